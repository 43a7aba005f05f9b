import json

import pandas as pd
import pytest

from src.sudoku.loader import load_puzzles
from src.sudoku.parser import parse_puzzle

GRID = "1 - - -\n- - 1 -\n- 1 - -\n- - - 1"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_puzzles(str(tmp_path / "nope.txt"))


def test_txt_with_one_grid(tmp_path):
    path = tmp_path / "easy.txt"
    path.write_text(GRID + "\n")
    assert load_puzzles(str(path)) == [{"id": "easy", "puzzle": GRID}]


def test_txt_with_several_grids(tmp_path):
    path = tmp_path / "batch.txt"
    path.write_text(GRID + "\n\n" + GRID + "\n")
    records = load_puzzles(str(path))
    assert [r["id"] for r in records] == ["batch-0", "batch-1"]


def test_json_array_and_object(tmp_path):
    array_path = tmp_path / "many.json"
    array_path.write_text(json.dumps([{"id": "a", "puzzle": GRID, "size": 4}, {"note": "no puzzle"}]))
    records = load_puzzles(str(array_path))
    assert records == [{"id": "a", "puzzle": GRID, "size": 4}]

    object_path = tmp_path / "one.json"
    object_path.write_text(json.dumps({"quizzes": "1..2" + "." * 12}))
    records = load_puzzles(str(object_path))
    assert records == [{"id": "one-0", "puzzle": "1..2" + "." * 12}]


def test_json_falls_back_to_lines(tmp_path):
    path = tmp_path / "lines.json"
    path.write_text(json.dumps({"id": "x", "puzzle": GRID}) + "\n{broken\n")
    records = load_puzzles(str(path))
    assert [r["id"] for r in records] == ["x"]


def test_csv_with_kaggle_columns(tmp_path):
    path = tmp_path / "sudoku.csv"
    quiz = "004300209" + "0" * 72
    pd.DataFrame({"quizzes": [quiz], "solutions": ["1" * 81]}).to_csv(path, index=False)

    records = load_puzzles(str(path))
    assert len(records) == 1
    assert records[0]["puzzle"] == quiz
    assert records[0]["solution"] == "1" * 81
    assert records[0]["id"] == "sudoku-0"


def test_txt_with_stray_blank_line_is_one_grid(tmp_path):
    path = tmp_path / "gappy.txt"
    path.write_text("1 - - -\n- - 1 -\n\n- 1 - -\n- - - 1\n")
    records = load_puzzles(str(path))
    assert len(records) == 1
    assert records[0]["id"] == "gappy"
    assert parse_puzzle(records[0]).givens == [(0, 0, 1), (1, 2, 1), (2, 1, 1), (3, 3, 1)]


def test_txt_with_compact_lines_splits_on_blank_lines(tmp_path):
    path = tmp_path / "compact.txt"
    path.write_text("1..2" + "." * 12 + "\n\n" + "." * 16 + "\n")
    assert [r["id"] for r in load_puzzles(str(path))] == ["compact-0", "compact-1"]


def test_numeric_puzzle_values_are_skipped(tmp_path, capsys):
    path = tmp_path / "numbers.json"
    path.write_text(json.dumps([
        {"id": "num", "puzzle": 4300209 * 10 ** 72},
        {"id": "text", "puzzle": "004300209" + "0" * 72},
    ]))
    records = load_puzzles(str(path))
    assert [r["id"] for r in records] == ["text"]
    assert "Skipping numeric 'puzzle'" in capsys.readouterr().out


def test_numeric_parquet_column_is_skipped(tmp_path):
    pytest.importorskip("pyarrow")
    path = tmp_path / "numbers.parquet"
    pd.DataFrame({"puzzle": [1234], "id": ["n"]}).to_parquet(path)
    assert load_puzzles(str(path)) == []
