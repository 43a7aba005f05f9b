import pytest

from src.sudoku.builder import build_board
from src.sudoku.parser import (
    PuzzleFormatError,
    format_board,
    format_values,
    parse_compact,
    parse_grid,
    parse_puzzle,
    to_compact,
)
from src.sudoku.propagation import assign
from src.utils.trace import Tracer


def test_parse_grid_infers_size_and_collects_givens():
    puzzle = parse_grid("1 - - -\n- - 1 -\n\n- 1 - -\n- - - 1\n")
    assert puzzle.size == 4
    assert puzzle.givens == [(0, 0, 1), (1, 2, 1), (2, 1, 1), (3, 3, 1)]


def test_parse_grid_uses_explicit_size():
    text = "\n".join(["- - - -"] * 4)
    with pytest.raises(PuzzleFormatError):
        parse_grid(text, size=9)


@pytest.mark.parametrize(
    "text",
    [
        "1 - -\n- - -\n- - -",  # size 3 is not a perfect square
        "1 - - -\n- - 1\n- 1 - -\n- - - 1",  # short row
        "x - - -\n- - - -\n- - - -\n- - - -",  # non-numeric token
        "5 - - -\n- - - -\n- - - -\n- - - -",  # label out of range
        "",
    ],
)
def test_parse_grid_rejects_malformed_input(text):
    with pytest.raises(PuzzleFormatError):
        parse_grid(text)


def test_parse_compact_requires_square_side():
    # Four characters would give a 2x2 grid, which has no block layout.
    with pytest.raises(PuzzleFormatError):
        parse_compact("1...")


def test_parse_compact_sixteen_cells_is_four_by_four():
    puzzle = parse_compact("1..2" + "." * 12)
    assert puzzle.size == 4
    assert puzzle.givens == [(0, 0, 1), (0, 3, 2)]


def test_parse_compact_rejects_bad_length():
    with pytest.raises(PuzzleFormatError):
        parse_compact("1" * 80)


def test_parse_puzzle_record_keeps_id_and_solution():
    record = {"id": "p1", "puzzle": "1..2" + "0" * 12, "size": "4", "solution": "1342"}
    puzzle = parse_puzzle(record)
    assert puzzle.id == "p1"
    assert puzzle.size == 4
    assert puzzle.solution == "1342"


def test_parse_puzzle_rejects_size_mismatch():
    with pytest.raises(PuzzleFormatError):
        parse_puzzle({"puzzle": "." * 81, "size": 4})


def test_format_board_marks_undetermined_cells():
    board = build_board(4)
    assert assign(board, 0, 3, tracer=Tracer())
    lines = format_board(board).splitlines()
    assert lines[0] == "3 - - -"
    assert len(lines) == 4


def test_format_values_and_compact():
    values = [[1, None], [None, 2]]
    assert format_values(values) == "1 -\n- 2"
    assert to_compact(values) == "1..2"
