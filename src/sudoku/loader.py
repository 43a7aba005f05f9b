import json
import numbers
import os
import re
from typing import Any, Dict, List, Optional

import pandas as pd

PUZZLE_KEYS = ("puzzle", "quizzes", "quiz", "question", "grid", "input")
SOLUTION_KEYS = ("solution", "solutions", "answer")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .txt, .json, .jsonl, .csv and .parquet.
    Returns a list of records with `id`, `puzzle` and, when known, `size`
    and `solution`.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = os.path.splitext(os.path.basename(file_path))[0]

    def _is_nonempty_str(value: Any) -> bool:
        return isinstance(value, str) and value.strip() != ""

    def _first_text(record: Dict[str, Any], keys) -> Optional[str]:
        for key in keys:
            value = record.get(key)
            if _is_nonempty_str(value):
                return value.strip()
            if isinstance(value, numbers.Number) and not isinstance(value, bool) and not pd.isna(value):
                # Numbers lose leading zeros (and floats lose digits), so the grid cannot be rebuilt.
                print(f"Skipping numeric {key!r} value in {file_path}; store puzzles as text")
                return None
        return None

    def _normalize_record(record: Dict[str, Any], position: int) -> Optional[Dict[str, Any]]:
        puzzle_text = _first_text(record, PUZZLE_KEYS)
        if not puzzle_text:
            return None

        normalized: Dict[str, Any] = {
            "id": str(record.get("id") or f"{stem}-{position}"),
            "puzzle": puzzle_text,
        }
        size = record.get("size")
        if size is not None and size != "" and not pd.isna(size):
            normalized["size"] = size
        solution = _first_text(record, SOLUTION_KEYS)
        if solution:
            normalized["solution"] = solution
        return normalized

    def _normalize_all(records: List[Any]) -> List[Dict[str, Any]]:
        data = []
        for position, record in enumerate(records):
            if not isinstance(record, dict):
                continue
            normalized = _normalize_record(record, position)
            if normalized is not None:
                data.append(normalized)
        return data

    # Case 1: Tabular files (Parquet or CSV)
    if file_path.endswith((".parquet", ".csv")):
        try:
            if file_path.endswith(".parquet"):
                df = pd.read_parquet(file_path)
            else:
                df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        except Exception as e:
            print(f"Error reading {file_path}: {e}")
            return []
        return _normalize_all(df.to_dict(orient="records"))

    # Case 2: Plain grids. Blank lines separate puzzles only when every block
    # is a whole grid; otherwise the file is one puzzle with stray blank lines.
    if file_path.endswith(".txt"):
        with open(file_path, "r", encoding="utf-8") as f:
            text = f.read()
        blocks = [b.strip() for b in re.split(r"\n\s*\n", text) if b.strip()]
        if len(blocks) > 1 and all(_is_whole_grid(block) for block in blocks):
            return [{"id": f"{stem}-{i}", "puzzle": block} for i, block in enumerate(blocks)]
        return [{"id": stem, "puzzle": text.strip()}] if text.strip() else []

    # Case 3: JSON File (array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            if isinstance(payload, list):
                return _normalize_all(payload)
            if isinstance(payload, dict):
                return _normalize_all([payload])
            return []
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            pass

    # Case 4: JSONL File
    objects = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                objects.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return _normalize_all(objects)


def _is_whole_grid(block: str) -> bool:
    """True for a one-line compact puzzle or a grid with as many rows as tokens per row."""
    rows = [line.split() for line in block.splitlines() if line.strip()]
    if len(rows) == 1:
        return len(rows[0]) == 1
    return all(len(row) == len(rows) for row in rows)
