"""Puzzle parser: convert grid text into givens, and render boards back to text.

Supports:
- Whitespace grids: `size` rows of `size` tokens, `-` marking an unknown cell
- Compact one-line strings for sizes up to 9 (`.`, `0` or `-` for unknowns)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import isqrt
from typing import Any, Dict, Optional, Sequence

from .model import Board, Givens, is_perfect_square

UNKNOWN = "-"
COMPACT_UNKNOWN = {".", "0", "-"}


class PuzzleFormatError(ValueError):
    """Raised when puzzle text cannot be turned into a valid grid."""


@dataclass
class Puzzle:
    size: int
    givens: Givens = field(default_factory=list)
    id: str = "unknown"
    solution: Optional[str] = None


def parse_puzzle(record: Dict[str, Any]) -> Puzzle:
    """Parse a loader record: `puzzle` text plus optional `size`, `id`, `solution`."""
    text = str(record.get("puzzle", "") or "")
    size = _coerce_size(record.get("size"))
    puzzle_id = str(record.get("id", "unknown"))

    if _looks_compact(text):
        puzzle = parse_compact(text)
        if size is not None and size != puzzle.size:
            raise PuzzleFormatError(f"Compact puzzle has size {puzzle.size}, expected {size}")
    else:
        puzzle = parse_grid(text, size)

    puzzle.id = puzzle_id
    solution = record.get("solution")
    puzzle.solution = str(solution) if solution not in (None, "") else None
    return puzzle


def parse_grid(text: str, size: Optional[int] = None) -> Puzzle:
    rows = [line.split() for line in text.splitlines() if line.strip()]
    if size is None:
        size = len(rows)
    _check_size(size)

    if len(rows) != size:
        raise PuzzleFormatError(f"Expected {size} rows, found {len(rows)}")

    givens: Givens = []
    for r, tokens in enumerate(rows):
        if len(tokens) != size:
            raise PuzzleFormatError(f"Row {r + 1} has {len(tokens)} tokens, expected {size}")
        for c, token in enumerate(tokens):
            if token == UNKNOWN:
                continue
            givens.append((r, c, _parse_label(token, size, r, c)))
    return Puzzle(size=size, givens=givens)


def parse_compact(text: str) -> Puzzle:
    chars = text.strip()
    size = isqrt(len(chars))
    if size * size != len(chars):
        raise PuzzleFormatError(f"Compact puzzle length {len(chars)} is not a square")
    _check_size(size)
    if size > 9:
        raise PuzzleFormatError("Compact puzzles only support sizes up to 9")

    givens: Givens = []
    for i, ch in enumerate(chars):
        if ch in COMPACT_UNKNOWN:
            continue
        r, c = divmod(i, size)
        givens.append((r, c, _parse_label(ch, size, r, c)))
    return Puzzle(size=size, givens=givens)


def format_values(values: Sequence[Sequence[Optional[int]]]) -> str:
    return "\n".join(
        " ".join(UNKNOWN if value is None else str(value) for value in row) for row in values
    )


def format_board(board: Board) -> str:
    """Render determined cells as their label and undetermined ones as `-`."""
    return format_values(board.values())


def to_compact(values: Sequence[Sequence[Optional[int]]]) -> str:
    return "".join("." if value is None else str(value) for row in values for value in row)


def _looks_compact(text: str) -> bool:
    stripped = text.strip()
    return bool(stripped) and len(stripped.split()) == 1 and "\n" not in stripped and len(stripped) > 1


def _coerce_size(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise PuzzleFormatError(f"Invalid size: {value!r}") from None


def _check_size(size: int) -> None:
    if not is_perfect_square(size):
        raise PuzzleFormatError(f"Size must be a positive perfect square, got {size}")


def _parse_label(token: str, size: int, row: int, column: int) -> int:
    try:
        label = int(token)
    except ValueError:
        raise PuzzleFormatError(
            f"Invalid token {token!r} at row {row + 1}, column {column + 1}"
        ) from None
    if not 1 <= label <= size:
        raise PuzzleFormatError(
            f"Label {label} at row {row + 1}, column {column + 1} is outside 1..{size}"
        )
    return label


__all__ = [
    "Puzzle",
    "PuzzleFormatError",
    "parse_puzzle",
    "parse_grid",
    "parse_compact",
    "format_board",
    "format_values",
    "to_compact",
]
