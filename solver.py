"""Top-level Sudoku solve interface.

Expose `solve_puzzle(puzzle)` that accepts a parsed `Puzzle`, a raw puzzle record
compatible with `src.sudoku.parser.parse_puzzle`, or grid text.
"""

from typing import Any, Optional

from src.sudoku import solver_core
from src.sudoku.parser import Puzzle, parse_puzzle
from src.utils.trace import Tracer


def solve_puzzle(puzzle: Any, tracer: Optional[Tracer] = None) -> solver_core.SolveResult:
    """
    Solve a puzzle and return the session result (status, board and trace summary).
    Accepts:
      - Puzzle instances (used directly)
      - Raw puzzle dictionaries (parsed via `parse_puzzle`)
      - Grid or compact puzzle text (size inferred from the text)
    """
    if isinstance(puzzle, Puzzle):
        parsed = puzzle
    elif isinstance(puzzle, dict):
        parsed = parse_puzzle(puzzle)
    elif isinstance(puzzle, str):
        parsed = parse_puzzle({"puzzle": puzzle})
    else:
        raise TypeError("solve_puzzle expects a Puzzle, puzzle dictionary or grid text")

    return solver_core.solve_givens(parsed.size, parsed.givens, tracer)


__all__ = ["solve_puzzle"]
