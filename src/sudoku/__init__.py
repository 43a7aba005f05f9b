"""Cell graph, propagation, snapshots and backtracking search for generalized Sudoku."""

from .model import Board, Cell
from .builder import build_board
from .propagation import assign, eliminate
from .snapshot import Snapshot, Trial, capture, restore
from .solver_core import SolveResult, apply_givens, solve, solve_givens
from .parser import Puzzle, PuzzleFormatError, format_board, parse_grid, parse_puzzle

__all__ = [
    "Board",
    "Cell",
    "build_board",
    "assign",
    "eliminate",
    "Snapshot",
    "Trial",
    "capture",
    "restore",
    "SolveResult",
    "apply_givens",
    "solve",
    "solve_givens",
    "Puzzle",
    "PuzzleFormatError",
    "format_board",
    "parse_grid",
    "parse_puzzle",
]
