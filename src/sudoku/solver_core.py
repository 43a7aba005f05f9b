"""Depth-first backtracking search over the propagated cell graph."""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from .builder import build_board
from .config import SolverConfig
from .model import Board, full_mask
from .propagation import assign
from .snapshot import Trial
from src.utils.trace import Tracer, get_tracer, reset_tracer

SOLVED = "solved"
CONTRADICTION = "contradiction"
FAILED = "failed"


@dataclass
class SolveResult:
    status: str
    board: Board
    searched: bool = False
    stats: dict = field(default_factory=dict)

    @property
    def solved(self) -> bool:
        return self.status == SOLVED


def solve(board: Board, tracer: Optional[Tracer] = None) -> bool:
    """
    Complete `board` by backtracking. The board must already hold its givens.

    On success the board is left solved. On failure it is restored to the state
    it had on entry, so the caller still sees the propagated givens.
    """
    tracer = tracer or get_tracer()
    with Trial(board, tracer) as trial:
        if _search(board, tracer):
            trial.commit()
            tracer.log_solution_found(determined_cells=len(board) - board.undetermined_count())
            return True
    return False


def _search(board: Board, tracer: Tracer) -> bool:
    index = first_undetermined(board)
    if index is None:
        return True

    cell = board.cells[index]
    for label in cell.labels:
        with Trial(board, tracer) as trial:
            if assign(board, index, label, reason="search", tracer=tracer) and _search(board, tracer):
                trial.commit()
                return True

    tracer.log_backtrack(cell.name)
    return False


def first_undetermined(board: Board) -> Optional[int]:
    for cell in board.cells:
        if not cell.determined:
            return cell.index
    return None


def apply_givens(
    board: Board, givens: Iterable[Tuple[int, int, int]], tracer: Optional[Tracer] = None
) -> bool:
    """Assign each (row, column, label) given in turn; stop at the first contradiction."""
    tracer = tracer or get_tracer()
    for row, column, label in givens:
        if not assign(board, board.index(row, column), label, reason="given", tracer=tracer):
            return False
    return True


def is_complete(board: Board) -> bool:
    return first_undetermined(board) is None


def is_valid_solution(board: Board) -> bool:
    """True when every row, column and block holds each label exactly once."""
    if not is_complete(board):
        return False
    expected = full_mask(board.size)
    for group in board.groups():
        seen = 0
        for index in group:
            seen |= board.cells[index].candidates
        if seen != expected:
            return False
    return True


def solve_givens(
    size: int, givens: Iterable[Tuple[int, int, int]], tracer: Optional[Tracer] = None
) -> SolveResult:
    """
    Run a whole session: build the board, propagate the givens, then search.

    Without an explicit tracer each session starts from a fresh global trace,
    enabled according to `SolverConfig`.
    """
    if tracer is None:
        reset_tracer()
        tracer = get_tracer()
        tracer.enabled = SolverConfig().trace_enabled
    board = build_board(size)

    if not apply_givens(board, givens, tracer):
        return SolveResult(status=CONTRADICTION, board=board, stats=tracer.summary())

    searched = not is_complete(board)
    status = SOLVED if solve(board, tracer) else FAILED
    return SolveResult(status=status, board=board, searched=searched, stats=tracer.summary())
