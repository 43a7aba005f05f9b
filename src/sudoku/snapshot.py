"""Whole-board snapshots used to undo speculative assignments."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .model import Board
from src.utils.trace import Tracer, get_tracer


@dataclass(frozen=True)
class Snapshot:
    candidates: Tuple[int, ...]
    determined: Tuple[bool, ...]

    def __len__(self) -> int:
        return len(self.candidates)


def capture(board: Board) -> Snapshot:
    return Snapshot(
        candidates=tuple(cell.candidates for cell in board.cells),
        determined=tuple(cell.determined for cell in board.cells),
    )


def restore(board: Board, snapshot: Snapshot) -> None:
    """Overwrite every cell's state with the captured one."""
    if len(snapshot) != len(board.cells):
        raise ValueError(
            f"Snapshot holds {len(snapshot)} cells but the board has {len(board.cells)}"
        )
    for cell, candidates, determined in zip(board.cells, snapshot.candidates, snapshot.determined):
        cell.candidates = candidates
        cell.determined = determined


class Trial:
    """
    Scope for one speculative change to the board.

    The board is captured on entry and restored on exit, unless `commit()` was
    called first. Leaving the scope through an exception also restores.
    """

    def __init__(self, board: Board, tracer: Optional[Tracer] = None):
        self.board = board
        self.tracer = tracer or get_tracer()
        self.snapshot: Optional[Snapshot] = None
        self.committed = False

    def __enter__(self) -> "Trial":
        self.snapshot = capture(self.board)
        self.tracer.log_snapshot(determined_cells=sum(self.snapshot.determined))
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self.committed and self.snapshot is not None:
            restore(self.board, self.snapshot)
            self.tracer.log_restore(determined_cells=sum(self.snapshot.determined))
        return False

    def commit(self) -> None:
        self.committed = True
