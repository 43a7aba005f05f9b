"""Constraint propagation over the cell graph (naked and hidden singles).

`assign` fixes a cell and `eliminate` removes a label from one; each may force
further assignments. Instead of recursing, both drain a FIFO worklist of
pending (cell, label) eliminations until it is empty or a contradiction shows up.
"""

from collections import deque
from typing import Deque, Optional, Tuple

from .model import Board, Cell, count_labels, label_bit, lowest_label, sole_label
from src.utils.trace import Tracer, get_tracer

Elimination = Tuple[int, int]


def assign(
    board: Board,
    index: int,
    label: int,
    reason: str = "search",
    tracer: Optional[Tracer] = None,
) -> bool:
    """
    Fix cell `index` to `label` and propagate the consequences.
    Returns False if `label` is not a current candidate of the cell or if
    propagation runs into a contradiction. On failure the board is left
    mid-propagation; callers restore it from a snapshot.
    """
    tracer = tracer or get_tracer()
    board.check_label(label)
    cell = board.cells[index]
    if not cell.has(label):
        tracer.log_contradiction(cell.name, label, reason=f"{label} is not a candidate")
        return False

    pending: Deque[Elimination] = deque()
    _fix(cell, label, pending, reason, tracer)
    return _drain(board, pending, tracer)


def eliminate(board: Board, index: int, label: int, tracer: Optional[Tracer] = None) -> bool:
    """Remove `label` from cell `index` and propagate. False on contradiction."""
    tracer = tracer or get_tracer()
    board.check_label(label)
    pending: Deque[Elimination] = deque([(index, label)])
    return _drain(board, pending, tracer)


def check_unique(board: Board, cell: Cell, group: Tuple[int, ...]) -> Optional[int]:
    """Return a candidate of `cell` that no other member of `group` can take."""
    if not group:
        return None
    others = 0
    for peer in group:
        others |= board.cells[peer].candidates
    return lowest_label(cell.candidates & ~others)


def _fix(cell: Cell, label: int, pending: Deque[Elimination], reason: str, tracer: Tracer) -> None:
    cell.candidates = label_bit(label)
    cell.determined = True
    tracer.log_assign(cell.name, label, reason=reason)
    pending.extend((peer, label) for peer in cell.neighbours)


def _drain(board: Board, pending: Deque[Elimination], tracer: Tracer) -> bool:
    while pending:
        index, label = pending.popleft()
        if not _eliminate_one(board, board.cells[index], label, pending, tracer):
            return False
    return True


def _eliminate_one(
    board: Board, cell: Cell, label: int, pending: Deque[Elimination], tracer: Tracer
) -> bool:
    bit = label_bit(label)

    # A determined cell never re-examines its groups.
    if cell.determined:
        if cell.candidates == bit:
            tracer.log_contradiction(cell.name, label, reason="determined label eliminated")
            return False
        return True

    if cell.candidates & bit:
        cell.candidates &= ~bit
        tracer.log_domain_reduction(cell.name, label, count_labels(cell.candidates))
    if not cell.candidates:
        tracer.log_contradiction(cell.name, label, reason="no candidates left")
        return False

    for _, group in cell.groups():
        forced = check_unique(board, cell, group)
        if forced is not None:
            _fix(cell, forced, pending, "hidden_single", tracer)
            return True

    forced = sole_label(cell.candidates)
    if forced is not None:
        _fix(cell, forced, pending, "naked_single", tracer)
    return True
