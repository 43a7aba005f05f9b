"""Graph builder: lay out the cells and link row, column and block peers."""

from typing import Dict, List

from .model import Board, Cell, full_mask


def build_board(size: int) -> Board:
    """
    Build a `size` x `size` board with every cell holding the full label set.

    Cells are indexed in row-major order. Every pair of cells is compared once
    and linked symmetrically into each relation it shares. When `size` is not a
    perfect square the block relation stays empty.
    """
    board = Board(size=size)
    block = board.block_size
    mask = full_mask(size)

    relations: Dict[str, List[List[int]]] = {
        role: [[] for _ in range(size * size)]
        for role in ("row", "column", "block", "neighbours")
    }

    for i in range(size * size):
        y, x = divmod(i, size)
        board.cells.append(Cell(index=i, row_index=y, column_index=x, candidates=mask))

        for k in range(i):
            ky, kx = divmod(k, size)
            same_row = y == ky
            same_column = x == kx
            same_block = bool(block) and (y // block, x // block) == (ky // block, kx // block)
            if not (same_row or same_column or same_block):
                continue

            if same_row:
                _link(relations["row"], i, k)
            if same_column:
                _link(relations["column"], i, k)
            if same_block:
                _link(relations["block"], i, k)
            _link(relations["neighbours"], i, k)

    for cell in board.cells:
        cell.row = tuple(relations["row"][cell.index])
        cell.column = tuple(relations["column"][cell.index])
        cell.block = tuple(relations["block"][cell.index])
        cell.neighbours = tuple(relations["neighbours"][cell.index])

    return board


def _link(relation: List[List[int]], a: int, b: int) -> None:
    relation[a].append(b)
    relation[b].append(a)
