"""Board data structures: cells, the cell arena, and candidate bit sets."""

from dataclasses import dataclass, field
from math import isqrt
from typing import Iterator, List, Optional, Tuple

Givens = List[Tuple[int, int, int]]


def full_mask(size: int) -> int:
    return (1 << size) - 1


def label_bit(label: int) -> int:
    return 1 << (label - 1)


def labels_in(mask: int) -> List[int]:
    """Labels whose bits are set in `mask`, in ascending order."""
    labels = []
    label = 1
    while mask:
        if mask & 1:
            labels.append(label)
        mask >>= 1
        label += 1
    return labels


def count_labels(mask: int) -> int:
    return bin(mask).count("1")


def lowest_label(mask: int) -> Optional[int]:
    if not mask:
        return None
    return (mask & -mask).bit_length()


def sole_label(mask: int) -> Optional[int]:
    """Return the label if exactly one bit is set, otherwise None."""
    if mask and not mask & (mask - 1):
        return mask.bit_length()
    return None


def is_perfect_square(value: int) -> bool:
    return value > 0 and isqrt(value) ** 2 == value


@dataclass
class Cell:
    """
    One grid position. `candidates` is a bit set over labels 1..size.
    Peer relations hold arena indices and are frozen once the board is built.
    """

    index: int
    row_index: int
    column_index: int
    candidates: int = 0
    determined: bool = False
    row: Tuple[int, ...] = ()
    column: Tuple[int, ...] = ()
    block: Tuple[int, ...] = ()
    neighbours: Tuple[int, ...] = ()

    @property
    def name(self) -> str:
        return f"R{self.row_index + 1}C{self.column_index + 1}"

    @property
    def labels(self) -> List[int]:
        return labels_in(self.candidates)

    @property
    def value(self) -> Optional[int]:
        if not self.determined:
            return None
        return sole_label(self.candidates)

    def has(self, label: int) -> bool:
        return bool(self.candidates & label_bit(label))

    def groups(self) -> Tuple[Tuple[str, Tuple[int, ...]], ...]:
        return (("row", self.row), ("column", self.column), ("block", self.block))


@dataclass
class Board:
    size: int
    cells: List[Cell] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"Board size must be positive, got {self.size}")
        # Non-square sizes carry no block constraints.
        self.block_size: int = isqrt(self.size) if is_perfect_square(self.size) else 0

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def index(self, row: int, column: int) -> int:
        if not (0 <= row < self.size and 0 <= column < self.size):
            raise IndexError(f"Cell ({row}, {column}) is outside a {self.size}x{self.size} board")
        return row * self.size + column

    def cell(self, row: int, column: int) -> Cell:
        return self.cells[self.index(row, column)]

    def check_label(self, label: int) -> None:
        if not 1 <= label <= self.size:
            raise ValueError(f"Label {label} is outside 1..{self.size}")

    def values(self) -> List[List[Optional[int]]]:
        """Determined labels by row; None marks an undetermined cell."""
        return [
            [self.cells[row * self.size + column].value for column in range(self.size)]
            for row in range(self.size)
        ]

    def groups(self) -> List[List[int]]:
        """Every row, column and block as a list of cell indices."""
        size = self.size
        groups = [[row * size + column for column in range(size)] for row in range(size)]
        groups += [[row * size + column for row in range(size)] for column in range(size)]
        step = self.block_size
        if step:
            for top in range(0, size, step):
                for left in range(0, size, step):
                    groups.append(
                        [
                            (top + dy) * size + (left + dx)
                            for dy in range(step)
                            for dx in range(step)
                        ]
                    )
        return groups

    def undetermined_count(self) -> int:
        return sum(1 for cell in self.cells if not cell.determined)
