"""Othello board, cell values and move coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

OTHELLO_SIZE = 8
NUM_CELLS = OTHELLO_SIZE * OTHELLO_SIZE

# (d_row, d_col) unit vectors for the eight compass directions.
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, 0),   # N
    (-1, 1),   # NE
    (0, 1),    # E
    (1, 1),    # SE
    (1, 0),    # S
    (1, -1),   # SW
    (0, -1),   # W
    (-1, -1),  # NW
)

_CHARS = {".": 0, "B": 1, "W": -1}


class Cell(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = -1


class Side(IntEnum):
    BLACK = 1
    WHITE = -1

    @property
    def opponent(self) -> "Side":
        return Side(-self.value)

    @property
    def token(self) -> Cell:
        return Cell(self.value)

    @property
    def symbol(self) -> str:
        return "X" if self is Side.BLACK else "O"


@dataclass(frozen=True, order=True)
class Move:
    """
    A placement target in 1-based (column, row) coordinates.

    The side making the move is implied by whoever is to move.
    """

    col: int
    row: int

    def in_bounds(self) -> bool:
        return 1 <= self.col <= OTHELLO_SIZE and 1 <= self.row <= OTHELLO_SIZE

    @property
    def index(self) -> int:
        """Row-major flat index; only meaningful when :meth:`in_bounds` holds."""
        if not self.in_bounds():
            raise ValueError(f"Move {self} is off the board")
        return (self.row - 1) * OTHELLO_SIZE + (self.col - 1)

    @classmethod
    def from_index(cls, index: int) -> "Move":
        if not 0 <= index < NUM_CELLS:
            raise ValueError(f"Flat index out of range: {index}")
        return cls(col=index % OTHELLO_SIZE + 1, row=index // OTHELLO_SIZE + 1)

    def __str__(self) -> str:
        return f"{'abcdefgh'[self.col - 1] if self.in_bounds() else '?'}{self.row}"


class Board:
    """
    8x8 grid of cell values backed by an ``int8`` numpy array.

    Internally indexed ``[row, col]`` from 0; the public accessors take the
    1-based ``(col, row)`` pairs used by moves.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Optional[np.ndarray] = None):
        if cells is None:
            cells = np.zeros((OTHELLO_SIZE, OTHELLO_SIZE), dtype=np.int8)
        cells = np.asarray(cells, dtype=np.int8)
        if cells.shape != (OTHELLO_SIZE, OTHELLO_SIZE):
            raise ValueError(f"Board must be {OTHELLO_SIZE}x{OTHELLO_SIZE}, got {cells.shape}")
        self._cells = cells

    @classmethod
    def initial(cls) -> "Board":
        board = cls()
        mid = OTHELLO_SIZE // 2
        board._cells[mid - 1, mid - 1] = Cell.BLACK
        board._cells[mid - 1, mid] = Cell.WHITE
        board._cells[mid, mid - 1] = Cell.WHITE
        board._cells[mid, mid] = Cell.BLACK
        return board

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Build a board from 8 strings of ``.``, ``B`` and ``W`` (whitespace ignored)."""
        rows = ["".join(r.split()) for r in rows]
        if len(rows) != OTHELLO_SIZE or any(len(r) != OTHELLO_SIZE for r in rows):
            raise ValueError("Expected 8 rows of 8 cells")
        try:
            data = [[_CHARS[ch] for ch in r] for r in rows]
        except KeyError as exc:
            raise ValueError(f"Unknown cell character {exc.args[0]!r}") from exc
        return cls(np.array(data, dtype=np.int8))

    @classmethod
    def from_flat(cls, values: Iterable[int]) -> "Board":
        flat = np.fromiter((int(v) for v in values), dtype=np.int8)
        if flat.size != NUM_CELLS:
            raise ValueError(f"Expected {NUM_CELLS} cell values, got {flat.size}")
        if not np.isin(flat, (-1, 0, 1)).all():
            raise ValueError("Cell values must be -1, 0 or 1")
        return cls(flat.reshape(OTHELLO_SIZE, OTHELLO_SIZE))

    @staticmethod
    def in_bounds(r: int, c: int) -> bool:
        return 0 <= r < OTHELLO_SIZE and 0 <= c < OTHELLO_SIZE

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the underlying array."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def at(self, r: int, c: int) -> int:
        return int(self._cells[r, c])

    def get(self, col: int, row: int) -> Cell:
        return Cell(int(self._cells[row - 1, col - 1]))

    def set(self, col: int, row: int, cell: Cell) -> None:
        self._cells[row - 1, col - 1] = cell

    def copy(self) -> "Board":
        return Board(self._cells.copy())

    def flat(self) -> List[int]:
        return [int(v) for v in self._cells.flatten()]

    def snapshot(self) -> bytes:
        """Hashable key identifying this exact position."""
        return self._cells.tobytes()

    def count(self, cell: Cell) -> int:
        return int(np.sum(self._cells == cell))

    def empty_cells(self) -> int:
        return self.count(Cell.EMPTY)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    def __hash__(self) -> int:
        return hash(self.snapshot())

    def __repr__(self) -> str:
        return f"Board(black={self.count(Cell.BLACK)}, white={self.count(Cell.WHITE)})"

    def render(self, cursor: Optional[Tuple[int, int]] = None) -> str:
        """Text rendering; ``cursor`` is a 1-based (col, row) pair to highlight."""
        lines = ["   " + " ".join("abcdefgh"[:OTHELLO_SIZE])]
        for r in range(OTHELLO_SIZE):
            row_chars = []
            for c in range(OTHELLO_SIZE):
                value = self._cells[r, c]
                ch = "X" if value == Cell.BLACK else "O" if value == Cell.WHITE else "."
                if cursor is not None and cursor == (c + 1, r + 1):
                    ch = "*" if ch == "." else ch.lower()
                row_chars.append(ch)
            lines.append(f"{r + 1:>2} " + " ".join(row_chars))
        return "\n".join(lines)
