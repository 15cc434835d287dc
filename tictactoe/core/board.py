from __future__ import annotations

import operator
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np


SIZE = 3
CELLS = SIZE * SIZE

# Winning index triples: rows, columns, diagonals
LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class Mark(Enum):
    """Cell contents. X always moves first."""
    EMPTY = 0
    X = 1
    O = 2

    def symbol(self) -> str:
        return {0: "", 1: "X", 2: "○"}[self.value]

    def opponent(self) -> "Mark":
        if self == Mark.X:
            return Mark.O
        if self == Mark.O:
            return Mark.X
        return Mark.EMPTY

    def __str__(self) -> str:
        return self.symbol()


_CHAR_TO_MARK = {
    "X": Mark.X,
    "x": Mark.X,
    "O": Mark.O,
    "o": Mark.O,
    "○": Mark.O,
    ".": Mark.EMPTY,
    "-": Mark.EMPTY,
    " ": Mark.EMPTY,
}


def index_of(row: int, col: int) -> int:
    """Convert 0-based (row, col) to a cell index."""
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise ValueError(f"Out of bounds: row={row}, col={col}")
    return row * SIZE + col


def row_col(index: int) -> Tuple[int, int]:
    """Convert a cell index to 0-based (row, col)."""
    if not 0 <= index < CELLS:
        raise ValueError(f"Out of bounds: {index}")
    return divmod(index, SIZE)


def as_index(value: object) -> Optional[int]:
    """
    Normalise a cell/move number to a plain int.

    Accepts int and numpy integers. Returns None for bool, floats,
    strings and anything else without __index__.
    """
    if isinstance(value, (bool, np.bool_)):
        return None
    try:
        return operator.index(value)
    except TypeError:
        return None


class Board:
    """
    One immutable snapshot of the 3x3 grid.

    - Cells are indexed 0..8 in row-major order.
    - Internally a read-only numpy int8 array of Mark values.
    - place() returns a new Board; the receiver is never modified,
      so boards kept in a history stay valid.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Optional[Iterable[Mark]] = None) -> None:
        marks = [Mark.EMPTY] * CELLS if cells is None else list(cells)
        if len(marks) != CELLS:
            raise ValueError(f"Board needs {CELLS} cells, got {len(marks)}")
        for m in marks:
            if not isinstance(m, Mark):
                raise TypeError(f"Board cells must be Mark, got {m!r}")
        arr = np.array([m.value for m in marks], dtype=np.int8)
        arr.flags.writeable = False
        self._cells: np.ndarray = arr

    # ---------- Constructors ----------

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Build a board from 9 characters, e.g. "XO.X.....".
        'X'/'O' (or '○') are marks; '.', '-' and ' ' are empty.
        """
        if len(text) != CELLS:
            raise ValueError(f"Board string must be {CELLS} chars, got {len(text)}")
        try:
            return cls(_CHAR_TO_MARK[ch] for ch in text)
        except KeyError as e:
            raise ValueError(f"Invalid board character: {e.args[0]!r}") from None

    @classmethod
    def _from_array(cls, arr: np.ndarray) -> "Board":
        board = cls.__new__(cls)
        arr.flags.writeable = False
        board._cells = arr
        return board

    # ---------- Cell access ----------

    @property
    def cells(self) -> np.ndarray:
        """Read-only int8 view of the cells (Mark values)."""
        return self._cells

    def __getitem__(self, index: int) -> Mark:
        if not 0 <= index < CELLS:
            raise IndexError(f"Out of bounds: {index}")
        return Mark(int(self._cells[index]))

    def __iter__(self) -> Iterator[Mark]:
        for v in self._cells:
            yield Mark(int(v))

    def __len__(self) -> int:
        return CELLS

    def is_empty(self, index: int) -> bool:
        return self[index] == Mark.EMPTY

    def place(self, index: int, mark: Mark) -> "Board":
        """
        Return a copy of this board with `mark` at `index`.

        Raises:
            ValueError if out of bounds, occupied, or mark is EMPTY.
        """
        if mark == Mark.EMPTY:
            raise ValueError("Cannot place EMPTY")
        if not 0 <= index < CELLS:
            raise ValueError(f"Out of bounds: {index}")
        if self._cells[index] != Mark.EMPTY.value:
            raise ValueError(f"Cell occupied at {index}")
        nxt = np.copy(self._cells)
        nxt[index] = mark.value
        return Board._from_array(nxt)

    # ---------- Iteration / helpers ----------

    def empty_cells(self) -> List[int]:
        return [int(i) for i in np.flatnonzero(self._cells == Mark.EMPTY.value)]

    def count(self, mark: Mark) -> int:
        return int(np.count_nonzero(self._cells == mark.value))

    def diff(self, other: "Board") -> List[int]:
        """Indices whose contents differ between the two boards."""
        return [int(i) for i in np.flatnonzero(self._cells != other._cells)]

    # ---------- Value semantics ----------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    def __hash__(self) -> int:
        return hash(self._cells.tobytes())

    def __repr__(self) -> str:
        return f"Board({self.to_string()!r})"

    # ---------- Rendering ----------

    def to_string(self) -> str:
        """Compact 9-char form, '.' for empty, 'X'/'O' for marks."""
        return "".join({0: ".", 1: "X", 2: "O"}[int(v)] for v in self._cells)

    def rows(self) -> List[List[Mark]]:
        marks = list(self)
        return [marks[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]

    def to_cli(self) -> str:
        letters = [chr(ord("A") + i) for i in range(SIZE)]
        lines = []
        lines.append("    " + " ".join(letters))
        for r, row in enumerate(self.rows(), start=1):
            syms = [m.symbol() or "." for m in row]
            lines.append(f"{str(r).rjust(2)}  " + " ".join(syms))
        return "\n".join(lines)
