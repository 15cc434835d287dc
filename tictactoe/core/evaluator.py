from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from tictactoe.core.board import CELLS, LINES, Board, Mark, as_index


_LINE_INDEX = np.array(LINES, dtype=np.intp)


def _completed(board: Board) -> np.ndarray:
    """Indices into LINES of every line held by a single non-empty mark."""
    cells = board.cells[_LINE_INDEX]  # shape (8, 3)
    full = (
        (cells[:, 0] != Mark.EMPTY.value)
        & (cells[:, 0] == cells[:, 1])
        & (cells[:, 1] == cells[:, 2])
    )
    return np.flatnonzero(full)


def winner(board: Board) -> Optional[Mark]:
    """
    Return the mark owning a completed row, column or diagonal.

    All 8 lines are inspected. None means no winner yet, which includes
    a full board with no line (draw).
    """
    hits = _completed(board)
    if hits.size == 0:
        return None
    a = LINES[int(hits[0])][0]
    return board[a]


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    """First completed line in LINES order, or None."""
    hits = _completed(board)
    if hits.size == 0:
        return None
    return LINES[int(hits[0])]


def is_full(board: Board) -> bool:
    return not board.empty_cells()


def is_draw(board: Board) -> bool:
    return is_full(board) and winner(board) is None


def is_move_legal(board: Board, index: int) -> bool:
    cell = as_index(index)
    if cell is None or not 0 <= cell < CELLS:
        return False
    if not board.is_empty(cell):
        return False
    return winner(board) is None


def status_text(board: Board, next_mark: Mark) -> str:
    w = winner(board)
    if w is not None:
        return f"Winner: {w.symbol()}"
    return f"Next player: {next_mark.symbol()}"
