# game.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from tictactoe.core import evaluator
from tictactoe.core.board import Board, Mark, as_index
from tictactoe.core.gamestate import GameState
from tictactoe.core.move import HistoryEntry, IllegalMove, Move, OutOfRange

logger = logging.getLogger(__name__)


class GameHistory:
    """
    One game session.

    Owns:
      - history: every board snapshot so far (history[0] is the empty board)
      - current_move: which snapshot is active

    Whose turn it is comes from current_move parity (even -> X), so jumping
    around never leaves the turn out of sync with the board.
    """

    def __init__(self) -> None:
        self.history: List[Board] = [Board.empty()]
        self.current_move: int = 0

    @classmethod
    def from_moves(cls, indices: Iterable[int]) -> "GameHistory":
        """Play the given cell indices in order. Raises IllegalMove on the first bad one."""
        game = cls()
        for index in indices:
            game.apply_move(index)
        return game

    def __len__(self) -> int:
        return len(self.history)

    # -------------------------
    # Queries
    # -------------------------

    def current_board(self) -> Board:
        return self.history[self.current_move]

    def next_mark(self) -> Mark:
        return Mark.X if self.current_move % 2 == 0 else Mark.O

    def winner(self) -> Optional[Mark]:
        return evaluator.winner(self.current_board())

    def is_game_over(self) -> bool:
        board = self.current_board()
        return evaluator.winner(board) is not None or evaluator.is_full(board)

    def is_latest(self) -> bool:
        return self.current_move == len(self.history) - 1

    def status(self) -> str:
        return evaluator.status_text(self.current_board(), self.next_mark())

    def list_moves(self) -> List[HistoryEntry]:
        return [HistoryEntry.for_move(m) for m in range(len(self.history))]

    def moves(self) -> List[Move]:
        """The move behind each snapshot after the first, recovered by diffing neighbours."""
        result: List[Move] = []
        for prev, cur in zip(self.history, self.history[1:]):
            (index,) = cur.diff(prev)
            result.append(Move(index=index, mark=cur[index]))
        return result

    def get_state(self) -> GameState:
        board = self.current_board()
        return GameState(
            board=board,
            current_move=self.current_move,
            next_mark=self.next_mark(),
            status=self.status(),
            winner=evaluator.winner(board),
            is_draw=evaluator.is_draw(board),
            entries=self.list_moves(),
        )

    # -------------------------
    # Mutators
    # -------------------------

    def apply_move(self, index: int) -> Board:
        """
        Mark `index` for the player to move on the current snapshot.

        Any snapshots after current_move are discarded first.

        Raises:
            IllegalMove if the cell is invalid/occupied or the game is decided.
            Nothing is changed in that case.
        """
        board = self.current_board()
        if not evaluator.is_move_legal(board, index):
            raise IllegalMove(index, self._illegal_reason(board, index))

        cell = as_index(index)
        mark = self.next_mark()
        next_board = board.place(cell, mark)

        del self.history[self.current_move + 1:]
        self.history.append(next_board)
        self.current_move = len(self.history) - 1
        logger.debug("move #%d: %s at %d", self.current_move, mark.name, cell)

        w = evaluator.winner(next_board)
        if w is not None:
            logger.info("%s wins after %d moves", w.name, self.current_move)
        elif evaluator.is_full(next_board):
            logger.info("draw after %d moves", self.current_move)
        return next_board

    def jump_to(self, move: int) -> Board:
        """
        Make snapshot `move` the active one. History is left as is.

        Raises:
            OutOfRange if move is not a valid history position.
        """
        target = as_index(move)
        if target is None or not 0 <= target < len(self.history):
            raise OutOfRange(move, len(self.history))
        self.current_move = target
        logger.debug("jump to move #%d of %d", target, len(self.history) - 1)
        return self.current_board()

    # -------------------------
    # Helpers
    # -------------------------

    @staticmethod
    def _illegal_reason(board: Board, index: object) -> str:
        cell = as_index(index)
        if cell is None:
            return "cell must be an integer 0..8"
        if not 0 <= cell < len(board):
            return "cell is out of bounds"
        if not board.is_empty(cell):
            return "cell is already occupied"
        return "game is already over"
