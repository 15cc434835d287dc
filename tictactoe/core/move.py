from __future__ import annotations

from dataclasses import dataclass

from tictactoe.core.board import Mark, row_col


@dataclass(frozen=True)
class Move:
    """The cell a player marked to produce one history snapshot."""
    index: int
    mark: Mark

    def __str__(self) -> str:
        row, col = row_col(self.index)
        return f"{self.mark.symbol()} at {chr(ord('A') + col)}{row + 1}"


@dataclass(frozen=True)
class HistoryEntry:
    """One navigable history item. move_index is its stable key."""
    move_index: int
    label: str

    @staticmethod
    def for_move(move_index: int) -> "HistoryEntry":
        if move_index == 0:
            return HistoryEntry(0, "Go to game start")
        return HistoryEntry(move_index, f"Go to move #{move_index}")


class GameError(Exception):
    """Base class for rejected game operations. State is never changed."""


class IllegalMove(GameError, ValueError):
    def __init__(self, index: object, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Illegal move at {index}: {reason}")


class OutOfRange(GameError, IndexError):
    def __init__(self, move: object, length: int) -> None:
        self.move = move
        self.length = length
        super().__init__(f"No move #{move} (history has moves 0..{length - 1})")
