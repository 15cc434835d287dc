from dataclasses import dataclass, field
from typing import List, Optional

from tictactoe.core.board import Board, Mark
from tictactoe.core.move import HistoryEntry


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot of a GameHistory for rendering."""
    board: Board
    current_move: int
    next_mark: Mark
    status: str
    winner: Optional[Mark] = None
    is_draw: bool = False
    entries: List[HistoryEntry] = field(default_factory=list)

    def is_game_over(self) -> bool:
        return self.winner is not None or self.is_draw

    @property
    def history_length(self) -> int:
        return len(self.entries)
