from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from tictactoe.core.gamestate import GameState


# =========================
# Message types
# =========================

class MessageType(Enum):
    ERR = "ERR"
    INFO = "INFO"
    MOVE = "MOVE"
    JUMP = "JUMP"
    HELP = "HELP"
    RESTART = "RESTART"
    QUIT = "QUIT"


@dataclass(frozen=True)
class Message:
    """
    A UI message shown between board and state.
    Examples:
      [ERR] Cell is already occupied
      [JUMP] Back to move #2
    """
    type: MessageType
    text: str = ""

    def render(self) -> str:
        if self.text:
            return f"[{self.type.value}] {self.text}"
        return f"[{self.type.value}]"


# =========================
# Screen utils
# =========================

def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


# =========================
# View (board + message + state + history)
# =========================

class CliView:
    """
    Responsible ONLY for rendering:
      1) board
      2) message
      3) state line
      4) history list (when toggled on)

    It does NOT parse input or touch the game.
    """

    def __init__(self, *, prompt: str = "> ", clear: bool = True) -> None:
        self.prompt = prompt
        self.clear = clear
        self.show_history = False

        self._message: Optional[Message] = None

    # ---------- Message API ----------

    def set_message(self, msg: Optional[Message]) -> None:
        self._message = msg

    def set_error(self, text: str) -> None:
        self._message = Message(MessageType.ERR, text)

    def set_info(self, text: str = "") -> None:
        self._message = Message(MessageType.INFO, text) if text else None

    def set_move(self, text: str) -> None:
        self._message = Message(MessageType.MOVE, text)

    def set_jump(self, text: str) -> None:
        self._message = Message(MessageType.JUMP, text)

    def set_restart(self, text: str = "") -> None:
        self._message = Message(MessageType.RESTART, text)

    def set_quit(self, text: str = "") -> None:
        self._message = Message(MessageType.QUIT, text)

    # ---------- Render ----------

    def render(self, state: GameState, *, with_prompt: bool = True) -> None:
        if self.clear:
            clear_screen()
        print(self.render_text(state))
        if with_prompt:
            print(self.prompt, end="", flush=True)

    def render_text(self, state: GameState) -> str:
        lines: List[str] = [state.board.to_cli(), ""]
        lines.append("" if self._message is None else self._message.render())
        lines.append(self._build_state_line(state))
        if self.show_history:
            lines.append("")
            lines.extend(self.history_lines(state))
        return "\n".join(lines)

    def history_lines(self, state: GameState) -> List[str]:
        out: List[str] = []
        for entry in state.entries:
            marker = ">" if entry.move_index == state.current_move else " "
            out.append(f"{marker} {str(entry.move_index).rjust(2)}. {entry.label}")
        return out

    def _build_state_line(self, state: GameState) -> str:
        line = state.status
        if state.is_draw:
            line += "   (draw)"
        last = state.history_length - 1
        if state.current_move != last:
            line += f"   [viewing move #{state.current_move} of {last}]"
        return line
