from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from tictactoe.cli.commands import Command, CommandProcessor, CommandType
from tictactoe.cli.view import CliView, Message, MessageType
from tictactoe.core.game import GameHistory
from tictactoe.core.move import GameError, Move

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayConfig:
    clear_screen: bool = True
    prompt: str = "> "


def read_stdin_line() -> Optional[str]:
    """Blocking line read. None on EOF / Ctrl-D."""
    try:
        return input()
    except EOFError:
        return None


class HotseatController:
    """
    Two players sharing one terminal.

    Loop:
      1) render if dirty
      2) read one line
      3) parse into Command / cell
      4) handle it to completion

    OOP rule:
      - Controller orchestrates.
      - GameHistory handles gameplay.
      - View renders only.
      - CommandProcessor parses only.
    """

    def __init__(
        self,
        *,
        config: PlayConfig = PlayConfig(),
        read_line: Callable[[], Optional[str]] = read_stdin_line,
    ) -> None:
        self.cfg = config
        self.game = GameHistory()
        self.view = CliView(prompt=config.prompt, clear=config.clear_screen)
        self.cmd = CommandProcessor()
        self._read_line = read_line

        self._running = True
        self._dirty = True

    # ---------- Main loop ----------

    def run(self) -> None:
        self.on_start()

        while self._running:
            self._render()

            line = self._read_line()
            if line is None:
                logger.debug("input closed")
                break

            parsed = self.cmd.parse(line)
            if not parsed.ok:
                # empty input is ok-noop
                if parsed.error:
                    self.view.set_error(parsed.error)
                    self._dirty = True
                continue

            if parsed.command is not None:
                self.handle_command(parsed.command)
            elif parsed.cell is not None:
                self.handle_move(parsed.cell)

        self.on_stop()

    def stop(self) -> None:
        self._running = False

    # ---------- Rendering ----------

    def _render(self) -> None:
        if not self._dirty:
            return
        self.view.render(self.game.get_state())
        self._dirty = False

    # ---------- Hooks ----------

    def on_start(self) -> None:
        self.view.set_message(Message(MessageType.RESTART, "New game. X moves first."))
        self._dirty = True

    def on_stop(self) -> None:
        self.view.render(self.game.get_state(), with_prompt=False)

    # ---------- Input dispatch ----------

    def handle_command(self, command: Command) -> None:
        if command.type == CommandType.HELP:
            self.view.set_message(Message(MessageType.HELP, self.cmd.help_text()))
        elif command.type == CommandType.QUIT:
            self.view.set_quit("Exiting...")
            self._running = False
        elif command.type == CommandType.RESTART:
            self._restart()
        elif command.type == CommandType.HISTORY:
            self.view.show_history = not self.view.show_history
            self.view.set_info("History shown." if self.view.show_history else "History hidden.")
        elif command.type == CommandType.JUMP:
            if command.arg is None:
                self.view.set_error("Usage: /jump N (0 = game start)")
            else:
                self._jump(command.arg)
        elif command.type == CommandType.BACK:
            self._jump(self.game.current_move - 1)
        elif command.type == CommandType.FORWARD:
            self._jump(self.game.current_move + 1)
        else:
            self.view.set_error("Unknown/unsupported command. Use /help")
        self._dirty = True

    def handle_move(self, cell: int) -> None:
        mark = self.game.next_mark()
        try:
            self.game.apply_move(cell)
        except GameError as e:
            self.view.set_error(str(e))
            self._dirty = True
            return

        self.view.set_move(str(Move(index=cell, mark=mark)))
        self._dirty = True

    # ---------- Helpers ----------

    def _jump(self, move: int) -> None:
        try:
            self.game.jump_to(move)
        except GameError as e:
            self.view.set_error(str(e))
            return
        label = self.game.list_moves()[move].label
        self.view.set_jump(label)

    def _restart(self) -> None:
        self.game = GameHistory()
        self.view.set_restart("Game restarted.")
