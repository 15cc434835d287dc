from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tictactoe.core.board import SIZE, index_of


class CommandType(Enum):
    QUIT = "quit"
    RESTART = "restart"
    HISTORY = "history"
    JUMP = "jump"
    BACK = "back"
    FORWARD = "forward"
    HELP = "help"


@dataclass(frozen=True)
class Command:
    """Parsed command from user input."""
    type: CommandType
    raw: str
    arg: Optional[int] = None


@dataclass(frozen=True)
class ParseResult:
    """
    Result of parsing one line input.
    Exactly one of (command, cell) should be set on success.
    """
    command: Optional[Command] = None
    cell: Optional[int] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.error == "" and (self.command is not None or self.cell is not None)


_SIMPLE = {
    "quit": CommandType.QUIT,
    "q": CommandType.QUIT,
    "restart": CommandType.RESTART,
    "history": CommandType.HISTORY,
    "back": CommandType.BACK,
    "forward": CommandType.FORWARD,
    "help": CommandType.HELP,
}


class CommandProcessor:
    """
    Parses user input line into:
      - Command (e.g. /jump 3)
      - cell index 0..8, from '2 3' (column row), 'B3', or '1'..'9'

    This class does NOT execute anything. The controller decides what to do.
    """

    @property
    def help_cmds(self) -> str:
        cmds = ["/help", "/quit", "/restart", "/history", "/jump N", "/back", "/forward"]
        return ", ".join(cmds)

    def help_text(self) -> str:
        col_end = chr(ord("A") + SIZE - 1)
        return (
            f"Input: 'x y' (e.g. 2 3), 'B3' (A-{col_end} + 1-{SIZE}) or a cell 1-{SIZE * SIZE}.\n"
            f"Commands: {self.help_cmds}"
        )

    # ---------- Public parse API ----------

    def parse(self, text: str) -> ParseResult:
        """Parse a raw input line. Empty input is a no-op (ok is False, no error)."""
        raw = (text or "").strip()
        if not raw:
            return ParseResult(error="")

        if raw.startswith("/"):
            return self._parse_command(raw)

        # move: "x y" (column row, 1..SIZE)
        parts = raw.split()
        if len(parts) == 2 and parts[0].isdecimal() and parts[1].isdecimal():
            x, y = int(parts[0]), int(parts[1])
            if not self._is_in_bounds(x, y):
                return ParseResult(error=self._oob_msg(x, y))
            return ParseResult(cell=index_of(y - 1, x - 1))

        # move: "5" (cell in reading order, 1..9)
        if raw.isdecimal():
            n = int(raw)
            if not 1 <= n <= SIZE * SIZE:
                return ParseResult(error=f"Out of bounds: {n} (must be 1..{SIZE * SIZE})")
            return ParseResult(cell=n - 1)

        # move: "B3" (A..C + 1..SIZE)
        if len(raw) >= 2 and raw[0].isalpha():
            col = raw[0].upper()
            rest = raw[1:].strip()
            if rest.isdecimal():
                x = ord(col) - ord("A") + 1
                y = int(rest)
                if not self._is_in_bounds(x, y):
                    return ParseResult(error=self._oob_msg(x, y))
                return ParseResult(cell=index_of(y - 1, x - 1))

        return ParseResult(error="Invalid input. Use 'x y', 'B3', 1-9 or /help")

    # ---------- Helpers ----------

    def _parse_command(self, raw: str) -> ParseResult:
        parts = raw[1:].strip().lower().split()
        if not parts:
            return ParseResult(error=f"Unknown command: {raw}")
        name, args = parts[0], parts[1:]

        if name in ("jump", "j"):
            if len(args) != 1 or not args[0].isdecimal():
                return ParseResult(error="Usage: /jump N (0 = game start)")
            return ParseResult(command=Command(CommandType.JUMP, raw, int(args[0])))

        ctype = _SIMPLE.get(name)
        if ctype is None:
            return ParseResult(error=f"Unknown command: {raw}")
        if args:
            return ParseResult(error=f"/{name} takes no arguments")
        return ParseResult(command=Command(ctype, raw))

    def _is_in_bounds(self, x: int, y: int) -> bool:
        return 1 <= x <= SIZE and 1 <= y <= SIZE

    def _oob_msg(self, x: int, y: int) -> str:
        return f"Out of bounds: {x}, {y} (must be 1..{SIZE})"
