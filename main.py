from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import List, Optional

from tictactoe.app.controller import HotseatController, PlayConfig
from tictactoe.cli.view import CliView
from tictactoe.core.game import GameHistory
from tictactoe.core.move import GameError


def parse_moves(text: str) -> List[int]:
    """'0,3,1' or '0 3 1' -> [0, 3, 1]"""
    parts = [p for p in re.split(r"[,\s]+", text.strip()) if p]
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"moves must be cell numbers 0-8, got {text!r}")


def run_play(clear: bool) -> int:
    ctrl = HotseatController(config=PlayConfig(clear_screen=clear))
    ctrl.run()
    return 0


def run_replay(moves: List[int]) -> int:
    game = GameHistory()
    for i, cell in enumerate(moves, start=1):
        try:
            game.apply_move(cell)
        except GameError as e:
            logging.error("move %d rejected: %s", i, e)
            return 2

    view = CliView(clear=False)
    view.show_history = True
    view.render(game.get_state(), with_prompt=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="tictactoe")
    ap.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    sub = ap.add_subparsers(dest="mode", required=True)

    ap_play = sub.add_parser("play", help="Two players at one terminal")
    ap_play.add_argument(
        "--clear",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Clear the screen between turns (default: True)",
    )

    ap_replay = sub.add_parser("replay", help="Apply a move list and print the result")
    ap_replay.add_argument("moves", type=parse_moves, help="Cell numbers 0-8, e.g. '0,3,1,4,2'")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.mode == "play":
        return run_play(args.clear)
    return run_replay(args.moves)


if __name__ == "__main__":
    sys.exit(main())
