"""Main entry point for the console games."""

import argparse
import logging
from dataclasses import replace
from random import Random

from rich.console import Console

from config import config
from console_ui.games import play_rps, play_tic_tac_toe, play_twenty_one
from console_ui.prompts import ConsolePrompts

GAMES = {
    "twenty-one": play_twenty_one,
    "rps": play_rps,
    "tic-tac-toe": play_tic_tac_toe,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a tabletop game against the computer.")
    parser.add_argument("game", choices=sorted(GAMES), nargs="?", default="twenty-one")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible games")
    parser.add_argument(
        "--pause",
        type=float,
        default=None,
        help="Seconds to pause between steps (default from GAME_PAUSE_SECONDS)",
    )
    parser.add_argument("--log-level", default=config.log_level, help="Logging level")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the console UI."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    game_config = config.game
    if args.pause is not None:
        game_config = replace(game_config, pause_seconds=args.pause)

    console = Console()
    try:
        GAMES[args.game](ConsolePrompts(console), Random(args.seed), game_config)
    except (KeyboardInterrupt, EOFError):
        console.print("\nGoodbye!")


if __name__ == "__main__":
    main()
