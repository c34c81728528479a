#!/usr/bin/env python3
"""
Entry point for the Yahtzee terminal game.

Usage:
    python yahtzee.py                           # Last used names, from settings
    python yahtzee.py --names Ann Bo            # Two players in seat order (remembered)
    python yahtzee.py --seed 42                 # Repeatable dice
    python yahtzee.py --log-level DEBUG         # Trace turns (textual console)
"""
import logging
import random

from textual.logging import TextualHandler

from game_coordinator import Game, parse_args
from settings import load_settings, save_settings
from tui import main as run_tui


def build_game(argv=None, settings=None, settings_path=None):
    """Create a Game from command-line arguments layered over settings.

    Names given on the command line are saved as the new default.
    """
    args = parse_args(argv)
    if settings is None:
        settings = load_settings(settings_path)
    names = list(args.names or settings["player_names"])
    seed = args.seed if args.seed is not None else settings["seed"]
    level = args.log_level or settings["log_level"]
    # Records go to the Textual devtools console so they don't corrupt the screen
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.WARNING),
                        handlers=[TextualHandler()])
    game = Game(names, rng=random.Random(seed))
    if names != list(settings["player_names"]):
        save_settings({**settings, "player_names": names}, path=settings_path)
    return game


def main(argv=None):
    run_tui(build_game(argv))


if __name__ == "__main__":
    main()
