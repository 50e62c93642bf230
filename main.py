import argparse
import logging
import sys
from typing import List, Optional

from game.civilizations import CIVILIZATIONS
from game.game import Game
from game.persistence import GameLoadError, GameSaveError
from game import settings
from world.settings import WorldSettings

logger = logging.getLogger("chronos")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a headless Chronos game.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for map generation and every later roll")
    parser.add_argument(
        "--civ",
        type=str,
        default="Rome",
        choices=list(CIVILIZATIONS),
        help="Civilization to play (default: Rome)",
    )
    parser.add_argument(
        "--turns", type=int, default=settings.DEFAULT_TURNS,
        help=f"Number of turns to play (default: {settings.DEFAULT_TURNS})",
    )
    parser.add_argument("--save-file", type=str, default=None, help="Where to write the save file")
    parser.add_argument(
        "--load", action="store_true",
        help="Resume from the save file instead of starting a new game",
    )
    parser.add_argument(
        "--no-save", action="store_true",
        help="Run the game without writing back to disk (dry-run mode)",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Play a game without any player input beyond founding the capital.
    Returns exit code 0 on success, nonzero on failure.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    game = Game(seed=args.seed, world_settings=WorldSettings(seed=args.seed), save_file=args.save_file)

    loaded = False
    if args.load:
        try:
            loaded = game.load()
        except GameLoadError as e:
            logger.error("Error loading save file %r: %s. Starting fresh.", str(game.save_file), e)
        else:
            if not loaded:
                logger.warning("No saved game in %r; starting fresh.", str(game.save_file))

    if not loaded:
        game.new_game()
        game.choose_civilization(args.civ)
        if not game.found_capital():
            logger.warning("%s has no settler to found a capital with", args.civ)

    for _ in range(max(0, args.turns)):
        game.end_turn()
        logger.info("Turn %d: %s", game.state.turn, game.summary())

    for key, value in game.summary().items():
        print(f"{key:>12}: {value}")
    for line in game.recent_logs():
        print(f"  {line}")

    if args.no_save:
        print("Skipping save (--no-save)")
        return 0
    try:
        game.save()
    except GameSaveError as e:
        logger.error("Failed to save game: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
