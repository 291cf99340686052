from __future__ import annotations

import argparse
import logging
from pathlib import Path

from core.settings import SAVE_FILE


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track quests from not started to completed.")
    parser.add_argument("--save-file", type=Path, default=SAVE_FILE, help="JSON file holding saved quests")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Imported late so --help works without opening a window.
    from game.game import Game

    Game(args.save_file).run()


if __name__ == "__main__":
    main()
