"""Bootstrap the journey clock for a freshly loaded album catalog."""
from __future__ import annotations

import argparse
import logging
import sys

from album_journey.db.session import SessionLocal, create_tables
from album_journey.services.clock import GlobalClock, count_albums

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create the global state row and release album #1.",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before initializing (skip when using migrations).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.create_tables:
        create_tables()

    with SessionLocal() as db:
        state = GlobalClock.initialize(db)
        total = count_albums(db)

    if total == 0:
        logger.warning("Album catalog is empty; import albums before the first tick")
    print(f"Journey at day {state.current_day} of {total} (paused={state.is_paused})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
