"""Command line entry for the moviegraph tour."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from moviegraph.core.config import Settings, settings as default_settings
from moviegraph.core.database import DatabaseManager
from moviegraph.core.exceptions import MovieGraphError
from moviegraph.core.observability import setup_tracing, shutdown_tracing
from moviegraph.core.reset import reset_database
from moviegraph.graph.client import GraphClient
from moviegraph.tour.runner import TourReport, run_tour

logger = logging.getLogger("moviegraph")


def build_parser(config: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moviegraph",
        description="Create and query a small actor/movie graph in Neo4j",
    )
    parser.add_argument(
        "--no-reset",
        dest="reset",
        action="store_false",
        default=config.RESET_ON_START,
        help="Keep existing graph data instead of clearing it first",
    )
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help=f"Logging verbosity (default: {config.LOG_LEVEL})",
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # The driver logs every Bolt message at DEBUG.
    logging.getLogger("neo4j").setLevel(max(logging.getLevelName(level), logging.INFO))


async def run(config: Settings, *, reset: bool, manager: Optional[DatabaseManager] = None) -> TourReport:
    """Connect, optionally reset, run the tour and always close the driver."""

    manager = manager or DatabaseManager(config)
    driver = await manager.initialize(verify=not reset)
    try:
        async with manager.session() as session:
            client = GraphClient(session)
            if reset:
                await reset_database(driver, client, config)
            return await run_tour(client, fresh=reset)
    finally:
        await manager.close()


def main(argv: Optional[Sequence[str]] = None, config: Optional[Settings] = None) -> int:
    config = config or default_settings
    args = build_parser(config).parse_args(argv)
    configure_logging(args.log_level)
    setup_tracing(config)

    try:
        asyncio.run(run(config, reset=args.reset))
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user.")
        return 1
    except MovieGraphError as exc:
        logger.error("Tour aborted: %s", exc)
        return 1
    finally:
        shutdown_tracing()
    return 0


if __name__ == "__main__":
    sys.exit(main())
