"""Helpers that bring the database to a clean state before the tour."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from neo4j import AsyncDriver
from neo4j.exceptions import AuthError, DriverError, Neo4jError

from moviegraph.core.config import Settings, settings as default_settings
from moviegraph.core.exceptions import DatabaseConnectionError
from moviegraph.graph import queries
from moviegraph.graph.client import GraphClient
from moviegraph.graph.models import column

logger = logging.getLogger(__name__)


async def start_database(driver: AsyncDriver, *, retries: int, delay: float) -> None:
    """Wait for the server to accept connections."""

    last_error: Optional[Exception] = None
    for attempt in range(1, retries + 1):
        try:
            await driver.verify_connectivity()
        except AuthError as exc:
            raise DatabaseConnectionError(
                "authentication_failed",
                "Neo4j rejected the configured credentials",
                {"reason": str(exc)},
            ) from exc
        except (DriverError, Neo4jError, OSError) as exc:
            last_error = exc
            logger.info("Waiting for Neo4j to start... (%d retries left)", retries - attempt)
            if attempt < retries:
                await asyncio.sleep(delay)
        else:
            logger.info("Neo4j is accepting connections")
            return

    raise DatabaseConnectionError(
        "database_unavailable",
        f"Neo4j did not become available after {retries} attempt(s)",
        {"reason": str(last_error)},
    )


async def remove_database(client: GraphClient) -> int:
    """Delete every node and relationship; returns the number of deleted nodes."""

    row = await client.single(queries.DELETE_ALL_NODES, operation="remove_database")
    deleted = int(column(row, "deleted"))
    logger.info("Removed %d node(s) from the graph", deleted)
    return deleted


async def reset_database(driver: AsyncDriver, client: GraphClient, config: Optional[Settings] = None) -> None:
    config = config or default_settings
    await start_database(
        driver,
        retries=config.CONNECT_RETRIES,
        delay=config.CONNECT_RETRY_DELAY_SECONDS,
    )
    await remove_database(client)
