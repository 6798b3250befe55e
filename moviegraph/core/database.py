"""Database connectivity layer for moviegraph."""

from __future__ import annotations

import logging
from typing import Optional

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncSession
from neo4j.exceptions import AuthError, DriverError, Neo4jError

from moviegraph.core.config import Settings, settings as default_settings
from moviegraph.core.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the single Neo4j driver used for the lifetime of the process."""

    def __init__(self, config: Optional[Settings] = None) -> None:
        self.settings = config or default_settings
        self.neo4j: Optional[AsyncDriver] = None

    async def initialize(self, *, verify: bool = True) -> AsyncDriver:
        """Create the driver and optionally check that the server answers."""

        if self.neo4j is not None:
            return self.neo4j

        logger.info("Connecting to Neo4j at %s", self.settings.NEO4J_URI)
        try:
            self.neo4j = AsyncGraphDatabase.driver(
                str(self.settings.NEO4J_URI),
                auth=(self.settings.NEO4J_USER, self.settings.NEO4J_PASSWORD),
            )
        except (DriverError, ValueError) as exc:
            raise DatabaseConnectionError(
                "invalid_uri",
                f"Cannot create a driver for {self.settings.NEO4J_URI}",
                {"reason": str(exc)},
            ) from exc

        if verify:
            try:
                await self.neo4j.verify_connectivity()
            except (AuthError, DriverError, Neo4jError, OSError) as exc:
                await self.close()
                raise DatabaseConnectionError(
                    "connection_failed",
                    f"Could not connect to {self.settings.NEO4J_URI}",
                    {"reason": str(exc)},
                ) from exc
            logger.info("Neo4j connection verified")

        return self.neo4j

    def session(self) -> AsyncSession:
        if self.neo4j is None:
            raise DatabaseConnectionError("not_initialized", "Neo4j driver not initialized")
        return self.neo4j.session(database=self.settings.NEO4J_DATABASE)

    async def close(self) -> None:
        """Tear down the driver; safe to call more than once."""

        if self.neo4j is not None:
            logger.info("Closing Neo4j driver")
            await self.neo4j.close()
            self.neo4j = None
