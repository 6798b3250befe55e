"""Thin query executor over a single Neo4j session."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from neo4j.exceptions import DriverError, Neo4jError

from moviegraph.core.exceptions import CardinalityError, DatabaseConnectionError, QueryExecutionError
from moviegraph.graph.models import Row

logger = logging.getLogger(__name__)


def _describe(statement: str) -> str:
    return " ".join(statement.split())


class GraphClient:
    """Runs parameterized Cypher statements and materializes their rows.

    The client wraps one session held for the whole tour. Every statement is
    an auto-commit query awaited to completion before the next one starts.
    """

    def __init__(self, session: Any) -> None:
        self._session = session

    async def run(self, statement: str, parameters: Optional[Mapping[str, Any]] = None) -> List[Row]:
        params: Dict[str, Any] = dict(parameters or {})
        logger.debug("Running %s with %s", _describe(statement), params)
        try:
            result = await self._session.run(statement, params)
            rows = [dict(record.items()) async for record in result]
        except Neo4jError as exc:
            raise QueryExecutionError(
                getattr(exc, "code", None) or "query_failed",
                getattr(exc, "message", None) or str(exc),
                {"statement": _describe(statement), "parameters": params},
            ) from exc
        except DriverError as exc:
            raise DatabaseConnectionError(
                "connection_lost",
                str(exc) or exc.__class__.__name__,
                {"statement": _describe(statement)},
            ) from exc
        logger.debug("Statement returned %d row(s)", len(rows))
        return rows

    async def expect_rows(
        self,
        statement: str,
        parameters: Optional[Mapping[str, Any]],
        expected: int,
        *,
        operation: str = "query",
    ) -> List[Row]:
        rows = await self.run(statement, parameters)
        if len(rows) != expected:
            raise CardinalityError.for_rows(operation, expected, len(rows))
        return rows

    async def single(
        self,
        statement: str,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        operation: str = "query",
    ) -> Row:
        rows = await self.expect_rows(statement, parameters, 1, operation=operation)
        return rows[0]
