"""Custom exception hierarchy for moviegraph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(eq=False)
class MovieGraphError(Exception):
    """Base class for application specific errors with structured payloads."""

    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        base = f"[{self.error_code}] {self.message}"
        if self.details:
            return f"{base} :: {self.details}"
        return base


class DatabaseConnectionError(MovieGraphError):
    """Raised when the graph database cannot be reached."""


class QueryExecutionError(MovieGraphError):
    """Raised when the database rejects or fails a Cypher statement."""


class CardinalityError(MovieGraphError):
    """Raised when a query returns a different number of rows than expected."""

    @classmethod
    def for_rows(cls, operation: str, expected: int, actual: int) -> "CardinalityError":
        return cls(
            "cardinality_mismatch",
            f"Incorrect results len in {operation}: got {actual}, expected {expected}",
            {"operation": operation, "expected": expected, "actual": actual},
        )


class RowMappingError(MovieGraphError):
    """Raised when a result row cannot be converted into a typed record."""
