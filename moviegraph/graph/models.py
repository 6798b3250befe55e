"""Graph node model and row mapping helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, ValidationError

from moviegraph.core.exceptions import RowMappingError

Row = Dict[str, Any]


@dataclass
class GraphNode:
    id: str
    labels: list[str]
    properties: Dict[str, object] = field(default_factory=dict)

    def get(self, key: str, default: object = None) -> object:
        return self.properties.get(key, default)


def column(row: Mapping[str, Any], name: str) -> Any:
    """Return a declared output column, failing loudly when it is missing."""

    if name not in row:
        raise RowMappingError(
            "missing_column",
            f"Result row has no column {name!r}",
            {"columns": sorted(row)},
        )
    return row[name]


def node_from_value(value: Any) -> GraphNode:
    """Convert a driver node into a `GraphNode`."""

    element_id = getattr(value, "element_id", None)
    labels = getattr(value, "labels", None)
    if element_id is None or labels is None or not hasattr(value, "items"):
        raise RowMappingError(
            "not_a_node",
            f"Expected a graph node, got {type(value).__name__}",
        )
    return GraphNode(
        id=str(element_id),
        labels=sorted(labels),
        properties=dict(value.items()),
    )


class RowRecord(BaseModel):
    """Typed view over selected columns of a result row."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]):
        values = {name: column(row, name) for name in cls.model_fields}
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise RowMappingError(
                "invalid_row",
                f"Result row does not match {cls.__name__}",
                {"errors": exc.errors(include_url=False)},
            ) from exc


class Casting(RowRecord):
    actor_name: StrictStr
    relationship_type: StrictStr
    movie_title: StrictStr


class BirthYear(RowRecord):
    name: StrictStr
    date_of_birth: StrictInt
