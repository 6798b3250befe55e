from .client import GraphClient
from .models import BirthYear, Casting, GraphNode, Row, column, node_from_value

__all__ = [
    "BirthYear",
    "Casting",
    "GraphClient",
    "GraphNode",
    "Row",
    "column",
    "node_from_value",
]
