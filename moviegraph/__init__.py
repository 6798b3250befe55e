"""Create and query a small actor/movie graph with the Neo4j driver."""

__version__ = "0.1.0"
