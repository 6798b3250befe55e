"""The seven demonstration steps of the movie graph tour.

Each step receives the `GraphClient` explicitly, runs one parameterized
statement and maps the generic rows into typed values. Unexpected row counts
raise `CardinalityError`; nothing here catches errors.
"""

from __future__ import annotations

import logging
from typing import List

from moviegraph.graph import queries
from moviegraph.graph.client import GraphClient
from moviegraph.graph.models import BirthYear, Casting, GraphNode, column, node_from_value

logger = logging.getLogger(__name__)

ACTOR_NAME = "Tom Hanks"
FIRST_MOVIE = "Sleepless in Seattle"
SECOND_MOVIE = "Forrest Gump"
ACTOR_BIRTH_YEAR = 1944
EXPECTED_MOVIES = 2


async def create_node(client: GraphClient, name: str = ACTOR_NAME) -> GraphNode:
    """Create the actor node with its `Actor` label."""

    row = await client.single(queries.CREATE_ACTOR, {"name": name}, operation="createNode()")
    node = node_from_value(column(row, "actor"))
    logger.info("Created actor node %s", node.id)
    return node


async def query_node(client: GraphClient, name: str = ACTOR_NAME) -> GraphNode:
    row = await client.single(queries.MATCH_ACTOR_BY_NAME, {"actor_name": name}, operation="queryNode()")
    return node_from_value(column(row, "actor"))


async def create_movie(client: GraphClient, actor: str = ACTOR_NAME, movie: str = FIRST_MOVIE) -> None:
    """Attach a new movie to the actor. Running this twice creates two movies."""

    await client.run(queries.CREATE_MOVIE_FOR_ACTOR, {"actor_name": actor, "movie_title": movie})
    logger.info("Created movie %r for %r", movie, actor)


async def create_unique(client: GraphClient, actor: str = ACTOR_NAME, movie: str = SECOND_MOVIE) -> Casting:
    """Attach a movie to the actor unless the same pattern already exists."""

    row = await client.single(
        queries.MERGE_MOVIE_FOR_ACTOR,
        {"actor_name": actor, "movie_title": movie},
        operation="createUnique()",
    )
    return Casting.from_row(row)


async def set_node_property(
    client: GraphClient, actor: str = ACTOR_NAME, dob: int = ACTOR_BIRTH_YEAR
) -> BirthYear:
    row = await client.single(
        queries.SET_ACTOR_BIRTH_YEAR,
        {"actor_name": actor, "dob": dob},
        operation="setNodeProperty()",
    )
    return BirthYear.from_row(row)


async def query_movies(client: GraphClient, expected: int = EXPECTED_MOVIES) -> List[GraphNode]:
    """Return every movie; the count must match `expected` exactly."""

    rows = await client.expect_rows(queries.MATCH_ALL_MOVIES, None, expected, operation="queryMovies()")
    return [node_from_value(column(row, "movie")) for row in rows]


async def query_all_nodes(client: GraphClient) -> List[GraphNode]:
    rows = await client.run(queries.MATCH_ALL_NODES)
    return [node_from_value(column(row, "n")) for row in rows]
