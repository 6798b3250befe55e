"""Ordered execution of the tour steps."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TextIO, Tuple

from opentelemetry import trace

from moviegraph.core.exceptions import MovieGraphError
from moviegraph.graph import queries
from moviegraph.graph.client import GraphClient
from moviegraph.graph.models import GraphNode, column
from moviegraph.tour import steps

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass(frozen=True)
class TourStep:
    name: str
    action: Callable[[GraphClient], Awaitable[Any]]
    render: Callable[[Any], List[str]]


@dataclass
class TourReport:
    """Results of the steps that completed, in execution order."""

    completed: List[Tuple[str, Any]] = field(default_factory=list)

    @property
    def step_names(self) -> List[str]:
        return [name for name, _ in self.completed]

    def result(self, name: str) -> Any:
        for step_name, value in self.completed:
            if step_name == name:
                return value
        raise KeyError(name)


def _node_lines(nodes: Sequence[GraphNode]) -> List[str]:
    return [f"  Node[{index}] {node.properties}" for index, node in enumerate(nodes)]


TOUR: Tuple[TourStep, ...] = (
    TourStep("create_node", steps.create_node, lambda node: [f"createNode() {node.properties}"]),
    TourStep("query_node", steps.query_node, lambda node: [f"queryNode() -> {node.properties}"]),
    TourStep("create_movie", steps.create_movie, lambda _: ["createMovie()"]),
    TourStep(
        "create_unique",
        steps.create_unique,
        lambda casting: [
            f"createUnique() {casting.actor_name} {casting.relationship_type} {casting.movie_title}"
        ],
    ),
    TourStep(
        "set_node_property",
        steps.set_node_property,
        lambda birth: [f"setNodeProperty() {birth.name} {birth.date_of_birth}"],
    ),
    TourStep("query_movies", steps.query_movies, lambda movies: ["queryMovies()", *_node_lines(movies)]),
    TourStep(
        "query_all_nodes",
        steps.query_all_nodes,
        lambda nodes: [f"queryAllNodes({len(nodes)})", *_node_lines(nodes)],
    ),
)


async def count_nodes(client: GraphClient) -> int:
    row = await client.single(queries.COUNT_ALL_NODES, operation="count_nodes")
    return int(column(row, "count"))


async def run_tour(
    client: GraphClient,
    *,
    fresh: bool = True,
    out: Optional[TextIO] = None,
    tour: Sequence[TourStep] = TOUR,
) -> TourReport:
    """Run every step in order, stopping at the first failure.

    `fresh` states whether the database was reset just before the tour. When
    it was not and the graph already holds nodes, the movie count check is
    expected to fail and a warning is logged up front.
    """

    stream = out or sys.stdout
    report = TourReport()

    if not fresh:
        existing = await count_nodes(client)
        if existing:
            logger.warning(
                "Graph already holds %d node(s); create_movie will add a duplicate and "
                "query_movies expects exactly %d movies on a fresh database",
                existing,
                steps.EXPECTED_MOVIES,
            )

    for step in tour:
        with tracer.start_as_current_span(f"tour.{step.name}"):
            try:
                value = await step.action(client)
            except MovieGraphError as exc:
                logger.error("Step %s failed: %s", step.name, exc)
                raise
        for line in step.render(value):
            print(line, file=stream)
        report.completed.append((step.name, value))

    logger.info("Tour finished: %d step(s) completed", len(report.completed))
    return report
