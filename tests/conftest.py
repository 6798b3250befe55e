import itertools
from typing import Any, Dict, List, Optional

import pytest

from moviegraph.graph import queries
from moviegraph.graph.client import GraphClient


class FakeNode:
    """Quacks like `neo4j.graph.Node` for the attributes the mapper reads."""

    def __init__(self, element_id: str, labels, properties: Dict[str, Any]):
        self.element_id = element_id
        self.labels = frozenset(labels)
        self._properties = dict(properties)

    def items(self):
        return self._properties.items()

    def get(self, key, default=None):
        return self._properties.get(key, default)

    def __setitem__(self, key, value):
        self._properties[key] = value


class FakeResult:
    def __init__(self, rows: List[Dict[str, Any]]):
        self._rows = rows

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for row in self._rows:
            yield row


class FakeGraph:
    """In-memory graph answering the tour's query templates."""

    def __init__(self):
        self.nodes: List[FakeNode] = []
        self.relationships: List[tuple] = []
        self._ids = itertools.count()
        self._handlers = {
            queries.CREATE_ACTOR: self._create_actor,
            queries.MATCH_ACTOR_BY_NAME: self._match_actor,
            queries.CREATE_MOVIE_FOR_ACTOR: self._create_movie,
            queries.MERGE_MOVIE_FOR_ACTOR: self._merge_movie,
            queries.SET_ACTOR_BIRTH_YEAR: self._set_birth_year,
            queries.MATCH_ALL_MOVIES: self._match_movies,
            queries.MATCH_ALL_NODES: lambda _: [{"n": node} for node in self.nodes],
            queries.COUNT_ALL_NODES: lambda _: [{"count": len(self.nodes)}],
            queries.DELETE_ALL_NODES: self._delete_all,
        }

    def add_node(self, labels, **properties) -> FakeNode:
        node = FakeNode(f"4:fake:{next(self._ids)}", labels, properties)
        self.nodes.append(node)
        return node

    def labelled(self, label: str) -> List[FakeNode]:
        return [node for node in self.nodes if label in node.labels]

    def actors(self, name: str) -> List[FakeNode]:
        return [node for node in self.labelled("Actor") if node.get("name") == name]

    def execute(self, statement: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        return self._handlers[statement](params)

    def _create_actor(self, params):
        return [{"actor": self.add_node(["Actor"], name=params["name"])}]

    def _match_actor(self, params):
        return [{"actor": actor} for actor in self.actors(params["actor_name"])]

    def _create_movie(self, params):
        for actor in self.actors(params["actor_name"]):
            movie = self.add_node(["Movie"], title=params["movie_title"])
            self.relationships.append((actor, "ACTED_IN", movie))
        return []

    def _merge_movie(self, params):
        rows = []
        for actor in self.actors(params["actor_name"]):
            existing = [
                end
                for start, rel_type, end in self.relationships
                if start is actor and rel_type == "ACTED_IN" and end.get("title") == params["movie_title"]
            ]
            if existing:
                movie = existing[0]
            else:
                movie = self.add_node(["Movie"], title=params["movie_title"])
                self.relationships.append((actor, "ACTED_IN", movie))
            rows.append(
                {"actor_name": actor.get("name"), "relationship_type": "ACTED_IN", "movie_title": movie.get("title")}
            )
        return rows

    def _set_birth_year(self, params):
        rows = []
        for actor in self.actors(params["actor_name"]):
            actor["DoB"] = params["dob"]
            rows.append({"name": actor.get("name"), "date_of_birth": actor.get("DoB")})
        return rows

    def _match_movies(self, _):
        return [{"movie": movie} for movie in self.labelled("Movie")]

    def _delete_all(self, _):
        deleted = len(self.nodes)
        self.nodes.clear()
        self.relationships.clear()
        return [{"deleted": deleted}]


class FakeSession:
    def __init__(self, graph: FakeGraph, error: Optional[Exception] = None):
        self.graph = graph
        self.error = error
        self.statements: List[str] = []
        self.closed = False

    async def run(self, statement, parameters=None):
        self.statements.append(statement)
        if self.error is not None:
            raise self.error
        return FakeResult(self.graph.execute(statement, dict(parameters or {})))

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True
        return False


@pytest.fixture
def graph():
    return FakeGraph()


@pytest.fixture
def session(graph):
    return FakeSession(graph)


@pytest.fixture
def client(session):
    return GraphClient(session)


@pytest.fixture
def failing_session(graph):
    def _make(error: Exception) -> FakeSession:
        return FakeSession(graph, error)

    return _make
