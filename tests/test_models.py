import pytest

from moviegraph.core.exceptions import RowMappingError
from moviegraph.graph.models import BirthYear, Casting, GraphNode, column, node_from_value


def test_node_from_value_copies_identity_labels_and_properties(graph):
    raw = graph.add_node(["Movie", "Classic"], title="Forrest Gump")

    node = node_from_value(raw)

    assert node == GraphNode(id=raw.element_id, labels=["Classic", "Movie"], properties={"title": "Forrest Gump"})
    assert node.get("title") == "Forrest Gump"
    assert node.get("missing", 0) == 0


@pytest.mark.parametrize("value", [{"name": "Tom Hanks"}, "Tom Hanks", None])
def test_node_from_value_rejects_non_nodes(value):
    with pytest.raises(RowMappingError) as excinfo:
        node_from_value(value)
    assert excinfo.value.error_code == "not_a_node"


def test_column_reports_available_columns():
    with pytest.raises(RowMappingError) as excinfo:
        column({"a.name": "Tom Hanks"}, "actor_name")

    assert excinfo.value.details == {"columns": ["a.name"]}


def test_casting_from_row_ignores_extra_columns():
    casting = Casting.from_row(
        {"actor_name": "Tom Hanks", "relationship_type": "ACTED_IN", "movie_title": "Forrest Gump", "r": object()}
    )

    assert (casting.actor_name, casting.relationship_type, casting.movie_title) == (
        "Tom Hanks",
        "ACTED_IN",
        "Forrest Gump",
    )


def test_casting_from_row_requires_every_column():
    with pytest.raises(RowMappingError) as excinfo:
        Casting.from_row({"actor_name": "Tom Hanks", "relationship_type": "ACTED_IN"})
    assert excinfo.value.error_code == "missing_column"


def test_birth_year_validates_field_types():
    assert BirthYear.from_row({"name": "Tom Hanks", "date_of_birth": 1944}).date_of_birth == 1944

    with pytest.raises(RowMappingError) as excinfo:
        BirthYear.from_row({"name": "Tom Hanks", "date_of_birth": "1944"})
    assert excinfo.value.error_code == "invalid_row"
    assert excinfo.value.details["errors"][0]["loc"] == ("date_of_birth",)
