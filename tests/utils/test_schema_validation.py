"""
Tests for graph definition schema validation.
"""

import pytest

from wayfinder.utils.validation import GRAPH_SCHEMA, validate_graph_definition


def _definition(**edge):
    return {
        "nodes": [{"name": "A", "x": 0, "y": 0}, {"name": "B", "x": 0, "y": 1}],
        "edges": [{"from": "A", "to": "B", **edge}],
    }


def test_minimal_definition():
    """Test the smallest valid graph definition."""
    result = validate_graph_definition({"nodes": [], "edges": []})
    assert result.is_valid
    assert result.context == {"schema": "graph"}


@pytest.mark.parametrize(
    "edge, location",
    [
        ({"weight": "1"}, "edges/0/weight"),
        ({"modalities": {"bike": -1}}, "edges/0/modalities/bike"),
        ({"contexts": "day"}, "edges/0/contexts"),
        ({"colour": "red"}, "edges/0"),
    ],
)
def test_invalid_edges(edge, location):
    """Test edge attribute validation reports the failing location."""
    result = validate_graph_definition(_definition(**edge))
    assert not result.is_valid
    assert len(result.errors) == 1
    assert f"Schema validation failed at {location}:" in result.errors[0]


def test_missing_node_name():
    """Test node names are required."""
    data = _definition()
    del data["nodes"][1]["name"]
    result = validate_graph_definition(data)
    assert not result.is_valid
    assert "nodes/1" in result.errors[0]


def test_non_object_document():
    """Test a document that is not an object."""
    result = validate_graph_definition([])
    assert not result.is_valid
    assert "<root>" in result.errors[0]


def test_custom_schema():
    """Test validation against a caller supplied schema."""
    schema = dict(GRAPH_SCHEMA, required=["nodes"])
    assert validate_graph_definition({"nodes": []}, schema).is_valid
