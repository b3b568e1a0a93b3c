"""Shared test fixtures."""

import pytest

from wayfinder.core.graph import Graph
from wayfinder.core.models import Point


@pytest.fixture
def points() -> dict:
    """Fixture providing named node values A-E."""
    return {
        "A": Point(0, 0, "A"),
        "B": Point(1, 0, "B"),
        "C": Point(1, 1, "C"),
        "D": Point(2, 1, "D"),
        "E": Point(5, 5, "E"),
    }


@pytest.fixture
def diamond_graph(points) -> Graph:
    """
    Fixture providing the reference graph, with E isolated:

    A --1--> B --5--> D
     \\       |       ^
      4      1       |
       \\     v       |
        ---> C --1---
    """
    g = Graph()
    for from_name, to_name, weight in [
        ("A", "B", 1.0),
        ("A", "C", 4.0),
        ("B", "C", 1.0),
        ("B", "D", 5.0),
        ("C", "D", 1.0),
    ]:
        g.add_edge(points[from_name], points[to_name], weight)
    g.add_node(points["E"])
    return g
