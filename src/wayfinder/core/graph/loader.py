"""
Building graphs from JSON graph definitions.

See ``wayfinder.utils.validation.schema`` for the accepted document layout.
"""

import logging
from typing import Any, Dict, Tuple

from ...utils.validation import validate_graph_definition
from ..exceptions import ConfigurationError, DuplicateResourceError, NodeNotFoundError
from ..models.nodal import Point
from .base import Graph

logger = logging.getLogger(__name__)


def build_graph(data: Dict[str, Any]) -> Tuple[Graph, Dict[str, Point]]:
    """
    Build a graph from a decoded graph definition.

    Args:
        data: Decoded JSON graph definition

    Returns:
        The graph and a lookup from node name to node value

    Raises:
        ConfigurationError: If the definition does not match the schema
        DuplicateResourceError: If two nodes share a name
        NodeNotFoundError: If an edge references an undeclared node
    """
    result = validate_graph_definition(data)
    if not result.is_valid:
        raise ConfigurationError("; ".join(result.errors))

    graph = Graph()
    points: Dict[str, Point] = {}
    for node_data in data["nodes"]:
        name = node_data["name"]
        if name in points:
            raise DuplicateResourceError(f"Node '{name}' is declared more than once")
        point = Point(x=node_data["x"], y=node_data["y"], name=name)
        points[name] = point
        graph.add_node(point)

    for edge_data in data["edges"]:
        for end in ("from", "to"):
            if edge_data[end] not in points:
                raise NodeNotFoundError(
                    f"Edge references undeclared node '{edge_data[end]}'"
                )
        graph.add_edge(
            points[edge_data["from"]],
            points[edge_data["to"]],
            weight=edge_data.get("weight", 1.0),
            modalities=edge_data.get("modalities"),
            contexts=edge_data.get("contexts"),
        )

    logger.info("Built graph with %d nodes and %d edges", graph.node_count(), graph.edge_count())
    return graph, points
