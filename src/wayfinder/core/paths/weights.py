"""
Edge weight calculators.

An edge weight calculator is any callable taking the two endpoint handles of
an edge and a modality (transport mode, vehicle profile, ...) and returning a
non-negative weight. Calculators must be deterministic and free of side
effects: a relaxation policy may ask for the same weight more than once.
"""

import math
from typing import Any, Hashable, Mapping, Optional, Protocol

from ..graph.base import Graph, InternalNode


class EdgeWeightCalculator(Protocol):
    """Pure function of (from node, to node, modality) to a non-negative weight."""

    def __call__(self, from_node: InternalNode, to_node: InternalNode, modality: Any) -> float:
        ...


class StoredWeightCalculator:
    """
    Reads the weights stored on the graph's edges.

    Uses the modality specific weight when the edge has one, the edge's
    default weight otherwise.
    """

    def __init__(self, graph: Graph):
        self.graph = graph

    def __call__(self, from_node: InternalNode, to_node: InternalNode, modality: Any) -> float:
        return self.graph.get_edge_weight(from_node, to_node, modality)


class EuclideanWeightCalculator:
    """
    Travel time along the straight line between two node coordinates.

    The distance is divided by the speed of the modality, or by
    ``default_speed`` for modalities without an entry in ``speeds``.

    Example:
        >>> calc = EuclideanWeightCalculator(speeds={"walk": 1.0, "bike": 4.0})
        >>> calc(a, b, "bike")  # a=(0, 0), b=(3, 4)
        1.25
    """

    def __init__(
        self, speeds: Optional[Mapping[Hashable, float]] = None, default_speed: float = 1.0
    ):
        self.speeds = dict(speeds or {})
        self.default_speed = default_speed
        for name, speed in [("default", default_speed), *self.speeds.items()]:
            if not speed > 0 or math.isinf(speed):
                raise ValueError(f"speed for {name!r} must be a positive finite number")

    def __call__(self, from_node: InternalNode, to_node: InternalNode, modality: Any) -> float:
        speed = self.speeds.get(modality, self.default_speed)
        a, b = from_node.nodal, to_node.nodal
        return math.hypot(b.x - a.x, b.y - a.y) / speed
