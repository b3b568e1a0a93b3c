"""Core graph and path finding functionality."""

from .exceptions import (
    ConfigurationError,
    DuplicateResourceError,
    EdgeNotFoundError,
    EmptyQueueError,
    InvalidOperationError,
    NodeNotFoundError,
    QueueConsistencyError,
    ResourceNotFoundError,
)
from .graph import Graph, InternalNode, build_graph
from .models import Nodal, Point
from .paths import (
    DefaultRelaxer,
    Dijkstra,
    EuclideanWeightCalculator,
    Path,
    PathFinding,
    PenaltyRelaxer,
    Relaxer,
    StoredWeightCalculator,
)

__all__ = [
    "ConfigurationError",
    "DefaultRelaxer",
    "Dijkstra",
    "DuplicateResourceError",
    "EdgeNotFoundError",
    "EmptyQueueError",
    "EuclideanWeightCalculator",
    "Graph",
    "InternalNode",
    "InvalidOperationError",
    "Nodal",
    "NodeNotFoundError",
    "Path",
    "PathFinding",
    "PenaltyRelaxer",
    "Point",
    "QueueConsistencyError",
    "Relaxer",
    "ResourceNotFoundError",
    "StoredWeightCalculator",
    "build_graph",
]
