"""Graph path finding functionality."""

from typing import Any, Optional

from ..graph.base import Graph
from ..models.nodal import Nodal
from .base import GraphAlgorithm
from .dijkstra import Dijkstra
from .heap import HeapHandle, PairingHeap
from .models import Path, PathValidationError, SearchMetrics, SearchNode
from .queue import FrontierQueue
from .relaxers import DefaultRelaxer, PenaltyRelaxer, Relaxer
from .utils import MemoryManager, get_edge_weight
from .weights import EdgeWeightCalculator, EuclideanWeightCalculator, StoredWeightCalculator

__all__ = [
    "DefaultRelaxer",
    "Dijkstra",
    "EdgeWeightCalculator",
    "EuclideanWeightCalculator",
    "FrontierQueue",
    "GraphAlgorithm",
    "HeapHandle",
    "MemoryManager",
    "PairingHeap",
    "Path",
    "PathFinding",
    "PathValidationError",
    "PenaltyRelaxer",
    "Relaxer",
    "SearchMetrics",
    "SearchNode",
    "StoredWeightCalculator",
    "get_edge_weight",
]


class PathFinding:
    """Static interface for path finding operations."""

    @staticmethod
    def create_dijkstra(
        graph: Graph,
        origin: Nodal,
        destination: Nodal,
        relaxer: Optional[Relaxer] = None,
        modality: Any = None,
        weight_calculator: Optional[EdgeWeightCalculator] = None,
        **kwargs,
    ) -> Dijkstra:
        """Build a Dijkstra search, defaulting to additive relaxation over stored weights."""
        return Dijkstra(
            graph,
            origin,
            destination,
            relaxer if relaxer is not None else DefaultRelaxer(),
            modality,
            weight_calculator if weight_calculator is not None else StoredWeightCalculator(graph),
            **kwargs,
        )

    @classmethod
    def shortest_path(
        cls,
        graph: Graph,
        origin: Nodal,
        destination: Nodal,
        relaxer: Optional[Relaxer] = None,
        modality: Any = None,
        weight_calculator: Optional[EdgeWeightCalculator] = None,
        **kwargs,
    ) -> Path:
        """
        Find the shortest path between two node values.

        Returns an invalid path when the destination is unreachable.

        Raises:
            NodeNotFoundError: If origin or destination is not in the graph
        """
        search = cls.create_dijkstra(
            graph, origin, destination, relaxer, modality, weight_calculator, **kwargs
        )
        search.execute()
        return search.get_result()
