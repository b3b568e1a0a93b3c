"""
Single-pair Dijkstra search with pluggable relaxation.

Nodes move from unseen to the frontier (a pairing heap indexed by node) and
from the frontier to the closed set, never back. The search stops as soon as
the destination is closed, so only the part of the shortest path tree that is
nearer than the destination gets built.

Example:
    >>> search = Dijkstra(graph, a, d, DefaultRelaxer(), None, StoredWeightCalculator(graph))
    >>> search.execute()
    >>> search.get_result().nodes
    [a, b, c, d]
"""

import logging
import math
from time import time
from typing import Any, Optional, Set

from ..graph.base import Graph, InternalNode
from ..models.nodal import Nodal
from .base import GraphAlgorithm
from .models import Path, SearchMetrics, SearchNode
from .queue import FrontierQueue
from .relaxers import Relaxer
from .utils import MemoryManager
from .weights import EdgeWeightCalculator

logger = logging.getLogger(__name__)


class Dijkstra(GraphAlgorithm[Path]):
    """
    Dijkstra's shortest path algorithm between one origin and one destination.

    The relaxer and weight calculator decide edge costs, so the same search loop
    serves plain distances, per-modality weights or penalised routes.
    Weights must be non-negative.

    A search instance owns its frontier, closed set and records; run
    concurrent searches on separate instances. The graph is only read.
    """

    def __init__(
        self,
        graph: Graph,
        origin: Nodal,
        destination: Nodal,
        relaxer: Relaxer,
        modality: Any,
        weight_calculator: EdgeWeightCalculator,
        context: Any = None,
        max_memory_mb: Optional[float] = None,
    ):
        """
        Initialize the search.

        Args:
            graph: Graph to search
            origin: Node value to start from
            destination: Node value to reach
            relaxer: Relaxation policy
            modality: Value passed through to the weight calculator
            weight_calculator: Edge weight source
            context: Traversal context used to filter outgoing edges
            max_memory_mb: Optional ceiling on memory growth during the search

        Raises:
            NodeNotFoundError: If origin or destination is not in the graph
        """
        super().__init__(graph)
        self.origin: InternalNode = graph.get_internal_node(origin)
        self.destination: InternalNode = graph.get_internal_node(destination)
        self.relaxer = relaxer
        self.modality = modality
        self.weight_calculator = weight_calculator
        self.context = context
        self.max_memory_mb = max_memory_mb
        self.metrics: Optional[SearchMetrics] = None
        self._result: Optional[Path] = None

    def execute(self) -> None:
        """Run the search; the outcome is available from ``get_result``."""
        self._result = None
        metrics = SearchMetrics(operation="dijkstra", start_time=time())
        self.metrics = metrics
        memory_manager = MemoryManager(self.max_memory_mb) if self.max_memory_mb else None

        queue = FrontierQueue()
        closed: Set[InternalNode] = set()
        queue.add(SearchNode(self.origin, 0.0), 0.0)
        metrics.nodes_discovered = 1

        logger.debug("Starting Dijkstra from %s to %s", self.origin.nodal, self.destination.nodal)
        try:
            while not queue.is_empty():
                if memory_manager:
                    memory_manager.check_memory()

                pu = queue.extract_min()
                closed.add(pu.node)
                metrics.nodes_closed += 1
                logger.debug("Closed %s at weight %s", pu.node.nodal, pu.weight)

                if self.is_done(pu):
                    metrics.path_length = self._result.edge_count
                    logger.info(
                        "Found path %s -> %s with weight %s after closing %d nodes",
                        self.origin.nodal,
                        self.destination.nodal,
                        pu.weight,
                        metrics.nodes_closed,
                    )
                    return

                for v in self.graph.get_outgoing_edges(pu.node, self.context):
                    if v in closed:
                        continue
                    pv = queue.get(v)
                    if pv is None:
                        pv = SearchNode(v, math.inf)
                        queue.add(pv, math.inf)
                        metrics.nodes_discovered += 1

                    new_weight = self.relaxer.relax(
                        pu, pv, self.weight_calculator, self.modality
                    )
                    if new_weight is not None:
                        logger.debug(
                            "  Relaxed %s: %s -> %s", v.nodal, pv.weight, new_weight
                        )
                        pv.improve(new_weight, pu)
                        metrics.relaxations += 1
                        queue.update(pv, new_weight)
                        metrics.decrease_keys += 1

            logger.warning(
                "No path from %s to %s; frontier exhausted after closing %d nodes",
                self.origin.nodal,
                self.destination.nodal,
                metrics.nodes_closed,
            )
        finally:
            metrics.end_time = time()
            if memory_manager:
                metrics.max_memory_used = memory_manager.peak_memory

    def is_done(self, pu: SearchNode) -> bool:
        """Store the path and return True once the destination has been closed."""
        if pu.node == self.destination:
            self._result = self._to_path(pu)
            return True
        return False

    def get_result(self) -> Path:
        """
        Return the found path.

        Returns an invalid, empty path when the destination was not reached
        or ``execute`` has not run.
        """
        if self._result is None:
            return Path.invalid()
        return self._result

    @staticmethod
    def _to_path(record: SearchNode) -> Path:
        return Path(
            nodes=[node.nodal for node in record.chain()],
            total_weight=record.weight,
            valid=True,
        )
