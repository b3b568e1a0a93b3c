"""
Data models for graph path finding.

This module provides the data structures shared by the path finding package:
- SearchNode: Per-node search state (tentative weight and predecessor link)
- Path: Result of a single-pair search, valid or not
- SearchMetrics: Counters describing one search run
- PathValidationError: Exception for path validation failures

Example:
    >>> path = search.get_result()
    >>> if path.valid:
    ...     print([str(n) for n in path.nodes], path.total_weight)
"""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Union

from ..exceptions import QueueConsistencyError
from ..graph.base import InternalNode
from ..models.nodal import Nodal

if TYPE_CHECKING:
    from ..graph.base import Graph
    from .weights import EdgeWeightCalculator


class PathValidationError(Exception):
    """
    Raised when a path fails validation checks.

    This exception indicates issues such as:
    - Wrong endpoints
    - Missing edges in graph
    - Weight inconsistencies
    - A valid flag on an empty path
    """

    pass


@dataclass(eq=False, slots=True)
class SearchNode:
    """
    Search state for one graph node.

    Equality and hashing use ``node`` only, so a record stays the right key in
    the frontier index while its weight changes.

    Attributes:
        node (InternalNode): The graph node this record tracks
        weight (float): Best known distance from the origin so far
        predecessor (Optional[SearchNode]): Record of the previous node on the
            best known path, None for the origin
    """

    node: InternalNode
    weight: float = math.inf
    predecessor: Optional["SearchNode"] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchNode):
            return NotImplemented
        return self.node == other.node

    def __hash__(self) -> int:
        return hash(self.node)

    def improve(self, weight: float, predecessor: "SearchNode") -> None:
        """
        Lower the tentative weight and record the new predecessor.

        Raises:
            QueueConsistencyError: If the weight does not strictly decrease or is negative
        """
        if not weight < self.weight:
            raise QueueConsistencyError(
                f"Weight of {self.node!r} may only decrease ({self.weight} -> {weight})"
            )
        if weight < 0:
            raise QueueConsistencyError(f"Weight of {self.node!r} cannot be negative")
        self.weight = weight
        self.predecessor = predecessor

    def chain(self) -> List[InternalNode]:
        """Reconstruct the nodes from the origin up to this record."""
        nodes = []
        current: Optional[SearchNode] = self
        while current is not None:
            nodes.append(current.node)
            current = current.predecessor
        nodes.reverse()
        return nodes

    def __repr__(self) -> str:
        return f"SearchNode({self.node.nodal}, weight={self.weight:.1f})"


@dataclass
class Path:
    """
    Result of a single-pair shortest path search.

    Attributes:
        nodes: Node values from origin to destination, origin first
        total_weight: Accumulated weight along the path
        valid: False when no path was found

    Example:
        >>> result = Path(nodes=[a, b, d], total_weight=3.0, valid=True)
        >>> result.validate(graph, StoredWeightCalculator(graph))
    """

    nodes: List[Nodal] = field(default_factory=list)
    total_weight: float = 0.0
    valid: bool = False

    def __post_init__(self):
        """Validate initialization parameters."""
        if not isinstance(self.nodes, list):
            raise TypeError("nodes must be a list")
        if isinstance(self.total_weight, bool) or not isinstance(
            self.total_weight, (int, float)
        ):
            raise TypeError("total_weight must be a numeric value")
        if self.valid and not self.nodes:
            raise PathValidationError("a valid path needs at least one node")

    @classmethod
    def invalid(cls) -> "Path":
        """Create the result of a search that did not reach its destination."""
        return cls(nodes=[], total_weight=math.inf, valid=False)

    def __len__(self) -> int:
        """Return the number of nodes in the path."""
        return len(self.nodes)

    def __getitem__(self, index: int) -> Nodal:
        return self.nodes[index]

    def __iter__(self) -> Iterator[Nodal]:
        return iter(self.nodes)

    @property
    def origin(self) -> Optional[Nodal]:
        return self.nodes[0] if self.nodes else None

    @property
    def destination(self) -> Optional[Nodal]:
        return self.nodes[-1] if self.nodes else None

    @property
    def edge_count(self) -> int:
        """Number of edges traversed."""
        return max(len(self.nodes) - 1, 0)

    def validate(
        self,
        graph: "Graph",
        weight_calculator: Optional["EdgeWeightCalculator"] = None,
        modality: Any = None,
        weight_epsilon: float = 1e-9,
    ) -> None:
        """
        Validate the path against a graph.

        Checks that every node is in the graph and every consecutive pair is
        connected. With a weight calculator, also checks that the edge weights
        add up to ``total_weight``; only meaningful for purely additive
        relaxation policies.

        Raises:
            PathValidationError: If any validation check fails
            ValueError: If weight_epsilon is not positive
        """
        if weight_epsilon <= 0:
            raise ValueError("weight_epsilon must be positive")
        if not self.valid:
            if self.nodes:
                raise PathValidationError("an invalid path must not carry nodes")
            return

        handles = []
        for nodal in self.nodes:
            if not graph.has_node(nodal):
                raise PathValidationError(f"Node {nodal} not in graph")
            handles.append(graph.get_internal_node(nodal))

        for i in range(len(handles) - 1):
            if not graph.has_edge(handles[i], handles[i + 1]):
                raise PathValidationError(
                    f"Edge from {self.nodes[i]} to {self.nodes[i + 1]} not found in graph"
                )

        if weight_calculator is not None:
            calculated = sum(
                weight_calculator(handles[i], handles[i + 1], modality)
                for i in range(len(handles) - 1)
            )
            if abs(calculated - self.total_weight) > weight_epsilon:
                raise PathValidationError(
                    f"Weight mismatch: calculated {calculated} != stored {self.total_weight}"
                )


@dataclass
class SearchMetrics:
    """
    Counters collected during one search.

    Attributes:
        operation: Name of the search operation
        start_time: Operation start timestamp
        end_time: Operation end timestamp (0.0 if not completed)
        nodes_closed: Number of nodes extracted from the frontier
        nodes_discovered: Number of records created
        relaxations: Number of successful relaxations
        decrease_keys: Number of decrease-key operations issued
        path_length: Number of edges on the found path, if any
        max_memory_used: Peak memory during the search (bytes), if tracked
    """

    operation: str
    start_time: float
    end_time: float = 0.0
    nodes_closed: int = 0
    nodes_discovered: int = 0
    relaxations: int = 0
    decrease_keys: int = 0
    path_length: Optional[int] = None
    max_memory_used: Optional[int] = None

    def __post_init__(self):
        """Validate metrics after initialization."""
        if not isinstance(self.operation, str) or not self.operation.strip():
            raise ValueError("operation must be a non-empty string")
        if self.end_time and self.end_time < self.start_time:
            raise ValueError("end_time cannot be before start_time")

    @property
    def duration(self) -> float:
        """Operation duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000 if self.end_time else 0.0

    def to_dict(self) -> Dict[str, Union[str, float, int, None]]:
        return {
            "operation": self.operation,
            "duration_ms": self.duration,
            "nodes_closed": self.nodes_closed,
            "nodes_discovered": self.nodes_discovered,
            "relaxations": self.relaxations,
            "decrease_keys": self.decrease_keys,
            "path_length": self.path_length,
            "max_memory_used": self.max_memory_used,
        }
