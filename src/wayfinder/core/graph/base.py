"""
In-memory directed graph with an arena based adjacency list representation.

This module provides the Graph class used by the search algorithms. Node values
(anything implementing ``Nodal``) are registered once and given an
``InternalNode`` handle whose identity is the integer slot the graph assigned.
Search algorithms only ever work with these handles.

The graph is mutable while it is being built and is expected to be left
untouched while searches run on it, so that several searches may read it
from different threads at the same time.
"""

import math
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    FrozenSet,
    Hashable,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
)

from ..exceptions import EdgeNotFoundError, NodeNotFoundError
from ..models.nodal import Nodal


@dataclass(frozen=True, slots=True)
class InternalNode:
    """
    Opaque handle for a node registered in a graph.

    Equality and hashing use the arena slot only, so two handles for the same
    node value are interchangeable and handles for distinct values never
    compare equal.

    Attributes:
        index (int): Arena slot assigned by the graph
        nodal (Nodal): The wrapped node value
    """

    index: int
    nodal: Nodal = field(compare=False)

    def __repr__(self) -> str:
        return f"InternalNode({self.index}, {self.nodal})"


@dataclass(slots=True)
class EdgeData:
    """
    Weights and reachability attached to a directed edge.

    Attributes:
        weight (float): Default weight, used when no modality specific weight exists
        modality_weights (Dict[Hashable, float]): Weights per modality
        contexts (Optional[FrozenSet[Hashable]]): Traversal contexts the edge is
            open for; None means the edge is open in every context
    """

    weight: float
    modality_weights: Dict[Hashable, float] = field(default_factory=dict)
    contexts: Optional[FrozenSet[Hashable]] = None

    def weight_for(self, modality: Any = None) -> float:
        if modality is not None and modality in self.modality_weights:
            return self.modality_weights[modality]
        return self.weight

    def is_open(self, context: Any = None) -> bool:
        if context is None or self.contexts is None:
            return True
        return context in self.contexts


def _validate_weight(name: str, weight: Any) -> float:
    """Validate that an edge weight is a finite non-negative number."""
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise TypeError(f"{name} must be a numeric value")
    if math.isnan(weight) or math.isinf(weight):
        raise ValueError(f"{name} must be a finite number")
    if weight < 0:
        raise ValueError(f"{name} must be non-negative")
    return float(weight)


@dataclass
class Graph:
    """
    Directed graph over ``Nodal`` values.

    Attributes:
        _nodes (List[InternalNode]): Arena of registered nodes, indexed by slot
        _index (Dict[Nodal, InternalNode]): Lookup from node value to handle
        _adjacency (List[Dict[int, EdgeData]]): Outgoing edges per slot
        _edge_count (int): Total number of edges
    """

    _nodes: List[InternalNode] = field(default_factory=list)
    _index: Dict[Nodal, InternalNode] = field(default_factory=dict)
    _adjacency: List[Dict[int, EdgeData]] = field(default_factory=list)
    _edge_count: int = 0

    def add_node(self, nodal: Nodal) -> InternalNode:
        """
        Register a node value, returning its handle.

        Registering the same value twice returns the existing handle.

        Args:
            nodal (Nodal): The node value to add

        Returns:
            InternalNode: Handle of the node
        """
        existing = self._index.get(nodal)
        if existing is not None:
            return existing
        if not isinstance(nodal, Nodal):
            raise TypeError("node values must expose integer x and y coordinates")

        node = InternalNode(len(self._nodes), nodal)
        self._nodes.append(node)
        self._adjacency.append({})
        self._index[nodal] = node
        return node

    def add_edge(
        self,
        from_nodal: Nodal,
        to_nodal: Nodal,
        weight: float = 1.0,
        modalities: Optional[Mapping[Hashable, float]] = None,
        contexts: Optional[Iterable[Hashable]] = None,
    ) -> None:
        """
        Add a directed edge, registering unknown node values on the way.

        Adding an edge between two nodes that are already connected replaces
        the earlier edge.

        Args:
            from_nodal (Nodal): Source node value
            to_nodal (Nodal): Target node value
            weight (float): Default non-negative weight
            modalities (Optional[Mapping[Hashable, float]]): Weights per modality
            contexts (Optional[Iterable[Hashable]]): Traversal contexts the edge
                is restricted to

        Raises:
            TypeError: If a weight is not numeric
            ValueError: If a weight is negative or not finite
        """
        data = EdgeData(
            weight=_validate_weight("weight", weight),
            modality_weights={
                modality: _validate_weight(f"weight for modality {modality!r}", value)
                for modality, value in (modalities or {}).items()
            },
            contexts=frozenset(contexts) if contexts is not None else None,
        )
        source = self.add_node(from_nodal)
        target = self.add_node(to_nodal)

        outgoing = self._adjacency[source.index]
        if target.index not in outgoing:
            self._edge_count += 1
        outgoing[target.index] = data

    def add_edges_batch(self, edges: Iterable[Tuple[Nodal, Nodal, float]]) -> None:
        """
        Add multiple weighted edges.

        Args:
            edges (Iterable[Tuple[Nodal, Nodal, float]]): (from, to, weight) triples
        """
        for from_nodal, to_nodal, weight in edges:
            self.add_edge(from_nodal, to_nodal, weight)

    def has_node(self, nodal: Nodal) -> bool:
        """Check if a node value is registered."""
        return nodal in self._index

    def has_edge(self, from_node: InternalNode, to_node: InternalNode) -> bool:
        """Check if an edge connects two handles."""
        self._check_handle(from_node)
        self._check_handle(to_node)
        return to_node.index in self._adjacency[from_node.index]

    def get_internal_node(self, nodal: Nodal) -> InternalNode:
        """
        Get the handle of a registered node value.

        Raises:
            NodeNotFoundError: If the value is not part of the graph
        """
        node = self._index.get(nodal)
        if node is None:
            raise NodeNotFoundError(f"Node '{nodal}' not found in the graph")
        return node

    def get_outgoing_edges(
        self, node: InternalNode, context: Any = None
    ) -> Iterator[InternalNode]:
        """
        Iterate over the targets of the edges leaving ``node``.

        Each call returns a fresh lazy iterator.

        Args:
            node (InternalNode): The node to expand
            context (Any): Optional traversal context; edges restricted to other
                contexts are skipped

        Returns:
            Iterator[InternalNode]: Handles of the reachable neighbors
        """
        self._check_handle(node)
        for target, data in self._adjacency[node.index].items():
            if data.is_open(context):
                yield self._nodes[target]

    def get_edge(self, from_node: InternalNode, to_node: InternalNode) -> EdgeData:
        """
        Get the data of the edge between two handles.

        Raises:
            EdgeNotFoundError: If no such edge exists
        """
        self._check_handle(from_node)
        self._check_handle(to_node)
        data = self._adjacency[from_node.index].get(to_node.index)
        if data is None:
            raise EdgeNotFoundError(
                f"No edge exists from '{from_node.nodal}' to '{to_node.nodal}'"
            )
        return data

    def get_edge_weight(
        self, from_node: InternalNode, to_node: InternalNode, modality: Any = None
    ) -> float:
        """
        Get the stored weight of an edge for a modality.

        Falls back to the default weight when the edge has no weight for
        ``modality``.
        """
        return self.get_edge(from_node, to_node).weight_for(modality)

    def get_nodes(self) -> List[Nodal]:
        """Get all node values in registration order."""
        return [node.nodal for node in self._nodes]

    def get_internal_nodes(self) -> List[InternalNode]:
        """Get all node handles in registration order."""
        return list(self._nodes)

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return self._edge_count

    def clear(self) -> None:
        """Clear all nodes and edges from the graph."""
        self._nodes.clear()
        self._index.clear()
        self._adjacency.clear()
        self._edge_count = 0

    def _check_handle(self, node: InternalNode) -> None:
        # Handles compare by slot only, so the wrapped value tells graphs apart.
        if not (0 <= node.index < len(self._nodes)) or (
            self._nodes[node.index].nodal != node.nodal
        ):
            raise NodeNotFoundError(f"Node handle {node!r} does not belong to this graph")

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[Nodal, Nodal, float]]) -> "Graph":
        """
        Create a new graph from (from, to, weight) triples.

        Args:
            edges (Iterable[Tuple[Nodal, Nodal, float]]): Edges to initialize the graph with

        Returns:
            Graph: New graph instance containing the edges
        """
        graph = cls()
        graph.add_edges_batch(edges)
        return graph
