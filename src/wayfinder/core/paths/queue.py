"""
Min-priority frontier queue for search records, backed by a pairing heap.

Besides ordering, the queue keeps an index from graph node to heap handle so
that "is this node on the frontier" is answered in constant time and a
decrease-key can be issued by node rather than by handle.
"""

from typing import Dict, Optional

from ..exceptions import QueueConsistencyError
from ..graph.base import InternalNode
from .heap import HeapHandle, PairingHeap
from .models import SearchNode


class FrontierQueue:
    """
    Indexed min-priority queue of ``SearchNode`` records.

    A node is indexed from the moment it is added until it is extracted.
    Not thread-safe; one queue belongs to one search.
    """

    def __init__(self) -> None:
        self._heap: PairingHeap[SearchNode] = PairingHeap()
        self._index: Dict[InternalNode, HeapHandle] = {}

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, node: object) -> bool:
        return node in self._index

    def is_empty(self) -> bool:
        """Return True if no record is on the frontier."""
        return self._heap.is_empty()

    def add(self, record: SearchNode, key: float) -> None:
        """
        Add a record with the given priority.

        Raises:
            QueueConsistencyError: If the record's node is already on the frontier
        """
        if record.node in self._index:
            raise QueueConsistencyError(f"Node {record.node!r} is already on the frontier")
        self._index[record.node] = self._heap.insert(record, key)

    def extract_min(self) -> SearchNode:
        """
        Remove and return the record with the smallest key.

        Raises:
            EmptyQueueError: If the queue is empty
        """
        record = self._heap.delete_min()
        del self._index[record.node]
        return record

    def get(self, node: InternalNode) -> Optional[SearchNode]:
        """
        Return the frontier record for ``node``.

        Returns None if the node was never added or has already been extracted.
        """
        handle = self._index.get(node)
        if handle is None:
            return None
        record, _ = self._heap.get(handle)
        return record

    def key_of(self, node: InternalNode) -> Optional[float]:
        """Return the current priority of ``node``, or None if it is not on the frontier."""
        handle = self._index.get(node)
        if handle is None:
            return None
        _, key = self._heap.get(handle)
        return key

    def update(self, record: SearchNode, key: float) -> None:
        """
        Lower the priority of a record already on the frontier.

        Raises:
            QueueConsistencyError: If the node is not on the frontier or the
                key would increase
        """
        handle = self._index.get(record.node)
        if handle is None:
            raise QueueConsistencyError(f"Node {record.node!r} not in pairing heap")
        self._heap.decrease_key(handle, record, key)
