"""
Pairing heap with decrease-key support.

The heap is a heap-ordered multiway tree stored in parallel arrays (an arena).
Every entry lives in a slot; tree links are slot indices, so handles stay valid
while the tree is restructured by merges. A per-slot generation counter lets
the heap reject handles whose entry has already been removed, even when the
slot has since been reused.

Complexity (amortized):
    insert        O(1)
    find_min      O(1)
    delete_min    O(log n)
    decrease_key  O(1) in practice (o(log n) proven)

Example:
    >>> heap = PairingHeap[str]()
    >>> handle = heap.insert("b", 5.0)
    >>> _ = heap.insert("a", 3.0)
    >>> heap.decrease_key(handle, "b", 1.0)
    >>> heap.delete_min()
    'b'
"""

from dataclasses import dataclass
import math
from typing import Any, Generic, List, Optional, Tuple, TypeVar

from ..exceptions import EmptyQueueError, QueueConsistencyError

V = TypeVar("V")

# Marker for "no slot" in the link arrays
NIL = -1


def _check_key(key: Any) -> None:
    # NaN is unordered against every key
    if isinstance(key, float) and math.isnan(key):
        raise QueueConsistencyError("heap keys must not be NaN")


@dataclass(frozen=True, slots=True)
class HeapHandle:
    """Opaque token identifying a heap entry, returned by ``PairingHeap.insert``."""

    slot: int
    generation: int


class PairingHeap(Generic[V]):
    """
    Min-heap over (value, key) pairs.

    Ties between equal keys are broken by tree structure; no ordering among
    equal keys is guaranteed. Keys only have to support ``<``.

    Not thread-safe.
    """

    def __init__(self) -> None:
        self._values: List[Optional[V]] = []
        self._keys: List[Any] = []
        self._child: List[int] = []  # leftmost child
        self._sibling: List[int] = []  # right sibling
        self._prev: List[int] = []  # parent for a leftmost child, else left sibling
        self._generation: List[int] = []
        self._live: List[bool] = []
        self._free: List[int] = []
        self._root = NIL
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        """Return True if the heap holds no entries."""
        return self._size == 0

    def insert(self, value: V, key: Any) -> HeapHandle:
        """
        Add a new entry.

        Args:
            value: The value to store
            key: Its ordering priority

        Returns:
            HeapHandle: Token for later ``decrease_key`` calls

        Raises:
            QueueConsistencyError: If the key is NaN
        """
        _check_key(key)
        slot = self._allocate(value, key)
        self._root = slot if self._root == NIL else self._link(self._root, slot)
        self._size += 1
        return HeapHandle(slot, self._generation[slot])

    def find_min(self) -> V:
        """
        Return the value with the smallest key without removing it.

        Raises:
            EmptyQueueError: If the heap is empty
        """
        if self._root == NIL:
            raise EmptyQueueError("find_min called on an empty heap")
        return self._values[self._root]

    def min_key(self) -> Any:
        """
        Return the smallest key.

        Raises:
            EmptyQueueError: If the heap is empty
        """
        if self._root == NIL:
            raise EmptyQueueError("min_key called on an empty heap")
        return self._keys[self._root]

    def delete_min(self) -> V:
        """
        Remove and return the value with the smallest key.

        Raises:
            EmptyQueueError: If the heap is empty
        """
        if self._root == NIL:
            raise EmptyQueueError("delete_min called on an empty heap")

        root = self._root
        value = self._values[root]
        self._root = self._merge_pairs(self._child[root])
        self._release(root)
        self._size -= 1
        return value

    def decrease_key(self, handle: HeapHandle, value: V, key: Any) -> None:
        """
        Replace the (value, key) pair of an existing entry.

        The entry is cut from its parent and re-linked with the root, so the
        previous key must not be smaller than the new one.

        Args:
            handle: Token returned by ``insert``
            value: Replacement value
            key: Replacement key, not larger than the current key

        Raises:
            QueueConsistencyError: If the handle is stale, the key is NaN or
                the key increases
        """
        _check_key(key)
        slot = self._resolve(handle)
        if self._keys[slot] < key:
            raise QueueConsistencyError(
                f"decrease_key cannot raise a key from {self._keys[slot]} to {key}"
            )

        self._values[slot] = value
        self._keys[slot] = key
        if slot == self._root:
            return

        self._cut(slot)
        self._root = self._link(self._root, slot)

    def get(self, handle: HeapHandle) -> Tuple[V, Any]:
        """
        Return the (value, key) pair of a live entry.

        Raises:
            QueueConsistencyError: If the handle is stale
        """
        slot = self._resolve(handle)
        return self._values[slot], self._keys[slot]

    def __contains__(self, handle: object) -> bool:
        if not isinstance(handle, HeapHandle):
            return False
        return (
            0 <= handle.slot < len(self._live)
            and self._live[handle.slot]
            and self._generation[handle.slot] == handle.generation
        )

    def _allocate(self, value: V, key: Any) -> int:
        if self._free:
            slot = self._free.pop()
            self._values[slot] = value
            self._keys[slot] = key
            self._child[slot] = NIL
            self._sibling[slot] = NIL
            self._prev[slot] = NIL
            self._live[slot] = True
            return slot

        self._values.append(value)
        self._keys.append(key)
        self._child.append(NIL)
        self._sibling.append(NIL)
        self._prev.append(NIL)
        self._generation.append(0)
        self._live.append(True)
        return len(self._values) - 1

    def _release(self, slot: int) -> None:
        self._values[slot] = None
        self._keys[slot] = None
        self._child[slot] = NIL
        self._sibling[slot] = NIL
        self._prev[slot] = NIL
        self._live[slot] = False
        self._generation[slot] += 1
        self._free.append(slot)

    def _resolve(self, handle: HeapHandle) -> int:
        if handle not in self:
            raise QueueConsistencyError(f"Heap handle {handle} does not refer to a live entry")
        return handle.slot

    def _link(self, a: int, b: int) -> int:
        """Merge two detached roots, returning the root of the result."""
        if self._keys[b] < self._keys[a]:
            a, b = b, a
        first = self._child[a]
        self._sibling[b] = first
        if first != NIL:
            self._prev[first] = b
        self._prev[b] = a
        self._child[a] = b
        self._sibling[a] = NIL
        self._prev[a] = NIL
        return a

    def _cut(self, slot: int) -> None:
        """Detach a non-root entry (with its subtree) from the tree."""
        prev = self._prev[slot]
        nxt = self._sibling[slot]
        if self._child[prev] == slot:
            self._child[prev] = nxt
        else:
            self._sibling[prev] = nxt
        if nxt != NIL:
            self._prev[nxt] = prev
        self._sibling[slot] = NIL
        self._prev[slot] = NIL

    def _merge_pairs(self, first: int) -> int:
        """Two-pass pairwise merge of a sibling list, returning the new root."""
        if first == NIL:
            return NIL

        # First pass: link siblings in pairs, left to right
        merged: List[int] = []
        current = first
        while current != NIL:
            second = self._sibling[current]
            if second == NIL:
                self._sibling[current] = NIL
                self._prev[current] = NIL
                merged.append(current)
                break
            following = self._sibling[second]
            self._sibling[second] = NIL
            self._prev[second] = NIL
            self._sibling[current] = NIL
            self._prev[current] = NIL
            merged.append(self._link(current, second))
            current = following

        # Second pass: fold the pairs right to left
        root = merged.pop()
        while merged:
            root = self._link(merged.pop(), root)
        return root
