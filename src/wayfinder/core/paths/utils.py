"""
Utility functions for path finding operations.
"""

import gc
import logging
import math
import os
import time
from typing import Any, Optional

import psutil

from ..graph.base import InternalNode
from .weights import EdgeWeightCalculator

logger = logging.getLogger(__name__)

# Constants
MEMORY_CHECK_INTERVAL = 0.1  # Seconds between two memory samples


def get_edge_weight(
    weight_calculator: EdgeWeightCalculator,
    from_node: InternalNode,
    to_node: InternalNode,
    modality: Any = None,
) -> float:
    """
    Compute an edge weight and check that it is usable by Dijkstra's algorithm.

    Raises:
        ValueError: If the weight is not numeric, not finite or negative
    """
    weight = weight_calculator(from_node, to_node, modality)
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise ValueError("Weight must be numeric")
    if math.isnan(weight) or math.isinf(weight):
        raise ValueError("Edge weight must be finite number")
    if weight < 0:
        raise ValueError(
            f"Edge weight must be non-negative, got {weight} for "
            f"{from_node.nodal} -> {to_node.nodal}"
        )
    return float(weight)


class MemoryManager:
    """Memory ceiling for a running search, sampled through psutil."""

    def __init__(
        self, max_memory_mb: Optional[float] = None, check_interval: float = MEMORY_CHECK_INTERVAL
    ):
        """Initialize memory manager."""
        self.max_memory = max_memory_mb * 1024 * 1024 if max_memory_mb else None
        self.start_memory = get_memory_usage()
        self._peak_memory = self.start_memory
        self._last_check = time.time()
        self._check_interval = check_interval

    def check_memory(self) -> None:
        """
        Check if memory growth since the start exceeds the limit.

        Raises:
            MemoryError: If usage stays above the limit after a collection
        """
        if not self.max_memory:
            return

        current_time = time.time()
        if current_time - self._last_check < self._check_interval:
            return
        self._last_check = current_time

        current = get_memory_usage()
        self._peak_memory = max(self._peak_memory, current)

        if current - self.start_memory > self.max_memory:
            # Try to reclaim memory
            gc.collect()
            current = get_memory_usage()

            if current - self.start_memory > self.max_memory:
                logger.warning(
                    "Search memory %.1fMB over limit of %.1fMB",
                    (current - self.start_memory) / 1024 / 1024,
                    self.max_memory / 1024 / 1024,
                )
                raise MemoryError(
                    f"Memory usage {current/1024/1024:.1f}MB exceeds "
                    f"limit of {self.max_memory/1024/1024:.1f}MB"
                )

    @property
    def peak_memory(self) -> int:
        """Peak memory usage seen so far, in bytes."""
        return self._peak_memory

    @property
    def peak_memory_mb(self) -> float:
        """Peak memory usage seen so far, in MB."""
        return self._peak_memory / 1024 / 1024


def get_memory_usage() -> int:
    """Get current memory usage in bytes."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss
