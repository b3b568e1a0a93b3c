from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..graph.base import Graph

# Type variable for algorithm results
T = TypeVar("T")


class GraphAlgorithm(ABC, Generic[T]):
    """Abstract base class for algorithms that run once over a graph and produce a result."""

    def __init__(self, graph: Graph):
        """Initialize algorithm with graph."""
        self.graph = graph

    @abstractmethod
    def execute(self) -> None:
        """Run the algorithm to completion."""
        pass

    @abstractmethod
    def get_result(self) -> T:
        """Return the result of the last ``execute`` call."""
        pass
