"""
Node value models for the route planning system.

A graph stores user supplied node values that only have to expose two integer
coordinates. The search algorithms never look at these values; they are
consumed by concrete edge weight calculators and returned in path results.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Nodal(Protocol):
    """
    Minimum requirements on the node values stored in a graph.

    Implementations should be immutable and hashable. They may be read
    concurrently by several threads running searches on the same graph.
    """

    @property
    def x(self) -> int:
        """X-coordinate of the node."""
        ...

    @property
    def y(self) -> int:
        """Y-coordinate of the node."""
        ...


@dataclass(frozen=True)
class Point:
    """
    Plain node value with integer coordinates and an optional name.

    Attributes:
        x (int): X-coordinate
        y (int): Y-coordinate
        name (Optional[str]): Human readable label, used by the CLI and in logs
    """

    x: int
    y: int
    name: Optional[str] = None

    def __post_init__(self):
        """Validate coordinates after initialization."""
        if isinstance(self.x, bool) or not isinstance(self.x, int):
            raise TypeError("x must be an integer")
        if isinstance(self.y, bool) or not isinstance(self.y, int):
            raise TypeError("y must be an integer")
        if self.name is not None and not isinstance(self.name, str):
            raise TypeError("name must be a string")
        if self.name is not None and not self.name.strip():
            raise ValueError("name must be a non-empty string")

    def __str__(self) -> str:
        if self.name:
            return self.name
        return f"({self.x}, {self.y})"
