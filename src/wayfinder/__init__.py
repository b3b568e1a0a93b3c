"""
Wayfinder - single-pair shortest path search over weighted graphs

This package provides:

- Dijkstra's algorithm with pluggable relaxation policies and edge weight sources
- A pairing heap with decrease-key and an indexed frontier queue built on it
- An in-memory directed graph over coordinate-bearing node values
- A command line interface for routing over JSON graph definitions
"""

__version__ = "0.1.0"
__author__ = "Wayfinder Team"

# Version compatibility check
import sys

if sys.version_info < (3, 10):
    raise RuntimeError("Wayfinder requires Python 3.10 or higher")

# Import commonly used components for easier access
from .core.graph import Graph
from .core.models import Point
from .core.paths import DefaultRelaxer, Dijkstra, Path, PathFinding

__all__ = [
    "DefaultRelaxer",
    "Dijkstra",
    "Graph",
    "Path",
    "PathFinding",
    "Point",
]
