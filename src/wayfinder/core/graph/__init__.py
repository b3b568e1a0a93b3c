"""
Graph module for the wayfinder system.

Provides the in-memory adjacency store searched by the path finding
algorithms, the opaque node handles it issues, and a loader for JSON graph
definitions.
"""

from .base import EdgeData, Graph, InternalNode
from .loader import build_graph

__all__ = [
    "EdgeData",
    "Graph",
    "InternalNode",
    "build_graph",
]
