"""
Core domain models package for the route planning system.

This package provides the node value models stored in graphs.
"""

from .nodal import Nodal, Point

__all__ = [
    "Nodal",
    "Point",
]
