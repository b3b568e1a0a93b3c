"""
Validation package for wayfinder.

This package provides schema validation for externally supplied graph definitions.
"""

from .schema import GRAPH_SCHEMA, ValidationResult, validate_graph_definition

__all__ = [
    "GRAPH_SCHEMA",
    "ValidationResult",
    "validate_graph_definition",
]
