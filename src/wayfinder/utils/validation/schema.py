"""
Schema Validation Components for wayfinder graph definitions

This module provides JSON schema-based validation of the graph definitions
accepted by the command line interface. A graph definition is a JSON object
listing named nodes with integer coordinates and weighted directed edges
between them:

    {
        "nodes": [{"name": "A", "x": 0, "y": 0}, {"name": "B", "x": 1, "y": 0}],
        "edges": [{"from": "A", "to": "B", "weight": 1.0, "modalities": {"bike": 0.5}}]
    }
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate

GRAPH_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "nodes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "x": {"type": "integer"},
                    "y": {"type": "integer"},
                },
                "required": ["name", "x", "y"],
                "additionalProperties": False,
            },
        },
        "edges": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "from": {"type": "string", "minLength": 1},
                    "to": {"type": "string", "minLength": 1},
                    "weight": {"type": "number", "minimum": 0},
                    "modalities": {
                        "type": "object",
                        "additionalProperties": {"type": "number", "minimum": 0},
                    },
                    "contexts": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["from", "to"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["nodes", "edges"],
}


@dataclass
class ValidationResult:
    """
    Outcome of validating a graph definition.

    Attributes:
        is_valid (bool): Whether the validation passed successfully
        errors (List[str]): List of validation error messages
        context (Optional[Dict[str, Any]]): Additional context about the validation
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    context: Optional[Dict[str, Any]] = None


def validate_graph_definition(
    data: Any, schema: Optional[Dict[str, Any]] = None
) -> ValidationResult:
    """
    Validate a decoded JSON graph definition against ``GRAPH_SCHEMA``.

    Args:
        data: Decoded JSON document
        schema: Alternative schema to validate against

    Returns:
        ValidationResult with the schema error, if any
    """
    errors = []
    try:
        json_validate(instance=data, schema=schema or GRAPH_SCHEMA)
    except JsonSchemaError as e:
        location = "/".join(str(part) for part in e.absolute_path) or "<root>"
        errors.append(f"Schema validation failed at {location}: {e.message}")

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        context={"schema": "graph"},
    )
