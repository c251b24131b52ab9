"""
Serialization Utilities

JSON to/from helpers for CollageLayoutResult, the hand-off format to an
external renderer.

- ``serialize_*`` / ``deserialize_*`` work on dictionaries
- ``save_*`` / ``load_*`` work on files
- Every deserialization validates against the schema first
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.results import CollageLayoutResult
from ..schemas.validator import LAYOUT_RESULT_SCHEMA_VERSION, validate_layout_result


def serialize_layout_result(result: CollageLayoutResult) -> dict[str, Any]:
    """
    Serialize a layout result to a dictionary.

    The output carries a schema version and passes schema validation.

    Args:
        result: Layout to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    data = result.to_dict()
    data["schemaVersion"] = LAYOUT_RESULT_SCHEMA_VERSION
    return data


def deserialize_layout_result(data: dict[str, Any], *, validate: bool = True) -> CollageLayoutResult:
    """
    Deserialize a layout result from a dictionary.

    Args:
        data: Dictionary from ``serialize_layout_result()``
        validate: Whether to validate against the schema first

    Returns:
        CollageLayoutResult instance

    Raises:
        ValidationError: If validation is enabled and data is invalid
    """
    if validate:
        validate_layout_result(data)
    return CollageLayoutResult.from_dict(data)


def save_layout_json(result: CollageLayoutResult, path: Path) -> None:
    """Write a layout result to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_layout_result(result), f, indent=2)


def load_layout_json(path: Path) -> CollageLayoutResult:
    """Read and validate a layout result from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return deserialize_layout_result(data)
