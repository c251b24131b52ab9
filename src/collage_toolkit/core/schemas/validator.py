"""
Schema Validation Utilities

Validates JSON data exchanged with the UI and renderer collaborators.

- ``validate_settings()`` checks a settings bundle before it becomes a
  CollageSettings instance.
- ``validate_layout_result()`` checks a serialized CollageLayoutResult
  before it is handed to (or read back from) a renderer.

Both fail fast on the first schema violation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Schema version constants
LAYOUT_RESULT_SCHEMA_VERSION = 1


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _validate(data: Any, schema_name: str) -> None:
    """Run jsonschema validation and translate the first failure."""
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e


def validate_settings(data: dict[str, Any]) -> None:
    """
    Validate a collage settings bundle.

    Args:
        data: camelCase settings dictionary from the UI side

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("settings must be a dict")
    _validate(data, "collage_settings")


def validate_layout_result(data: dict[str, Any]) -> None:
    """
    Validate a serialized layout result.

    Args:
        data: Dictionary produced by ``serialize_layout_result()``

    Raises:
        ValidationError: If data is invalid or has the wrong schema version
    """
    if not isinstance(data, dict):
        raise ValidationError("layout result must be a dict")

    version = data.get("schemaVersion")
    if version != LAYOUT_RESULT_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported layout schema version: {version} (expected {LAYOUT_RESULT_SCHEMA_VERSION})",
            path="schemaVersion",
        )

    _validate(data, "layout_result")

    placed = [p["imageId"] for p in data["placements"]]
    if len(placed) != len(set(placed)):
        raise ValidationError("Duplicate imageId in placements", path="placements")
