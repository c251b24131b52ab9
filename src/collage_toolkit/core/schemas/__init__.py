"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_settings,
    validate_layout_result,
    ValidationError,
    LAYOUT_RESULT_SCHEMA_VERSION,
)

__all__ = [
    "validate_settings",
    "validate_layout_result",
    "ValidationError",
    "LAYOUT_RESULT_SCHEMA_VERSION",
]
