"""
Utils Package

Serialization utilities.
"""

from .serialization import (
    serialize_layout_result,
    deserialize_layout_result,
    save_layout_json,
    load_layout_json,
)

__all__ = [
    "serialize_layout_result",
    "deserialize_layout_result",
    "save_layout_json",
    "load_layout_json",
]
