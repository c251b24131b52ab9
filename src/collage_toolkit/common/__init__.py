"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .paper_sizes import (
    PAPER_SIZES,
    DEFAULT_PAPER_SIZE,
    UnknownPaperSizeError,
    get_paper_size,
    supported_paper_sizes,
)
from . import thresholds

__all__ = [
    # paper sizes
    "PAPER_SIZES",
    "DEFAULT_PAPER_SIZE",
    "UnknownPaperSizeError",
    "get_paper_size",
    "supported_paper_sizes",
    # module references
    "thresholds",
]
