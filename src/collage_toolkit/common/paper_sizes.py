"""
Module: common.paper_sizes

Purpose:
    Named paper-size lookup used by the collage orchestrator.
    All sizes are in inches, portrait orientation (width x height).

Key Functions:
    - get_paper_size(): Resolve a name to (width, height)
    - supported_paper_sizes(): List all available names

Used By:
    - layout.config: CollageSettings validation
    - layout.controller: Page size resolution
"""

from __future__ import annotations

from typing import Dict, List, Tuple

__all__ = [
    "PAPER_SIZES",
    "DEFAULT_PAPER_SIZE",
    "UnknownPaperSizeError",
    "get_paper_size",
    "supported_paper_sizes",
]


PAPER_SIZES: Dict[str, Tuple[float, float]] = {
    "11x17": (11.0, 17.0),
    "Letter": (8.5, 11.0),
    "A4": (8.27, 11.69),
    "A3": (11.69, 16.54),
    "Legal": (8.5, 14.0),
}

DEFAULT_PAPER_SIZE = "11x17"


class UnknownPaperSizeError(KeyError):
    """Paper size name not in the lookup table."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown paper size {self.name!r}; expected one of {supported_paper_sizes()}"


def supported_paper_sizes() -> List[str]:
    """Return all supported paper-size names."""
    return list(PAPER_SIZES)


def get_paper_size(name: str) -> Tuple[float, float]:
    """
    Resolve a paper-size name.

    Args:
        name: Paper name such as "Letter" or "11x17"

    Returns:
        (width_inches, height_inches)

    Raises:
        UnknownPaperSizeError: If the name is not known
    """
    try:
        return PAPER_SIZES[name]
    except KeyError:
        raise UnknownPaperSizeError(name) from None
