"""
Layout algorithms.

Every algorithm is a pure function ``AlgorithmInput -> AlgorithmOutput``
with the same contract:

- Placements never overlap (at least ``gap`` apart) and stay on the page
- Every input id ends up either placed or unused, never both
- Same input (including seed) gives the same output

Algorithms are looked up by name through ALGORITHMS / get_algorithm().
"""

from __future__ import annotations

from typing import Callable, Dict

from collage_toolkit.core.models import AlgorithmInput, AlgorithmOutput

from .ffd_row import ffd_row_algorithm
from .guillotine import guillotine_algorithm
from .masonry import masonry_algorithm
from .spiral import spiral_algorithm
from .treemap import treemap_algorithm

LayoutAlgorithm = Callable[[AlgorithmInput], AlgorithmOutput]

ALGORITHMS: Dict[str, LayoutAlgorithm] = {
    "ffd-row": ffd_row_algorithm,
    "masonry": masonry_algorithm,
    "guillotine": guillotine_algorithm,
    "spiral": spiral_algorithm,
    "treemap": treemap_algorithm,
}


class UnknownAlgorithmError(KeyError):
    """Raised when an algorithm name is not registered."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        known = ", ".join(sorted(ALGORITHMS))
        return f"Unknown layout algorithm '{self.name}' (expected one of: {known})"


def get_algorithm(name: str) -> LayoutAlgorithm:
    """
    Look up an algorithm by name.

    Accepts a plain string or a CollageAlgorithm member.

    Raises:
        UnknownAlgorithmError: If the name is not registered
    """
    key = getattr(name, "value", name)
    try:
        return ALGORITHMS[key]
    except KeyError:
        raise UnknownAlgorithmError(str(key)) from None


__all__ = [
    "ALGORITHMS",
    "LayoutAlgorithm",
    "UnknownAlgorithmError",
    "get_algorithm",
    "ffd_row_algorithm",
    "masonry_algorithm",
    "guillotine_algorithm",
    "spiral_algorithm",
    "treemap_algorithm",
]
