"""
Core Models Package

Immutable, validated data models shared by every layout algorithm.

**DESIGN RATIONALE:**

All models except PoolImage are frozen dataclasses. This ensures:
1. No accidental mutation while algorithms pass placements around
2. Safe to compute several layouts in parallel
3. Reproducibility depends on the seed alone, never on shared state

PoolImage keeps a mutable ``selected`` flag for the UI side.
"""

from .geometry import CollageRect, CropBox
from .images import ImageDimensions, PoolImage, images_to_dimensions
from .placements import PlacedImage
from .results import AlgorithmInput, AlgorithmOutput, CollageLayoutResult

__all__ = [
    "CollageRect",
    "CropBox",
    "ImageDimensions",
    "PoolImage",
    "images_to_dimensions",
    "PlacedImage",
    "AlgorithmInput",
    "AlgorithmOutput",
    "CollageLayoutResult",
]
