"""
Collage Toolkit Core Package

Shared data models and utilities for the layout engine.

1. **Immutable Data Models**
   - Frozen dataclasses; transforms create new instances
   - Image ids survive every transform

2. **Derived Values Are Never Stored**
   - ``ImageDimensions.area`` and ``aspect_ratio`` are computed from
     width/height, so they cannot drift apart

3. **Physical Units**
   - Everything the algorithms see is in inches; pixels only appear on
     PoolImage and CropBox
"""

from .models import (
    CollageRect,
    CropBox,
    ImageDimensions,
    PoolImage,
    PlacedImage,
    AlgorithmInput,
    AlgorithmOutput,
    CollageLayoutResult,
)

__all__ = [
    "CollageRect",
    "CropBox",
    "ImageDimensions",
    "PoolImage",
    "PlacedImage",
    "AlgorithmInput",
    "AlgorithmOutput",
    "CollageLayoutResult",
]
