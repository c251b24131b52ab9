"""
Module: layout.cropping

Purpose:
    Source-region computation for renderers that crop images to their
    placed aspect ratio. Pure arithmetic on pixel sizes; no pixels are
    read or written.

Key Functions:
    - calculate_crop(): Crop box honoring a max-crop cap and an anchor

Used By:
    - External renderer (populates PlacedImage.crop_box)
    - scripts/benchmark_layouts.py
"""

from __future__ import annotations

from typing import Dict, Tuple

from collage_toolkit.core.models import CropBox

from .config import CropAnchor

# (x, y) weight of the leftover space placed before the crop
_ANCHOR_WEIGHTS: Dict[CropAnchor, Tuple[float, float]] = {
    CropAnchor.CENTER: (0.5, 0.5),
    CropAnchor.TOP: (0.5, 0.0),
    CropAnchor.BOTTOM: (0.5, 1.0),
    CropAnchor.LEFT: (0.0, 0.5),
    CropAnchor.RIGHT: (1.0, 0.5),
    CropAnchor.TOP_LEFT: (0.0, 0.0),
    CropAnchor.TOP_RIGHT: (1.0, 0.0),
    CropAnchor.BOTTOM_LEFT: (0.0, 1.0),
    CropAnchor.BOTTOM_RIGHT: (1.0, 1.0),
}


def calculate_crop(
    source_width: float,
    source_height: float,
    target_aspect: float,
    max_crop_ratio: float,
    anchor: CropAnchor = CropAnchor.CENTER,
) -> CropBox:
    """
    Compute the source region to draw into a cell of ``target_aspect``.

    Only one axis is cropped: height when the target is wider than the
    source, width otherwise. The crop never removes more than
    ``max_crop_ratio`` of that side, so the result may not match
    ``target_aspect`` exactly.

    Args:
        source_width: Source width in pixels
        source_height: Source height in pixels
        target_aspect: Placed width / placed height
        max_crop_ratio: Max fraction of a side to remove (0.15 = 15%)
        anchor: Region to keep (CropAnchor or its string value)

    Returns:
        CropBox in source pixel space

    Raises:
        ValueError: If sizes or aspect are not positive

    Example:
        >>> calculate_crop(1000, 1000, 2.0, 0.15, CropAnchor.TOP)
        CropBox(sx=0.0, sy=0.0, sw=1000, sh=850.0)
    """
    if source_width <= 0 or source_height <= 0:
        raise ValueError(f"Source size must be positive: {source_width}x{source_height}")
    if target_aspect <= 0:
        raise ValueError(f"target_aspect must be positive: {target_aspect}")

    anchor = CropAnchor(anchor)
    source_aspect = source_width / source_height

    crop_width = source_width
    crop_height = source_height
    if target_aspect > source_aspect:
        ideal_height = source_width / target_aspect
        floor_height = source_height - source_height * max_crop_ratio
        crop_height = min(source_height, max(ideal_height, floor_height))
    else:
        ideal_width = source_height * target_aspect
        floor_width = source_width - source_width * max_crop_ratio
        crop_width = min(source_width, max(ideal_width, floor_width))

    weight_x, weight_y = _ANCHOR_WEIGHTS[anchor]
    return CropBox(
        sx=(source_width - crop_width) * weight_x,
        sy=(source_height - crop_height) * weight_y,
        sw=crop_width,
        sh=crop_height,
    )
