"""
Module: layout.algorithms.ffd_row

Purpose:
    First-Fit-Decreasing row (shelf) packing.

Algorithm:
    1. Order images by area (descending) with a biased shuffle
    2. Place images left-to-right in the current row
    3. Start a new row below the tallest image when the row is full
    4. Images that fit neither the current nor a fresh row are unused

    Good for pools of similar-sized images. Images keep native size.

Dependencies:
    - layout.randomization: SeededRandom, biased_shuffle_by_area
    - layout.helpers: Input screening and output assembly

Used By:
    - layout.algorithms: Dispatch table
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from collage_toolkit.common.thresholds import SHUFFLE_BIAS
from collage_toolkit.core.models import (
    AlgorithmInput,
    AlgorithmOutput,
    CollageRect,
    ImageDimensions,
    PlacedImage,
)

from ..helpers import build_output, create_empty_output, split_valid_images
from ..randomization import SeededRandom, biased_shuffle_by_area

logger = logging.getLogger(__name__)


@dataclass
class _Row:
    """Shelf currently being filled."""
    y: float
    height: float = 0.0
    cursor_x: float = 0.0


def ffd_row_algorithm(layout_input: AlgorithmInput) -> AlgorithmOutput:
    """
    Lay out images in rows.

    Args:
        layout_input: Images, page and gap

    Returns:
        AlgorithmOutput; every placement has scale_factor 1.0

    Example:
        >>> imgs = [ImageDimensions(str(i), 4, 4) for i in range(3)]
        >>> out = ffd_row_algorithm(AlgorithmInput(imgs, 10, 10, 0, 1, seed=1))
        >>> out.coverage
        0.48
    """
    valid, unused = split_valid_images(layout_input)
    if not valid:
        return create_empty_output(layout_input.images)

    rng = SeededRandom(layout_input.seed)
    ordered = biased_shuffle_by_area(valid, rng, SHUFFLE_BIAS.ffd_row)

    page_width = layout_input.page_width
    page_height = layout_input.page_height
    gap = layout_input.gap_inches

    placements: List[PlacedImage] = []
    row = _Row(y=0.0)

    for img in ordered:
        placed = _try_place(img, row, page_width, page_height, gap)
        if placed is None:
            unused.append(img.id)
            continue
        placements.append(placed)

    logger.debug(f"ffd-row placed {len(placements)}/{len(layout_input.images)} images")
    return build_output(placements, unused, layout_input)


def _try_place(
    img: ImageDimensions,
    row: _Row,
    page_width: float,
    page_height: float,
    gap: float,
) -> Optional[PlacedImage]:
    """Place in the current row, or open a new row; None if neither works."""
    if img.width > page_width:
        return None

    if img.width <= page_width - row.cursor_x:
        if row.y + img.height > page_height:
            # A fresh row would sit even lower
            return None
        return _place_in_row(img, row, gap)

    new_row_y = row.y + row.height + gap
    if new_row_y + img.height > page_height:
        return None

    row.y = new_row_y
    row.height = 0.0
    row.cursor_x = 0.0
    return _place_in_row(img, row, gap)


def _place_in_row(img: ImageDimensions, row: _Row, gap: float) -> PlacedImage:
    """Place flush after the row's previous image and advance the cursor."""
    placement = PlacedImage(
        image_id=img.id,
        rect=CollageRect(x=row.cursor_x, y=row.y, width=img.width, height=img.height),
        scale_factor=1.0,
    )
    row.cursor_x += img.width + gap
    row.height = max(row.height, img.height)
    return placement
