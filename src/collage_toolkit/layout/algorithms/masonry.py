"""
Module: layout.algorithms.masonry

Purpose:
    Pinterest-style column packing.

Algorithm:
    1. Derive a column count from the average image width
       (at least two columns, fewer if columns would be too narrow)
    2. Order images by area with a biased shuffle
    3. Scale each image to exactly the column width (aspect preserved)
    4. Drop it onto the currently shortest column
    5. Images that would run past the page bottom are unused

    Good for varied aspect ratios, especially portrait-heavy pools.

Dependencies:
    - layout.randomization: SeededRandom, biased_shuffle_by_area
    - layout.helpers: Input screening and output assembly

Used By:
    - layout.algorithms: Dispatch table
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from collage_toolkit.common.thresholds import ALGORITHM_THRESHOLDS, SHUFFLE_BIAS
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
class _Column:
    """One masonry column and its filled height."""
    x: float
    width: float
    current_y: float = 0.0


def masonry_algorithm(layout_input: AlgorithmInput) -> AlgorithmOutput:
    """
    Lay out images in equal-width columns.

    Args:
        layout_input: Images, page and gap

    Returns:
        AlgorithmOutput; scale_factor is column width / image width
    """
    valid, unused = split_valid_images(layout_input)
    if not valid:
        return create_empty_output(layout_input.images)

    page_width = layout_input.page_width
    gap = layout_input.gap_inches

    column_count = column_count_for(valid, page_width, gap, layout_input.min_image_size_inches)
    column_width = (page_width - gap * (column_count - 1)) / column_count
    if column_width <= 0:
        # Gap alone swallows the page width
        return create_empty_output(layout_input.images)

    columns = [
        _Column(x=i * (column_width + gap), width=column_width)
        for i in range(column_count)
    ]

    rng = SeededRandom(layout_input.seed)
    ordered = biased_shuffle_by_area(valid, rng, SHUFFLE_BIAS.masonry)

    placements: List[PlacedImage] = []
    for img in ordered:
        placed = _place_in_shortest_column(img, columns, layout_input.page_height, gap)
        if placed is None:
            unused.append(img.id)
        else:
            placements.append(placed)

    logger.debug(
        f"masonry placed {len(placements)}/{len(layout_input.images)} images "
        f"in {column_count} columns"
    )
    return build_output(placements, unused, layout_input)


def column_count_for(
    images: Sequence[ImageDimensions],
    page_width: float,
    gap: float,
    min_size: float,
) -> int:
    """
    Number of columns for the given images.

    ``page_width / (avg_width + gap)`` rounded half up, at least two, reduced to
    ``floor(page_width / (min_size + gap))`` (but at least one) when the
    resulting column width would fall below ``min_size``.
    """
    avg_width = sum(img.width for img in images) / len(images)
    count = max(
        ALGORITHM_THRESHOLDS.masonry_min_columns,
        math.floor(page_width / (avg_width + gap) + 0.5),
    )

    column_width = (page_width - gap * (count - 1)) / count
    if column_width < min_size:
        count = max(1, math.floor(page_width / (min_size + gap))) if min_size + gap > 0 else 1
    return count


def _place_in_shortest_column(
    img: ImageDimensions,
    columns: List[_Column],
    page_height: float,
    gap: float,
) -> Optional[PlacedImage]:
    """Scale to column width and stack on the shortest column."""
    shortest = columns[0]
    for col in columns:
        if col.current_y < shortest.current_y:
            shortest = col

    scale = shortest.width / img.width
    scaled_height = img.height * scale

    if shortest.current_y + scaled_height > page_height:
        return None

    placement = PlacedImage(
        image_id=img.id,
        rect=CollageRect(x=shortest.x, y=shortest.current_y, width=shortest.width, height=scaled_height),
        scale_factor=scale,
    )
    shortest.current_y += scaled_height + gap
    return placement
