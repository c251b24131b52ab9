"""
Module: layout.algorithms.treemap

Purpose:
    Squarified treemap partitioning. Produces a balanced, grid-like
    collage where every valid image gets its own cell.

Algorithm:
    1. Scale all images by sqrt(page_area / total_area) * 0.85
    2. Recursively split the image list and its container in two:
       - Cut across the container's longer side
       - Pick the split index whose first group's average aspect ratio
         best matches the aspect ratio of the sub-rect it would receive
       - 20% of the time nudge the split by one for variety
       - Each side of the cut loses half the gap
    3. Each leaf image is scaled to fit its cell and centered in it

Key Functions:
    - treemap_algorithm(): Entry point

Dependencies:
    - layout.randomization: SeededRandom, biased_shuffle_by_area

Used By:
    - layout.algorithms: Dispatch table
"""

from __future__ import annotations

import logging
import math
from typing import List, NamedTuple, Sequence

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


class _Cell(NamedTuple):
    """Container region; may be degenerate, unlike CollageRect."""
    x: float
    y: float
    width: float
    height: float


def treemap_algorithm(layout_input: AlgorithmInput) -> AlgorithmOutput:
    """
    Partition the page into one cell per image.

    Args:
        layout_input: Images, page and gap

    Returns:
        AlgorithmOutput; scale_factor is placed width / input width.
        Unused ids (undersized or squeezed out by gaps) follow input order.
    """
    valid, _ = split_valid_images(layout_input)
    if not valid:
        return create_empty_output(layout_input.images)

    rng = SeededRandom(layout_input.seed)
    ordered = biased_shuffle_by_area(valid, rng, SHUFFLE_BIAS.treemap)

    page = _Cell(0.0, 0.0, layout_input.page_width, layout_input.page_height)
    total_area = sum(img.area for img in ordered)
    fit_scale = math.sqrt(layout_input.page_area / total_area) * ALGORITHM_THRESHOLDS.treemap_fill_ratio

    scaled = [img.scaled(fit_scale) for img in ordered]
    placements = _squarify(scaled, page, layout_input.gap_inches, rng, fit_scale)

    placed_ids = {p.image_id for p in placements}
    unused = [img.id for img in layout_input.images if img.id not in placed_ids]

    logger.debug(
        f"treemap placed {len(placements)}/{len(layout_input.images)} images "
        f"(fit scale {fit_scale:.3f})"
    )
    return build_output(placements, unused, layout_input)


def _squarify(
    images: List[ImageDimensions],
    page: _Cell,
    gap: float,
    rng: SeededRandom,
    fit_scale: float,
) -> List[PlacedImage]:
    """
    Depth-first partitioning with an explicit stack.

    The first group is always processed before the second so random draws
    happen in the same order as a recursive descent.
    """
    placements: List[PlacedImage] = []
    stack = [(images, page)]

    while stack:
        group, cell = stack.pop()

        if cell.width <= 0 or cell.height <= 0:
            # Gaps ate the cell; these images stay unused
            continue
        if len(group) == 1:
            placements.append(_layout_single(group[0], cell, fit_scale))
            continue

        split = _choose_split(group, cell, rng)
        first_cell, second_cell = _split_cell(group, split, cell, gap)

        stack.append((group[split:], second_cell))
        stack.append((group[:split], first_cell))

    return placements


def _choose_split(group: Sequence[ImageDimensions], cell: _Cell, rng: SeededRandom) -> int:
    """Index splitting ``group`` so the first half best matches its sub-cell's shape."""
    is_wide = cell.width >= cell.height
    total_area = sum(img.area for img in group)

    best_split = 1
    best_diff = math.inf
    running_area = 0.0
    aspect_sum = 0.0

    for i in range(len(group) - 1):
        running_area += group[i].area
        aspect_sum += group[i].aspect_ratio
        ratio = running_area / total_area

        group_w = cell.width * ratio if is_wide else cell.width
        group_h = cell.height if is_wide else cell.height * ratio
        avg_aspect = aspect_sum / (i + 1)

        diff = abs(math.log(avg_aspect) - math.log(group_w / group_h))
        if diff < best_diff:
            best_diff = diff
            best_split = i + 1

    if (
        rng.next() < ALGORITHM_THRESHOLDS.treemap_split_jitter_probability
        and 1 < best_split < len(group) - 1
    ):
        best_split += -1 if rng.next() < 0.5 else 1

    return best_split


def _split_cell(
    group: Sequence[ImageDimensions],
    split: int,
    cell: _Cell,
    gap: float,
) -> tuple[_Cell, _Cell]:
    """Cut the cell across its longer side in proportion to group area."""
    total_area = sum(img.area for img in group)
    ratio = sum(img.area for img in group[:split]) / total_area
    half_gap = gap / 2

    if cell.width >= cell.height:
        split_x = cell.x + cell.width * ratio
        first = _Cell(cell.x, cell.y, cell.width * ratio - half_gap, cell.height)
        second = _Cell(split_x + half_gap, cell.y, cell.width * (1 - ratio) - half_gap, cell.height)
    else:
        split_y = cell.y + cell.height * ratio
        first = _Cell(cell.x, cell.y, cell.width, cell.height * ratio - half_gap)
        second = _Cell(cell.x, split_y + half_gap, cell.width, cell.height * (1 - ratio) - half_gap)
    return first, second


def _layout_single(img: ImageDimensions, cell: _Cell, fit_scale: float) -> PlacedImage:
    """Scale to fit the cell (aspect preserved) and center."""
    scale = min(cell.width / img.width, cell.height / img.height)
    width = img.width * scale
    height = img.height * scale
    return PlacedImage(
        image_id=img.id,
        rect=CollageRect(
            x=cell.x + (cell.width - width) / 2,
            y=cell.y + (cell.height - height) / 2,
            width=width,
            height=height,
        ),
        scale_factor=fit_scale * scale,
    )
