"""
Module: layout.algorithms.guillotine

Purpose:
    Guillotine bin packing with Best-Short-Side-Fit selection. Usually the
    best space efficiency for mixed image sizes. Images are never rotated
    or resized.

Algorithm:
    1. Start with the whole page as one free rectangle
    2. For each image (biased area order), pick the free rectangle that
       leaves the smallest short-side leftover
    3. Place the image in that rectangle's top-left corner
    4. Split the leftover L-shape with one guillotine cut along the
       shorter axis
    5. Drop slivers, merge free rectangles sharing a full edge

Gap handling:
    Free space is tracked on a page inflated by ``gap`` on the right and
    bottom, and every image claims ``width + gap`` by ``height + gap``.
    The claimed margin on the far side of the last image falls off the
    real page, so images stay in bounds and keep ``gap`` between them.

Key Functions:
    - guillotine_algorithm(): Entry point

Dependencies:
    - layout.randomization: SeededRandom, biased_shuffle_by_area
    - layout.helpers: Input screening, output assembly, LayoutInvariantError

Used By:
    - layout.algorithms: Dispatch table
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from collage_toolkit.common.thresholds import ALGORITHM_THRESHOLDS, SHUFFLE_BIAS
from collage_toolkit.core.models import (
    AlgorithmInput,
    AlgorithmOutput,
    CollageRect,
    ImageDimensions,
    PlacedImage,
)

from ..helpers import (
    LayoutInvariantError,
    build_output,
    create_empty_output,
    split_valid_images,
)
from ..randomization import SeededRandom, biased_shuffle_by_area

logger = logging.getLogger(__name__)


@dataclass
class _FreeRect:
    """Unoccupied region; mutable so merges can grow it in place."""
    x: float
    y: float
    width: float
    height: float


def guillotine_algorithm(layout_input: AlgorithmInput) -> AlgorithmOutput:
    """
    Pack images into the page with guillotine splits.

    Args:
        layout_input: Images, page and gap

    Returns:
        AlgorithmOutput; every placement has scale_factor 1.0

    Raises:
        LayoutInvariantError: If a split ever yields a free rect with
            non-positive size (a bug, not a fit failure)
    """
    valid, unused = split_valid_images(layout_input)
    if not valid:
        return create_empty_output(layout_input.images)

    rng = SeededRandom(layout_input.seed)
    ordered = biased_shuffle_by_area(valid, rng, SHUFFLE_BIAS.guillotine)

    gap = layout_input.gap_inches
    free_rects: List[_FreeRect] = [
        _FreeRect(0.0, 0.0, layout_input.page_width + gap, layout_input.page_height + gap)
    ]

    placements: List[PlacedImage] = []
    for img in ordered:
        placed = _place_image(img, free_rects, gap)
        if placed is None:
            unused.append(img.id)
        else:
            placements.append(placed)

    logger.debug(
        f"guillotine placed {len(placements)}/{len(layout_input.images)} images, "
        f"{len(free_rects)} free rects left"
    )
    return build_output(placements, unused, layout_input)


def _place_image(
    img: ImageDimensions,
    free_rects: List[_FreeRect],
    gap: float,
) -> Optional[PlacedImage]:
    """Place one image in its best-fitting free rect; None if none fits."""
    used_width = img.width + gap
    used_height = img.height + gap

    best_index = -1
    best_score = 0.0
    for i, rect in enumerate(free_rects):
        if used_width <= rect.width and used_height <= rect.height:
            # Best Short Side Fit; first rect wins ties
            score = min(rect.width - used_width, rect.height - used_height)
            if best_index < 0 or score < best_score:
                best_index = i
                best_score = score

    if best_index < 0:
        return None

    target = free_rects.pop(best_index)
    placement = PlacedImage(
        image_id=img.id,
        rect=CollageRect(x=target.x, y=target.y, width=img.width, height=img.height),
        scale_factor=1.0,
    )

    _split_free_rect(target, used_width, used_height, free_rects)
    _prune_and_merge(free_rects)
    return placement


def _split_free_rect(
    rect: _FreeRect,
    used_width: float,
    used_height: float,
    free_rects: List[_FreeRect],
) -> None:
    """Carve the L-shaped leftover of ``rect`` with one cut along the shorter axis."""
    min_fragment = ALGORITHM_THRESHOLDS.min_fragment_inches
    remaining_width = rect.width - used_width
    remaining_height = rect.height - used_height

    if remaining_width > min_fragment and remaining_height > min_fragment:
        if remaining_width <= remaining_height:
            # Horizontal cut: short right strip, full-width bottom
            free_rects.append(_FreeRect(rect.x + used_width, rect.y, remaining_width, used_height))
            free_rects.append(_FreeRect(rect.x, rect.y + used_height, rect.width, remaining_height))
        else:
            # Vertical cut: full-height right, short bottom strip
            free_rects.append(_FreeRect(rect.x + used_width, rect.y, remaining_width, rect.height))
            free_rects.append(_FreeRect(rect.x, rect.y + used_height, used_width, remaining_height))
    elif remaining_width > min_fragment:
        free_rects.append(_FreeRect(rect.x + used_width, rect.y, remaining_width, rect.height))
    elif remaining_height > min_fragment:
        free_rects.append(_FreeRect(rect.x, rect.y + used_height, rect.width, remaining_height))

    for free in free_rects:
        if free.width <= 0 or free.height <= 0:
            raise LayoutInvariantError(
                f"Free rect with non-positive size: "
                f"({free.x:.4f}, {free.y:.4f}, {free.width:.4f}x{free.height:.4f})"
            )


def _prune_and_merge(free_rects: List[_FreeRect]) -> None:
    """Drop slivers, then merge rect pairs that share a full edge until none remain."""
    min_fragment = ALGORITHM_THRESHOLDS.min_fragment_inches
    free_rects[:] = [
        r for r in free_rects
        if r.width >= min_fragment and r.height >= min_fragment
    ]

    merged = True
    while merged:
        merged = False
        for i in range(len(free_rects)):
            for j in range(i + 1, len(free_rects)):
                if _try_merge(free_rects[i], free_rects[j]):
                    del free_rects[j]
                    merged = True
                    break
            if merged:
                break


def _try_merge(a: _FreeRect, b: _FreeRect) -> bool:
    """
    Merge ``b`` into ``a`` if they share a full edge (within tolerance).

    The merged rect is clipped to the narrower of the two on the shared
    axis, so float drift cannot widen free space.
    """
    tol = ALGORITHM_THRESHOLDS.merge_tolerance_inches

    if abs(a.x - b.x) < tol and abs(a.width - b.width) < tol:
        # Stacked vertically
        if abs(a.y + a.height - b.y) < tol:
            top, bottom = a, b
        elif abs(b.y + b.height - a.y) < tol:
            top, bottom = b, a
        else:
            top = bottom = None
        if top is not None:
            left = max(a.x, b.x)
            right = min(a.x + a.width, b.x + b.width)
            y = top.y
            height = bottom.y + bottom.height - top.y
            a.x, a.y, a.width, a.height = left, y, right - left, height
            return True

    if abs(a.y - b.y) < tol and abs(a.height - b.height) < tol:
        # Side by side
        if abs(a.x + a.width - b.x) < tol:
            first, second = a, b
        elif abs(b.x + b.width - a.x) < tol:
            first, second = b, a
        else:
            return False
        top_edge = max(a.y, b.y)
        bottom_edge = min(a.y + a.height, b.y + b.height)
        x = first.x
        width = second.x + second.width - first.x
        a.x, a.y, a.width, a.height = x, top_edge, width, bottom_edge - top_edge
        return True

    return False
