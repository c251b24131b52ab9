"""
Module: layout.algorithms.spiral

Purpose:
    Edge-inward spiral layout. Fills the page border first, then the next
    ring inside it, and so on. Larger images land on the outer rings.

Algorithm:
    Each round:
        1. Top edge, left to right
        2. Right edge, top to bottom
        3. Bottom edge, right to left
        4. Left edge, bottom to top
    Every edge is filled with queued images at native size, stretched
    uniformly (1.0x to 1.5x) to span the edge, and the working bounds
    shrink inward by the stretched thickness plus the gap. The spiral
    stops when a round places nothing, the queue empties, or the bounds
    collapse.

    Post-passes (fixed order):
        1. tuck_placements(): Slide toward the nearest page edge
        2. shift_outward(): Slide away from page center on the dominant axis
        3. expand_to_fill_center(): Grow images below native scale inward

Key Functions:
    - spiral_algorithm(): Entry point
    - tuck_placements() / shift_outward() / expand_to_fill_center()

Dependencies:
    - layout.geometry: Movement bounds, growth space, collision tests
    - layout.randomization: SeededRandom, biased_shuffle_by_area

Used By:
    - layout.algorithms: Dispatch table
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from collage_toolkit.common.thresholds import ALGORITHM_THRESHOLDS, SHUFFLE_BIAS
from collage_toolkit.core.models import (
    AlgorithmInput,
    AlgorithmOutput,
    CollageRect,
    ImageDimensions,
    PlacedImage,
)

from ..geometry import (
    find_max_x,
    find_max_y,
    find_min_x,
    find_min_y,
    find_space_above,
    find_space_below,
    find_space_left,
    find_space_right,
    has_collision,
    rect_within_page,
)
from ..helpers import build_output, create_empty_output, split_valid_images
from ..randomization import SeededRandom, biased_shuffle_by_area

logger = logging.getLogger(__name__)

TOP = "top"
RIGHT = "right"
BOTTOM = "bottom"
LEFT = "left"

_HORIZONTAL_EDGES = (TOP, BOTTOM)


@dataclass
class _Bounds:
    """Working area that shrinks as the spiral moves inward."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


def spiral_algorithm(layout_input: AlgorithmInput) -> AlgorithmOutput:
    """
    Lay out images in inward rings, then run the three post-passes.

    Args:
        layout_input: Images, page and gap

    Returns:
        AlgorithmOutput; scale_factor reflects edge stretching (>= 1.0)
        and any later expansion
    """
    valid, unused = split_valid_images(layout_input)
    if not valid:
        return create_empty_output(layout_input.images)

    rng = SeededRandom(layout_input.seed)
    queue = biased_shuffle_by_area(valid, rng, SHUFFLE_BIAS.spiral)

    page_width = layout_input.page_width
    page_height = layout_input.page_height
    gap = layout_input.gap_inches
    min_size = layout_input.min_image_size_inches

    bounds = _Bounds(left=0.0, top=0.0, right=page_width, bottom=page_height)
    placements: List[PlacedImage] = []
    rounds = 0

    while queue:
        rounds += 1
        start_count = len(queue)

        queue = _fill_and_shrink(TOP, queue, bounds, gap, placements)
        if not queue or bounds.top >= bounds.bottom:
            break

        queue = _fill_and_shrink(RIGHT, queue, bounds, gap, placements)
        if not queue or bounds.left >= bounds.right:
            break

        queue = _fill_and_shrink(BOTTOM, queue, bounds, gap, placements)
        if not queue or bounds.top >= bounds.bottom:
            break

        queue = _fill_and_shrink(LEFT, queue, bounds, gap, placements)

        if len(queue) == start_count:
            break
        if bounds.width < min_size or bounds.height < min_size:
            break

    unused.extend(img.id for img in queue)

    placements = tuck_placements(placements, gap, page_width, page_height)
    placements = shift_outward(placements, gap, page_width, page_height)
    placements = expand_to_fill_center(placements, gap, page_width, page_height)

    logger.debug(
        f"spiral placed {len(placements)}/{len(layout_input.images)} images "
        f"in {rounds} rounds"
    )
    return build_output(placements, unused, layout_input)


# ─────────────────────────────────────────────────────────────────────────────
# Edge filling
# ─────────────────────────────────────────────────────────────────────────────

def _fill_and_shrink(
    edge: str,
    queue: List[ImageDimensions],
    bounds: _Bounds,
    gap: float,
    placements: List[PlacedImage],
) -> List[ImageDimensions]:
    """Fill one edge, stretch it, record placements and shrink bounds. Returns the new queue."""
    placed, remaining = _fill_edge(edge, queue, bounds, gap)
    if placed:
        stretched, thickness = _scale_edge_to_fit(edge, placed, bounds, gap)
        placements.extend(stretched)
        if edge == TOP:
            bounds.top += thickness + gap
        elif edge == RIGHT:
            bounds.right -= thickness + gap
        elif edge == BOTTOM:
            bounds.bottom -= thickness + gap
        else:
            bounds.left += thickness + gap
    return remaining


def _fill_edge(
    edge: str,
    images: Sequence[ImageDimensions],
    bounds: _Bounds,
    gap: float,
) -> Tuple[List[ImageDimensions], List[ImageDimensions]]:
    """
    Take queued images that fit along one edge at native size.

    Returns:
        (placed images in edge order, remaining images in queue order)
    """
    horizontal = edge in _HORIZONTAL_EDGES
    # Thickness runs across the edge: height for top/bottom, width for left/right
    available_thickness = bounds.height if horizontal else bounds.width
    if edge == TOP:
        cursor, limit = bounds.left, bounds.right
    elif edge == RIGHT:
        cursor, limit = bounds.top, bounds.bottom
    elif edge == BOTTOM:
        cursor, limit = bounds.left, bounds.right
    else:
        cursor, limit = bounds.top, bounds.bottom
    available_length = limit - cursor

    placed: List[ImageDimensions] = []
    remaining: List[ImageDimensions] = []
    used = 0.0

    for img in images:
        length = img.width if horizontal else img.height
        thickness = img.height if horizontal else img.width

        if thickness > available_thickness:
            remaining.append(img)
            continue

        needed = length if not placed else used + gap + length
        if needed <= available_length:
            placed.append(img)
            used = needed
        else:
            remaining.append(img)

    return placed, remaining


def _scale_edge_to_fit(
    edge: str,
    placed: Sequence[ImageDimensions],
    bounds: _Bounds,
    gap: float,
) -> Tuple[List[PlacedImage], float]:
    """
    Stretch one edge's images uniformly so they span the edge.

    The factor is ``(edge_length - (n - 1) * gap) / sum(lengths)`` clamped
    to ``[edge_scale_min, edge_scale_max]`` and to the room left across
    the edge.

    Returns:
        (placements, stretched max thickness)
    """
    thresholds = ALGORITHM_THRESHOLDS
    horizontal = edge in _HORIZONTAL_EDGES

    edge_length = bounds.width if horizontal else bounds.height
    available_thickness = bounds.height if horizontal else bounds.width
    lengths = [img.width if horizontal else img.height for img in placed]
    max_thickness = max(img.height if horizontal else img.width for img in placed)

    scale = (edge_length - (len(placed) - 1) * gap) / sum(lengths)
    scale = max(thresholds.edge_scale_min, min(scale, thresholds.edge_scale_max))
    scale = min(scale, available_thickness / max_thickness)

    result: List[PlacedImage] = []
    if edge == TOP:
        cursor = bounds.left
        for img in placed:
            w, h = img.width * scale, img.height * scale
            result.append(_placed(img, cursor, bounds.top, w, h, scale))
            cursor += w + gap
    elif edge == RIGHT:
        cursor = bounds.top
        for img in placed:
            w, h = img.width * scale, img.height * scale
            result.append(_placed(img, bounds.right - w, cursor, w, h, scale))
            cursor += h + gap
    elif edge == BOTTOM:
        cursor = bounds.right
        for img in placed:
            w, h = img.width * scale, img.height * scale
            result.append(_placed(img, cursor - w, bounds.bottom - h, w, h, scale))
            cursor -= w + gap
    else:
        cursor = bounds.bottom
        for img in placed:
            w, h = img.width * scale, img.height * scale
            result.append(_placed(img, bounds.left, cursor - h, w, h, scale))
            cursor -= h + gap

    return result, max_thickness * scale


def _placed(img: ImageDimensions, x: float, y: float, w: float, h: float, scale: float) -> PlacedImage:
    return PlacedImage(image_id=img.id, rect=CollageRect(x, y, w, h), scale_factor=scale)


# ─────────────────────────────────────────────────────────────────────────────
# Post-passes
# ─────────────────────────────────────────────────────────────────────────────

def tuck_placements(
    placements: Sequence[PlacedImage],
    gap: float,
    page_width: float,
    page_height: float,
) -> List[PlacedImage]:
    """
    Slide each image toward its nearest page edge as far as collisions allow.

    Ties between equally near edges resolve top, right, bottom, left. An
    image already within ``gap`` of that edge stays put.

    Returns:
        New placement list (input is not modified)
    """
    result = list(placements)

    for i, placement in enumerate(result):
        rect = placement.rect
        distances = (
            (TOP, rect.y),
            (RIGHT, page_width - rect.right),
            (BOTTOM, page_height - rect.bottom),
            (LEFT, rect.x),
        )
        nearest = min(d for _, d in distances)

        new_rect = rect
        for edge, dist in distances:
            if dist != nearest or dist <= gap:
                continue
            if edge == TOP:
                new_y = find_min_y(rect, result, i, gap)
                if new_y < rect.y:
                    new_rect = rect.moved_to(rect.x, new_y)
            elif edge == RIGHT:
                new_x = find_max_x(rect, result, i, gap, page_width)
                if new_x > rect.x:
                    new_rect = rect.moved_to(new_x, rect.y)
            elif edge == BOTTOM:
                new_y = find_max_y(rect, result, i, gap, page_height)
                if new_y > rect.y:
                    new_rect = rect.moved_to(rect.x, new_y)
            else:
                new_x = find_min_x(rect, result, i, gap)
                if new_x < rect.x:
                    new_rect = rect.moved_to(new_x, rect.y)
            break

        if new_rect is not rect:
            result[i] = placement.with_rect(new_rect)

    return result


def shift_outward(
    placements: Sequence[PlacedImage],
    gap: float,
    page_width: float,
    page_height: float,
) -> List[PlacedImage]:
    """
    Slide each image away from the page center along its dominant axis.

    Consolidates white space toward the middle of the page.
    """
    result = list(placements)
    center_x = page_width / 2
    center_y = page_height / 2

    for i, placement in enumerate(result):
        rect = placement.rect
        cx, cy = rect.center
        dx = cx - center_x
        dy = cy - center_y

        new_rect = rect
        if abs(dx) > abs(dy):
            if dx > 0:
                new_x = find_max_x(rect, result, i, gap, page_width)
                if new_x > rect.x:
                    new_rect = rect.moved_to(new_x, rect.y)
            else:
                new_x = find_min_x(rect, result, i, gap)
                if new_x < rect.x:
                    new_rect = rect.moved_to(new_x, rect.y)
        else:
            if dy > 0:
                new_y = find_max_y(rect, result, i, gap, page_height)
                if new_y > rect.y:
                    new_rect = rect.moved_to(rect.x, new_y)
            else:
                new_y = find_min_y(rect, result, i, gap)
                if new_y < rect.y:
                    new_rect = rect.moved_to(rect.x, new_y)

        if new_rect is not rect:
            result[i] = placement.with_rect(new_rect)

    return result


def expand_to_fill_center(
    placements: Sequence[PlacedImage],
    gap: float,
    page_width: float,
    page_height: float,
) -> List[PlacedImage]:
    """
    Grow images that sit below native scale toward the page center.

    Growth is uniform (aspect preserved), anchored on the side away from
    center and centered on the perpendicular axis. The factor is limited
    by the open space toward center and by native size (scale 1.0). A
    grown rect that would leave the page or touch a neighbour is
    discarded and the image keeps its current size.
    """
    result = list(placements)
    center_x = page_width / 2
    center_y = page_height / 2
    min_change = ALGORITHM_THRESHOLDS.min_expand_change

    for i, placement in enumerate(result):
        if placement.scale_factor >= 1.0:
            continue

        rect = placement.rect
        cx, cy = rect.center
        dx = center_x - cx
        dy = center_y - cy
        horizontal = abs(dx) > abs(dy)

        if horizontal:
            if dx > 0:
                space = find_space_right(rect, result, i, gap, page_width)
            else:
                space = find_space_left(rect, result, i, gap)
            span = rect.width
        else:
            if dy > 0:
                space = find_space_below(rect, result, i, gap, page_height)
            else:
                space = find_space_above(rect, result, i, gap)
            span = rect.height

        if space <= 0:
            continue

        growth = min(1.0 / placement.scale_factor, (span + space) / span)
        new_scale = min(placement.scale_factor * growth, 1.0)
        change = new_scale / placement.scale_factor
        if change <= min_change:
            continue

        new_w = rect.width * change
        new_h = rect.height * change
        if horizontal:
            x = rect.x if dx > 0 else rect.right - new_w
            y = rect.y - (new_h - rect.height) / 2
        else:
            x = rect.x - (new_w - rect.width) / 2
            y = rect.y if dy > 0 else rect.bottom - new_h

        x = max(0.0, min(x, page_width - new_w))
        y = max(0.0, min(y, page_height - new_h))
        grown = CollageRect(x, y, new_w, new_h)

        if not rect_within_page(grown, page_width, page_height):
            continue
        if has_collision(grown, result, placement.image_id, gap):
            continue

        result[i] = placement.with_rect(grown, new_scale)

    return result
