"""
Module: layout.geometry

Purpose:
    Shared rectangle geometry for every layout algorithm and the spiral
    post-passes. Implemented once so all callers agree on what counts as
    a collision.

Key Functions:
    - rects_intersect(): Overlap test with gap tolerance
    - has_collision(): Test a rect against existing placements
    - find_min_y() / find_max_y() / find_min_x() / find_max_x():
      Furthest collision-free position when moving a rect
    - find_space_above() / find_space_below() / find_space_left() /
      find_space_right(): Open distance when growing a rect

Conventions:
    - Placements are referenced by index; ``self_index`` is skipped
    - Two rects "block" each other along one axis only when they overlap
      (within ``gap``) on the perpendicular axis
    - A movement blocker is any such rect that extends further in the
      direction of travel, including one that already overlaps
    - Page origin is (0, 0); far edges are passed explicitly

Dependencies:
    - core.models: CollageRect, PlacedImage

Used By:
    - layout.algorithms.spiral: Tuck / shift / expand passes
    - tests: No-overlap invariant checks
"""

from __future__ import annotations

from typing import Sequence

from collage_toolkit.core.models import CollageRect, PlacedImage


def rects_intersect(a: CollageRect, b: CollageRect, tolerance: float = 0.0) -> bool:
    """
    Check whether two rectangles overlap.

    The rects do not intersect when one rect's far edge plus ``tolerance``
    is at or before the other's near edge, on either axis. With
    ``tolerance=0`` touching edges do not count.

    Args:
        a: First rect
        b: Second rect
        tolerance: Required clearance (typically the gap)

    Returns:
        True if the rects overlap (or sit closer than ``tolerance``)

    Example:
        >>> rects_intersect(CollageRect(0, 0, 2, 2), CollageRect(2, 0, 2, 2))
        False
        >>> rects_intersect(CollageRect(0, 0, 2, 2), CollageRect(2, 0, 2, 2), 0.5)
        True
    """
    return not (
        a.x + a.width + tolerance <= b.x
        or b.x + b.width + tolerance <= a.x
        or a.y + a.height + tolerance <= b.y
        or b.y + b.height + tolerance <= a.y
    )


def has_collision(
    rect: CollageRect,
    placements: Sequence[PlacedImage],
    exclude_id: str,
    gap: float,
) -> bool:
    """
    Check whether ``rect`` intersects any placement other than ``exclude_id``.

    Args:
        rect: Candidate rect
        placements: Current placements
        exclude_id: Image id to ignore (usually the rect's own image)
        gap: Required clearance between images

    Returns:
        True if any other placement is within ``gap`` of ``rect``
    """
    for p in placements:
        if p.image_id == exclude_id:
            continue
        if rects_intersect(rect, p.rect, gap):
            return True
    return False


def _overlaps_horizontally(a: CollageRect, b: CollageRect, gap: float) -> bool:
    """Whether the x-extents of a and b overlap (with gap clearance)."""
    return not (a.x + a.width + gap <= b.x or b.x + b.width + gap <= a.x)


def _overlaps_vertically(a: CollageRect, b: CollageRect, gap: float) -> bool:
    """Whether the y-extents of a and b overlap (with gap clearance)."""
    return not (a.y + a.height + gap <= b.y or b.y + b.height + gap <= a.y)


# ─────────────────────────────────────────────────────────────────────────────
# Movement bounds
# ─────────────────────────────────────────────────────────────────────────────

def find_min_y(
    rect: CollageRect,
    placements: Sequence[PlacedImage],
    self_index: int,
    gap: float,
) -> float:
    """
    Smallest y the rect can move up to without colliding.

    Placements that overlap ``rect`` horizontally and start above it
    block the move; the page top (0) bounds it otherwise. A blocker that
    already overlaps ``rect`` yields a bound at or below ``rect.y``, so
    callers never slide a rect through a neighbour it touches.
    """
    min_y = 0.0
    for i, p in enumerate(placements):
        if i == self_index:
            continue
        other = p.rect
        if other.y < rect.y and _overlaps_horizontally(rect, other, gap):
            min_y = max(min_y, other.y + other.height + gap)
    return min_y


def find_max_y(
    rect: CollageRect,
    placements: Sequence[PlacedImage],
    self_index: int,
    gap: float,
    page_height: float,
) -> float:
    """Largest y the rect can move down to without colliding."""
    max_y = page_height - rect.height
    for i, p in enumerate(placements):
        if i == self_index:
            continue
        other = p.rect
        if other.y + other.height > rect.y + rect.height and _overlaps_horizontally(rect, other, gap):
            max_y = min(max_y, other.y - rect.height - gap)
    return max_y


def find_min_x(
    rect: CollageRect,
    placements: Sequence[PlacedImage],
    self_index: int,
    gap: float,
) -> float:
    """Smallest x the rect can move left to without colliding."""
    min_x = 0.0
    for i, p in enumerate(placements):
        if i == self_index:
            continue
        other = p.rect
        if other.x < rect.x and _overlaps_vertically(rect, other, gap):
            min_x = max(min_x, other.x + other.width + gap)
    return min_x


def find_max_x(
    rect: CollageRect,
    placements: Sequence[PlacedImage],
    self_index: int,
    gap: float,
    page_width: float,
) -> float:
    """Largest x the rect can move right to without colliding."""
    max_x = page_width - rect.width
    for i, p in enumerate(placements):
        if i == self_index:
            continue
        other = p.rect
        if other.x + other.width > rect.x + rect.width and _overlaps_vertically(rect, other, gap):
            max_x = min(max_x, other.x - rect.width - gap)
    return max_x


# ─────────────────────────────────────────────────────────────────────────────
# Growth space
# ─────────────────────────────────────────────────────────────────────────────

def find_space_right(
    rect: CollageRect,
    placements: Sequence[PlacedImage],
    self_index: int,
    gap: float,
    page_width: float,
) -> float:
    """Open distance between the rect's right edge and the nearest blocker."""
    min_blocker = page_width
    for i, p in enumerate(placements):
        if i == self_index:
            continue
        other = p.rect
        if other.x > rect.x + rect.width - gap and _overlaps_vertically(rect, other, gap):
            min_blocker = min(min_blocker, other.x - gap)
    return min_blocker - (rect.x + rect.width)


def find_space_left(
    rect: CollageRect,
    placements: Sequence[PlacedImage],
    self_index: int,
    gap: float,
) -> float:
    """Open distance between the rect's left edge and the nearest blocker."""
    max_blocker = 0.0
    for i, p in enumerate(placements):
        if i == self_index:
            continue
        other = p.rect
        if other.x + other.width < rect.x + gap and _overlaps_vertically(rect, other, gap):
            max_blocker = max(max_blocker, other.x + other.width + gap)
    return rect.x - max_blocker


def find_space_below(
    rect: CollageRect,
    placements: Sequence[PlacedImage],
    self_index: int,
    gap: float,
    page_height: float,
) -> float:
    """Open distance between the rect's bottom edge and the nearest blocker."""
    min_blocker = page_height
    for i, p in enumerate(placements):
        if i == self_index:
            continue
        other = p.rect
        if other.y > rect.y + rect.height - gap and _overlaps_horizontally(rect, other, gap):
            min_blocker = min(min_blocker, other.y - gap)
    return min_blocker - (rect.y + rect.height)


def find_space_above(
    rect: CollageRect,
    placements: Sequence[PlacedImage],
    self_index: int,
    gap: float,
) -> float:
    """Open distance between the rect's top edge and the nearest blocker."""
    max_blocker = 0.0
    for i, p in enumerate(placements):
        if i == self_index:
            continue
        other = p.rect
        if other.y + other.height < rect.y + gap and _overlaps_horizontally(rect, other, gap):
            max_blocker = max(max_blocker, other.y + other.height + gap)
    return rect.y - max_blocker


def rect_within_page(
    rect: CollageRect,
    page_width: float,
    page_height: float,
    epsilon: float = 1e-9,
) -> bool:
    """Whether the rect lies inside [0, page_width] x [0, page_height]."""
    return (
        rect.x >= -epsilon
        and rect.y >= -epsilon
        and rect.x + rect.width <= page_width + epsilon
        and rect.y + rect.height <= page_height + epsilon
    )
