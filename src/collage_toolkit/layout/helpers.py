"""
Module: layout.helpers

Purpose:
    Small helpers shared by all five layout algorithms: input screening,
    coverage calculation and the empty/degenerate output.

Key Functions:
    - split_valid_images(): Separate placeable images from undersized ones
    - calculate_coverage(): Placed area / page area, clamped to [0, 1]
    - create_empty_output(): Output with every image unused
    - build_output(): Assemble an AlgorithmOutput from placements

Key Classes:
    - LayoutInvariantError: Geometry bug, never raised for valid input

Used By:
    - layout.algorithms.*
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from collage_toolkit.core.models import (
    AlgorithmInput,
    AlgorithmOutput,
    ImageDimensions,
    PlacedImage,
)


class LayoutInvariantError(RuntimeError):
    """
    Internal geometry invariant violated.

    Signals a programming defect in an algorithm (for example a free
    rectangle with negative size), as opposed to an image that simply
    does not fit.
    """
    pass


def split_valid_images(
    layout_input: AlgorithmInput,
) -> Tuple[List[ImageDimensions], List[str]]:
    """
    Screen algorithm input.

    Returns:
        (valid images, ids of undersized images). When the page itself is
        unusable every image is reported undersized.
    """
    if not layout_input.is_valid:
        return [], [img.id for img in layout_input.images]

    min_size = layout_input.min_image_size_inches
    valid: List[ImageDimensions] = []
    undersized: List[str] = []
    for img in layout_input.images:
        if img.width >= min_size and img.height >= min_size:
            valid.append(img)
        else:
            undersized.append(img.id)
    return valid, undersized


def calculate_coverage(
    placements: Iterable[PlacedImage],
    page_width: float,
    page_height: float,
) -> float:
    """Placed area divided by page area, clamped to [0, 1]."""
    page_area = page_width * page_height
    if page_area <= 0:
        return 0.0
    used_area = sum(p.rect.width * p.rect.height for p in placements)
    return max(0.0, min(1.0, used_area / page_area))


def create_empty_output(images: Sequence[ImageDimensions]) -> AlgorithmOutput:
    """Output for when nothing can be placed: every image unused."""
    return AlgorithmOutput.empty([img.id for img in images])


def build_output(
    placements: Sequence[PlacedImage],
    unused_ids: Sequence[str],
    layout_input: AlgorithmInput,
) -> AlgorithmOutput:
    """Assemble the output for a finished run."""
    return AlgorithmOutput(
        placements=tuple(placements),
        coverage=calculate_coverage(placements, layout_input.page_width, layout_input.page_height),
        unused_image_ids=tuple(unused_ids),
    )
