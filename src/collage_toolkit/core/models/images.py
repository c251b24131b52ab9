"""
Module: images

Purpose:
    Image descriptors used by the layout core. PoolImage is the
    pixel-dimensioned record supplied by the upload side; ImageDimensions
    is the algorithm-facing view in physical units.

Key Classes:
    - PoolImage: Pool entry with pixel size and selection flag
    - ImageDimensions: Immutable inch-dimensioned view of a pool image

Key Functions:
    - images_to_dimensions(): Convert pool images at a fixed source DPI

Dependencies:
    - dataclasses (std)

Used By:
    - layout.algorithms: Algorithm inputs
    - layout.optimization: Scaling and normalization
    - layout.controller: Pool conversion
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional


@dataclass
class PoolImage:
    """
    One image in the collage pool.

    Mutable only in ``selected``, which the orchestrator sets after each
    layout to reflect whether the image made it onto the page.

    Attributes:
        id: Unique, stable identifier within the pool
        width_pixels: Source width in pixels
        height_pixels: Source height in pixels
        path: Optional source file location
        selected: Whether the last layout placed this image
    """

    id: str
    width_pixels: int
    height_pixels: int
    path: Optional[Path] = None
    selected: bool = False

    def __post_init__(self) -> None:
        """Validate pool image on construction."""
        if not self.id:
            raise ValueError("id must be non-empty")
        if self.width_pixels <= 0 or self.height_pixels <= 0:
            raise ValueError(
                f"pixel size must be positive: {self.width_pixels}x{self.height_pixels}"
            )


@dataclass(frozen=True, slots=True)
class ImageDimensions:
    """
    Algorithm-facing view of one pool image (immutable).

    Transforms (scaling, normalization) always create new instances;
    ``id`` survives every transform.

    Attributes:
        id: Pool image identifier
        width: Width in inches
        height: Height in inches

    Invariants:
        - width > 0, height > 0
        - area == width * height (derived, never stored)

    Example:
        >>> img = ImageDimensions("a", 4.0, 2.0)
        >>> img.area, img.aspect_ratio
        (8.0, 2.0)
        >>> img.scaled(0.5).width
        2.0
    """

    id: str
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"dimensions must be positive: {self.width}x{self.height}")

    @property
    def area(self) -> float:
        """Area in square inches."""
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    def scaled(self, factor: float) -> ImageDimensions:
        """Return a uniformly scaled copy with the same id."""
        return ImageDimensions(self.id, self.width * factor, self.height * factor)

    @classmethod
    def from_pixels(cls, image_id: str, width_px: int, height_px: int, dpi: float) -> ImageDimensions:
        """Build dimensions from a pixel size at the given resolution."""
        return cls(image_id, width_px / dpi, height_px / dpi)


def images_to_dimensions(images: Iterable[PoolImage], dpi: float) -> List[ImageDimensions]:
    """
    Convert pool images to inch dimensions at a fixed source resolution.

    Args:
        images: Pool images with pixel sizes
        dpi: Assumed source resolution (pixels per inch)

    Returns:
        ImageDimensions in the same order as ``images``
    """
    if dpi <= 0:
        raise ValueError(f"dpi must be positive: {dpi}")
    return [
        ImageDimensions.from_pixels(img.id, img.width_pixels, img.height_pixels, dpi)
        for img in images
    ]
