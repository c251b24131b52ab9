"""
Module: placements

Purpose:
    The PlacedImage dataclass - where and at what scale an image lands
    on the page.

Key Classes:
    - PlacedImage: Placement of a single pool image

Dependencies:
    - core.models.geometry: CollageRect, CropBox

Used By:
    - core.models.results: AlgorithmOutput, CollageLayoutResult
    - layout.algorithms: All five strategies
    - layout.geometry: Collision queries
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .geometry import CollageRect, CropBox


@dataclass(frozen=True, slots=True)
class PlacedImage:
    """
    A pool image positioned on the page (immutable).

    Attributes:
        image_id: Id of the placed ImageDimensions / PoolImage
        rect: Final placed position and size (inches)
        scale_factor: Placed size relative to the algorithm's input size
        crop_box: Source region to sample; set by the renderer only
        rotated: Always False from the layout core

    Example:
        >>> p = PlacedImage("a", CollageRect(0, 0, 2, 3), scale_factor=1.0)
        >>> p.with_rect(CollageRect(1, 1, 2, 3)).rect.x
        1
    """

    image_id: str
    rect: CollageRect
    scale_factor: float = 1.0
    crop_box: Optional[CropBox] = None
    rotated: bool = False

    def __post_init__(self) -> None:
        """Validate placement on construction."""
        if self.scale_factor <= 0:
            raise ValueError(f"scale_factor must be > 0: {self.scale_factor}")

    def with_rect(self, rect: CollageRect, scale_factor: Optional[float] = None) -> PlacedImage:
        """Return a copy with a new rect (and optionally a new scale)."""
        if scale_factor is None:
            return replace(self, rect=rect)
        return replace(self, rect=rect, scale_factor=scale_factor)

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        d = {
            "imageId": self.image_id,
            "rect": self.rect.to_dict(),
            "scaleFactor": self.scale_factor,
            "rotated": self.rotated,
        }
        if self.crop_box is not None:
            d["cropBox"] = self.crop_box.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: dict) -> PlacedImage:
        """Deserialize from dictionary."""
        crop = data.get("cropBox")
        return cls(
            image_id=data["imageId"],
            rect=CollageRect.from_dict(data["rect"]),
            scale_factor=data.get("scaleFactor", 1.0),
            crop_box=CropBox.from_dict(crop) if crop is not None else None,
            rotated=data.get("rotated", False),
        )
