"""
Module: geometry

Purpose:
    Provides the CollageRect dataclass - an axis-aligned rectangle on the
    page in physical units (inches), and CropBox - a source-pixel region
    the renderer may sample from.

Key Functions:
    - CollageRect.right / bottom: Far edges
    - CollageRect.area: width * height
    - CollageRect.moved_to(x, y): Copy at a new position
    - CollageRect.to_dict() / from_dict(): JSON round-trip

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.placements.PlacedImage
    - layout.geometry: Collision and free-space queries
    - layout.algorithms: Placement construction
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CollageRect:
    """
    Placed region on the page, in inches.

    Coordinates are relative to the page's top-left origin (0, 0).

    Attributes:
        x: Left edge
        y: Top edge
        width: Horizontal extent
        height: Vertical extent

    Invariants:
        - width > 0
        - height > 0

    Example:
        >>> rect = CollageRect(x=1.0, y=2.0, width=4.0, height=3.0)
        >>> rect.right, rect.bottom
        (5.0, 5.0)
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate rect on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be > 0: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be > 0: {self.height}")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def right(self) -> float:
        """X-coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Y-coordinate of the bottom edge."""
        return self.y + self.height

    @property
    def area(self) -> float:
        """Area in square inches."""
        return self.width * self.height

    @property
    def center(self) -> tuple[float, float]:
        """Center point as (cx, cy)."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    # ─────────────────────────────────────────────────────────────────────────
    # Derived Copies
    # ─────────────────────────────────────────────────────────────────────────

    def moved_to(self, x: float, y: float) -> CollageRect:
        """Return a copy of this rect with its top-left corner at (x, y)."""
        return CollageRect(x=x, y=y, width=self.width, height=self.height)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict) -> CollageRect:
        """Deserialize from dictionary."""
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"CollageRect({self.x:.3f}, {self.y:.3f}, {self.width:.3f}x{self.height:.3f})"


@dataclass(frozen=True, slots=True)
class CropBox:
    """
    Source-pixel region to sample when rendering a placement.

    Populated by the renderer only; layout algorithms leave it unset.

    Attributes:
        sx: Left edge in source pixels
        sy: Top edge in source pixels
        sw: Width in source pixels
        sh: Height in source pixels
    """

    sx: float
    sy: float
    sw: float
    sh: float

    def __post_init__(self) -> None:
        """Validate crop box on construction."""
        if self.sx < 0 or self.sy < 0:
            raise ValueError(f"crop origin must be >= 0: ({self.sx}, {self.sy})")
        if self.sw <= 0 or self.sh <= 0:
            raise ValueError(f"crop size must be > 0: {self.sw}x{self.sh}")

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {"sx": self.sx, "sy": self.sy, "sw": self.sw, "sh": self.sh}

    @classmethod
    def from_dict(cls, data: dict) -> CropBox:
        """Deserialize from dictionary."""
        return cls(sx=data["sx"], sy=data["sy"], sw=data["sw"], sh=data["sh"])
