"""
Module: layout.config

Purpose:
    Settings for a collage layout request. Immutable, validated on
    construction, convertible to and from the camelCase settings bundle
    used by the UI and renderer collaborators.

Key Classes:
    - CollageAlgorithm: The five layout algorithms
    - CropAnchor: Where the renderer keeps the image when cropping
    - CollageSettings: Main configuration

Dependencies:
    - core.schemas: validate_settings (jsonschema)
    - common.paper_sizes: Paper-size names

Used By:
    - layout.controller: create_collage_layout()
    - scripts/benchmark_layouts.py
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from collage_toolkit.common.paper_sizes import DEFAULT_PAPER_SIZE, PAPER_SIZES
from collage_toolkit.core.schemas import validate_settings


class CollageAlgorithm(Enum):
    """
    Layout algorithm selector.

    Values are the names used in settings bundles and the dispatch table.

    Example:
        >>> CollageAlgorithm("ffd-row") is CollageAlgorithm.FFD_ROW
        True
    """

    FFD_ROW = "ffd-row"        # Rows, native size
    MASONRY = "masonry"        # Equal-width columns
    GUILLOTINE = "guillotine"  # Bin packing, best for mixed sizes
    SPIRAL = "spiral"          # Edges inward
    TREEMAP = "treemap"        # Recursive partitioning, every image placed


class CropAnchor(Enum):
    """Part of the source image kept when the renderer crops."""

    CENTER = "center"
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


SUPPORTED_DPI = (300, 600)


@dataclass(frozen=True)
class CollageSettings:
    """
    Configuration for one collage layout (immutable).

    Crop settings and dpi are not used by the layout core; they travel
    with the result so the renderer can apply them.

    Attributes:
        algorithm: Layout algorithm
        paper_size: Name from PAPER_SIZES
        gap_inches: Spacing between images (0-0.5)
        max_downscale_percent: How far the optimizer may shrink images (0-90)
        allow_cropping: Renderer may crop to fill cells
        max_crop_percent: Max share of a side the renderer may crop (5-30)
        crop_anchor: Region kept when cropping
        min_image_size_inches: Smallest allowed image side (0.25-3)
        normalize_image_sizes: Pull image sizes toward an equal share first
        dpi: Output resolution for the renderer (300 or 600)

    Example:
        >>> settings = CollageSettings(algorithm=CollageAlgorithm.MASONRY, paper_size="A4")
        >>> settings.to_dict()["algorithm"]
        'masonry'
    """

    algorithm: CollageAlgorithm = CollageAlgorithm.GUILLOTINE
    paper_size: str = DEFAULT_PAPER_SIZE
    gap_inches: float = 0.125
    max_downscale_percent: float = 50.0

    # Renderer pass-through
    allow_cropping: bool = False
    max_crop_percent: float = 15.0
    crop_anchor: CropAnchor = CropAnchor.CENTER

    min_image_size_inches: float = 1.0
    normalize_image_sizes: bool = False
    dpi: int = 300

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.algorithm, CollageAlgorithm):
            object.__setattr__(self, "algorithm", CollageAlgorithm(self.algorithm))
        if not isinstance(self.crop_anchor, CropAnchor):
            object.__setattr__(self, "crop_anchor", CropAnchor(self.crop_anchor))

        if self.paper_size not in PAPER_SIZES:
            raise ValueError(f"Unknown paper_size: {self.paper_size!r}")
        if not 0 <= self.gap_inches <= 0.5:
            raise ValueError(f"gap_inches must be in [0, 0.5]: {self.gap_inches}")
        if not 0 <= self.max_downscale_percent <= 90:
            raise ValueError(f"max_downscale_percent must be in [0, 90]: {self.max_downscale_percent}")
        if not 5 <= self.max_crop_percent <= 30:
            raise ValueError(f"max_crop_percent must be in [5, 30]: {self.max_crop_percent}")
        if not 0.25 <= self.min_image_size_inches <= 3:
            raise ValueError(f"min_image_size_inches must be in [0.25, 3]: {self.min_image_size_inches}")
        if self.dpi not in SUPPORTED_DPI:
            raise ValueError(f"dpi must be one of {SUPPORTED_DPI}: {self.dpi}")

    @property
    def min_scale(self) -> float:
        """Smallest global scale the optimizer may choose."""
        return 1 - self.max_downscale_percent / 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase settings bundle."""
        return {
            "algorithm": self.algorithm.value,
            "paperSize": self.paper_size,
            "gapInches": self.gap_inches,
            "maxDownscalePercent": self.max_downscale_percent,
            "allowCropping": self.allow_cropping,
            "maxCropPercent": self.max_crop_percent,
            "cropAnchor": self.crop_anchor.value,
            "minImageSizeInches": self.min_image_size_inches,
            "normalizeImageSizes": self.normalize_image_sizes,
            "dpi": self.dpi,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CollageSettings:
        """
        Build settings from a camelCase bundle.

        Missing optional keys take their defaults.

        Raises:
            ValidationError: If the bundle fails schema validation
            ValueError: If the paper size is unknown
        """
        validate_settings(data)
        defaults = cls.__dataclass_fields__
        return cls(
            algorithm=CollageAlgorithm(data["algorithm"]),
            paper_size=data["paperSize"],
            gap_inches=data.get("gapInches", defaults["gap_inches"].default),
            max_downscale_percent=data.get(
                "maxDownscalePercent", defaults["max_downscale_percent"].default
            ),
            allow_cropping=data.get("allowCropping", defaults["allow_cropping"].default),
            max_crop_percent=data.get("maxCropPercent", defaults["max_crop_percent"].default),
            crop_anchor=CropAnchor(data.get("cropAnchor", CropAnchor.CENTER.value)),
            min_image_size_inches=data.get(
                "minImageSizeInches", defaults["min_image_size_inches"].default
            ),
            normalize_image_sizes=data.get(
                "normalizeImageSizes", defaults["normalize_image_sizes"].default
            ),
            dpi=data.get("dpi", defaults["dpi"].default),
        )
