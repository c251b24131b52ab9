"""
Module: results

Purpose:
    Request/response value objects for the layout algorithms and the
    public layout result handed to the renderer.

Key Classes:
    - AlgorithmInput: Immutable request to one algorithm
    - AlgorithmOutput: Raw placements from one algorithm run
    - CollageLayoutResult: Final public result (adds scale and seed)

Dependencies:
    - core.models.images: ImageDimensions
    - core.models.placements: PlacedImage

Used By:
    - layout.algorithms: Input/output contract
    - layout.optimization: Scale search
    - layout.controller: Result assembly
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .images import ImageDimensions
from .placements import PlacedImage


@dataclass(frozen=True)
class AlgorithmInput:
    """
    Immutable request to a layout algorithm.

    Page and gap values are not validated here: algorithms answer an
    unusable page with an empty output instead of raising.

    Attributes:
        images: Images to lay out (inches)
        page_width: Page width (inches)
        page_height: Page height (inches)
        gap_inches: Minimum spacing between placed images
        min_image_size_inches: Images with a smaller side are excluded
        seed: Drives all randomness deterministically
    """

    images: tuple[ImageDimensions, ...]
    page_width: float
    page_height: float
    gap_inches: float = 0.0
    min_image_size_inches: float = 0.0
    seed: int = 0

    def __post_init__(self) -> None:
        """Normalise the image sequence to a tuple."""
        if not isinstance(self.images, tuple):
            object.__setattr__(self, "images", tuple(self.images))

    @property
    def is_valid(self) -> bool:
        """True when the page can hold anything at all."""
        return self.page_width > 0 and self.page_height > 0 and self.gap_inches >= 0

    @property
    def page_area(self) -> float:
        """Page area in square inches."""
        return self.page_width * self.page_height


@dataclass(frozen=True)
class AlgorithmOutput:
    """
    Result of one algorithm run.

    Attributes:
        placements: One PlacedImage per placed image, pairwise gap-separated
        coverage: Placed area / page area, in [0, 1]
        unused_image_ids: Ids excluded as undersized or not fitting

    Example:
        >>> out = AlgorithmOutput.empty(["a", "b"])
        >>> out.coverage, out.unused_image_ids
        (0.0, ('a', 'b'))
    """

    placements: tuple[PlacedImage, ...] = ()
    coverage: float = 0.0
    unused_image_ids: tuple[str, ...] = ()

    @classmethod
    def empty(cls, unused_ids: Sequence[str] = ()) -> AlgorithmOutput:
        """Output with nothing placed and the given ids unused."""
        return cls(placements=(), coverage=0.0, unused_image_ids=tuple(unused_ids))

    @property
    def placed_count(self) -> int:
        """Number of placed images."""
        return len(self.placements)

    @property
    def placed_ids(self) -> set[str]:
        """Ids of all placed images."""
        return {p.image_id for p in self.placements}


@dataclass(frozen=True)
class CollageLayoutResult:
    """
    Final layout handed to the renderer (immutable).

    Attributes:
        placements: Placed images
        coverage: Placed area / page area
        unused_image_ids: Ids left off the page
        scale_factor: Global scale chosen by the optimizer
        seed: Seed actually used, for reproduction

    Example:
        >>> result = create_collage_layout(pool, settings, seed=7).layout
        >>> result.seed
        7
    """

    placements: tuple[PlacedImage, ...]
    coverage: float
    unused_image_ids: tuple[str, ...]
    scale_factor: float
    seed: int

    @property
    def placed_count(self) -> int:
        """Number of placed images."""
        return len(self.placements)

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {
            "placements": [p.to_dict() for p in self.placements],
            "coverage": self.coverage,
            "unusedImageIds": list(self.unused_image_ids),
            "scaleFactor": self.scale_factor,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CollageLayoutResult:
        """Deserialize from dictionary."""
        return cls(
            placements=tuple(PlacedImage.from_dict(p) for p in data["placements"]),
            coverage=data["coverage"],
            unused_image_ids=tuple(data["unusedImageIds"]),
            scale_factor=data["scaleFactor"],
            seed=data["seed"],
        )
