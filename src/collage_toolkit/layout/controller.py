"""
Module: layout.controller

Purpose:
    Orchestrate one collage layout request.
    Resolve page -> Convert pool -> Optimize scale -> Package result

Key Functions:
    - create_collage_layout(): Main entry point

Key Classes:
    - CollageProgress: Progress event passed to the caller's callback
    - CollageResult: Layout plus everything the renderer needs
    - CollageError: Request the caller must fix (duplicate ids)

Dependencies:
    - layout.optimization: optimize_scale_factor()
    - layout.randomization: generate_seed()
    - common.paper_sizes: Page size lookup

Used By:
    - scripts/benchmark_layouts.py
    - External renderer integration
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Set

from collage_toolkit.common.paper_sizes import get_paper_size
from collage_toolkit.core.models import CollageLayoutResult, PoolImage, images_to_dimensions

from .config import CollageSettings
from .optimization import optimize_scale_factor
from .randomization import generate_seed

logger = logging.getLogger(__name__)

# Pool pixel sizes are read as if scanned at this resolution
SOURCE_DPI = 300


class CollageError(Exception):
    """Error in a collage request that cannot become a degenerate result."""
    pass


@dataclass(frozen=True)
class CollageProgress:
    """
    Coarse progress event.

    Attributes:
        step: Steps done so far
        total: Total steps (pool size + 1)
        message: Human-readable status
    """
    step: int
    total: int
    message: str


ProgressCallback = Callable[[CollageProgress], None]


@dataclass(frozen=True)
class CollageResult:
    """
    Complete layout request result (immutable).

    Attributes:
        layout: Placements, coverage, unused ids, chosen scale and seed
        page_width: Page width in inches
        page_height: Page height in inches
        settings: Settings the layout was made with (crop settings and dpi
            are for the renderer)
        elapsed_seconds: Wall time spent on the layout

    Example:
        >>> result = create_collage_layout(pool, CollageSettings(), seed=7)
        >>> print(f"{result.layout.placed_count} placed, {result.layout.coverage:.0%} coverage")
    """
    layout: CollageLayoutResult
    page_width: float
    page_height: float
    settings: CollageSettings
    elapsed_seconds: float = 0.0

    @property
    def canvas_size_pixels(self) -> tuple[int, int]:
        """Output canvas size at the settings' dpi."""
        return (
            round(self.page_width * self.settings.dpi),
            round(self.page_height * self.settings.dpi),
        )


def create_collage_layout(
    pool: Sequence[PoolImage],
    settings: CollageSettings,
    seed: Optional[int] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> CollageResult:
    """
    Lay out a pool of images on one page.

    Pipeline:
    1. Resolve the page size from ``settings.paper_size``
    2. Convert pool pixel sizes to inches at 300 dpi
    3. Search for the best global scale with the chosen algorithm
    4. Mark each pool image ``selected`` if it was placed

    Args:
        pool: Pool images; ids must be unique. ``selected`` is updated in place.
        settings: Layout settings
        seed: Seed for reproducible layouts; generated when None
        on_progress: Called before and after optimization

    Returns:
        CollageResult. An empty pool or a pool that cannot be placed gives
        an empty layout, not an error.

    Raises:
        CollageError: If pool ids repeat
    """
    start_time = time.perf_counter()

    duplicates = sorted(image_id for image_id, count in Counter(img.id for img in pool).items() if count > 1)
    if duplicates:
        raise CollageError(f"Duplicate pool image ids: {duplicates}")

    page_width, page_height = get_paper_size(settings.paper_size)

    if seed is None:
        seed = generate_seed()

    logger.info(
        f"Starting {settings.algorithm.value} layout of {len(pool)} images "
        f"on {settings.paper_size} (seed={seed})"
    )

    dimensions = images_to_dimensions(pool, SOURCE_DPI)
    total_steps = len(pool) + 1
    _report(on_progress, 0, total_steps, "Calculating optimal layout...")

    optimized = optimize_scale_factor(
        dimensions,
        page_width,
        page_height,
        settings.algorithm,
        settings.gap_inches,
        settings.min_image_size_inches,
        seed,
        settings.max_downscale_percent,
        settings.normalize_image_sizes,
    )
    output = optimized.output

    layout = CollageLayoutResult(
        placements=tuple(output.placements),
        coverage=output.coverage,
        unused_image_ids=tuple(output.unused_image_ids),
        scale_factor=optimized.best_scale,
        seed=seed,
    )

    _mark_selected(pool, output.placed_ids)
    _report(on_progress, total_steps, total_steps, "Layout complete")

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Layout complete: scale={optimized.best_scale:.3f}, "
        f"coverage={layout.coverage:.1%}, placed={layout.placed_count}, "
        f"unused={len(layout.unused_image_ids)}, "
        f"{optimized.iterations} runs in {elapsed:.2f}s"
    )

    return CollageResult(
        layout=layout,
        page_width=page_width,
        page_height=page_height,
        settings=settings,
        elapsed_seconds=elapsed,
    )


def _report(callback: Optional[ProgressCallback], step: int, total: int, message: str) -> None:
    if callback is not None:
        callback(CollageProgress(step=step, total=total, message=message))


def _mark_selected(pool: Sequence[PoolImage], placed_ids: Set[str]) -> None:
    """Set each pool image's ``selected`` flag from the placed ids."""
    pool_ids = {img.id for img in pool}
    unknown = placed_ids - pool_ids
    if unknown:
        logger.warning(f"Placements reference ids not in the pool: {sorted(unknown)}")
    for img in pool:
        img.selected = img.id in placed_ids
