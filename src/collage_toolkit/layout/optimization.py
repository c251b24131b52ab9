"""
Module: layout.optimization

Purpose:
    Pick one global scale factor for a pool of images so the chosen
    algorithm reaches ~92% page coverage while placing as many images as
    possible.

Key Functions:
    - optimize_scale_factor(): Coarse scan + binary-search refinement
    - normalize_images(): Optional equal-share size pre-pass
    - scale_images(): Uniform scale, dropping images below minimum size

Key Classes:
    - OptimizationResult: Chosen scale, output and iteration count

Scoring:
    score = coverage * (0.5 + 0.5 * placed / total)

    Higher score wins; equal scores prefer more placed images. ``total``
    is always the caller's image count, so scales that drop images pay
    for it.

Dependencies:
    - layout.algorithms: Dispatch table
    - common.thresholds: Coverage target, scale candidates, window sizes

Used By:
    - layout.controller: create_collage_layout()
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from collage_toolkit.common.thresholds import OPTIMIZER_THRESHOLDS
from collage_toolkit.core.models import AlgorithmInput, AlgorithmOutput, ImageDimensions

from .algorithms import LayoutAlgorithm, get_algorithm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizationResult:
    """
    Outcome of a scale search.

    Attributes:
        best_scale: Global scale applied to every image
        output: Algorithm output at that scale; images dropped by scaling
            are included in ``unused_image_ids``
        iterations: Number of algorithm runs (diagnostic only)
    """
    best_scale: float
    output: AlgorithmOutput
    iterations: int


@dataclass
class _Candidate:
    """Best run seen so far."""
    scale: float
    output: AlgorithmOutput
    score: float


def optimize_scale_factor(
    images: Sequence[ImageDimensions],
    page_width: float,
    page_height: float,
    algorithm: str,
    gap_inches: float,
    min_image_size_inches: float,
    seed: int,
    max_downscale_percent: float,
    normalize_image_sizes: bool = False,
) -> OptimizationResult:
    """
    Search for the scale factor that best balances coverage and placements.

    Phase 1 tries each coarse scale (largest first) that respects
    ``max_downscale_percent`` and stops early once coverage is within
    tolerance of the target with at least two thirds of the images
    placed. Phase 2 binary-searches within +/-0.15 of the best coarse
    scale.

    Args:
        images: Images at native size (inches)
        page_width: Page width in inches
        page_height: Page height in inches
        algorithm: Algorithm name (or CollageAlgorithm)
        gap_inches: Spacing between images
        min_image_size_inches: Images smaller than this after scaling are dropped
        seed: Seed passed to every algorithm run
        max_downscale_percent: 0-90; scales below ``1 - pct/100`` are not tried
        normalize_image_sizes: Run the equal-share pre-pass first

    Returns:
        OptimizationResult. When no scale leaves any image placeable the
        output is empty with every image unused and the scale is 1.0.

    Raises:
        UnknownAlgorithmError: If ``algorithm`` is not registered
    """
    thresholds = OPTIMIZER_THRESHOLDS
    algorithm_fn = get_algorithm(algorithm)
    all_ids = [img.id for img in images]
    total = len(images)
    if total == 0:
        return OptimizationResult(best_scale=1.0, output=AlgorithmOutput.empty(), iterations=0)

    min_scale = 1 - max_downscale_percent / 100
    if normalize_image_sizes:
        working = normalize_images(
            images, page_width, page_height, min_image_size_inches, max_downscale_percent
        )
    else:
        working = list(images)

    def run(scale: float) -> Optional[AlgorithmOutput]:
        scaled = scale_images(working, scale, min_image_size_inches)
        if not scaled:
            return None
        output = algorithm_fn(
            AlgorithmInput(
                images=tuple(scaled),
                page_width=page_width,
                page_height=page_height,
                gap_inches=gap_inches,
                min_image_size_inches=min_image_size_inches,
                seed=seed,
            )
        )
        return _with_dropped_ids(output, all_ids)

    # ─── Phase 1: coarse scan ───
    best: Optional[_Candidate] = None
    iterations = 0

    for scale in (s for s in thresholds.coarse_scales if s >= min_scale):
        output = run(scale)
        if output is None:
            logger.debug(f"scale {scale:.3f}: no images above minimum size, skipped")
            continue
        iterations += 1

        score = score_output(output, total)
        logger.debug(
            f"scale {scale:.3f}: coverage={output.coverage:.3f} "
            f"placed={output.placed_count}/{total} score={score:.4f}"
        )
        if best is None or _is_better(score, output, best):
            best = _Candidate(scale, output, score)

        placed_ratio = output.placed_count / total
        if (
            output.coverage >= thresholds.target_coverage - thresholds.coverage_tolerance
            and placed_ratio >= thresholds.min_placed_ratio
        ):
            logger.debug(f"scale {scale:.3f} within target, stopping coarse scan")
            return OptimizationResult(best_scale=scale, output=output, iterations=iterations)

    if best is None:
        logger.debug("no scale produced placeable images")
        return OptimizationResult(
            best_scale=1.0,
            output=AlgorithmOutput.empty(all_ids),
            iterations=iterations,
        )

    # ─── Phase 2: binary-search refinement ───
    low = max(min_scale, best.scale - thresholds.refine_window)
    high = min(1.0, best.scale + thresholds.refine_window)
    refined, refine_iterations = _binary_search(run, low, high, best, total)

    return OptimizationResult(
        best_scale=refined.scale,
        output=refined.output,
        iterations=iterations + refine_iterations,
    )


def _binary_search(
    run: Callable[[float], Optional[AlgorithmOutput]],
    low: float,
    high: float,
    best: _Candidate,
    total: int,
) -> Tuple[_Candidate, int]:
    """Narrow [low, high] toward target coverage; returns (best candidate, runs)."""
    thresholds = OPTIMIZER_THRESHOLDS
    iterations = 0

    while iterations < thresholds.refine_max_iterations and high - low > thresholds.refine_min_span:
        mid = (low + high) / 2
        output = run(mid)
        iterations += 1

        if output is None:
            high = mid
            continue

        score = score_output(output, total)
        if _is_better(score, output, best):
            best = _Candidate(mid, output, score)

        if output.coverage < thresholds.target_coverage:
            high = mid
        elif output.coverage > thresholds.target_coverage + thresholds.coverage_tolerance:
            low = mid
        elif output.placed_count >= total * thresholds.min_placed_ratio:
            logger.debug(f"refined scale {mid:.3f} within target after {iterations} steps")
            return _Candidate(mid, output, score), iterations
        else:
            high = mid

        logger.debug(f"refine window [{low:.3f}, {high:.3f}] coverage={output.coverage:.3f}")

    return best, iterations


def score_output(output: AlgorithmOutput, total: int) -> float:
    """Coverage weighted by the fraction of ``total`` images placed."""
    if total <= 0:
        return 0.0
    return output.coverage * (0.5 + 0.5 * output.placed_count / total)


def _is_better(score: float, output: AlgorithmOutput, best: _Candidate) -> bool:
    return (score, output.placed_count) > (best.score, best.output.placed_count)


def _with_dropped_ids(output: AlgorithmOutput, all_ids: Sequence[str]) -> AlgorithmOutput:
    """Append ids the scaling step dropped so every input id is accounted for."""
    accounted = output.placed_ids | set(output.unused_image_ids)
    dropped = [image_id for image_id in all_ids if image_id not in accounted]
    if not dropped:
        return output
    return AlgorithmOutput(
        placements=output.placements,
        coverage=output.coverage,
        unused_image_ids=tuple(output.unused_image_ids) + tuple(dropped),
    )


def scale_images(
    images: Sequence[ImageDimensions],
    scale: float,
    min_size: float,
) -> List[ImageDimensions]:
    """Scale every image, dropping those with either side below ``min_size``."""
    scaled = [img.scaled(scale) for img in images]
    return [img for img in scaled if img.width >= min_size and img.height >= min_size]


def normalize_images(
    images: Sequence[ImageDimensions],
    page_width: float,
    page_height: float,
    min_image_size_inches: float,
    max_downscale_percent: float,
) -> List[ImageDimensions]:
    """
    Pull image sizes toward an equal share of the page.

    Each image targets ``0.85 * page_area / n``. Larger images shrink by
    ``1/sqrt(ratio)``; smaller ones grow by ``1/ratio**0.3`` (at most
    1.2x). The factor is clamped to ``[min_scale, 1.5]`` and an image
    that ends up below the minimum size is scaled back up so its shorter
    side equals it.
    """
    if not images:
        return []
    if page_width <= 0 or page_height <= 0:
        return list(images)

    thresholds = OPTIMIZER_THRESHOLDS
    target_area = page_width * page_height * thresholds.normalize_fill_ratio / len(images)
    min_scale = 1 - max_downscale_percent / 100

    normalized: List[ImageDimensions] = []
    for img in images:
        area_ratio = img.area / target_area
        if area_ratio > 1:
            factor = 1 / math.sqrt(area_ratio)
        else:
            factor = min(thresholds.normalize_max_grow, 1 / area_ratio ** thresholds.normalize_grow_exponent)
        factor = max(min_scale, min(thresholds.normalize_max_scale, factor))

        resized = img.scaled(factor)
        shorter = min(resized.width, resized.height)
        if shorter < min_image_size_inches:
            resized = resized.scaled(min_image_size_inches / shorter)
        normalized.append(resized)

    return normalized
