"""Centralized threshold and magic number configuration.

This module contains the tuning constants used by the layout algorithms
and the scale optimizer. Having these in one place makes tuning easier
and keeps each algorithm's visual character documented next to its peers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ShuffleBiasThresholds:
    """Bias factors for biased_shuffle_by_area (1.0 = sorted, 0.0 = random)."""

    ffd_row: float = 0.7
    masonry: float = 0.6
    guillotine: float = 0.75
    spiral: float = 0.9  # Keeps large images on the outer edges
    treemap: float = 0.65
    default: float = 0.7


@dataclass
class AlgorithmThresholds:
    """Geometric thresholds shared by the layout algorithms."""

    # Masonry
    masonry_min_columns: int = 2

    # Guillotine
    min_fragment_inches: float = 0.1  # Free rects thinner than this are dropped
    merge_tolerance_inches: float = 0.01  # Edge alignment tolerance for merging free rects

    # Spiral
    edge_scale_min: float = 1.0  # Edges never shrink when stretched
    edge_scale_max: float = 1.5  # Max stretch applied along one edge
    min_expand_change: float = 1.001  # Ignore expansions smaller than 0.1%

    # Treemap
    treemap_fill_ratio: float = 0.85  # Leaves room for gaps
    treemap_split_jitter_probability: float = 0.2


@dataclass
class OptimizerThresholds:
    """Thresholds for the scale-factor search."""

    target_coverage: float = 0.92
    coverage_tolerance: float = 0.05  # +/- around target
    min_placed_ratio: float = 0.66  # Two-thirds of the pool must be placed to stop early
    coarse_scales: tuple[float, ...] = (1.0, 0.8, 0.6, 0.5, 0.4, 0.3, 0.2, 0.15, 0.1)
    refine_window: float = 0.15  # Binary search spans best coarse scale +/- this
    refine_max_iterations: int = 8
    refine_min_span: float = 0.02

    # Normalization pre-pass
    normalize_fill_ratio: float = 0.85  # Equal share of 85% of the page per image
    normalize_grow_exponent: float = 0.3
    normalize_max_grow: float = 1.2
    normalize_max_scale: float = 1.5


# Global instances for easy import
SHUFFLE_BIAS = ShuffleBiasThresholds()
ALGORITHM_THRESHOLDS = AlgorithmThresholds()
OPTIMIZER_THRESHOLDS = OptimizerThresholds()
