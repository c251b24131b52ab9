"""
Collage layout engine.

Exports the public entry points:
- create_collage_layout(): Pool + settings -> placed layout
- optimize_scale_factor(): Scale search for one algorithm
- ALGORITHMS / get_algorithm(): The five layout algorithms by name
- SeededRandom: Reproducible randomness
- calculate_crop(), load_pool_images(), render_layout_preview():
  Helpers for the renderer side
"""

from __future__ import annotations

from .algorithms import (
    ALGORITHMS,
    UnknownAlgorithmError,
    ffd_row_algorithm,
    get_algorithm,
    guillotine_algorithm,
    masonry_algorithm,
    spiral_algorithm,
    treemap_algorithm,
)
from .config import CollageAlgorithm, CollageSettings, CropAnchor
from .controller import (
    CollageError,
    CollageProgress,
    CollageResult,
    create_collage_layout,
)
from .cropping import calculate_crop
from .helpers import LayoutInvariantError
from .optimization import OptimizationResult, optimize_scale_factor
from .pool import load_pool_images
from .preview import render_layout_preview, save_layout_preview
from .randomization import SeededRandom, biased_shuffle_by_area, generate_seed

__all__ = [
    # Orchestration
    "create_collage_layout",
    "CollageResult",
    "CollageProgress",
    "CollageError",
    # Settings
    "CollageSettings",
    "CollageAlgorithm",
    "CropAnchor",
    # Algorithms
    "ALGORITHMS",
    "get_algorithm",
    "UnknownAlgorithmError",
    "LayoutInvariantError",
    "ffd_row_algorithm",
    "masonry_algorithm",
    "guillotine_algorithm",
    "spiral_algorithm",
    "treemap_algorithm",
    # Optimization
    "optimize_scale_factor",
    "OptimizationResult",
    # Randomness
    "SeededRandom",
    "biased_shuffle_by_area",
    "generate_seed",
    # Renderer helpers
    "calculate_crop",
    "load_pool_images",
    "render_layout_preview",
    "save_layout_preview",
]
