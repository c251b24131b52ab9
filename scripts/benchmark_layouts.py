"""
Benchmark script for the collage layout algorithms.
Measures layout time, coverage and placement counts per algorithm.
"""

import logging
import statistics
import sys
import time
from pathlib import Path
from typing import List, Optional

# Add src to path so we can import collage_toolkit
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from collage_toolkit.core.models import PoolImage  # noqa: E402
from collage_toolkit.layout import (  # noqa: E402
    CollageAlgorithm,
    CollageSettings,
    SeededRandom,
    create_collage_layout,
    load_pool_images,
    save_layout_preview,
)

# Setup logging
logging.basicConfig(level=logging.WARNING, format='%(message)s')
logger = logging.getLogger("benchmark")

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp", ".tif", ".tiff", ".bmp"}


def synthetic_pool(count: int, seed: int) -> List[PoolImage]:
    """Pool of phone-camera-like pixel sizes in both orientations."""
    rng = SeededRandom(seed)
    pool = []
    for i in range(count):
        long_side = rng.next_int(900, 1800)
        short_side = round(long_side * rng.next_float(0.55, 1.0))
        if rng.next() < 0.5:
            width, height = long_side, short_side
        else:
            width, height = short_side, long_side
        pool.append(PoolImage(id=f"synthetic-{i:03d}", width_pixels=width, height_pixels=height))
    return pool


def benchmark_algorithm(
    pool: List[PoolImage],
    algorithm: CollageAlgorithm,
    paper_size: str,
    iterations: int = 5,
    preview_dir: Optional[Path] = None,
):
    """Benchmark one algorithm over several seeds."""
    print(f"\n--- {algorithm.value} (x{iterations}) ---")

    settings = CollageSettings(algorithm=algorithm, paper_size=paper_size)
    times = []
    coverages = []

    for i in range(iterations):
        start = time.perf_counter()
        result = create_collage_layout(pool, settings, seed=12345 + i)  # Different seed per run
        duration = time.perf_counter() - start

        times.append(duration)
        coverages.append(result.layout.coverage)
        print(
            f"Run {i+1}: {duration:.4f}s "
            f"(coverage {result.layout.coverage:.1%}, "
            f"{result.layout.placed_count}/{len(pool)} placed, "
            f"scale {result.layout.scale_factor:.3f})"
        )

        if preview_dir is not None and i == 0:
            save_layout_preview(
                result.layout,
                (result.page_width, result.page_height),
                preview_dir / f"{algorithm.value}.png",
            )

    print(f"Average: {statistics.mean(times):.4f}s")
    print(f"Min: {min(times):.4f}s")
    print(f"Max: {max(times):.4f}s")
    print(f"Mean coverage: {statistics.mean(coverages):.1%}")

    return statistics.mean(times)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Benchmark collage layout algorithms")
    parser.add_argument("--images", type=Path, help="Folder of images to use as the pool")
    parser.add_argument("--count", type=int, default=40, help="Synthetic pool size when --images is not given")
    parser.add_argument("--paper", type=str, default="11x17", help="Paper size name")
    parser.add_argument("--iterations", type=int, default=5, help="Runs per algorithm")
    parser.add_argument(
        "--algorithm",
        choices=[a.value for a in CollageAlgorithm],
        help="Benchmark a single algorithm (default: all)",
    )
    parser.add_argument("--preview-dir", type=Path, help="Save a preview PNG of the first run per algorithm")

    args = parser.parse_args()

    if args.images and args.images.is_dir():
        paths = sorted(p for p in args.images.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)
        pool = load_pool_images(paths)
        print(f"Pool: {len(pool)} images from {args.images}")
    else:
        pool = synthetic_pool(args.count, seed=7)
        print(f"Pool: {len(pool)} synthetic images")

    algorithms = [CollageAlgorithm(args.algorithm)] if args.algorithm else list(CollageAlgorithm)
    for algorithm in algorithms:
        benchmark_algorithm(pool, algorithm, args.paper, args.iterations, args.preview_dir)
