"""
Module: layout.pool

Purpose:
    Build a pool of PoolImage descriptors from image files on disk. Only
    headers are read (pixel size and EXIF orientation); pixel data is
    never decoded here.

Key Functions:
    - load_pool_images(): Paths -> PoolImage list, skipping unreadable files
    - read_pixel_size(): Display size of one image file

Dependencies:
    - PIL: Image header parsing

Used By:
    - scripts/benchmark_layouts.py
    - Callers assembling a pool for create_collage_layout()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Set, Tuple, Union

from PIL import Image, UnidentifiedImageError

from collage_toolkit.core.models import PoolImage

logger = logging.getLogger(__name__)

# EXIF orientation tag and the values that rotate by 90 degrees
EXIF_ORIENTATION_TAG = 0x0112
_TRANSPOSED_ORIENTATIONS = {5, 6, 7, 8}


def read_pixel_size(path: Union[str, Path]) -> Tuple[int, int]:
    """
    Return the (width, height) an image displays at.

    Images whose EXIF orientation rotates them by 90 degrees report
    swapped sides, matching what a viewer shows.

    Raises:
        UnidentifiedImageError: If Pillow cannot identify the file
        OSError: If the file cannot be read
    """
    with Image.open(path) as img:
        width, height = img.size
        orientation = img.getexif().get(EXIF_ORIENTATION_TAG, 1)
    if orientation in _TRANSPOSED_ORIENTATIONS:
        return height, width
    return width, height


def load_pool_images(paths: Iterable[Union[str, Path]]) -> List[PoolImage]:
    """
    Create pool descriptors for image files.

    Ids are file names, suffixed ``-2``, ``-3``... when names repeat.
    Files Pillow cannot read are logged and skipped.

    Args:
        paths: Image file paths

    Returns:
        PoolImage list in input order (unreadable files omitted)

    Example:
        >>> pool = load_pool_images(sorted(Path("photos").glob("*.jpg")))
        >>> pool[0].id
        'beach.jpg'
    """
    pool: List[PoolImage] = []
    seen: Set[str] = set()

    for raw_path in paths:
        path = Path(raw_path)
        try:
            width, height = read_pixel_size(path)
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Skipping unreadable image {path}: {e}")
            continue
        if width <= 0 or height <= 0:
            logger.warning(f"Skipping image with empty size {path}")
            continue

        image_id = path.name
        suffix = 2
        while image_id in seen:
            image_id = f"{path.name}-{suffix}"
            suffix += 1
        seen.add(image_id)

        pool.append(PoolImage(id=image_id, width_pixels=width, height_pixels=height, path=path))

    logger.info(f"Loaded {len(pool)} pool images")
    return pool
