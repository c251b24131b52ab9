"""
Module: layout.preview

Purpose:
    Debug visualization of a collage layout. Draws each placement as a
    labelled outline on a blank page so algorithm output can be inspected
    without the real renderer.

Key Functions:
    - render_layout_preview(): Layout -> PIL image
    - save_layout_preview(): Render and write a PNG

Dependencies:
    - PIL: Image drawing

Used By:
    - scripts/benchmark_layouts.py: --preview-dir output
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

from collage_toolkit.core.models import CollageLayoutResult

logger = logging.getLogger(__name__)

# Visualization constants
PAGE_COLOR = (255, 255, 255)
FILL_COLOR = (225, 235, 250)
OUTLINE_COLOR = (40, 90, 200)
LABEL_TEXT_COLOR = (20, 20, 20)
BOX_LINE_WIDTH = 2
FONT_SIZE = 12
DEFAULT_PREVIEW_DPI = 50


def render_layout_preview(
    layout: CollageLayoutResult,
    page_size: Tuple[float, float],
    dpi: int = DEFAULT_PREVIEW_DPI,
    show_labels: bool = True,
) -> Image.Image:
    """
    Draw placement outlines for a layout.

    Args:
        layout: Layout to draw
        page_size: (width, height) in inches
        dpi: Preview resolution
        show_labels: Write each image id inside its box

    Returns:
        RGB image of size ``page_size * dpi``

    Example:
        >>> img = render_layout_preview(result.layout, (11, 17), dpi=30)
        >>> img.size
        (330, 510)
    """
    if dpi <= 0:
        raise ValueError(f"dpi must be positive: {dpi}")

    page_w = max(1, round(page_size[0] * dpi))
    page_h = max(1, round(page_size[1] * dpi))
    preview = Image.new("RGB", (page_w, page_h), PAGE_COLOR)
    draw = ImageDraw.Draw(preview)

    try:
        font = ImageFont.truetype("DejaVuSans.ttf", FONT_SIZE)
    except (IOError, OSError):
        font = ImageFont.load_default()

    for placement in layout.placements:
        rect = placement.rect
        box = (
            round(rect.x * dpi),
            round(rect.y * dpi),
            max(round(rect.x * dpi), round(rect.right * dpi) - 1),
            max(round(rect.y * dpi), round(rect.bottom * dpi) - 1),
        )
        draw.rectangle(box, fill=FILL_COLOR, outline=OUTLINE_COLOR, width=BOX_LINE_WIDTH)
        if show_labels:
            draw.text((box[0] + 3, box[1] + 2), placement.image_id, fill=LABEL_TEXT_COLOR, font=font)

    return preview


def save_layout_preview(
    layout: CollageLayoutResult,
    page_size: Tuple[float, float],
    output_path: Path,
    dpi: int = DEFAULT_PREVIEW_DPI,
) -> Path:
    """Render a preview and save it as PNG; returns the written path."""
    preview = render_layout_preview(layout, page_size, dpi=dpi)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    preview.save(output_path, "PNG")

    logger.info(
        f"Saved layout preview to {output_path}: "
        f"{layout.placed_count} placements at {dpi} dpi"
    )
    return output_path
