"""Rasterize a color grid into a magnified RGBA bitmap."""
from __future__ import annotations

import io
from typing import Sequence, Tuple

from PIL import Image, ImageDraw

from .color import TRANSPARENT, hex_to_rgb
from .config import InputError

# 20% black stroke around each bead
GRID_LINE_COLOR: Tuple[int, int, int, int] = (0, 0, 0, 51)


def _blend(
    base: Tuple[int, int, int], overlay: Tuple[int, int, int, int]
) -> Tuple[int, int, int, int]:
    # Drawing on an RGBA image replaces pixels, so composite the stroke here
    alpha = overlay[3] / 255.0
    mixed = tuple(
        int(round(b * (1.0 - alpha) + o * alpha)) for b, o in zip(base, overlay[:3])
    )
    return mixed + (255,)


def render_grid(
    grid: Sequence[Sequence[str]],
    cell_size: int,
    show_grid_lines: bool = True,
    line_color: Tuple[int, int, int, int] = GRID_LINE_COLOR,
) -> Image.Image:
    """Draw each bead as a filled square.

    Transparent cells are left fully transparent, with no fill and no
    border. Every other cell is opaque. Rendering is pure: the same grid
    and parameters always produce the same bitmap.

    Args:
        grid: Color grid of "#RRGGBB" codes and TRANSPARENT cells.
        cell_size: Pixel size of each bead.
        show_grid_lines: Whether to stroke a thin border around each bead.
        line_color: RGBA color of the border stroke.

    Returns:
        RGBA image of size (cols * cell_size, rows * cell_size).

    Raises:
        InputError: If cell_size is not positive.
    """
    if cell_size <= 0:
        raise InputError("cell_size must be greater than 0")

    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    bitmap = Image.new("RGBA", (cols * cell_size, rows * cell_size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(bitmap, "RGBA")

    for y, row in enumerate(grid):
        for x, color in enumerate(row):
            if color == TRANSPARENT:
                continue
            x0 = x * cell_size
            y0 = y * cell_size
            x1 = x0 + cell_size - 1
            y1 = y0 + cell_size - 1
            rgb = hex_to_rgb(color)
            draw.rectangle([x0, y0, x1, y1], fill=rgb + (255,))
            if show_grid_lines:
                draw.rectangle(
                    [x0, y0, x1, y1], outline=_blend(rgb, line_color), width=1
                )

    return bitmap


def encode_png(bitmap: Image.Image) -> bytes:
    """Encode a bitmap as PNG bytes, keeping its alpha channel."""
    out_buf = io.BytesIO()
    bitmap.save(out_buf, format="PNG")
    return out_buf.getvalue()
