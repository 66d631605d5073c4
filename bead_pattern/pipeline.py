"""Image-to-bead-grid generation pipeline."""
from __future__ import annotations

import io
import logging
import os
import time
from dataclasses import dataclass
from typing import Dict, Optional, Union

from PIL import Image

from .background import background_mask
from .config import Config, InputError, validate_config, validate_image_dimensions
from .palette import Palette, load_palette
from .pattern import color_counts
from .quantize import ColorGrid, quantize_pixels
from .render import encode_png, render_grid
from .resample import resample_image

logger = logging.getLogger("bead_pattern")

ImageSource = Union[Image.Image, bytes, str, "os.PathLike[str]"]


@dataclass
class GenerationResult:
    """Output of one pipeline run."""

    bitmap: Image.Image
    color_grid: ColorGrid
    color_counts: Dict[str, int]
    palette_name: str
    cell_size: int = 10
    show_grid_lines: bool = True

    @property
    def width(self) -> int:
        return len(self.color_grid[0]) if self.color_grid else 0

    @property
    def height(self) -> int:
        return len(self.color_grid)


def load_image(image: ImageSource) -> Image.Image:
    """Decode an image from a PIL image, encoded bytes, or a file path.

    Raises:
        InputError: If the image cannot be decoded.
    """
    if isinstance(image, Image.Image):
        return image
    try:
        if isinstance(image, (bytes, bytearray)):
            img = Image.open(io.BytesIO(image))
        else:
            img = Image.open(os.fspath(image))
        img.load()
    except (OSError, ValueError) as exc:
        raise InputError(f"Failed to load image: {exc}") from exc
    return img


def generate(
    image: ImageSource,
    config: Optional[Config] = None,
    palette: Optional[Palette] = None,
) -> GenerationResult:
    """Convert an image into a bead grid and its rendered bitmap.

    Stages run in order: resample, background segmentation, quantization,
    rasterization. Any input error fails the whole call; no partial result
    is returned.

    Args:
        image: PIL image, encoded image bytes, or path to an image file.
        config: Generation settings. Uses defaults if None.
        palette: Palette to use instead of resolving ``config.palette_name``.

    Returns:
        GenerationResult with bitmap, color grid and bead counts.

    Raises:
        InputError: If the image, palette or settings are unusable.
        UsageError: If the palette name is unknown.
    """
    config = config or Config()
    validate_config(config)

    t0 = time.perf_counter()
    img = load_image(image)
    validate_image_dimensions(*img.size)
    if palette is None:
        palette = load_palette(config.palette_name)
    if len(palette) == 0:
        raise InputError("Palette is empty")
    t1 = time.perf_counter()

    pixels = resample_image(img, config.max_cells)
    t2 = time.perf_counter()

    mask = background_mask(
        pixels, config.remove_background, config.background_threshold
    )
    t3 = time.perf_counter()

    grid = quantize_pixels(pixels, mask, palette, config.dithering)
    t4 = time.perf_counter()

    bitmap = render_grid(grid, config.cell_size, config.show_grid_lines)
    counts = color_counts(grid)
    t5 = time.perf_counter()

    logger.debug(
        f"Generated {len(grid[0])}x{len(grid)} grid with "
        f"{len(counts)} colors, {sum(counts.values())} beads"
    )

    if config.timing:
        print(
            "Timing (s): "
            f"load={t1 - t0:.4f}, "
            f"resample={t2 - t1:.4f}, "
            f"background={t3 - t2:.4f}, "
            f"quantize={t4 - t3:.4f}, "
            f"render={t5 - t4:.4f}, "
            f"total={t5 - t0:.4f}"
        )

    return GenerationResult(
        bitmap=bitmap,
        color_grid=grid,
        color_counts=counts,
        palette_name=palette.name,
        cell_size=config.cell_size,
        show_grid_lines=config.show_grid_lines,
    )


def generate_png(image_bytes: bytes, config: Optional[Config] = None) -> bytes:
    """Run the pipeline on encoded bytes and return the bitmap as PNG bytes."""
    return encode_png(generate(image_bytes, config).bitmap)
