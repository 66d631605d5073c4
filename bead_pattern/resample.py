"""Aspect-preserving downscaling to the bead grid resolution."""
from __future__ import annotations

import logging
import math
from typing import Tuple

import numpy as np
from PIL import Image

from .config import InputError, validate_image_dimensions

logger = logging.getLogger("bead_pattern")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def target_dimensions(width: int, height: int, max_cells: int) -> Tuple[int, int]:
    """Compute grid dimensions that fit within ``max_cells`` on the long axis.

    Images already within bounds keep their size; no upscaling happens.
    The short axis is scaled by the same ratio, rounded half-up and
    floored at 1.

    Args:
        width: Native image width.
        height: Native image height.
        max_cells: Maximum number of cells on the longer axis.

    Returns:
        Tuple of (width, height) in cells.

    Raises:
        InputError: If any argument is not positive.
    """
    if width <= 0 or height <= 0:
        raise InputError("Image dimensions cannot be zero")
    if max_cells <= 0:
        raise InputError("max_cells must be greater than 0")

    if width > height:
        if width > max_cells:
            height = max(_round_half_up(height * (max_cells / width)), 1)
            width = max_cells
    else:
        if height > max_cells:
            width = max(_round_half_up(width * (max_cells / height)), 1)
            height = max_cells
    return width, height


def resample_image(img: Image.Image, max_cells: int) -> np.ndarray:
    """Resample an image to the bead grid resolution.

    Args:
        img: Input image of any mode.
        max_cells: Maximum number of cells on the longer axis.

    Returns:
        Pixel buffer of shape (rows, cols, 4) with uint8 RGBA samples.
    """
    width, height = img.size
    validate_image_dimensions(width, height)
    target_w, target_h = target_dimensions(width, height, max_cells)

    rgba = img.convert("RGBA")
    if (target_w, target_h) != (width, height):
        rgba = rgba.resize((target_w, target_h), resample=Image.BILINEAR)
    logger.debug(f"Resampled {width}x{height} -> {target_w}x{target_h}")

    return np.array(rgba, dtype=np.uint8)
