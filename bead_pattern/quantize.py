"""Palette quantization with optional Floyd-Steinberg dithering."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from .color import TRANSPARENT
from .config import InputError
from .palette import Palette, find_nearest_index

logger = logging.getLogger("bead_pattern")

ColorGrid = List[List[str]]

# (dx, dy, weight) taps for Floyd-Steinberg error diffusion
FLOYD_STEINBERG: Tuple[Tuple[int, int, float], ...] = (
    (1, 0, 7 / 16),
    (-1, 1, 3 / 16),
    (0, 1, 5 / 16),
    (1, 1, 1 / 16),
)


def _find_nearest_chunked(
    data: np.ndarray,
    targets: np.ndarray,
    chunk_size: int = 100_000,
) -> np.ndarray:
    """Find index of nearest target for each data point using chunked processing.

    Uses squared Euclidean distance; ``np.argmin`` returns the first
    minimum, so ties go to the earliest target.

    Args:
        data: Array of shape (N, D) with data points.
        targets: Array of shape (K, D) with target points.
        chunk_size: Chunk size for memory-efficient processing.

    Returns:
        Array of shape (N,) with indices of nearest targets.
    """
    nearest = np.empty(data.shape[0], dtype=np.int64)
    for start in range(0, data.shape[0], chunk_size):
        end = min(start + chunk_size, data.shape[0])
        chunk = data[start:end]
        diff = chunk[:, None, :] - targets[None, :, :]
        dists = np.sum(diff * diff, axis=2)
        nearest[start:end] = np.argmin(dists, axis=1)
    return nearest


def _indices_to_grid(
    indices: np.ndarray, mask: np.ndarray, palette: Palette
) -> ColorGrid:
    codes = palette.colors
    rows, cols = mask.shape
    grid: ColorGrid = []
    for y in range(rows):
        row: List[str] = []
        for x in range(cols):
            row.append(TRANSPARENT if mask[y, x] else codes[indices[y, x]])
        grid.append(row)
    return grid


def quantize_pixels(
    pixels: np.ndarray,
    mask: Optional[np.ndarray],
    palette: Palette,
    dithering: bool = False,
) -> ColorGrid:
    """Map every non-background pixel to a palette color.

    Args:
        pixels: Pixel buffer of shape (rows, cols, 3 or 4).
        mask: Boolean background mask of shape (rows, cols), or None.
        palette: Palette to draw colors from.
        dithering: Whether to apply Floyd-Steinberg error diffusion.

    Returns:
        Color grid of "#RRGGBB" codes and TRANSPARENT cells.

    Raises:
        InputError: If the palette is empty.
    """
    if len(palette) == 0:
        raise InputError("Palette is empty")

    rows, cols = pixels.shape[:2]
    if mask is None:
        mask = np.zeros((rows, cols), dtype=bool)

    if dithering:
        indices = dither_indices(pixels, mask, palette.rgb)
    else:
        indices = map_indices(pixels, mask, palette.rgb)

    grid = _indices_to_grid(indices, mask, palette)
    used = {palette.colors[i] for i in np.unique(indices[~mask])}
    logger.debug(
        f"Quantized {cols}x{rows} to {len(used)} colors "
        f"from palette {palette.name} (dithering={dithering})"
    )
    return grid


def map_indices(
    pixels: np.ndarray, mask: np.ndarray, palette_rgb: np.ndarray
) -> np.ndarray:
    """Direct per-pixel nearest-color lookup.

    Returns:
        Array of shape (rows, cols) with palette indices. Background
        pixels hold -1.
    """
    rows, cols = pixels.shape[:2]
    indices = np.full((rows, cols), -1, dtype=np.int64)
    rgb = pixels[:, :, :3].astype(np.float64)
    keep = ~mask
    if keep.any():
        indices[keep] = _find_nearest_chunked(rgb[keep], palette_rgb)
    return indices


def diffuse_error(
    work: np.ndarray, y: int, x: int, error: np.ndarray
) -> np.ndarray:
    """Spread ``error`` from (y, x) to unvisited neighbors.

    Targets outside the buffer are skipped, so their share is dropped.

    Returns:
        The total error actually added to the buffer, per channel.
    """
    rows, cols = work.shape[:2]
    spread = np.zeros(3, dtype=np.float64)
    for dx, dy, weight in FLOYD_STEINBERG:
        nx = x + dx
        ny = y + dy
        if 0 <= nx < cols and 0 <= ny < rows:
            work[ny, nx] += error * weight
            spread += error * weight
    return spread


def dither_indices(
    pixels: np.ndarray, mask: np.ndarray, palette_rgb: np.ndarray
) -> np.ndarray:
    """Floyd-Steinberg quantization in row-major order.

    Each pixel is read from a floating-point working buffer, clamped to
    [0, 255], matched against the palette, and its residual is diffused
    forward. Background pixels take no color and diffuse nothing.

    Returns:
        Array of shape (rows, cols) with palette indices. Background
        pixels hold -1.
    """
    rows, cols = pixels.shape[:2]
    work = pixels[:, :, :3].astype(np.float64)
    indices = np.full((rows, cols), -1, dtype=np.int64)

    for y in range(rows):
        for x in range(cols):
            if mask[y, x]:
                continue
            current = np.clip(work[y, x], 0.0, 255.0)
            idx = find_nearest_index(current, palette_rgb)
            indices[y, x] = idx
            diffuse_error(work, y, x, current - palette_rgb[idx])
    return indices
