"""Border-seeded background segmentation."""
from __future__ import annotations

import logging
from collections import deque
from typing import Dict, List, Tuple

import numpy as np

from .color import MAX_RGB_DISTANCE

logger = logging.getLogger("bead_pattern")


def sample_points(rows: int, cols: int) -> List[Tuple[int, int]]:
    """Return the 8 border sample points as (row, col) pairs.

    Order is the four corners (top-left, top-right, bottom-left,
    bottom-right) followed by the top, bottom, left and right midpoints.
    """
    mid_r = rows // 2
    mid_c = cols // 2
    return [
        (0, 0),
        (0, cols - 1),
        (rows - 1, 0),
        (rows - 1, cols - 1),
        (0, mid_c),
        (rows - 1, mid_c),
        (mid_r, 0),
        (mid_r, cols - 1),
    ]


def sample_background_color(pixels: np.ndarray) -> Tuple[int, int, int]:
    """Most frequent color among the border sample points.

    Ties go to the color that was sampled first.

    Args:
        pixels: Pixel buffer of shape (rows, cols, 3 or 4).

    Returns:
        RGB triple of the background seed color.
    """
    rows, cols = pixels.shape[:2]
    counts: Dict[Tuple[int, int, int], int] = {}
    for r, c in sample_points(rows, cols):
        rgb = tuple(int(v) for v in pixels[r, c, :3])
        counts[rgb] = counts.get(rgb, 0) + 1

    best = None
    best_count = 0
    for rgb, count in counts.items():
        if count > best_count:
            best = rgb
            best_count = count
    return best


def _border_seeds(rows: int, cols: int) -> List[Tuple[int, int]]:
    seeds: List[Tuple[int, int]] = []
    for c in range(cols):
        seeds.append((0, c))
        seeds.append((rows - 1, c))
    for r in range(1, rows - 1):
        seeds.append((r, 0))
        seeds.append((r, cols - 1))
    return seeds


def find_background(pixels: np.ndarray, threshold: float) -> np.ndarray:
    """Flood fill the background region connected to the image border.

    Every border pixel seeds a breadth-first search over 4-connected
    neighbors. A pixel is background when its distance to the seed color,
    as a fraction of the maximum RGB distance, is strictly below
    ``threshold / 100``. Regions of background color enclosed by other
    content are never reached.

    Args:
        pixels: Pixel buffer of shape (rows, cols, 3 or 4).
        threshold: Sensitivity in [0, 100].

    Returns:
        Boolean mask of shape (rows, cols), True for background pixels.
    """
    rows, cols = pixels.shape[:2]
    mask = np.zeros((rows, cols), dtype=bool)
    if rows == 0 or cols == 0:
        return mask

    bound = threshold / 100.0
    seed = np.array(sample_background_color(pixels), dtype=np.float64)

    # Precompute the normalized distance of every pixel to the seed color
    diff = pixels[:, :, :3].astype(np.float64) - seed
    distance = np.sqrt(np.sum(diff * diff, axis=2)) / MAX_RGB_DISTANCE
    similar = distance < bound

    visited = np.zeros((rows, cols), dtype=bool)
    queue = deque(_border_seeds(rows, cols))
    while queue:
        r, c = queue.popleft()
        if visited[r, c]:
            continue
        visited[r, c] = True
        if not similar[r, c]:
            continue
        mask[r, c] = True
        if c > 0:
            queue.append((r, c - 1))
        if c < cols - 1:
            queue.append((r, c + 1))
        if r > 0:
            queue.append((r - 1, c))
        if r < rows - 1:
            queue.append((r + 1, c))

    logger.debug(
        f"Background seed={tuple(int(v) for v in seed)} "
        f"bound={bound:.3f} removed={int(mask.sum())} pixels"
    )
    return mask


def background_mask(
    pixels: np.ndarray, enabled: bool, threshold: float
) -> np.ndarray:
    """Return the transparent-pixel mask, empty when removal is disabled."""
    if not enabled:
        return np.zeros(pixels.shape[:2], dtype=bool)
    return find_background(pixels, threshold)
