"""Color conversion utilities."""
from __future__ import annotations

import math
from typing import Sequence, Tuple

from .config import InputError

# Sentinel stored in grid cells that hold no bead
TRANSPARENT = "transparent"

# Distance between black and white in RGB space
MAX_RGB_DISTANCE = 255 * math.sqrt(3)


def hex_to_rgb(code: str) -> Tuple[int, int, int]:
    """Convert a "#RRGGBB" string to an RGB triple.

    Raises:
        InputError: If the code is not a 6-digit hex color.
    """
    value = code.strip()
    if value.startswith("#"):
        value = value[1:]
    if len(value) != 6:
        raise InputError(f"Invalid hex color: {code!r}")
    try:
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
    except ValueError as exc:
        raise InputError(f"Invalid hex color: {code!r}") from exc


def rgb_to_hex(rgb: Sequence[int]) -> str:
    """Convert an RGB triple to an upper-case "#RRGGBB" string."""
    r, g, b = (int(c) for c in rgb[:3])
    return f"#{r:02X}{g:02X}{b:02X}"


def normalize_hex(code: str) -> str:
    """Return the canonical upper-case form of a hex color."""
    return rgb_to_hex(hex_to_rgb(code))


def color_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two RGB colors."""
    return math.sqrt(
        (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2
    )


def normalized_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Distance between two RGB colors as a fraction of the maximum distance."""
    return color_distance(a, b) / MAX_RGB_DISTANCE
