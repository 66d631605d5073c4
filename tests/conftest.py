"""Pytest fixtures for bead_pattern tests."""
from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from bead_pattern.palette import Palette, PaletteEntry


@pytest.fixture
def rgb_palette() -> Palette:
    """A tiny palette of pure red, green, blue, black and white."""
    return Palette("rgb", (
        PaletteEntry("#FF0000", "Red"),
        PaletteEntry("#00FF00", "Green"),
        PaletteEntry("#0000FF", "Blue"),
        PaletteEntry("#000000", "Black"),
        PaletteEntry("#FFFFFF", "White"),
    ))


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a 16x16 image of 4x4 blocks in four primary colors."""
    arr = np.zeros((16, 16, 4), dtype=np.uint8)
    colors = [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 0, 255),  # Yellow
    ]
    for y in range(4):
        for x in range(4):
            arr[y * 4:(y + 1) * 4, x * 4:(x + 1) * 4] = colors[(x + y) % len(colors)]
    return Image.fromarray(arr, "RGBA")


@pytest.fixture
def sample_image_bytes(sample_image: Image.Image) -> bytes:
    """Return sample image as PNG bytes."""
    buf = io.BytesIO()
    sample_image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def framed_image() -> Image.Image:
    """A 9x9 image: white border, black ring, white interior.

    The outer white region touches the border; the 3x3 white center is
    fully enclosed by the black ring.
    """
    arr = np.full((9, 9, 4), 255, dtype=np.uint8)
    arr[2:7, 2:7, :3] = 0
    arr[3:6, 3:6, :3] = 255
    return Image.fromarray(arr, "RGBA")


@pytest.fixture
def gradient_image() -> Image.Image:
    """Create a 16x8 image with a horizontal gray gradient."""
    arr = np.zeros((8, 16, 4), dtype=np.uint8)
    for x in range(16):
        gray = int(x * 255 / 15)
        arr[:, x] = (gray, gray, gray, 255)
    return Image.fromarray(arr, "RGBA")
