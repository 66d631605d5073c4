"""Configuration and validation for bead pattern generation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class BeadPatternError(Exception):
    """Base exception for bead pattern errors."""

    pass


class InputError(BeadPatternError):
    """Raised when an image, palette or setting cannot be used as input."""

    pass


class UsageError(BeadPatternError):
    """Raised when an operation is invoked in the wrong state or with an unknown name."""

    pass


@dataclass
class Config:
    """Configuration for the bead pattern pipeline."""

    max_cells: int = 29  # Max beads on the long axis
    cell_size: int = 10  # Display pixels per bead
    palette_name: str = "standard"
    show_grid_lines: bool = True
    dithering: bool = False
    remove_background: bool = False
    background_threshold: int = 30  # 0-100, fraction of max RGB distance

    input_path: str = ""
    output_path: str = ""
    pattern_path: Optional[str] = None
    show_counts: bool = False
    timing: bool = False


def validate_image_dimensions(width: int, height: int) -> None:
    """Validate image dimensions are within acceptable bounds.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Raises:
        InputError: If dimensions are invalid.
    """
    if width == 0 or height == 0:
        raise InputError("Image dimensions cannot be zero")
    if width > 10000 or height > 10000:
        raise InputError("Image dimensions too large (max 10000x10000)")


def validate_config(config: Config) -> None:
    """Validate generation settings.

    Raises:
        InputError: If a setting is out of range.
    """
    if config.max_cells <= 0:
        raise InputError("max_cells must be greater than 0")
    if config.cell_size <= 0:
        raise InputError("cell_size must be greater than 0")
    if not 0 <= config.background_threshold <= 100:
        raise InputError("background_threshold must be between 0 and 100")
