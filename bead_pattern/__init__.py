"""Bead Pattern - Turn any image into a melting-bead pattern.

This package resamples an image onto a small grid, optionally removes the
background, maps every remaining cell to a bead palette (with optional
Floyd-Steinberg dithering) and renders the result as a magnified bitmap.

Example:
    from bead_pattern import Config, generate

    config = Config(max_cells=29, palette_name="mini", dithering=True)
    result = generate("input.png", config)
    result.bitmap.save("pattern.png")
    print(result.color_counts)

Hand edits go through a GridEditor:

    from bead_pattern import GridEditor

    editor = GridEditor(palette_name="mini")
    editor.load(result)
    editor.enter_edit()
    editor.set_tool("erase")
    editor.apply_tool(0, 0)
    editor.commit()

For debug logging, enable with:

    import logging
    logging.getLogger("bead_pattern").setLevel(logging.DEBUG)
    logging.basicConfig(level=logging.DEBUG)
"""
import logging

# Package logger - disabled by default, enable with logging.getLogger("bead_pattern").setLevel(logging.DEBUG)
logger = logging.getLogger("bead_pattern")
logger.addHandler(logging.NullHandler())
from .cli import main, parse_args, process_image
from .color import TRANSPARENT
from .config import BeadPatternError, Config, InputError, UsageError
from .editor import EDITING, TOOLS, VIEWING, GridEditor
from .palette import Palette, PaletteEntry, colors, get_palette, load_palette, nearest, palette_names
from .pattern import color_counts, render_bead_pattern
from .pipeline import GenerationResult, generate, generate_png
from .render import encode_png, render_grid
from .resample import target_dimensions

__all__ = [
    "Config",
    "BeadPatternError",
    "InputError",
    "UsageError",
    "TRANSPARENT",
    "main",
    "parse_args",
    "process_image",
    # Pipeline
    "GenerationResult",
    "generate",
    "generate_png",
    "target_dimensions",
    "render_grid",
    "encode_png",
    # Palettes
    "Palette",
    "PaletteEntry",
    "colors",
    "get_palette",
    "load_palette",
    "nearest",
    "palette_names",
    # Counts and editing
    "color_counts",
    "render_bead_pattern",
    "GridEditor",
    "TOOLS",
    "VIEWING",
    "EDITING",
]

__version__ = "1.0.0"
