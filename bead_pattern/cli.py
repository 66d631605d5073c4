"""Command-line interface for bead pattern generation."""
from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence

from .config import BeadPatternError, Config, InputError
from .palette import load_palette
from .pattern import render_bead_pattern, sorted_counts, total_beads
from .pipeline import generate
from .render import encode_png

logger = logging.getLogger("bead_pattern")


def process_image(config: Config) -> None:
    """Generate a bead pattern from an image file.

    Args:
        config: Configuration with input/output paths.
    """
    print(f"Processing: {config.input_path}")
    palette = load_palette(config.palette_name)
    result = generate(config.input_path, config, palette=palette)

    with open(config.output_path, "wb") as f:
        f.write(encode_png(result.bitmap))
    print(f"Saved to: {config.output_path} ({result.width}x{result.height} beads)")

    if config.pattern_path:
        sheet = render_bead_pattern(result.color_grid, palette)
        sheet.save(config.pattern_path, format="PNG")
        print(f"Pattern sheet saved to: {config.pattern_path}")

    if config.show_counts:
        counts = result.color_counts
        print(f"Total: {total_beads(counts)} beads using {len(counts)} colors")
        for color, count in sorted_counts(counts):
            print(f"  {color}: {count}")


def _parse_int(args: List[str], i: int, name: str) -> int:
    if i + 1 >= len(args):
        raise InputError(_usage_message())
    try:
        return int(args[i + 1])
    except ValueError:
        raise InputError(f"Invalid {name} value: '{args[i + 1]}'") from None


def parse_args(argv: Sequence[str]) -> Config:
    """Parse command-line arguments.

    Args:
        argv: Command-line arguments (including program name).

    Returns:
        Configured Config instance.

    Raises:
        InputError: If arguments are invalid.
    """
    args = list(argv[1:])
    config = Config()
    debug = False
    positional: List[str] = []

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--max-cells":
            config.max_cells = _parse_int(args, i, "max-cells")
            if config.max_cells <= 0:
                raise InputError("max-cells must be a positive integer")
            i += 2
        elif arg == "--cell-size":
            config.cell_size = _parse_int(args, i, "cell-size")
            if config.cell_size <= 0:
                raise InputError("cell-size must be a positive integer")
            i += 2
        elif arg == "--threshold":
            config.background_threshold = _parse_int(args, i, "threshold")
            if not 0 <= config.background_threshold <= 100:
                raise InputError("threshold must be between 0 and 100")
            i += 2
        elif arg == "--palette":
            if i + 1 >= len(args):
                raise InputError(_usage_message())
            config.palette_name = args[i + 1]
            i += 2
        elif arg == "--pattern":
            if i + 1 >= len(args):
                raise InputError(_usage_message())
            config.pattern_path = args[i + 1]
            i += 2
        elif arg == "--no-grid":
            config.show_grid_lines = False
            i += 1
        elif arg == "--dither":
            config.dithering = True
            i += 1
        elif arg == "--remove-background":
            config.remove_background = True
            i += 1
        elif arg == "--counts":
            config.show_counts = True
            i += 1
        elif arg == "--timing":
            config.timing = True
            i += 1
        elif arg == "--debug":
            debug = True
            i += 1
        elif arg.startswith("--"):
            raise InputError(f"Unknown option: {arg}\n{_usage_message()}")
        else:
            positional.append(arg)
            i += 1

    if len(positional) != 2:
        raise InputError(_usage_message())
    config.input_path, config.output_path = positional

    # Enable debug logging if requested
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s"
        )
        logging.getLogger("bead_pattern").setLevel(logging.DEBUG)

    return config


def _usage_message() -> str:
    """Return usage message string."""
    return (
        "Usage: bead-pattern input.png output.png "
        "[--max-cells N] [--cell-size N] [--palette NAME|PATH] [--no-grid] "
        "[--dither] [--remove-background] [--threshold N] [--pattern PATH] "
        "[--counts] [--timing] [--debug]"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments. Defaults to ``sys.argv``.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    if argv is None:
        argv = sys.argv
    try:
        config = parse_args(argv)
        process_image(config)
        return 0
    except BeadPatternError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Processing error: {exc}", file=sys.stderr)
        return 1
