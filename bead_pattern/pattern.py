"""Bead counts and printable pattern sheets."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from .color import TRANSPARENT, hex_to_rgb
from .palette import Palette, PaletteEntry


@dataclass
class PatternLegendItem:
    """Legend item for a bead pattern."""

    entry: PaletteEntry
    count: int
    symbol: str


_SYMBOLS = list(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789@#$%&*+=?"
)


def color_counts(grid: Sequence[Sequence[str]]) -> Dict[str, int]:
    """Count beads of each color, excluding transparent cells.

    Always computed from scratch over the whole grid. Keys appear in the
    order their color is first met in row-major order.
    """
    counts: Dict[str, int] = {}
    for row in grid:
        for color in row:
            if color != TRANSPARENT:
                counts[color] = counts.get(color, 0) + 1
    return counts


def sorted_counts(counts: Dict[str, int]) -> List[Tuple[str, int]]:
    """Colors ordered by count descending, then by code."""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def total_beads(counts: Dict[str, int]) -> int:
    return sum(counts.values())


def _text_size(draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont) -> Tuple[int, int]:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    return right - left, bottom - top


def _assign_symbols(codes: List[str]) -> Dict[str, str]:
    symbols: Dict[str, str] = {}
    for idx, code in enumerate(codes):
        symbols[code] = _SYMBOLS[idx] if idx < len(_SYMBOLS) else "?"
    return symbols


def _contrast_color(rgb: Tuple[int, int, int]) -> Tuple[int, int, int]:
    r, g, b = rgb
    luminance = 0.2126 * r + 0.7152 * g + 0.0722 * b
    return (0, 0, 0) if luminance > 160 else (255, 255, 255)


def build_legend(
    grid: Sequence[Sequence[str]], palette: Optional[Palette] = None
) -> List[PatternLegendItem]:
    """Legend items for every color in the grid, most used first."""
    ordered = sorted_counts(color_counts(grid))
    symbol_map = _assign_symbols([code for code, _ in ordered])

    items: List[PatternLegendItem] = []
    for code, count in ordered:
        entry = PaletteEntry(code, code)
        if palette is not None and code in palette:
            found = palette.entry_for(code)
            entry = PaletteEntry(code, found.name or code)
        items.append(PatternLegendItem(entry=entry, count=count, symbol=symbol_map[code]))
    return items


def render_bead_pattern(
    grid: Sequence[Sequence[str]],
    palette: Optional[Palette] = None,
    title: Optional[str] = None,
    cell_size: int = 18,
    major_every: int = 5,
    include_symbols: bool = True,
) -> Image.Image:
    """Render a printable bead pattern sheet from a color grid.

    Args:
        grid: Color grid of "#RRGGBB" codes and TRANSPARENT cells.
        palette: Palette used to name legend entries.
        title: Optional title for the pattern.
        cell_size: Pixel size of each bead cell in the output.
        major_every: Major gridline interval.
        include_symbols: Whether to overlay symbols on each cell.

    Returns:
        PIL Image with the rendered pattern.
    """
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    legend = build_legend(grid, palette)
    symbols = {item.entry.code: item.symbol for item in legend}

    font = ImageFont.load_default()
    measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))
    _, text_h = _text_size(measure, "Ag", font)
    label_w, _ = _text_size(measure, str(rows), font)

    pad = 16
    summary = f"{cols}x{rows} beads, {len(legend)} colors, {total_beads(color_counts(grid))} total"
    if palette is not None:
        summary += f" ({palette.name})"
    heading = [title or "Bead Pattern", summary]

    # Grid origin sits below the heading and the column numbers
    left = pad + label_w + 4
    top = pad + len(heading) * (text_h + 2) + text_h + 4
    grid_right = left + cols * cell_size
    grid_bottom = top + rows * cell_size

    swatch = text_h + 2
    legend_top = grid_bottom + pad
    legend_text = [
        f"{item.symbol}  {item.entry.name} {item.entry.code}  x{item.count}"
        for item in legend
    ]
    text_w = max((_text_size(measure, t, font)[0] for t in legend_text + heading), default=0)

    width = max(grid_right, left + swatch + 6 + text_w) + pad
    height = legend_top + len(legend) * (swatch + 4) + pad
    sheet = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(sheet)

    y = pad
    for line in heading:
        draw.text((pad, y), line, fill=(0, 0, 0), font=font)
        y += text_h + 2

    for n in range(major_every, max(cols, rows) + 1, major_every):
        label = str(n)
        w, _ = _text_size(draw, label, font)
        if n <= cols:
            draw.text((left + n * cell_size - w / 2, top - text_h - 4), label, fill=(0, 0, 0), font=font)
        if n <= rows:
            draw.text((left - w - 4, top + n * cell_size - text_h / 2), label, fill=(0, 0, 0), font=font)

    for r, grid_row in enumerate(grid):
        for c, code in enumerate(grid_row):
            if code == TRANSPARENT:
                continue
            rgb = hex_to_rgb(code)
            x0 = left + c * cell_size
            y0 = top + r * cell_size
            draw.rectangle([x0, y0, x0 + cell_size, y0 + cell_size], fill=rgb)
            if include_symbols:
                sym = symbols[code]
                w, h = _text_size(draw, sym, font)
                draw.text(
                    (x0 + (cell_size - w) / 2, y0 + (cell_size - h) / 2),
                    sym, fill=_contrast_color(rgb), font=font,
                )

    # Heavier rule every major_every beads
    for c in range(cols + 1):
        x = left + c * cell_size
        draw.line([(x, top), (x, grid_bottom)], fill=(0, 0, 0), width=1 + (c % major_every == 0))
    for r in range(rows + 1):
        y = top + r * cell_size
        draw.line([(left, y), (grid_right, y)], fill=(0, 0, 0), width=1 + (r % major_every == 0))

    y = legend_top
    for item, text in zip(legend, legend_text):
        draw.rectangle(
            [left, y, left + swatch, y + swatch],
            fill=hex_to_rgb(item.entry.code), outline=(0, 0, 0),
        )
        draw.text((left + swatch + 6, y + 1), text, fill=(0, 0, 0), font=font)
        y += swatch + 4

    return sheet
