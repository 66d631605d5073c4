"""Bead palettes and nearest-color lookup."""
from __future__ import annotations

import csv
import os
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union

import numpy as np

from .color import hex_to_rgb, normalize_hex
from .config import InputError, UsageError


@dataclass(frozen=True)
class PaletteEntry:
    """A single bead color."""

    code: str
    name: str = ""


@dataclass(frozen=True)
class Palette:
    """An ordered, immutable set of bead colors.

    Order matters: nearest-color search returns the first entry with the
    minimum distance, so duplicates are kept as they are.
    """

    name: str
    entries: Tuple[PaletteEntry, ...]

    @property
    def colors(self) -> Tuple[str, ...]:
        return tuple(entry.code for entry in self.entries)

    @property
    def rgb(self) -> np.ndarray:
        """Array of shape (K, 3) with the RGB values of each entry."""
        return np.array(
            [hex_to_rgb(entry.code) for entry in self.entries], dtype=np.float64
        ).reshape(-1, 3)

    def entry_for(self, code: str) -> PaletteEntry:
        """Return the first entry with the given code."""
        for entry in self.entries:
            if entry.code == code:
                return entry
        raise UsageError(f"Color {code} is not in palette {self.name}")

    def __contains__(self, code: object) -> bool:
        return code in self.colors

    def __len__(self) -> int:
        return len(self.entries)


def _entries(*pairs: Tuple[str, str]) -> Tuple[PaletteEntry, ...]:
    return tuple(PaletteEntry(code, name) for code, name in pairs)


_BUILTIN_PALETTES: Dict[str, Palette] = {
    # 48 nominal colors; gold is listed twice
    "standard": Palette("standard", _entries(
        # Whites and grays
        ("#FFFFFF", "White"),
        ("#F5F5F5", "Snow"),
        ("#E0E0E0", "Light Gray"),
        ("#A9A9A9", "Gray"),
        ("#696969", "Dark Gray"),
        ("#000000", "Black"),
        # Reds
        ("#FFE4E1", "Misty Rose"),
        ("#FFC0CB", "Pink"),
        ("#FF69B4", "Hot Pink"),
        ("#FF1493", "Deep Pink"),
        ("#DC143C", "Crimson"),
        ("#FF0000", "Red"),
        ("#8B0000", "Dark Red"),
        # Oranges
        ("#FFF0F5", "Lavender Blush"),
        ("#FFDAB9", "Peach"),
        ("#FFEFD5", "Papaya Whip"),
        ("#FFD700", "Gold"),
        ("#FFA500", "Orange"),
        ("#FF8C00", "Dark Orange"),
        ("#FF4500", "Orange Red"),
        # Yellows
        ("#FFFFE0", "Light Yellow"),
        ("#FFFACD", "Lemon Chiffon"),
        ("#FFFF00", "Yellow"),
        ("#FFD700", "Gold"),
        ("#BDB76B", "Dark Khaki"),
        # Greens
        ("#F0FFF0", "Honeydew"),
        ("#98FB98", "Pale Green"),
        ("#90EE90", "Light Green"),
        ("#00FF00", "Lime"),
        ("#32CD32", "Lime Green"),
        ("#008000", "Green"),
        ("#006400", "Dark Green"),
        ("#2E8B57", "Sea Green"),
        # Blues
        ("#F0FFFF", "Azure"),
        ("#E0FFFF", "Light Cyan"),
        ("#AFEEEE", "Pale Turquoise"),
        ("#00FFFF", "Cyan"),
        ("#00CED1", "Dark Turquoise"),
        ("#1E90FF", "Dodger Blue"),
        ("#0000FF", "Blue"),
        ("#0000CD", "Medium Blue"),
        ("#00008B", "Dark Blue"),
        ("#191970", "Midnight Blue"),
        # Purples
        ("#E6E6FA", "Lavender"),
        ("#D8BFD8", "Thistle"),
        ("#DDA0DD", "Plum"),
        ("#EE82EE", "Violet"),
        ("#DA70D6", "Orchid"),
        ("#9370DB", "Medium Purple"),
        ("#8A2BE2", "Blue Violet"),
        ("#4B0082", "Indigo"),
    )),
    "mini": Palette("mini", _entries(
        ("#FFFFFF", "White"),
        ("#E0E0E0", "Light Gray"),
        ("#A9A9A9", "Gray"),
        ("#000000", "Black"),
        ("#FFC0CB", "Pink"),
        ("#FF69B4", "Hot Pink"),
        ("#FF0000", "Red"),
        ("#8B0000", "Dark Red"),
        ("#FFDAB9", "Peach"),
        ("#FFA500", "Orange"),
        ("#FFFF00", "Yellow"),
        ("#FFD700", "Gold"),
        ("#98FB98", "Pale Green"),
        ("#00FF00", "Lime"),
        ("#008000", "Green"),
        ("#2E8B57", "Sea Green"),
        ("#AFEEEE", "Pale Turquoise"),
        ("#00FFFF", "Cyan"),
        ("#1E90FF", "Dodger Blue"),
        ("#0000FF", "Blue"),
        ("#00008B", "Dark Blue"),
        ("#DDA0DD", "Plum"),
        ("#EE82EE", "Violet"),
        ("#8A2BE2", "Blue Violet"),
    )),
    "pastel": Palette("pastel", _entries(
        ("#FFFFFF", "White"),
        ("#000000", "Black"),
        ("#FFE4E1", "Misty Rose"),
        ("#FFC0CB", "Pink"),
        ("#FFDAB9", "Peach"),
        ("#FFFACD", "Lemon Chiffon"),
        ("#F0FFF0", "Honeydew"),
        ("#98FB98", "Pale Green"),
        ("#E0FFFF", "Light Cyan"),
        ("#AFEEEE", "Pale Turquoise"),
        ("#E6E6FA", "Lavender"),
        ("#D8BFD8", "Thistle"),
    )),
}


def palette_names() -> List[str]:
    """Return the names of the built-in palettes."""
    return list(_BUILTIN_PALETTES)


def get_palette(name: str) -> Palette:
    """Return a built-in palette by name.

    Raises:
        UsageError: If the palette name is unknown.
    """
    try:
        return _BUILTIN_PALETTES[name]
    except KeyError:
        raise UsageError(
            f"Palette not found: {name}. "
            f"Available palettes: {', '.join(palette_names())}"
        ) from None


def colors(name: str) -> Tuple[str, ...]:
    """Return the ordered colors of a built-in palette."""
    return get_palette(name).colors


def load_palette_file(path: str) -> Palette:
    """Load a palette from a CSV file.

    Each row holds a hex code and an optional color name. Blank rows and
    comment rows starting with "# " are skipped.

    Args:
        path: Path to the palette CSV file.

    Returns:
        Palette named after the file.

    Raises:
        InputError: If the file cannot be parsed or holds no colors.
    """
    entries: List[PaletteEntry] = []

    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        for row in reader:
            if not row or not row[0].strip():
                continue
            raw = row[0].strip()
            if raw.startswith("# "):
                continue
            try:
                code = normalize_hex(raw)
            except InputError as exc:
                raise InputError(f"Invalid palette row in {path}: {row}") from exc
            name = row[1].strip() if len(row) > 1 else ""
            entries.append(PaletteEntry(code, name))

    if not entries:
        raise InputError(f"No colors found in palette: {path}")
    name = os.path.splitext(os.path.basename(path))[0]
    return Palette(name, tuple(entries))


def load_palette(name_or_path: str) -> Palette:
    """Resolve a built-in palette name, falling back to a CSV file path."""
    if name_or_path in _BUILTIN_PALETTES:
        return _BUILTIN_PALETTES[name_or_path]
    if os.path.exists(name_or_path):
        return load_palette_file(name_or_path)
    return get_palette(name_or_path)


def find_nearest_index(rgb: Sequence[float], palette_rgb: np.ndarray) -> int:
    """Index of the palette entry closest to ``rgb``.

    Uses squared Euclidean distance. Ties go to the lowest index.

    Raises:
        InputError: If the palette is empty.
    """
    if palette_rgb.shape[0] == 0:
        raise InputError("Palette is empty")
    diff = palette_rgb - np.asarray(rgb, dtype=np.float64)[:3]
    dists = np.sum(diff * diff, axis=1)
    return int(np.argmin(dists))


def nearest(
    color: Union[str, Sequence[float]], palette: Union[str, Palette]
) -> str:
    """Return the palette color closest to ``color``.

    Args:
        color: Query color as "#RRGGBB" or an RGB triple.
        palette: Palette or built-in palette name.
    """
    if isinstance(palette, str):
        palette = get_palette(palette)
    rgb = hex_to_rgb(color) if isinstance(color, str) else color
    return palette.colors[find_nearest_index(rgb, palette.rgb)]
