"""Tests for palette module."""
from __future__ import annotations

import numpy as np
import pytest

from bead_pattern.config import InputError, UsageError
from bead_pattern.palette import (
    Palette,
    PaletteEntry,
    colors,
    find_nearest_index,
    get_palette,
    load_palette,
    load_palette_file,
    nearest,
    palette_names,
)


class TestBuiltinPalettes:
    """Tests for the built-in palettes."""

    def test_names(self) -> None:
        """Should expose the three built-in palettes."""
        assert palette_names() == ["standard", "mini", "pastel"]

    def test_sizes(self) -> None:
        """Mini and pastel should have 24 and 12 colors."""
        assert len(colors("mini")) == 24
        assert len(colors("pastel")) == 12

    def test_standard_keeps_duplicate_gold(self) -> None:
        """Duplicated entries should be preserved, not deduplicated."""
        assert colors("standard").count("#FFD700") == 2

    def test_codes_are_canonical(self) -> None:
        """Every code should be an upper-case #RRGGBB string."""
        for name in palette_names():
            for code in colors(name):
                assert len(code) == 7
                assert code.startswith("#")
                assert code == code.upper()

    def test_unknown_palette(self) -> None:
        """Should reject unknown palette names."""
        with pytest.raises(UsageError, match="Palette not found"):
            get_palette("neon")

    def test_palette_is_frozen(self) -> None:
        """Palettes should be immutable."""
        palette = get_palette("mini")
        with pytest.raises(Exception):
            palette.name = "other"  # type: ignore[misc]


class TestNearest:
    """Tests for nearest-color search."""

    def test_exact_match(self) -> None:
        """An exact palette color should map to itself."""
        assert nearest("#FF0000", "mini") == "#FF0000"

    def test_rgb_query(self) -> None:
        """Should accept RGB triples."""
        assert nearest((250, 5, 5), "mini") == "#FF0000"

    def test_is_minimum_distance(self) -> None:
        """Chosen color should be at least as close as every other entry."""
        palette = get_palette("standard")
        rgb = palette.rgb
        rng = np.random.default_rng(7)
        for query in rng.integers(0, 256, size=(50, 3)):
            idx = find_nearest_index(query, rgb)
            dists = np.sum((rgb - query) ** 2, axis=1)
            assert dists[idx] == dists.min()

    def test_tie_goes_to_first(self) -> None:
        """On exact ties the earliest entry should win."""
        palette_rgb = np.array([[0, 0, 0], [20, 0, 0]], dtype=np.float64)
        assert find_nearest_index((10, 0, 0), palette_rgb) == 0

    def test_duplicate_never_chosen(self) -> None:
        """A later duplicate should never beat its earlier twin."""
        palette = get_palette("standard")
        idx = find_nearest_index((255, 215, 0), palette.rgb)
        assert idx == palette.colors.index("#FFD700")

    def test_empty_palette(self) -> None:
        """Should fail fast on an empty palette."""
        with pytest.raises(InputError, match="empty"):
            find_nearest_index((0, 0, 0), np.zeros((0, 3)))


class TestPalette:
    """Tests for Palette dataclass."""

    def test_structure(self) -> None:
        """Palette should expose codes and an RGB array."""
        palette = Palette("tiny", (PaletteEntry("#FF0000", "Red"), PaletteEntry("#00FF00")))
        assert palette.colors == ("#FF0000", "#00FF00")
        assert palette.rgb.shape == (2, 3)
        assert "#FF0000" in palette
        assert "#0000FF" not in palette
        assert palette.entry_for("#FF0000").name == "Red"


class TestLoadPalette:
    """Tests for load_palette and load_palette_file."""

    def test_builtin_by_name(self) -> None:
        """Should resolve built-in names first."""
        assert load_palette("pastel") is get_palette("pastel")

    def test_load_valid_file(self, tmp_path) -> None:
        """Should load a CSV palette."""
        palette_file = tmp_path / "custom.csv"
        palette_file.write_text("#ff0000,Red\n00FF00,Green\n")
        palette = load_palette(str(palette_file))
        assert palette.name == "custom"
        assert palette.colors == ("#FF0000", "#00FF00")
        assert palette.entries[0].name == "Red"

    def test_skips_blank_and_comment_rows(self, tmp_path) -> None:
        """Should skip blank rows and comments."""
        palette_file = tmp_path / "with_comments.csv"
        palette_file.write_text("# my beads\n\n#123456\n")
        palette = load_palette_file(str(palette_file))
        assert palette.colors == ("#123456",)

    def test_empty_file(self, tmp_path) -> None:
        """Should reject files with no colors."""
        palette_file = tmp_path / "empty.csv"
        palette_file.write_text("")
        with pytest.raises(InputError, match="No colors found"):
            load_palette_file(str(palette_file))

    def test_invalid_row(self, tmp_path) -> None:
        """Should reject malformed rows."""
        palette_file = tmp_path / "invalid.csv"
        palette_file.write_text("red,Red\n")
        with pytest.raises(InputError, match="Invalid palette row"):
            load_palette_file(str(palette_file))

    def test_missing(self) -> None:
        """Should reject names that are neither built in nor files."""
        with pytest.raises(UsageError, match="Palette not found"):
            load_palette("nonexistent_palette_xyz")
