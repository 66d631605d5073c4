"""Tests for bead counts and pattern sheet rendering."""
from __future__ import annotations

from bead_pattern.color import TRANSPARENT
from bead_pattern.palette import get_palette
from bead_pattern.pattern import (
    build_legend,
    color_counts,
    render_bead_pattern,
    sorted_counts,
    total_beads,
)

GRID = [
    ["#FF0000", "#0000FF", TRANSPARENT],
    ["#0000FF", "#0000FF", TRANSPARENT],
]


class TestColorCounts:
    """Tests for color_counts and helpers."""

    def test_two_pixel_example(self) -> None:
        """One red and one blue bead."""
        assert color_counts([["#FF0000", "#0000FF"]]) == {"#FF0000": 1, "#0000FF": 1}

    def test_excludes_transparent(self) -> None:
        """Transparent cells should not be counted."""
        counts = color_counts(GRID)
        assert TRANSPARENT not in counts
        assert counts == {"#FF0000": 1, "#0000FF": 3}
        assert total_beads(counts) == 4

    def test_all_transparent(self) -> None:
        """A fully transparent grid has no beads."""
        assert color_counts([[TRANSPARENT] * 3]) == {}

    def test_sorted_counts(self) -> None:
        """Most used colors should come first, ties by code."""
        counts = {"#FFFFFF": 2, "#000000": 2, "#FF0000": 5}
        assert sorted_counts(counts) == [
            ("#FF0000", 5),
            ("#000000", 2),
            ("#FFFFFF", 2),
        ]


class TestLegend:
    """Tests for build_legend function."""

    def test_names_from_palette(self) -> None:
        """Legend entries should carry palette color names."""
        items = build_legend(GRID, get_palette("mini"))
        assert [item.entry.code for item in items] == ["#0000FF", "#FF0000"]
        assert items[0].entry.name == "Blue"
        assert items[0].count == 3
        assert items[0].symbol != items[1].symbol

    def test_without_palette(self) -> None:
        """Without a palette the code doubles as the name."""
        items = build_legend(GRID)
        assert items[1].entry.name == "#FF0000"


class TestRenderBeadPattern:
    """Tests for render_bead_pattern function."""

    def test_render(self) -> None:
        """Should render a sheet larger than the grid."""
        sheet = render_bead_pattern(
            GRID,
            get_palette("mini"),
            title="Test Pattern",
            cell_size=10,
            major_every=1,
        )
        assert sheet.mode == "RGB"
        assert sheet.size[0] > 3 * 10
        assert sheet.size[1] > 2 * 10

    def test_without_symbols(self) -> None:
        """Should render with symbols disabled."""
        sheet = render_bead_pattern(GRID, include_symbols=False)
        assert sheet.size[0] > 0

    def test_legend_row_per_color(self) -> None:
        """Each extra color should add a legend row below the grid."""
        one = render_bead_pattern([["#FF0000", "#FF0000"]], cell_size=10)
        two = render_bead_pattern([["#FF0000", "#0000FF"]], cell_size=10)
        assert two.size[1] > one.size[1]

    def test_empty_grid(self) -> None:
        """An empty grid should still render a heading."""
        sheet = render_bead_pattern([])
        assert sheet.size[0] > 0 and sheet.size[1] > 0
