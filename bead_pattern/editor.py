"""Interactive hand-editing of a generated bead grid.

The editor has two states. While *viewing*, the canonical grid is read-only.
``enter_edit`` copies it into an edit buffer that the add, erase and pick
tools mutate one cell at a time. ``commit`` swaps the buffer in and
re-renders; ``cancel`` throws it away.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from PIL import Image

from .color import TRANSPARENT, normalize_hex
from .config import InputError, UsageError
from .palette import Palette, get_palette
from .pattern import color_counts
from .pipeline import GenerationResult
from .quantize import ColorGrid
from .render import render_grid

logger = logging.getLogger("bead_pattern")

VIEWING = "viewing"
EDITING = "editing"

TOOL_ADD = "add"
TOOL_ERASE = "erase"
TOOL_PICK = "pick"
TOOLS = (TOOL_ADD, TOOL_ERASE, TOOL_PICK)


def clone_grid(grid: ColorGrid) -> ColorGrid:
    return [list(row) for row in grid]


class GridEditor:
    """Edit session over the most recently generated grid."""

    def __init__(
        self,
        palette_name: str = "standard",
        cell_size: int = 10,
        show_grid_lines: bool = True,
    ) -> None:
        self._palette: Palette = get_palette(palette_name)
        self._selected_color: str = self._palette.colors[0]
        self._tool: str = TOOL_ADD
        self._state: str = VIEWING
        self.cell_size = cell_size
        self.show_grid_lines = show_grid_lines

        self._grid: Optional[ColorGrid] = None
        self._bitmap: Optional[Image.Image] = None
        self._counts: Dict[str, int] = {}
        self._buffer: Optional[ColorGrid] = None
        # Set by load, cleared when an edit session ends
        self._fresh_run: bool = False

    # Canonical state

    def load(self, result: GenerationResult) -> None:
        """Install the result of a new pipeline run.

        A newer run supersedes any open edit, so the edit buffer is dropped.
        Re-rendering adopts the cell size and grid-line setting the result was
        generated with.
        """
        if self._state == EDITING:
            logger.debug("New grid loaded while editing; discarding edit buffer")
            self._buffer = None
            self._state = VIEWING
        self._grid = clone_grid(result.color_grid)
        self._bitmap = result.bitmap
        self._counts = color_counts(self._grid)
        self.cell_size = result.cell_size
        self.show_grid_lines = result.show_grid_lines
        self._fresh_run = True

    @property
    def grid(self) -> Optional[ColorGrid]:
        """Copy of the canonical grid."""
        return clone_grid(self._grid) if self._grid is not None else None

    @property
    def bitmap(self) -> Optional[Image.Image]:
        return self._bitmap

    @property
    def counts(self) -> Dict[str, int]:
        return dict(self._counts)

    @property
    def state(self) -> str:
        return self._state

    @property
    def is_editing(self) -> bool:
        return self._state == EDITING

    # Tool and color selection

    @property
    def tool(self) -> str:
        return self._tool

    def set_tool(self, name: str) -> None:
        if name not in TOOLS:
            raise UsageError(f"Unknown tool: {name}. Available tools: {', '.join(TOOLS)}")
        self._tool = name

    @property
    def palette_name(self) -> str:
        return self._palette.name

    def select_palette(self, name: str) -> None:
        """Switch the palette edits draw from.

        The selected color falls back to the palette's first color when the
        new palette does not contain it.
        """
        palette = get_palette(name)
        self._palette = palette
        if self._selected_color not in palette:
            self._selected_color = palette.colors[0]

    @property
    def selected_color(self) -> str:
        return self._selected_color

    def select_color(self, color: str) -> None:
        try:
            code = normalize_hex(color)
        except InputError as exc:
            raise UsageError(str(exc)) from exc
        if code not in self._palette:
            raise UsageError(f"Color {code} is not in palette {self._palette.name}")
        self._selected_color = code

    # Editing

    def enter_edit(self) -> None:
        """Start editing a copy of the canonical grid.

        No-op when an edit is already open, or when no new run has been
        loaded since the last commit or cancel.
        """
        if self._grid is None or self._state == EDITING or not self._fresh_run:
            return
        self._buffer = clone_grid(self._grid)
        self._state = EDITING
        logger.debug("Entered edit mode")

    def _require_editing(self, operation: str) -> ColorGrid:
        if self._state != EDITING or self._buffer is None:
            raise UsageError(f"Cannot {operation} outside edit mode")
        return self._buffer

    def apply_tool(self, row: int, col: int) -> None:
        """Apply the active tool to one cell; out-of-range targets are ignored."""
        buffer = self._require_editing("apply a tool")
        if not (0 <= row < len(buffer) and 0 <= col < len(buffer[row])):
            return

        if self._tool == TOOL_ADD:
            buffer[row][col] = self._selected_color
        elif self._tool == TOOL_ERASE:
            buffer[row][col] = TRANSPARENT
        elif self._tool == TOOL_PICK:
            color = buffer[row][col]
            # Selection stays within the active palette
            if color == TRANSPARENT or color not in self._palette:
                return
            self._selected_color = color
            self._tool = TOOL_ADD

    def preview(self) -> Image.Image:
        """Render the edit buffer without committing it."""
        buffer = self._require_editing("preview")
        return render_grid(buffer, self.cell_size, self.show_grid_lines)

    def commit(self) -> None:
        """Replace the canonical grid with the edit buffer and re-render."""
        buffer = self._require_editing("commit")
        bitmap = render_grid(buffer, self.cell_size, self.show_grid_lines)
        self._grid = buffer
        self._bitmap = bitmap
        self._counts = color_counts(buffer)
        self._buffer = None
        self._state = VIEWING
        self._fresh_run = False
        logger.debug(f"Committed edits; {len(self._counts)} colors in use")

    def cancel(self) -> None:
        """Discard the edit buffer, leaving the canonical grid untouched."""
        self._require_editing("cancel")
        self._buffer = None
        self._state = VIEWING
        self._fresh_run = False
        logger.debug("Cancelled edit mode")

    def edit_cells(self) -> List[List[str]]:
        """Copy of the edit buffer."""
        return clone_grid(self._require_editing("read the edit buffer"))
