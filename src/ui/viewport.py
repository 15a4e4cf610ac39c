"""Scrollable window over the contact raster.

Screen layout (rows top to bottom):
    row 0      status strip (fixed)
    row 1      horizontal residue ruler (scrolls with x)
    rows 2..   contact raster (scrolls with x and y), vertical ruler in column 0

The raster is drawn from screen column 1 and screen row 2, which is why the
largest horizontal offset is ``raster_cols - terminal_cols + 1`` and the
largest vertical one ``raster_rows - terminal_rows + 2``. A raster that fits
in the visible area in one axis is pinned to offset 0 in that axis.
"""
from __future__ import annotations

from dataclasses import dataclass

# screen rows/cols taken by the fixed strips
HEADER_ROWS = 2
RULER_COLS = 1


def _clamp(value: int, upper: int) -> int:
    return max(0, min(value, upper))


@dataclass
class Viewport:
    raster_rows: int
    raster_cols: int
    terminal_rows: int = 24
    terminal_cols: int = 80
    x_offset: int = 0
    y_offset: int = 0

    def __post_init__(self):
        self._reclamp()

    @property
    def max_x_offset(self) -> int:
        if self.raster_cols <= self.visible_cols:
            return 0
        return self.raster_cols - self.visible_cols

    @property
    def max_y_offset(self) -> int:
        if self.raster_rows <= self.visible_rows:
            return 0
        return self.raster_rows - self.visible_rows

    @property
    def visible_rows(self) -> int:
        return max(0, self.terminal_rows - HEADER_ROWS)

    @property
    def visible_cols(self) -> int:
        return max(0, self.terminal_cols - RULER_COLS)

    def _reclamp(self) -> None:
        self.x_offset = _clamp(self.x_offset, self.max_x_offset)
        self.y_offset = _clamp(self.y_offset, self.max_y_offset)

    def reflow(self, terminal_rows: int, terminal_cols: int) -> None:
        """New terminal extent (entry or resize); offsets are re-clamped."""
        self.terminal_rows = max(0, int(terminal_rows))
        self.terminal_cols = max(0, int(terminal_cols))
        self._reclamp()

    def set_raster_extent(self, raster_rows: int, raster_cols: int) -> None:
        self.raster_rows = raster_rows
        self.raster_cols = raster_cols
        self._reclamp()

    def pan(self, dx_cells: int, dy_cells: int) -> None:
        self.x_offset += dx_cells
        self.y_offset += dy_cells
        self._reclamp()

    def jump_start_x(self) -> None:
        self.x_offset = 0

    def jump_end_x(self) -> None:
        self.x_offset = self.max_x_offset

    def jump_start_y(self) -> None:
        self.y_offset = 0

    def jump_end_y(self) -> None:
        self.y_offset = self.max_y_offset


__all__ = ["Viewport", "HEADER_ROWS", "RULER_COLS"]
