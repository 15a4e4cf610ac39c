"""Braille raster of a contact map.

One terminal cell covers a block of 4 rows x 2 columns of the N x N contact
grid. Each of the 8 sub-positions maps to one dot of a Unicode braille
pattern (U+2800 + code):

    dx=0  dx=1
     1     8     dy=0
     2    16     dy=1
     4    32     dy=2
    64   128     dy=3

Cells on the last raster row/column only test dots that correspond to real
residues; the remaining dots stay unset.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np
from loguru import logger

from .base import ResourceError
from .distance_matrix import DistanceMatrix

BLOCK_ROWS = 4
BLOCK_COLS = 2
BRAILLE_BASE = 0x2800

# DOT_WEIGHTS[dy][dx]
DOT_WEIGHTS: Tuple[Tuple[int, int], ...] = (
    (0x01, 0x08),
    (0x02, 0x10),
    (0x04, 0x20),
    (0x40, 0x80),
)

GLYPHS: Tuple[str, ...] = (" ",) + tuple(chr(BRAILLE_BASE + code) for code in range(1, 256))

# checkerboard tiles, in cells
SHADE_COLS = 10
SHADE_ROWS = 5


def raster_shape(nres: int) -> Tuple[int, int]:
    """(rows, cols) of the raster for a chain of ``nres`` residues."""
    return (nres + BLOCK_ROWS - 1) // BLOCK_ROWS, (nres + BLOCK_COLS - 1) // BLOCK_COLS


def glyph(code: int) -> str:
    return GLYPHS[code]


def is_light_cell(row: int, col: int) -> bool:
    """Cosmetic checkerboard shade for cell (row, col); 20 x 20 residue tiles."""
    left = col % (2 * SHADE_COLS) < SHADE_COLS
    top = row % (2 * SHADE_ROWS) < SHADE_ROWS
    return left == top


def cell_dots(nres: int, row: int, col: int) -> Iterator[Tuple[int, int, int]]:
    """Yield (dy, dx, weight) for every dot of cell (row, col) backed by real residues."""
    y0 = row * BLOCK_ROWS
    x0 = col * BLOCK_COLS
    for dy in range(BLOCK_ROWS):
        if y0 + dy >= nres:
            break
        for dx in range(BLOCK_COLS):
            if x0 + dx >= nres:
                break
            yield dy, dx, DOT_WEIGHTS[dy][dx]


def render_cell(dm: DistanceMatrix, threshold: float, row: int, col: int) -> int:
    """Glyph code of a single cell, evaluated pair by pair through ``dm.distance``."""
    y0 = row * BLOCK_ROWS
    x0 = col * BLOCK_COLS
    code = 0
    for dy, dx, weight in cell_dots(dm.nres, row, col):
        if dm.distance(y0 + dy, x0 + dx) <= threshold:
            code |= weight
    return code


@dataclass(frozen=True, eq=False)
class ContactRaster:
    codes: np.ndarray
    threshold: float
    nres: int

    @property
    def rows(self) -> int:
        return int(self.codes.shape[0])

    @property
    def cols(self) -> int:
        return int(self.codes.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def code(self, row: int, col: int) -> int:
        return int(self.codes[row, col])

    def row_text(self, row: int) -> str:
        return "".join(map(glyph, self.codes[row].tolist()))

    def lines(self) -> List[str]:
        return [self.row_text(r) for r in range(self.rows)]

    def dot_count(self) -> int:
        """Total number of set dots over the whole raster."""
        return int(np.unpackbits(self.codes).sum())


def render(dm: DistanceMatrix, threshold: float) -> ContactRaster:
    """Pack ``distance <= threshold`` for every residue pair into braille codes.

    Each (dy, dx) dot position is filled from a strided slice of the contact
    mask (rows dy, dy+4, ...; columns dx, dx+2, ...). A slice only contains
    existing residues, so trailing cells get exactly the dots they can hold.
    """
    rows, cols = raster_shape(dm.nres)
    try:
        mask = dm.contact_mask(threshold)
        codes = np.zeros((rows, cols), dtype=np.uint8)
        for dy in range(BLOCK_ROWS):
            for dx in range(BLOCK_COLS):
                sub = mask[dy::BLOCK_ROWS, dx::BLOCK_COLS]
                if sub.size == 0:
                    continue
                codes[:sub.shape[0], :sub.shape[1]] |= np.where(sub, DOT_WEIGHTS[dy][dx], 0).astype(np.uint8)
    except MemoryError as exc:
        raise ResourceError(f"Cannot allocate {rows}x{cols} raster for {dm.nres} residues") from exc
    logger.debug(f"Rendered {rows}x{cols} raster at threshold {threshold:.2f}")
    return ContactRaster(codes=codes, threshold=float(threshold), nres=dm.nres)


__all__ = [
    "ContactRaster",
    "DOT_WEIGHTS",
    "GLYPHS",
    "cell_dots",
    "glyph",
    "is_light_cell",
    "raster_shape",
    "render",
    "render_cell",
]
