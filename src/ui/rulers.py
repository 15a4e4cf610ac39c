"""Residue position rulers drawn along the top and left edge of the map.

Every 20th residue (1, 21, 41, ...) is labelled. One cell spans 2 residues
horizontally and 4 vertically, so labels sit every 10 columns on the
horizontal ruler and every 5 rows on the vertical one.
"""
from __future__ import annotations

RESIDUES_PER_LABEL = 20
H_LABEL_SPACING = 10
V_LABEL_SPACING = 5


def _ruler(length: int, spacing: int) -> str:
    cells = [" "] * max(0, length)
    residue = 1
    label = str(residue)
    position = 0
    # a label is only placed when it ends strictly before the last cell
    while position < length - len(label):
        cells[position:position + len(label)] = label
        residue += RESIDUES_PER_LABEL
        position += spacing
        label = str(residue)
    return "".join(cells)


def horizontal_ruler(width: int) -> str:
    """Ruler text for a raster ``width`` cells wide."""
    return _ruler(width, H_LABEL_SPACING)


def vertical_ruler(height: int) -> str:
    """Ruler text for a raster ``height`` cells tall, one character per row."""
    return _ruler(height, V_LABEL_SPACING)


__all__ = ["horizontal_ruler", "vertical_ruler"]
