"""Serialization of contact maps to plain text and Encapsulated PostScript.

Both exporters enumerate the same pairs: (i, j) with i < j and distance
strictly below the threshold, in increasing (i, j) order.
"""
from __future__ import annotations
from typing import List, Optional

from reportlab.graphics import renderPS
from reportlab.graphics.shapes import Drawing, Group, Rect, String
from reportlab.lib import colors

from analysis.distance_matrix import DistanceMatrix
from utils.config import __version__

# drawing target: about six square inches whatever the chain length
EPS_DRAWING_SIZE = 72.0 * 6.0
EPS_MARGIN = 0.0
EPS_FRAME_WIDTH = 1.0
EPS_TITLE_HEIGHT = 40.0
EPS_FONT = "Courier"
EPS_FONT_SIZE = 12


def contact_header(dm: DistanceMatrix, threshold: float, tool: Optional[str] = None) -> List[str]:
    lines = [f"# {tool or f'cmap v{__version__}'}"]
    if dm.source_filename:
        lines.append(f"# source file: {dm.source_filename}")
    if dm.source_chain:
        lines.append(f"# source chain: {dm.source_chain}")
    if dm.sequence:
        lines.append(f"# sequence: {dm.sequence}")
    lines.append(f"# threshold: {threshold:f}")
    return lines


def export_contacts_text(dm: DistanceMatrix, threshold: float, tool: Optional[str] = None) -> str:
    """Header comment lines followed by one ``i<TAB>j`` line (1-based) per contact."""
    lines = contact_header(dm, threshold, tool)
    lines.extend(f"{i + 1}\t{j + 1}" for i, j in dm.contacts(threshold))
    return "\n".join(lines) + "\n"


def build_contact_drawing(dm: DistanceMatrix, threshold: float) -> Drawing:
    """Vector drawing of the contact map: border, title lines and one square per contact.

    Origin is bottom-left. Residue i runs left to right, residue j top to
    bottom, so contacts fill the lower-left triangle of the frame.
    """
    nres = dm.nres
    box = EPS_DRAWING_SIZE / nres
    side = nres * box
    xmax = 2 * EPS_MARGIN + 2 * EPS_FRAME_WIDTH + side
    ymax = xmax + EPS_TITLE_HEIGHT

    drawing = Drawing(xmax, ymax)
    drawing.add(String(5, ymax - 15, f"File: {dm.source_filename or '-'}",
                       fontName=EPS_FONT, fontSize=EPS_FONT_SIZE))
    drawing.add(String(5, ymax - 30, f"Threshold: {threshold:.2f}",
                       fontName=EPS_FONT, fontSize=EPS_FONT_SIZE))
    drawing.add(Rect(EPS_MARGIN + EPS_FRAME_WIDTH / 2.0, EPS_MARGIN + EPS_FRAME_WIDTH / 2.0,
                     side + EPS_FRAME_WIDTH, side + EPS_FRAME_WIDTH,
                     strokeColor=colors.Color(0.75, 0.75, 0.75), strokeWidth=EPS_FRAME_WIDTH,
                     fillColor=None))

    squares = Group()
    origin = EPS_MARGIN + EPS_FRAME_WIDTH
    top = origin + side
    for i, j in dm.contacts(threshold):
        squares.add(Rect(origin + i * box, top - (j + 1) * box, box, box,
                         strokeColor=None, fillColor=colors.black))
    drawing.add(squares)
    return drawing


def export_eps(dm: DistanceMatrix, threshold: float, tool: Optional[str] = None) -> bytes:
    """EPS document of the contact drawing, with a ``%%Creator`` comment after the magic line."""
    data = renderPS.drawToString(build_contact_drawing(dm, threshold))
    if isinstance(data, str):
        data = data.encode("latin-1")
    magic, _, body = data.partition(b"\n")
    creator = f"%%Creator: {tool or f'cmap v{__version__}'}".encode("latin-1")
    return b"\n".join((magic, creator, body))


__all__ = [
    'build_contact_drawing',
    'contact_header',
    'export_contacts_text',
    'export_eps',
]
