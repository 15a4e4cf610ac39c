"""Terminal colour palette.

The palette is resolved once after curses starts and handed to the drawing
code; a monochrome palette (all attributes 0) is used when colours are
unavailable or disabled.
"""
from __future__ import annotations

import curses
from dataclasses import dataclass

from analysis.contact_raster import is_light_cell
from utils.config import DisplayConfig

# colour pair numbers
PAIR_BACKGROUND = 1
PAIR_STATUS = 2
PAIR_LIGHT = 3
PAIR_DARK = 4
PAIR_RULER = 5

# custom colour slots defined in DisplayConfig.custom_colours
GREY = 13
SUN_FLOWER = 10
WET_ASPHALT = 11
MIDNIGHT_BLUE = 12


@dataclass(frozen=True)
class Palette:
    background: int = 0
    status: int = 0
    light: int = 0
    dark: int = 0
    ruler: int = 0
    enabled: bool = False

    @classmethod
    def monochrome(cls) -> "Palette":
        return cls()

    def cell_attr(self, row: int, col: int) -> int:
        return self.light if is_light_cell(row, col) else self.dark


def init_palette(display: DisplayConfig) -> Palette:
    """Set up colour pairs; must be called after curses is initialised."""
    if not display.use_colour or not curses.has_colors():
        return Palette.monochrome()
    curses.start_color()
    pairs = {
        PAIR_BACKGROUND: (curses.COLOR_WHITE, curses.COLOR_BLACK),
        PAIR_STATUS: (curses.COLOR_YELLOW, curses.COLOR_BLACK),
        PAIR_LIGHT: (curses.COLOR_WHITE, curses.COLOR_BLUE),
        PAIR_DARK: (curses.COLOR_WHITE, curses.COLOR_BLACK),
        PAIR_RULER: (curses.COLOR_WHITE, curses.COLOR_BLACK),
    }
    if curses.can_change_color() and curses.COLORS > max(display.custom_colours, default=0):
        curses.init_color(curses.COLOR_BLACK, 0, 0, 0)
        curses.init_color(curses.COLOR_WHITE, 1000, 1000, 1000)
        for number, (r, g, b) in display.custom_colours.items():
            curses.init_color(number, r, g, b)
        pairs = {
            PAIR_BACKGROUND: (curses.COLOR_WHITE, GREY),
            PAIR_STATUS: (SUN_FLOWER, GREY),
            PAIR_LIGHT: (curses.COLOR_WHITE, WET_ASPHALT),
            PAIR_DARK: (curses.COLOR_WHITE, MIDNIGHT_BLUE),
            PAIR_RULER: (curses.COLOR_WHITE, GREY),
        }
    for pair, (fg, bg) in pairs.items():
        curses.init_pair(pair, fg, bg)
    return Palette(
        background=curses.color_pair(PAIR_BACKGROUND),
        status=curses.color_pair(PAIR_STATUS),
        light=curses.color_pair(PAIR_LIGHT),
        dark=curses.color_pair(PAIR_DARK),
        ruler=curses.color_pair(PAIR_RULER),
        enabled=True,
    )


__all__ = ["Palette", "init_palette"]
