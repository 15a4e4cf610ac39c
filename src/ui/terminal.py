"""Curses front-end for the contact-map viewer.

Everything is drawn into pads (status strip, two rulers, the contact map) that
are blitted to the screen at the current viewport offsets on every iteration
of the input loop. The contact pad is only rebuilt after a threshold change;
a resize only re-clamps offsets and re-blits.
"""
from __future__ import annotations

import curses
import locale
from typing import Optional

from loguru import logger

from analysis.contact_raster import SHADE_COLS
from ui.layout.theme import Palette, init_palette
from ui.view import Action, ContactMapView
from utils.config import DisplayConfig
from utils.logging_config import suspend_console_logging


class TerminalViewer:
    def __init__(self, stdscr, view: ContactMapView, palette: Palette, display: DisplayConfig):
        self.stdscr = stdscr
        self.view = view
        self.palette = palette
        self.display = display
        self.status = None
        self.hruler = None
        self.vruler = None
        self.contacts = None
        self._built_generation: Optional[int] = None

    # -- pads -----------------------------------------------------------------
    def build_status_pad(self):
        m = self.view.matrix
        rows, cols = self.stdscr.getmaxyx()
        width = max(self.display.status_width, cols)
        pad = curses.newpad(1, width + 1)
        pad.addstr(0, 0, self.display.status_fill * width, self.palette.status)
        segments = [
            f" {m.source_filename or '<stdin>'} ",
            f" Chain: {m.source_chain or '-'} ",
            f" Residues: {m.nres} ",
            f" Threshold: {self.view.threshold:2.2f} ",
        ]
        col = 1
        for text in segments:
            if col + len(text) >= width:
                break
            pad.addstr(0, col, text, self.palette.status | curses.A_REVERSE)
            col += len(text) + 1
        return pad

    def build_ruler_pads(self):
        raster = self.view.raster
        hpad = curses.newpad(1, raster.cols + 1)
        hpad.addstr(0, 0, self.view.hruler, self.palette.ruler)
        vpad = curses.newpad(raster.rows + 1, 2)
        for row, ch in enumerate(self.view.vruler):
            vpad.addstr(row, 0, ch, self.palette.ruler)
        return hpad, vpad

    def build_contacts_pad(self):
        raster = self.view.raster
        pad = curses.newpad(raster.rows + 1, raster.cols + 1)
        for row in range(raster.rows):
            text = raster.row_text(row)
            if not self.palette.enabled:
                pad.addstr(row, 0, text)
                continue
            # shade changes every SHADE_COLS cells, so write one run per tile
            for start in range(0, raster.cols, SHADE_COLS):
                pad.addstr(row, start, text[start:start + SHADE_COLS], self.palette.cell_attr(row, start))
        return pad

    def rebuild(self):
        self.status = self.build_status_pad()
        if self.hruler is None:
            self.hruler, self.vruler = self.build_ruler_pads()
        if self._built_generation != self.view.generation:
            self.contacts = self.build_contacts_pad()
            self._built_generation = self.view.generation

    # -- screen ---------------------------------------------------------------
    def refresh(self):
        nrow, ncol = self.stdscr.getmaxyx()
        vp = self.view.viewport
        self.stdscr.noutrefresh()
        if ncol > 1:
            self.status.noutrefresh(0, 0, 0, 0, 0, ncol - 1)
            if nrow > 1:
                self.hruler.noutrefresh(0, vp.x_offset, 1, 1, 1, ncol - 1)
        if nrow > 2:
            self.vruler.noutrefresh(vp.y_offset, 0, 2, 0, nrow - 1, 0)
            if ncol > 1:
                self.contacts.noutrefresh(vp.y_offset, vp.x_offset, 2, 1, nrow - 1, ncol - 1)
        curses.doupdate()

    def run(self):
        self.stdscr.bkgd(" ", self.palette.background)
        self.stdscr.keypad(True)
        self.view.reflow(*self.stdscr.getmaxyx())
        self.rebuild()
        while True:
            self.refresh()
            action = self.view.handle_key(self.stdscr.getch())
            if action is Action.QUIT:
                break
            if action is Action.RESIZED:
                self.view.reflow(*self.stdscr.getmaxyx())
                self.stdscr.clear()
                self.status = self.build_status_pad()
            elif action is Action.RERENDERED:
                self.rebuild()


def _session(stdscr, view: ContactMapView, display: DisplayConfig) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        logger.debug("Terminal cannot hide the cursor")
    palette = init_palette(display)
    TerminalViewer(stdscr, view, palette, display).run()


def run_viewer(view: ContactMapView, display: DisplayConfig) -> None:
    """Run the interactive viewer until the user quits.

    curses.wrapper restores the terminal on every exit path, including
    exceptions, which are re-raised to the caller.
    """
    locale.setlocale(locale.LC_ALL, "")
    with suspend_console_logging():
        curses.wrapper(_session, view, display)


__all__ = ["TerminalViewer", "run_viewer"]
