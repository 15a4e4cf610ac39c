"""Interactive state of the contact-map viewer.

ContactMapView owns the current threshold, the raster rendered for it, the
viewport offsets and the pending-chord state. It translates key codes into
state changes and tells the terminal loop what needs redrawing. It has no
curses dependency beyond the key constants.
"""
from __future__ import annotations

import curses
from enum import Enum
from typing import Callable, Dict

from loguru import logger

from analysis.contact_raster import ContactRaster, render
from analysis.distance_matrix import DistanceMatrix
from performance.timing import time_block
from ui.rulers import horizontal_ruler, vertical_ruler
from ui.viewport import Viewport
from utils.config import AppConfig


class Action(Enum):
    NONE = "none"
    MOVED = "moved"
    RERENDERED = "rerendered"
    RESIZED = "resized"
    QUIT = "quit"


class ChordState(Enum):
    IDLE = "idle"
    AWAITING_SECOND_KEY = "awaiting_second_key"


CHORD_KEY = ord("g")

LEFT_KEYS = {curses.KEY_LEFT, ord("a"), ord("A"), ord("h")}
RIGHT_KEYS = {curses.KEY_RIGHT, ord("d"), ord("D"), ord("l")}
UP_KEYS = {curses.KEY_UP, ord("w"), ord("W"), ord("k")}
DOWN_KEYS = {curses.KEY_DOWN, ord("s"), ord("S"), ord("j")}
QUIT_KEYS = {ord("q"), ord("Q")}


class ContactMapView:
    def __init__(self,
                 matrix: DistanceMatrix,
                 threshold: float,
                 config: AppConfig,
                 terminal_rows: int = 24,
                 terminal_cols: int = 80,
                 renderer: Callable[[DistanceMatrix, float], ContactRaster] = render):
        self.matrix = matrix
        self.config = config
        self._renderer = renderer
        self.threshold = max(config.contact.min_threshold, float(threshold))
        self.raster = self._render()
        self.viewport = Viewport(self.raster.rows, self.raster.cols, terminal_rows, terminal_cols)
        self.hruler = horizontal_ruler(self.raster.cols)
        self.vruler = vertical_ruler(self.raster.rows)
        self.chord = ChordState.IDLE
        # bumped on every render so the front-end knows when to rebuild its pad
        self.generation = 0

        nav = config.navigation
        self._bindings: Dict[int, Callable[[], Action]] = {}
        for key in LEFT_KEYS:
            self._bindings[key] = lambda: self._pan(-nav.pan_step_x, 0)
        for key in RIGHT_KEYS:
            self._bindings[key] = lambda: self._pan(nav.pan_step_x, 0)
        for key in UP_KEYS:
            self._bindings[key] = lambda: self._pan(0, -nav.pan_step_y)
        for key in DOWN_KEYS:
            self._bindings[key] = lambda: self._pan(0, nav.pan_step_y)
        self._bindings[ord("$")] = lambda: self._jump(self.viewport.jump_end_x)
        self._bindings[ord("^")] = lambda: self._jump(self.viewport.jump_start_x)
        self._bindings[ord("0")] = lambda: self._jump(self.viewport.jump_start_x)
        self._bindings[ord("G")] = lambda: self._jump(self.viewport.jump_end_y)
        self._bindings[ord("+")] = lambda: self.change_threshold(config.contact.threshold_step)
        self._bindings[ord("-")] = lambda: self.change_threshold(-config.contact.threshold_step)

    def _render(self) -> ContactRaster:
        with time_block("render_raster", items=self.matrix.nres * self.matrix.nres):
            return self._renderer(self.matrix, self.threshold)

    def _pan(self, dx: int, dy: int) -> Action:
        self.viewport.pan(dx, dy)
        return Action.MOVED

    def _jump(self, move: Callable[[], None]) -> Action:
        move()
        return Action.MOVED

    def change_threshold(self, delta: float) -> Action:
        return self.on_threshold_change(self.threshold + delta)

    def on_threshold_change(self, new_threshold: float) -> Action:
        """Re-render at ``new_threshold`` (floored); pan offsets are only re-clamped."""
        self.threshold = max(self.config.contact.min_threshold, float(new_threshold))
        self.raster = self._render()
        self.viewport.set_raster_extent(self.raster.rows, self.raster.cols)
        self.generation += 1
        logger.debug(f"Threshold set to {self.threshold:.2f}")
        return Action.RERENDERED

    def reflow(self, terminal_rows: int, terminal_cols: int) -> Action:
        self.viewport.reflow(terminal_rows, terminal_cols)
        return Action.RESIZED

    def handle_key(self, key: int) -> Action:
        """Apply one key press.

        KEY_RESIZE only reports RESIZED; the caller reads the new terminal
        size and passes it to ``reflow``.
        """
        if key in QUIT_KEYS:
            return Action.QUIT
        if key == CHORD_KEY:
            if self.chord is ChordState.AWAITING_SECOND_KEY:
                self.chord = ChordState.IDLE
                return self._jump(self.viewport.jump_start_y)
            self.chord = ChordState.AWAITING_SECOND_KEY
            return Action.NONE
        self.chord = ChordState.IDLE
        if key == curses.KEY_RESIZE:
            return Action.RESIZED
        handler = self._bindings.get(key)
        if handler is None:
            return Action.NONE
        return handler()


__all__ = ["Action", "ChordState", "ContactMapView"]
