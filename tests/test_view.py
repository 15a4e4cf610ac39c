"""Tests for ContactMapView key handling and threshold changes."""
import curses

import pytest

from analysis.contact_raster import render
from analysis.distance_matrix import DistanceMatrix
from ui.view import Action, ChordState, ContactMapView


@pytest.fixture
def view(app_config, line_points):
    # 200 residues -> 50 x 100 raster on a 24 x 80 terminal
    dm = DistanceMatrix.from_points(line_points(200, spacing=3.8))
    return ContactMapView(dm, 8.0, app_config, terminal_rows=24, terminal_cols=80)


def test_initial_state(view):
    assert view.raster.shape == (50, 100)
    assert view.chord is ChordState.IDLE
    assert (view.viewport.x_offset, view.viewport.y_offset) == (0, 0)
    assert view.hruler.startswith("1         21")


@pytest.mark.parametrize("key,expected", [
    (curses.KEY_RIGHT, (10, 0)),
    (ord("d"), (10, 0)),
    (ord("D"), (10, 0)),
    (ord("l"), (10, 0)),
    (curses.KEY_DOWN, (0, 5)),
    (ord("s"), (0, 5)),
    (ord("j"), (0, 5)),
])
def test_pan_keys(view, key, expected):
    assert view.handle_key(key) is Action.MOVED
    assert (view.viewport.x_offset, view.viewport.y_offset) == expected


def test_pan_back_and_jumps(view):
    view.handle_key(ord("$"))
    assert view.viewport.x_offset == 21
    view.handle_key(ord("a"))
    assert view.viewport.x_offset == 11
    view.handle_key(ord("0"))
    assert view.viewport.x_offset == 0
    view.handle_key(ord("$"))
    view.handle_key(ord("^"))
    assert view.viewport.x_offset == 0
    view.handle_key(ord("G"))
    assert view.viewport.y_offset == 28
    view.handle_key(ord("k"))
    assert view.viewport.y_offset == 23


def test_gg_chord_jumps_to_top(view):
    view.handle_key(ord("G"))
    assert view.handle_key(ord("g")) is Action.NONE
    assert view.chord is ChordState.AWAITING_SECOND_KEY
    assert view.handle_key(ord("g")) is Action.MOVED
    assert view.chord is ChordState.IDLE
    assert view.viewport.y_offset == 0


def test_other_key_resets_chord_and_is_handled(view):
    view.handle_key(ord("G"))
    view.handle_key(ord("g"))
    assert view.handle_key(ord("l")) is Action.MOVED
    assert view.chord is ChordState.IDLE
    assert view.viewport.x_offset == 10
    # a single g afterwards only arms the chord again
    view.handle_key(ord("g"))
    assert view.viewport.y_offset == 28


def test_quit_and_unbound_keys(view):
    assert view.handle_key(ord("x")) is Action.NONE
    assert view.handle_key(ord("q")) is Action.QUIT
    assert view.handle_key(ord("Q")) is Action.QUIT


def test_resize_key_only_reports(view):
    generation = view.generation
    assert view.handle_key(curses.KEY_RESIZE) is Action.RESIZED
    assert view.generation == generation
    assert view.reflow(100, 200) is Action.RESIZED
    assert view.viewport.max_x_offset == 0


def test_threshold_steps_and_floor(view):
    assert view.handle_key(ord("+")) is Action.RERENDERED
    assert view.threshold == pytest.approx(8.5)
    assert view.raster.threshold == pytest.approx(8.5)
    view.on_threshold_change(0.2)
    assert view.handle_key(ord("-")) is Action.RERENDERED
    assert view.threshold == 0.0
    view.handle_key(ord("-"))
    assert view.threshold == 0.0


def test_rerender_keeps_offsets(view):
    view.handle_key(ord("l"))
    view.handle_key(ord("s"))
    generation = view.generation
    view.on_threshold_change(12.0)
    assert view.generation == generation + 1
    assert (view.viewport.x_offset, view.viewport.y_offset) == (10, 5)


def test_negative_initial_threshold_is_floored(app_config, line_points):
    dm = DistanceMatrix.from_points(line_points(4))
    calls = []

    def renderer(matrix, threshold):
        calls.append(threshold)
        return render(matrix, threshold)

    v = ContactMapView(dm, -3.0, app_config, renderer=renderer)
    assert v.threshold == 0.0
    assert calls == [0.0]
    v.handle_key(ord("h"))
    v.handle_key(ord("w"))
    assert calls == [0.0]
