"""Tests for the braille contact raster."""
import numpy as np
import pytest

from analysis.contact_raster import (
    DOT_WEIGHTS,
    cell_dots,
    glyph,
    is_light_cell,
    raster_shape,
    render,
    render_cell,
)
from analysis.distance_matrix import DistanceMatrix


class RecordingMatrix:
    """Stands in for a DistanceMatrix and records every pair it is asked about."""

    def __init__(self, nres: int, value: float = 1.0):
        self.nres = nres
        self.value = value
        self.calls = []

    def distance(self, i, j):
        assert 0 <= i < self.nres and 0 <= j < self.nres, (i, j)
        self.calls.append((i, j))
        return 0.0 if i == j else self.value


def _random_matrix(n, seed=3):
    rng = np.random.default_rng(seed)
    return DistanceMatrix.from_points([tuple(p) for p in rng.uniform(0, 25, size=(n, 3))])


def test_raster_shape():
    assert raster_shape(1) == (1, 1)
    assert raster_shape(7) == (2, 4)
    assert raster_shape(8) == (2, 4)
    assert raster_shape(9) == (3, 5)


def test_glyphs():
    assert glyph(0) == " "
    assert glyph(1) == "⠁"
    assert glyph(255) == "⣿"


def test_single_residue_sets_only_top_left_dot():
    raster = render(DistanceMatrix.from_points([(0.0, 0.0, 0.0)]), 0.0)
    assert raster.shape == (1, 1)
    assert raster.code(0, 0) == DOT_WEIGHTS[0][0]
    assert raster.lines() == ["⠁"]


def test_seven_residue_boundary_never_reads_past_chain():
    rec = RecordingMatrix(7)
    rows, cols = raster_shape(7)
    codes = {(r, c): render_cell(rec, 8.0, r, c) for r in range(rows) for c in range(cols)}
    assert sorted(set(rec.calls)) == sorted((i, j) for i in range(7) for j in range(7))
    assert len(rec.calls) == 49
    # last row covers residues 4..6 only: dy=3 never set
    assert codes[(1, 0)] == 0x01 | 0x02 | 0x04 | 0x08 | 0x10 | 0x20
    # trailing half column: only dx=0 dots
    assert codes[(0, 3)] == 0x01 | 0x02 | 0x04 | 0x40
    # bottom-right cell composes both limits
    assert codes[(1, 3)] == 0x01 | 0x02 | 0x04
    assert list(cell_dots(7, 1, 3)) == [(0, 0, 0x01), (1, 0, 0x02), (2, 0, 0x04)]


@pytest.mark.parametrize("n", [1, 2, 5, 7, 8, 13, 30])
def test_vectorised_render_matches_scalar_reference(n):
    dm = _random_matrix(n)
    raster = render(dm, 12.0)
    for r in range(raster.rows):
        for c in range(raster.cols):
            assert raster.code(r, c) == render_cell(dm, 12.0, r, c)


@pytest.mark.parametrize("threshold", [0.0, 5.0, 12.0, 40.0])
def test_dot_count_matches_contact_pairs(threshold):
    dm = _random_matrix(23, seed=11)
    pairs = sum(1 for i in range(23) for j in range(i + 1, 23) if dm.distance(i, j) <= threshold)
    assert render(dm, threshold).dot_count() == 23 + 2 * pairs


def test_render_is_idempotent():
    dm = _random_matrix(17)
    first = render(dm, 10.0)
    second = render(dm, 10.0)
    assert np.array_equal(first.codes, second.codes)
    assert first.lines() == second.lines()


def test_missing_residue_never_in_contact():
    dm = DistanceMatrix.from_points([(0.0, 0.0, 0.0), None, (1.0, 0.0, 0.0)])
    raster = render(dm, 100.0)
    # residue 1 only touches itself: dots (0,1) and (1,0) unset, diagonal set
    code = raster.code(0, 0)
    assert code & DOT_WEIGHTS[1][0] == 0
    assert code & DOT_WEIGHTS[0][1] == 0
    assert code & DOT_WEIGHTS[1][1]


def test_checkerboard():
    assert is_light_cell(0, 0)
    assert not is_light_cell(0, 10)
    assert not is_light_cell(5, 0)
    assert is_light_cell(5, 10)
    assert is_light_cell(9, 19)
    assert is_light_cell(10, 20)
