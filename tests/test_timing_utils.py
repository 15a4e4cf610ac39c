"""Tests for performance.timing utilities."""
import time

from performance.timing import TIMINGS, TimingCollector, time_block


def test_time_block_and_snapshot():
    TIMINGS.enabled = True
    TIMINGS.clear()
    with time_block("dummy", items=5):
        time.sleep(0.01)
    snap = TIMINGS.snapshot()
    assert "dummy" in snap
    assert snap["dummy"]["calls"] == 1
    assert snap["dummy"]["total_items"] == 5
    assert snap["dummy"]["total_time"] > 0


def test_disabled_collector_records_nothing():
    collector = TimingCollector(enabled=False)
    collector.add("x", 1.0, items=3)
    assert collector.snapshot() == {}


def test_view_render_is_timed(app_config, line_points):
    from analysis.distance_matrix import DistanceMatrix
    from ui.view import ContactMapView

    TIMINGS.enabled = True
    TIMINGS.clear()
    view = ContactMapView(DistanceMatrix.from_points(line_points(8)), 8.0, app_config)
    view.handle_key(ord("+"))
    snap = TIMINGS.snapshot()
    assert snap["render_raster"]["calls"] == 2
    assert snap["render_raster"]["total_items"] == 128
