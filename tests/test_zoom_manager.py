"""
Zoom Manager Tests

Covers the year-to-screen mapping, scale clamping, resize behaviour,
visible domain and tick calculations, and the gesture helpers.
"""

import math

import pytest

from chronoview.rendering.zoom_manager import ZoomManager, ZoomTransform


class TestBaseMapping:

    def test_identity_maps_domain_onto_margins(self, zoom):
        assert zoom.to_screen_x(-3200) == pytest.approx(60)
        assert zoom.to_screen_x(2030) == pytest.approx(1140)

    def test_transform_is_applied_after_base_scale(self, zoom):
        zoom.set_transform(2.0, -300)
        base = zoom.base_x(0)
        assert zoom.to_screen_x(0) == pytest.approx(2.0 * base - 300)

    @pytest.mark.parametrize("k, tx", [(0.3, 0), (1, 0), (2.5, -800), (100, -50000), (7, 123.4)])
    def test_mapping_is_strictly_increasing(self, zoom, k, tx):
        zoom.set_transform(k, tx)
        years = [-3200, -776, -1, 0, 1, 1492, 1971, 1972, 2030]
        xs = [zoom.to_screen_x(y) for y in years]
        assert all(a < b for a, b in zip(xs, xs[1:]))

    def test_invert_round_trips(self, zoom):
        zoom.set_transform(3.7, -1234.5)
        for year in (-3000, -776, 0, 1971):
            assert zoom.invert(zoom.to_screen_x(year)) == pytest.approx(year)

    def test_rejects_empty_domain(self):
        with pytest.raises(ValueError):
            ZoomManager(domain=(2000, 2000))


class TestScaleClamp:

    def test_scale_above_extent_is_clamped(self, zoom):
        zoom.set_transform(500, 0)
        assert zoom.scale == 100

    def test_scale_below_extent_is_clamped(self, zoom):
        zoom.set_transform(0.01, 0)
        assert zoom.scale == pytest.approx(0.3)

    def test_translation_is_unconstrained(self, zoom):
        zoom.set_transform(1, -1e7)
        assert zoom.translate_x == -1e7

    def test_non_finite_values_are_ignored(self, zoom):
        zoom.set_transform(2, 50)
        zoom.set_transform(math.nan, math.inf)
        assert zoom.transform == ZoomTransform(2, 50)

    def test_set_transform_reports_change(self, zoom):
        assert zoom.set_transform(2, 10) is True
        assert zoom.set_transform(2, 10) is False

    def test_can_zoom_flags_follow_extent(self, zoom):
        zoom.set_transform(100, 0)
        assert not zoom.can_zoom_in()
        assert zoom.can_zoom_out()
        zoom.set_transform(0.3, 0)
        assert zoom.can_zoom_in()
        assert not zoom.can_zoom_out()


class TestResize:

    def test_resize_keeps_transform(self, zoom):
        zoom.set_transform(4, -900)
        zoom.resize(800, 300)
        assert zoom.transform == ZoomTransform(4, -900)
        assert (zoom.width, zoom.height) == (800, 300)

    def test_resize_recomputes_base_range(self, zoom):
        zoom.resize(800, 300)
        assert zoom.to_screen_x(-3200) == pytest.approx(60)
        assert zoom.to_screen_x(2030) == pytest.approx(740)

    def test_narrow_canvas_stays_invertible(self, zoom):
        zoom.resize(100, 100)
        assert math.isfinite(zoom.invert(50))


class TestTicks:

    @pytest.mark.parametrize("span, interval", [
        (4000, 1000),
        (3001, 1000),
        (3000, 500),
        (1500, 500),
        (1000, 100),
        (600, 100),
        (500, 50),
        (101, 50),
        (100, 10),
        (51, 10),
        (50, 5),
        (40, 5),
    ])
    def test_tick_interval_table(self, span, interval):
        assert ZoomManager.tick_interval(span) == interval

    def test_visible_span_shrinks_with_zoom(self, zoom):
        assert zoom.visible_span() == pytest.approx(5230)
        zoom.set_transform(2, 0)
        assert zoom.visible_span() == pytest.approx(2615)

    def test_identity_ticks_are_thousands(self, zoom):
        assert zoom.ticks(tolerance=50) == [-3000, -2000, -1000, 0, 1000, 2000]

    def test_zoomed_ticks_use_finer_interval(self, zoom):
        # Full zoom shows about 52 years
        zoom.set_transform(*_zoom_about(zoom, 1900, 100))
        ticks = zoom.ticks()
        assert ticks
        assert all(year % 10 == 0 for year in ticks)
        assert all(b - a == 10 for a, b in zip(ticks, ticks[1:]))
        assert ticks[0] <= 1900 <= ticks[-1]


class TestGestures:

    def test_zoom_at_keeps_year_under_pointer(self, zoom):
        before = zoom.invert(400)
        transform = zoom.zoom_at(400, 3)
        zoom.set_transform(transform.k, transform.x)
        assert zoom.scale == pytest.approx(3)
        assert zoom.invert(400) == pytest.approx(before)

    def test_zoom_at_clamps_before_anchoring(self, zoom):
        zoom.set_transform(80, -5000)
        before = zoom.invert(300)
        transform = zoom.zoom_at(300, 10)
        assert transform.k == 100
        zoom.set_transform(transform.k, transform.x)
        assert zoom.invert(300) == pytest.approx(before)

    def test_gesture_helpers_do_not_mutate(self, zoom):
        zoom.zoom_at(100, 2)
        zoom.pan_by(50)
        zoom.zoom_in()
        zoom.zoom_out()
        assert zoom.transform == ZoomTransform()

    def test_pan_by_shifts_translation(self, zoom):
        zoom.set_transform(2, 10)
        assert zoom.pan_by(-35) == ZoomTransform(2, -25)

    def test_zoom_in_and_out_are_inverse(self, zoom):
        transform = zoom.zoom_in()
        zoom.set_transform(transform.k, transform.x)
        transform = zoom.zoom_out()
        zoom.set_transform(transform.k, transform.x)
        assert zoom.scale == pytest.approx(1)
        assert zoom.translate_x == pytest.approx(0, abs=1e-9)

    def test_reset_returns_identity(self, zoom):
        zoom.set_transform(9, 400)
        assert zoom.reset() == ZoomTransform(1.0, 0.0)


def _zoom_about(zoom, year, k):
    """Transform that shows `year` at the canvas centre with scale k."""
    return k, zoom.width / 2 - k * zoom.base_x(year)
