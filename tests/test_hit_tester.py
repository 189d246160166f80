"""Tests for resolving pointer positions to events."""

import pytest

from chronoview.interaction.hit_tester import HitTester
from chronoview.interaction.view_state import visible_placements
from chronoview.rendering.event_layout import layout_event
from tests.helpers import make_event


def test_every_drawn_event_is_hit_at_its_centre(sample_events, make_state, zoom):
    state = make_state(sample_events)
    tester = HitTester(sample_events)

    placements = visible_placements(sample_events, state)
    assert placements
    for placement in placements:
        assert tester.hit_test(placement.x, placement.y, state) == placement.event


def test_exact_hit_in_a_dense_dataset(make_state, zoom):
    events = [make_event(year, title=f"Event {year}", significance=5)
              for year in range(-3000, 2000, 20)]
    state = make_state(events)
    tester = HitTester(events)

    for event in events[::17]:
        placement = layout_event(event, zoom)
        if 0 <= placement.x <= zoom.width:
            assert tester.hit_test(placement.x, placement.y, state) == event


def test_empty_area_misses(sample_events, make_state):
    state = make_state(sample_events)
    tester = HitTester(sample_events)
    assert tester.hit_test(5, 5, state) is None


def test_hit_radius_includes_tolerance(make_state, zoom):
    event = make_event(1000, significance=5)
    state = make_state([event])
    tester = HitTester([event])
    placement = layout_event(event, zoom)
    reach = placement.radius + HitTester.HIT_TOLERANCE

    assert tester.hit_test(placement.x + reach - 0.5, placement.y, state) == event
    assert tester.hit_test(placement.x + reach + 0.5, placement.y, state) is None


def test_identical_positions_go_to_first_in_dataset(make_state):
    first = make_event(1500, title="Twin", significance=4, category="politics")
    second = make_event(1500, title="Twin", significance=4, category="war")
    events = [first, second]
    state = make_state(events)

    assert HitTester(events).hit_test(*_centre(first, state), state) == first
    assert HitTester(events[::-1]).hit_test(*_centre(first, state), state) == second


def test_nearest_event_wins(make_state, zoom):
    left = make_event(1500, title="Same", significance=5)
    right = make_event(1504, title="Same", significance=5, category="war")
    state = make_state([left, right])
    tester = HitTester([left, right])

    right_x, y = _centre(right, state)
    assert tester.hit_test(right_x + 1, y, state) == right


def test_filtered_events_cannot_be_hit(make_state, zoom):
    event = make_event(1000, significance=5, category="war")
    state = make_state([event], active_categories={"politics"})
    assert HitTester([event]).hit_test(*_centre(event, state), state) is None


@pytest.mark.parametrize("significance, hittable", [(1, False), (2, False), (3, True)])
def test_level_of_detail_applies(make_state, significance, hittable):
    event = make_event(1000, significance=significance)
    state = make_state([event])
    hit = HitTester([event]).hit_test(*_centre(event, state), state)
    assert (hit == event) is hittable


def _centre(event, state):
    placement = layout_event(event, state.zoom)
    return placement.x, placement.y
