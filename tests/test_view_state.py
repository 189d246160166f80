"""Tests for the shared view state."""

from chronoview.interaction.view_state import visible_placements
from tests.helpers import make_event


def test_equal_duplicates_are_emphasized_separately(make_state):
    first = make_event(1000, title="Dup", significance=5)
    second = make_event(1000, title="Dup", significance=5)
    state = make_state([first, second], hovered=first)

    assert first == second
    assert state.is_emphasized(first)
    assert not state.is_emphasized(second)


def test_selection_counts_as_emphasis(make_state):
    event = make_event(1000)
    assert make_state([event], selected=event).is_emphasized(event)
    assert not make_state([event]).is_emphasized(event)


def test_backing_size_uses_device_pixel_ratio(make_state):
    assert make_state([]).backing_size() == (1200, 600)
    assert make_state([], device_pixel_ratio=1.5).backing_size() == (1800, 900)


def test_visible_placements_keep_dataset_order(make_state, sample_events):
    placements = visible_placements(sample_events, make_state(sample_events))
    titles = [p.event.title for p in placements]
    assert titles == [e.title for e in sample_events if e.significance >= 3]
