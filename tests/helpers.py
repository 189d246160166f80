"""Shared helpers for building test events."""

from chronoview.data.event_loader import Event


def make_event(year, title="Event", significance=3, category="politics", description=""):
    return Event(year=year, title=title, description=description,
                 significance=significance, category=category)
