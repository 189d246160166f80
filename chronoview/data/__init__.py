"""
Data layer for the timeline: event records, dataset loading and the
category registry.
"""

from .event_loader import Event, parse_events, load_events
from .category_registry import CategoryRegistry, CategoryStyle

__all__ = ['Event', 'parse_events', 'load_events', 'CategoryRegistry', 'CategoryStyle']
