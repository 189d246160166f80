"""
Chronoview - Interactive Event Timeline

This package renders a fixed dataset of dated events as a pannable, zoomable
and filterable timeline. Significance-based level of detail keeps the view
readable when zoomed out, and a deterministic layout keeps every event at the
same place across redraws.
"""

__version__ = "1.0.0"
__author__ = "Chronoview Development Team"

from .data.event_loader import Event, load_events
from .data.category_registry import CategoryRegistry
from .timeline_canvas import TimelineCanvas

__all__ = ['Event', 'load_events', 'CategoryRegistry', 'TimelineCanvas']
