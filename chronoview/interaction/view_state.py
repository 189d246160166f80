"""
View State - Mutable view state owned by the interaction controller.

The controller is the only writer. The renderer and hit-tester receive the
state on every call and only read it.
"""

from dataclasses import dataclass, field
from typing import Optional, Set, Tuple

from chronoview.data.event_loader import Event
from chronoview.rendering.event_layout import layout_visible
from chronoview.rendering.viewport_optimizer import ViewportOptimizer
from chronoview.rendering.zoom_manager import ZoomManager


@dataclass
class ViewState:
    """
    Everything a frame depends on besides the dataset.

    Attributes:
        zoom: Viewport transform and logical canvas size
        active_categories: Categories switched on (never empty)
        hovered: Event under the pointer, if any
        selected: Event chosen by the last click, if any
        pointer: Last pointer position over an event, for tooltip placement
        device_pixel_ratio: Backing buffer pixels per logical pixel
    """
    zoom: ZoomManager
    active_categories: Set[str] = field(default_factory=set)
    hovered: Optional[Event] = None
    selected: Optional[Event] = None
    pointer: Optional[Tuple[float, float]] = None
    device_pixel_ratio: float = 1.0

    def is_emphasized(self, event):
        """True if this exact record is hovered or selected; equal duplicates are distinct."""
        return event is self.hovered or event is self.selected

    def backing_size(self):
        """
        Size of the raster backing buffer in device pixels.

        Returns:
            tuple: (width, height) as ints
        """
        ratio = self.device_pixel_ratio
        return (int(round(self.zoom.width * ratio)), int(round(self.zoom.height * ratio)))


def visible_placements(events, state, optimizer=None):
    """
    Filter and place the events of one frame.

    The renderer and the hit-tester both go through this function so they
    always agree on what is on screen and where.

    Args:
        events (list): Full dataset in dataset order
        state (ViewState): Current view state
        optimizer (ViewportOptimizer): Optional optimizer that keeps frame stats

    Returns:
        list: EventPlacement objects in dataset order
    """
    optimizer = optimizer or ViewportOptimizer()
    filtered = optimizer.visible_events(events, state.active_categories, state.zoom.scale)
    return layout_visible(filtered, state.zoom, optimizer)
