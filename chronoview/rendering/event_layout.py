"""
Event Layout - Deterministic screen placement of timeline events.

Positions are recomputed on every frame and never cached. Vertical jitter
comes from a hash over stable event attributes instead of a random number
generator, so the same event at the same canvas height always lands on the
same pixel across redraws, resizes and hit-tests.
"""

from dataclasses import dataclass

from chronoview.data.event_loader import Event, MAX_SIGNIFICANCE
from chronoview.rendering.viewport_optimizer import ViewportOptimizer

# Jitter hash: seed = year * YEAR_MULTIPLIER + code point of the title's first character
YEAR_MULTIPLIER = 31
JITTER_BUCKETS = 100
JITTER_AMPLITUDE = 0.6

# Low-significance events are pushed this much further from the axis
SIGNIFICANCE_OFFSET = 0.2

# Vertical spread: fraction of the canvas height, capped in pixels
SPREAD_RATIO = 0.35
MAX_SPREAD = 200

# Dot radius: (BASE + significance * PER_SIGNIFICANCE) * clamp(k * ZOOM_RATIO)
BASE_RADIUS = 3
RADIUS_PER_SIGNIFICANCE = 3.5
RADIUS_ZOOM_RATIO = 0.5
MIN_RADIUS_ZOOM = 0.5
MAX_RADIUS_ZOOM = 2.0


@dataclass(frozen=True)
class EventPlacement:
    """Screen position and dot radius of one event in one frame."""
    event: Event
    x: float
    y: float
    radius: float


def jitter_bucket(event):
    """
    Hash an event into [0, JITTER_BUCKETS).

    Python's modulo is non-negative for a positive divisor, so BC years fold
    into the same range as AD years.
    """
    first_char = ord(event.title[0]) if event.title else 0
    return (event.year * YEAR_MULTIPLIER + first_char) % JITTER_BUCKETS


def vertical_offset(event, height):
    """
    Signed distance of an event from the centre axis.

    Args:
        event (Event): Event to place
        height (float): Logical canvas height

    Returns:
        float: Offset in pixels (negative is above the axis)
    """
    jitter = (jitter_bucket(event) / JITTER_BUCKETS - 0.5) * JITTER_AMPLITUDE
    emphasis = ((MAX_SIGNIFICANCE - event.significance) / MAX_SIGNIFICANCE) * SIGNIFICANCE_OFFSET
    direction = -1.0 if jitter < 0 else 1.0
    spread = min(height * SPREAD_RATIO, MAX_SPREAD)
    return (jitter + direction * emphasis) * spread


def event_y(event, height):
    return height / 2 + vertical_offset(event, height)


def event_radius(significance, scale):
    """
    Dot radius for a significance at a zoom scale.

    Args:
        significance (int): Event significance (1-5)
        scale (float): Zoom scale k

    Returns:
        float: Radius in logical pixels
    """
    zoom_factor = max(MIN_RADIUS_ZOOM, min(MAX_RADIUS_ZOOM, scale * RADIUS_ZOOM_RATIO))
    return (BASE_RADIUS + significance * RADIUS_PER_SIGNIFICANCE) * zoom_factor


def layout_event(event, zoom_manager):
    """
    Place a single event.

    Args:
        event (Event): Event to place
        zoom_manager (ZoomManager): Current viewport transform and canvas size

    Returns:
        EventPlacement: Screen position and radius
    """
    return EventPlacement(
        event=event,
        x=zoom_manager.to_screen_x(event.year),
        y=event_y(event, zoom_manager.height),
        radius=event_radius(event.significance, zoom_manager.scale)
    )


def layout_visible(events, zoom_manager, optimizer=None):
    """
    Place filtered events and drop those culled off-screen.

    Args:
        events (list): Events that passed the dataset filter, in dataset order
        zoom_manager (ZoomManager): Current viewport transform and canvas size
        optimizer (ViewportOptimizer): Optional, receives the culled count

    Returns:
        list: EventPlacement objects in dataset order
    """
    placements = []
    culled = 0
    for event in events:
        placement = layout_event(event, zoom_manager)
        if ViewportOptimizer.is_on_screen(placement.x, zoom_manager.width):
            placements.append(placement)
        else:
            culled += 1

    if optimizer is not None:
        optimizer.record_culled(culled)
    return placements
