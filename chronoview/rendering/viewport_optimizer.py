"""
Viewport Optimizer - Decides which events take part in a frame.

This module provides the ViewportOptimizer class which implements:
- Level-of-detail filtering (significance threshold by zoom scale)
- Category filtering
- Viewport culling (skip events far outside the screen)
- Per-frame statistics for debug logging
"""

import logging

logger = logging.getLogger(__name__)


class ViewportOptimizer:
    """
    Filters the dataset down to the events visible in the current frame.

    Zoomed out, only the most significant events are kept to prevent
    overdraw; zooming in progressively reveals lower-significance events.
    """

    # (scale upper bound, minimum significance) pairs, checked in order
    LOD_BREAKPOINTS = (
        (0.5, 5),
        (1.0, 4),
        (2.0, 3),
        (5.0, 2),
    )
    LOD_FULL_DETAIL = 1

    # Pixels beyond each screen edge that still count as on-screen
    CULL_TOLERANCE = 50

    def __init__(self):
        """Initialize the viewport optimizer."""
        self.total_events = 0
        self.visible_count = 0
        self.culled_count = 0
        self.current_min_significance = self.LOD_FULL_DETAIL

    @classmethod
    def min_significance(cls, scale):
        """
        Get the lowest significance shown at a zoom scale.

        Args:
            scale (float): Zoom scale k

        Returns:
            int: Minimum significance (5 when zoomed far out, 1 when zoomed in)
        """
        for upper_bound, significance in cls.LOD_BREAKPOINTS:
            if scale < upper_bound:
                return significance
        return cls.LOD_FULL_DETAIL

    def visible_events(self, events, active_categories, scale):
        """
        Filter events by category and level of detail.

        Dataset order is preserved.

        Args:
            events (list): All events, in dataset order
            active_categories (set): Categories currently switched on
            scale (float): Zoom scale k

        Returns:
            list: Events passing both filters
        """
        threshold = self.min_significance(scale)
        visible = [
            event for event in events
            if event.category in active_categories and event.significance >= threshold
        ]

        self.total_events = len(events)
        self.visible_count = len(visible)
        self.current_min_significance = threshold
        return visible

    @classmethod
    def is_on_screen(cls, x, width):
        """
        Check whether a screen x is within the culling tolerance.

        Args:
            x (float): Screen x in logical pixels
            width (float): Logical canvas width

        Returns:
            bool: True if the position should be drawn and hit-tested
        """
        return -cls.CULL_TOLERANCE <= x <= width + cls.CULL_TOLERANCE

    def record_culled(self, count):
        """Record how many filtered events were culled off-screen this frame."""
        self.culled_count = count

    def get_stats(self):
        """
        Get filtering statistics for the last frame.

        Returns:
            dict: total, visible, culled counts and the active significance threshold
        """
        return {
            'total': self.total_events,
            'visible': self.visible_count,
            'culled': self.culled_count,
            'min_significance': self.current_min_significance
        }

    def log_stats(self):
        stats = self.get_stats()
        logger.debug(
            f"Frame: {stats['visible']}/{stats['total']} events pass filters, "
            f"{stats['culled']} culled, min significance {stats['min_significance']}"
        )
