"""
Zoom Manager - Owns the viewport transform for the timeline.

This module provides the ZoomManager class which manages:
- The base year-to-pixel linear scale (fixed domain, margin-inset range)
- The current zoom transform (scale k, horizontal translation)
- Scale clamping to the allowed zoom extent
- Visible domain and axis tick calculations
- Gesture helpers that derive a new transform (wheel zoom, drag pan)
"""

import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoomTransform:
    """Affine horizontal transform: screen_x = k * base_x + x."""
    k: float = 1.0
    x: float = 0.0


class ZoomManager:
    """
    Manages the affine mapping from years to screen-space x.

    The base scale maps the fixed year domain onto the canvas width minus a
    margin on each side. The zoom transform then scales and translates that
    base position. Scale is always kept within [MIN_SCALE, MAX_SCALE];
    translation is unconstrained so the user can pan freely.

    Gesture helpers (zoom_at, pan_by, zoom_in, zoom_out, reset) never mutate
    the manager. They return the transform a gesture would produce, which the
    interaction controller then applies through set_transform.
    """

    # Zoom extent
    MIN_SCALE = 0.3
    MAX_SCALE = 100.0

    # Screen margin on each side of the base range (logical pixels)
    MARGIN = 60

    # Fixed logical domain (years)
    DOMAIN_START = -3200
    DOMAIN_END = 2030

    # Factor used by keyboard / button zoom
    ZOOM_STEP = 2.0

    # (span threshold, tick interval) pairs, checked in order
    TICK_INTERVALS = (
        (3000, 1000),
        (1000, 500),
        (500, 100),
        (100, 50),
        (50, 10),
    )
    MIN_TICK_INTERVAL = 5

    # Safety limit on generated ticks per frame
    MAX_TICKS = 500

    def __init__(self, width=1200, height=600, margin=MARGIN,
                 domain=(DOMAIN_START, DOMAIN_END),
                 scale_extent=(MIN_SCALE, MAX_SCALE)):
        """
        Initialize the ZoomManager with the identity transform.

        Args:
            width (float): Logical canvas width in pixels
            height (float): Logical canvas height in pixels
            margin (float): Screen margin on each side of the base range
            domain (tuple): (first_year, last_year) of the base scale
            scale_extent (tuple): (min_scale, max_scale)

        Raises:
            ValueError: If the domain or scale extent is empty
        """
        if domain[0] >= domain[1]:
            raise ValueError(f"Domain start must be before domain end, got {domain}")
        if not 0 < scale_extent[0] <= scale_extent[1]:
            raise ValueError(f"Invalid scale extent {scale_extent}")

        self._margin = float(margin)
        self._domain = (float(domain[0]), float(domain[1]))
        self._min_scale = float(scale_extent[0])
        self._max_scale = float(scale_extent[1])
        self._width = float(width)
        self._height = float(height)
        self._transform = ZoomTransform()

    @classmethod
    def from_config(cls, view_config):
        """
        Create a ZoomManager from a ViewConfig.

        Args:
            view_config (ViewConfig): Loaded view configuration

        Returns:
            ZoomManager: Manager using the configured margin, domain and extent
        """
        settings = view_config.get_viewport_settings()
        width, height = view_config.get_canvas_size()
        return cls(
            width=width,
            height=height,
            margin=settings['margin'],
            domain=(settings['domain_start'], settings['domain_end']),
            scale_extent=(settings['min_scale'], settings['max_scale'])
        )

    @property
    def scale(self):
        """Current zoom scale k."""
        return self._transform.k

    @property
    def translate_x(self):
        """Current horizontal translation in pixels."""
        return self._transform.x

    @property
    def transform(self):
        return self._transform

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def margin(self):
        return self._margin

    @property
    def domain(self):
        return self._domain

    @property
    def scale_extent(self):
        return (self._min_scale, self._max_scale)

    def clamp_scale(self, k):
        """
        Clamp a scale to the zoom extent.

        Args:
            k (float): Requested scale

        Returns:
            float: Scale within [min_scale, max_scale]
        """
        return max(self._min_scale, min(self._max_scale, float(k)))

    def set_transform(self, k, translate_x):
        """
        Apply a new zoom transform.

        Non-finite values are ignored and the previous value kept.

        Args:
            k (float): Requested scale (clamped to the zoom extent)
            translate_x (float): Horizontal translation in pixels

        Returns:
            bool: True if the stored transform changed
        """
        new_k = self._transform.k
        new_x = self._transform.x

        if math.isfinite(k):
            new_k = self.clamp_scale(k)
        else:
            logger.warning(f"Ignoring non-finite zoom scale: {k}")

        if math.isfinite(translate_x):
            new_x = float(translate_x)
        else:
            logger.warning(f"Ignoring non-finite zoom translation: {translate_x}")

        new_transform = ZoomTransform(new_k, new_x)
        if new_transform == self._transform:
            return False

        self._transform = new_transform
        return True

    def resize(self, width, height):
        """
        Update the logical canvas size.

        The base range is recomputed from the new width. The zoom transform is
        left untouched so the current zoom survives a resize.

        Args:
            width (float): New logical width
            height (float): New logical height

        Returns:
            bool: True if the size changed
        """
        width = max(0.0, float(width))
        height = max(0.0, float(height))
        if width == self._width and height == self._height:
            return False

        self._width = width
        self._height = height
        return True

    def _range_width(self):
        # Keep the base scale invertible on canvases narrower than both margins
        return max(1.0, self._width - 2 * self._margin)

    def base_x(self, year):
        """
        Map a year onto the untransformed base range.

        Args:
            year (float): Year in the logical domain

        Returns:
            float: Base x position in pixels
        """
        start, end = self._domain
        return self._margin + (year - start) / (end - start) * self._range_width()

    def to_screen_x(self, year):
        """
        Map a year to screen-space x under the current transform.

        Args:
            year (float): Year in the logical domain

        Returns:
            float: Screen x in logical pixels
        """
        return self._transform.k * self.base_x(year) + self._transform.x

    def invert(self, screen_x):
        """
        Map a screen x back to a (fractional) year.

        Args:
            screen_x (float): Screen x in logical pixels

        Returns:
            float: Year under that screen position
        """
        start, end = self._domain
        base = (screen_x - self._transform.x) / self._transform.k
        return start + (base - self._margin) / self._range_width() * (end - start)

    def visible_domain(self):
        """
        Get the years at the left and right edges of the base range.

        Returns:
            tuple: (first_year, last_year) currently shown between the margins
        """
        return (self.invert(self._margin), self.invert(self._margin + self._range_width()))

    def visible_span(self):
        """
        Get the number of years currently shown between the margins.

        Returns:
            float: Visible domain span in years
        """
        first, last = self.visible_domain()
        return last - first

    @classmethod
    def tick_interval(cls, span):
        """
        Choose a "nice" tick interval for a visible span.

        Args:
            span (float): Visible domain span in years

        Returns:
            int: Years between major ticks
        """
        for threshold, interval in cls.TICK_INTERVALS:
            if span > threshold:
                return interval
        return cls.MIN_TICK_INTERVAL

    def ticks(self, tolerance=0.0):
        """
        Calculate tick years across the screen.

        Args:
            tolerance (float): Extra pixels beyond each screen edge to include

        Returns:
            list: Tick years (ints) in ascending order
        """
        interval = self.tick_interval(self.visible_span())
        first = self.invert(-tolerance)
        last = self.invert(self._width + tolerance)

        ticks = []
        year = int(math.ceil(first / interval)) * interval
        while year <= last and len(ticks) < self.MAX_TICKS:
            ticks.append(year)
            year += interval

        return ticks

    def zoom_at(self, screen_x, factor):
        """
        Get the transform produced by zooming about a screen position.

        The year under screen_x stays under screen_x. The scale is clamped
        before the translation is derived, so zooming past the extent does not
        drift the view.

        Args:
            screen_x (float): Anchor position in logical pixels
            factor (float): Multiplicative zoom factor (>1 zooms in)

        Returns:
            ZoomTransform: Proposed transform
        """
        k = self._transform.k
        new_k = self.clamp_scale(k * factor)
        anchor = (screen_x - self._transform.x) / k
        return ZoomTransform(new_k, screen_x - anchor * new_k)

    def pan_by(self, dx):
        """
        Get the transform produced by dragging horizontally.

        Args:
            dx (float): Horizontal drag distance in logical pixels

        Returns:
            ZoomTransform: Proposed transform
        """
        return ZoomTransform(self._transform.k, self._transform.x + dx)

    def zoom_in(self):
        """Get the transform one zoom step in, about the viewport centre."""
        return self.zoom_at(self._width / 2, self.ZOOM_STEP)

    def zoom_out(self):
        """Get the transform one zoom step out, about the viewport centre."""
        return self.zoom_at(self._width / 2, 1 / self.ZOOM_STEP)

    def reset(self):
        """Get the identity transform."""
        return ZoomTransform()

    def can_zoom_in(self):
        """
        Check if zooming in is possible.

        Returns:
            bool: True if below the maximum scale
        """
        return self._transform.k < self._max_scale

    def can_zoom_out(self):
        """
        Check if zooming out is possible.

        Returns:
            bool: True if above the minimum scale
        """
        return self._transform.k > self._min_scale

    def __repr__(self):
        return (
            f"ZoomManager(k={self._transform.k:.3f}, "
            f"x={self._transform.x:.1f}, "
            f"size={self._width:.0f}x{self._height:.0f})"
        )
