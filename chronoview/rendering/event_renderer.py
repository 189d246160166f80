"""
Event Renderer - Draws the timeline frame onto a raster surface.

This module provides the EventRenderer class which paints, in order:
- The background and the horizontal time axis
- Adaptive tick marks and year labels
- Event glows, dots and title/year labels

Drawing happens in logical pixels. When the target image has a device pixel
ratio above 1 Qt scales the painter transparently, so layout and hit-testing
never see device pixels.
"""

import logging

from PyQt5.QtCore import Qt, QPointF, QRectF
from PyQt5.QtGui import (QBrush, QColor, QFont, QFontMetricsF, QImage, QPainter,
                         QPen, QRadialGradient)

from chronoview.interaction.view_state import visible_placements
from chronoview.rendering.viewport_optimizer import ViewportOptimizer
from chronoview.styles import Colors, TimelineStyles
from chronoview.utils.error_handler import RenderError
from chronoview.utils.tooltip_manager import format_year

logger = logging.getLogger(__name__)


class EventRenderer:
    """
    Stateless painter for timeline frames.

    The renderer only reads the view state it is given; it never changes
    hover, selection, filters or the transform.
    """

    # Glow around significant or emphasized dots
    GLOW_MIN_SIGNIFICANCE = 4
    GLOW_RADIUS_SCALE = 2.0
    GLOW_RADIUS_SCALE_EMPHASIZED = 3.0
    GLOW_OPACITY = 0.15
    GLOW_OPACITY_EMPHASIZED = 0.3

    # Dot opacity: BASE + significance * STEP
    DOT_OPACITY_BASE = 0.6
    DOT_OPACITY_STEP = 0.08

    # Gap between a dot and the year label above it
    LABEL_GAP = 4
    TICK_LABEL_GAP = 4

    def __init__(self, category_registry, background=Colors.BG_PRIMARY):
        """
        Initialize the event renderer.

        Args:
            category_registry (CategoryRegistry): Category colors
            background (str): Canvas background color
        """
        self.category_registry = category_registry
        self.background = QColor(background)
        self.optimizer = ViewportOptimizer()

        self.tick_font = QFont(TimelineStyles.FONT_FAMILY, TimelineStyles.TICK_FONT_SIZE)
        self.title_font = QFont(TimelineStyles.FONT_FAMILY, TimelineStyles.TITLE_FONT_SIZE)
        self.title_font_emphasized = QFont(
            TimelineStyles.FONT_FAMILY, TimelineStyles.TITLE_FONT_SIZE_EMPHASIZED, QFont.Bold
        )
        self.year_font = QFont(TimelineStyles.FONT_FAMILY, TimelineStyles.YEAR_FONT_SIZE)
        self.year_font_emphasized = QFont(
            TimelineStyles.FONT_FAMILY, TimelineStyles.YEAR_FONT_SIZE_EMPHASIZED
        )

    # ---- Emphasis rules ----

    @classmethod
    def should_show_glow(cls, event, emphasized):
        return emphasized or event.significance >= cls.GLOW_MIN_SIGNIFICANCE

    @staticmethod
    def should_show_label(event, scale, emphasized):
        """
        Decide whether an event gets a title and year label.

        Args:
            event (Event): Event being drawn
            scale (float): Zoom scale k
            emphasized (bool): Event is hovered or selected

        Returns:
            bool: True if labels should be drawn
        """
        return (
            (event.significance >= 4 and scale > 1)
            or (event.significance >= 3 and scale > 3)
            or emphasized
        )

    @classmethod
    def dot_opacity(cls, event, emphasized):
        if emphasized:
            return 1.0
        return cls.DOT_OPACITY_BASE + event.significance * cls.DOT_OPACITY_STEP

    # ---- Surfaces ----

    @staticmethod
    def create_backing_image(state):
        """
        Allocate a backing buffer for the current canvas size.

        Args:
            state (ViewState): Provides logical size and device pixel ratio

        Returns:
            QImage: Buffer sized in device pixels (null if the canvas is empty)
        """
        width, height = state.backing_size()
        if width <= 0 or height <= 0:
            return QImage()

        image = QImage(width, height, QImage.Format_ARGB32_Premultiplied)
        image.setDevicePixelRatio(state.device_pixel_ratio)
        return image

    def render_to_image(self, image, events, state):
        """
        Render a full frame into an image.

        Args:
            image (QImage): Target buffer
            events (list): Full dataset in dataset order
            state (ViewState): Current view state

        Returns:
            bool: True if a frame was drawn, False for a null image

        Raises:
            RenderError: If a painter cannot be opened on a valid image
        """
        if image is None or image.isNull():
            logger.debug("Skipping render: no backing image")
            return False

        image.setDevicePixelRatio(state.device_pixel_ratio)
        painter = QPainter()
        if not painter.begin(image):
            raise RenderError(
                "Could not open a painter on the timeline buffer",
                details=f"image {image.width()}x{image.height()} format {image.format()}"
            )
        try:
            return self.render(painter, events, state)
        finally:
            painter.end()

    def render(self, painter, events, state):
        """
        Render a full frame with an already active painter.

        Args:
            painter (QPainter): Active painter, logical coordinates
            events (list): Full dataset in dataset order
            state (ViewState): Current view state

        Returns:
            bool: True if a frame was drawn, False if the painter is unusable
        """
        if painter is None or not painter.isActive():
            logger.debug("Skipping render: painter is not active")
            return False

        zoom = state.zoom
        painter.save()
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setRenderHint(QPainter.TextAntialiasing, True)

        # Clear
        painter.fillRect(QRectF(0, 0, zoom.width, zoom.height), self.background)

        axis_y = zoom.height / 2
        self._draw_axis(painter, zoom, axis_y)
        self._draw_ticks(painter, zoom, axis_y)

        placements = visible_placements(events, state, self.optimizer)

        # Emphasized events last so neighbours never cover them
        normal = [p for p in placements if not state.is_emphasized(p.event)]
        emphasized = [p for p in placements if state.is_emphasized(p.event)]
        for placement in normal:
            self._draw_event(painter, placement, zoom.scale, False)
        for placement in emphasized:
            self._draw_event(painter, placement, zoom.scale, True)

        painter.restore()
        self.optimizer.log_stats()
        return True

    # ---- Axis ----

    def _draw_axis(self, painter, zoom, axis_y):
        painter.setPen(QPen(QColor(Colors.AXIS_LINE), TimelineStyles.AXIS_LINE_WIDTH))
        painter.drawLine(QPointF(0, axis_y), QPointF(zoom.width, axis_y))

    def _draw_ticks(self, painter, zoom, axis_y):
        """Draw tick marks and year labels below the axis."""
        tick_pen = QPen(QColor(Colors.AXIS_TICK), 1)
        text_pen = QPen(QColor(Colors.TEXT_MUTED))
        painter.setFont(self.tick_font)
        metrics = QFontMetricsF(self.tick_font)

        tick_bottom = axis_y + TimelineStyles.TICK_LENGTH
        label_baseline = tick_bottom + self.TICK_LABEL_GAP + metrics.ascent()

        for year in zoom.ticks(tolerance=ViewportOptimizer.CULL_TOLERANCE):
            x = zoom.to_screen_x(year)
            if not ViewportOptimizer.is_on_screen(x, zoom.width):
                continue

            painter.setPen(tick_pen)
            painter.drawLine(QPointF(x, axis_y), QPointF(x, tick_bottom))

            label = format_year(year)
            painter.setPen(text_pen)
            painter.drawText(QPointF(x - metrics.horizontalAdvance(label) / 2, label_baseline), label)

    # ---- Events ----

    def _event_color(self, event, emphasized):
        if emphasized:
            return QColor(Colors.HIGHLIGHT)
        color = QColor(self.category_registry.color_for(event.category))
        if not color.isValid():
            # Registry entries are user configuration; bad color strings fall back
            color = QColor(self.category_registry.DEFAULT_COLOR)
        return color

    def _draw_event(self, painter, placement, scale, emphasized):
        """
        Draw one event: glow, dot, then labels.

        Args:
            painter (QPainter): Active painter
            placement (EventPlacement): Position and radius
            scale (float): Zoom scale k
            emphasized (bool): Event is hovered or selected
        """
        event = placement.event
        center = QPointF(placement.x, placement.y)
        color = self._event_color(event, emphasized)

        if self.should_show_glow(event, emphasized):
            self._draw_glow(painter, center, placement.radius, color, emphasized)

        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(color))
        painter.setOpacity(self.dot_opacity(event, emphasized))
        painter.drawEllipse(center, placement.radius, placement.radius)
        painter.setOpacity(1.0)

        if self.should_show_label(event, scale, emphasized):
            self._draw_labels(painter, placement, emphasized)

    def _draw_glow(self, painter, center, radius, color, emphasized):
        if emphasized:
            glow_radius = radius * self.GLOW_RADIUS_SCALE_EMPHASIZED
            opacity = self.GLOW_OPACITY_EMPHASIZED
        else:
            glow_radius = radius * self.GLOW_RADIUS_SCALE
            opacity = self.GLOW_OPACITY

        inner = QColor(color)
        inner.setAlphaF(opacity)
        outer = QColor(color)
        outer.setAlphaF(0.0)

        gradient = QRadialGradient(center, glow_radius)
        gradient.setColorAt(0.0, inner)
        gradient.setColorAt(1.0, outer)

        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(gradient))
        painter.drawEllipse(center, glow_radius, glow_radius)

    def _draw_labels(self, painter, placement, emphasized):
        """Draw the title with the formatted year beneath it, both above the dot."""
        title_font = self.title_font_emphasized if emphasized else self.title_font
        year_font = self.year_font_emphasized if emphasized else self.year_font
        title_metrics = QFontMetricsF(title_font)
        year_metrics = QFontMetricsF(year_font)

        year_text = format_year(placement.event.year)
        year_baseline = placement.y - placement.radius - self.LABEL_GAP - year_metrics.descent()
        title_baseline = year_baseline - year_metrics.ascent() - title_metrics.descent()

        painter.setFont(title_font)
        painter.setPen(QPen(QColor(Colors.HIGHLIGHT if emphasized else Colors.TEXT_PRIMARY)))
        painter.drawText(
            QPointF(placement.x - title_metrics.horizontalAdvance(placement.event.title) / 2, title_baseline),
            placement.event.title
        )

        painter.setFont(year_font)
        painter.setPen(QPen(QColor(Colors.TEXT_SECONDARY)))
        painter.drawText(
            QPointF(placement.x - year_metrics.horizontalAdvance(year_text) / 2, year_baseline),
            year_text
        )
