"""
Timeline Canvas - Qt widget hosting the interactive timeline.

This module provides the TimelineCanvas class which connects Qt input events
to the interaction controller and shows the frames produced by the event
renderer.

The widget keeps a QImage backing buffer at device resolution. Every state
change renders a full frame into that buffer synchronously; paintEvent only
copies the buffer to the screen.
"""

import logging

from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, pyqtSignal, QPointF
from PyQt5.QtGui import QPainter, QColor, QImage

from chronoview.interaction.controller import (
    InteractionController, PointerMove, PointerClick, PointerLeave, Dismiss,
    ToggleCategory, ShowAllCategories, ZoomTo, Resize
)
from chronoview.rendering.event_renderer import EventRenderer
from chronoview.rendering.zoom_manager import ZoomManager
from chronoview.utils.error_handler import ErrorHandler
from chronoview.utils.view_config import ViewConfig

logger = logging.getLogger(__name__)


class TimelineCanvas(QWidget):
    """
    Interactive timeline surface.

    Input handling:
    - Mouse move: hover tracking (or panning while the left button drags)
    - Left click without drag: select the event under the pointer, or clear
      the selection on empty canvas
    - Mouse wheel: zoom about the pointer
    - Esc: dismiss the selection; +/-: zoom in/out; 0: reset zoom

    Signals:
        event_hovered: Hovered event (or None) and pointer position (QPointF or None)
        event_selected: Selected event, or None when the selection is cleared
        categories_changed: Active categories in display order
        transform_changed: Zoom scale and horizontal translation
    """

    event_hovered = pyqtSignal(object, object)
    event_selected = pyqtSignal(object)
    categories_changed = pyqtSignal(list)
    transform_changed = pyqtSignal(float, float)

    # Pixels the pointer may move between press and release and still click
    DRAG_THRESHOLD = 3

    # Wheel zoom: factor = 2 ** (angle_delta * rate); one notch (120) ~ 1.18x
    WHEEL_ZOOM_RATE = 0.002

    MIN_WIDTH = 320
    MIN_HEIGHT = 200

    def __init__(self, events, category_registry, view_config=None, zoom_manager=None, parent=None):
        """
        Initialize the timeline canvas.

        Args:
            events (list): Dataset in display order
            category_registry (CategoryRegistry): Category colors and labels
            view_config (ViewConfig): View settings (defaults if omitted)
            zoom_manager (ZoomManager): Viewport transform (built from config if omitted)
            parent: Parent widget
        """
        super().__init__(parent)

        self.view_config = view_config or ViewConfig()
        self.zoom_manager = zoom_manager or ZoomManager.from_config(self.view_config)
        self.category_registry = category_registry
        self.background = QColor(self.view_config.get_background_color())

        self.event_renderer = EventRenderer(category_registry, self.view_config.get_background_color())
        self.error_handler = ErrorHandler(self)

        self.controller = InteractionController(
            events,
            self.zoom_manager,
            category_registry,
            redraw=self._redraw,
            device_pixel_ratio=self.devicePixelRatioF()
        )
        self.controller.add_hover_listener(self._on_hover_changed)
        self.controller.add_selection_listener(self.event_selected.emit)
        self.controller.add_filter_listener(self.categories_changed.emit)

        # Backing buffer in device pixels
        self._backing = QImage()

        self._setup_interaction()

        width, height = self.view_config.get_canvas_size()
        self.setMinimumSize(self.MIN_WIDTH, self.MIN_HEIGHT)
        self.resize(width, height)

    def _setup_interaction(self):
        """Setup mouse and keyboard interaction."""
        # Enable mouse tracking for hover effects
        self.setMouseTracking(True)

        # Set focus policy for keyboard events
        self.setFocusPolicy(Qt.StrongFocus)

        # Track press/drag state
        self._press_pos = None
        self._last_drag_x = None
        self._is_panning = False

        # The buffer covers the whole widget
        self.setAttribute(Qt.WA_OpaquePaintEvent, True)

        self.setCursor(Qt.OpenHandCursor)

    # ---- Public API ----

    @property
    def events(self):
        return self.controller.events

    def hovered_event(self):
        return self.controller.hovered

    def selected_event(self):
        return self.controller.selected

    def active_categories(self):
        return self.controller.active_categories

    def toggle_category(self, category):
        """
        Toggle a category filter.

        Args:
            category (str): Category key

        Returns:
            bool: False if the toggle was refused (last active category)
        """
        return self.controller.dispatch(ToggleCategory(category))

    def show_all_categories(self):
        self.controller.dispatch(ShowAllCategories())

    def dismiss_selection(self):
        self.controller.dispatch(Dismiss())

    def set_transform(self, k, translate_x):
        """
        Apply a zoom transform (scale is clamped to the zoom extent).

        Args:
            k (float): Zoom scale
            translate_x (float): Horizontal translation in logical pixels
        """
        self.controller.dispatch(ZoomTo(k, translate_x))
        self.transform_changed.emit(self.zoom_manager.scale, self.zoom_manager.translate_x)

    def zoom_in(self):
        """Zoom in one step about the canvas centre."""
        if self.zoom_manager.can_zoom_in():
            self._apply_transform(self.zoom_manager.zoom_in())

    def zoom_out(self):
        """Zoom out one step about the canvas centre."""
        if self.zoom_manager.can_zoom_out():
            self._apply_transform(self.zoom_manager.zoom_out())

    def reset_zoom(self):
        self._apply_transform(self.zoom_manager.reset())

    def backing_image(self):
        return self._backing

    # ---- Rendering ----

    def _apply_transform(self, transform):
        self.set_transform(transform.k, transform.x)

    def _ensure_backing(self, state):
        width, height = state.backing_size()
        if self._backing.isNull() or self._backing.width() != width or self._backing.height() != height:
            self._backing = self.event_renderer.create_backing_image(state)

    def _redraw(self, state):
        """Render a full frame into the backing buffer and schedule a repaint."""
        self._ensure_backing(state)
        ErrorHandler.safe_execute(
            self.event_renderer.render_to_image,
            self._backing,
            self.controller.events,
            state,
            default_return=False,
            error_handler=self.error_handler,
            context="rendering the timeline"
        )
        self.update()

    def paintEvent(self, event):
        """
        Copy the backing buffer to the widget.

        Args:
            event: QPaintEvent
        """
        painter = QPainter(self)
        if self._backing.isNull():
            painter.fillRect(self.rect(), self.background)
        else:
            painter.drawImage(QPointF(0, 0), self._backing)
        painter.end()

    # ---- Qt events ----

    def resizeEvent(self, event):
        """
        Handle resize events by recomputing the base scale and the buffer.

        Args:
            event: QResizeEvent
        """
        super().resizeEvent(event)
        size = event.size()
        self.controller.dispatch(Resize(size.width(), size.height(), self.devicePixelRatioF()))

    def showEvent(self, event):
        super().showEvent(event)
        # The device pixel ratio is only final once the widget is on a screen
        if self.devicePixelRatioF() != self.controller.state.device_pixel_ratio:
            self.controller.dispatch(Resize(self.width(), self.height(), self.devicePixelRatioF()))

    def wheelEvent(self, event):
        """
        Handle mouse wheel events for zooming about the pointer.

        Args:
            event: QWheelEvent
        """
        delta = event.angleDelta().y()
        if delta == 0:
            event.ignore()
            return

        factor = 2 ** (delta * self.WHEEL_ZOOM_RATE)
        self._apply_transform(self.zoom_manager.zoom_at(event.position().x(), factor))
        event.accept()

    def mousePressEvent(self, event):
        """
        Start a click or a pan.

        Args:
            event: QMouseEvent
        """
        if event.button() == Qt.LeftButton:
            self._press_pos = event.pos()
            self._last_drag_x = event.pos().x()
            self._is_panning = False
            event.accept()
            return

        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        """
        Handle mouse move events for panning and hover tracking.

        Args:
            event: QMouseEvent
        """
        if self._press_pos is not None and event.buttons() & Qt.LeftButton:
            if not self._is_panning:
                moved = (event.pos() - self._press_pos).manhattanLength()
                self._is_panning = moved > self.DRAG_THRESHOLD

            if self._is_panning:
                dx = event.pos().x() - self._last_drag_x
                self._last_drag_x = event.pos().x()
                self._apply_transform(self.zoom_manager.pan_by(dx))
                self.setCursor(Qt.ClosedHandCursor)
                event.accept()
                return

        self.controller.dispatch(PointerMove(event.pos().x(), event.pos().y()))
        self._update_cursor()
        event.accept()

    def mouseReleaseEvent(self, event):
        """
        Finish a click or a pan.

        Args:
            event: QMouseEvent
        """
        if event.button() == Qt.LeftButton and self._press_pos is not None:
            if not self._is_panning:
                self.controller.dispatch(PointerClick(event.pos().x(), event.pos().y()))

            self._press_pos = None
            self._last_drag_x = None
            self._is_panning = False
            self._update_cursor()
            event.accept()
            return

        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        self.controller.dispatch(PointerLeave())
        super().leaveEvent(event)

    def keyPressEvent(self, event):
        """
        Handle keyboard shortcuts.

        Args:
            event: QKeyEvent
        """
        key = event.key()
        if key == Qt.Key_Escape:
            self.dismiss_selection()
        elif key in (Qt.Key_Plus, Qt.Key_Equal):
            self.zoom_in()
        elif key == Qt.Key_Minus:
            self.zoom_out()
        elif key == Qt.Key_0:
            self.reset_zoom()
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    # ---- Notifications ----

    def _on_hover_changed(self, event, pointer):
        position = QPointF(*pointer) if pointer is not None else None
        self.event_hovered.emit(event, position)

    def _update_cursor(self):
        if self.controller.hovered is not None:
            self.setCursor(Qt.PointingHandCursor)
        else:
            self.setCursor(Qt.OpenHandCursor)
