"""
Interaction Controller - Hover/selection state machine for the timeline.

Input arrives as small command objects (pointer moved, clicked, zoomed, ...).
Each command is handled synchronously: the view state is updated, listeners
are notified and a redraw is requested before dispatch() returns. The
controller has no Qt dependency so it can be driven directly from tests.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from chronoview.interaction.hit_tester import HitTester
from chronoview.interaction.view_state import ViewState, visible_placements

logger = logging.getLogger(__name__)


# ---- Commands ----

@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerClick:
    x: float
    y: float


@dataclass(frozen=True)
class PointerLeave:
    pass


@dataclass(frozen=True)
class Dismiss:
    pass


@dataclass(frozen=True)
class ToggleCategory:
    category: str


@dataclass(frozen=True)
class ShowAllCategories:
    pass


@dataclass(frozen=True)
class ZoomTo:
    k: float
    translate_x: float


@dataclass(frozen=True)
class Resize:
    width: float
    height: float
    device_pixel_ratio: Optional[float] = None


class InteractionController:
    """
    Owns the view state and applies input commands to it.

    Hover and selection are independent: a selection hides the hover tooltip
    but hover tracking keeps running underneath it.

    Listeners:
        hover listeners: fn(event_or_none, pointer_or_none)
        selection listeners: fn(event_or_none)
        filter listeners: fn(active_categories_in_display_order)
    """

    def __init__(self, events, zoom_manager, category_registry=None, redraw=None,
                 device_pixel_ratio=1.0):
        """
        Initialize the controller with every category switched on.

        Args:
            events (list): Dataset in display order
            zoom_manager (ZoomManager): Viewport transform
            category_registry (CategoryRegistry): Registered categories (optional)
            redraw (callable): Called with the ViewState after each change
            device_pixel_ratio (float): Initial backing buffer ratio
        """
        self.events = list(events)
        self.hit_tester = HitTester(self.events)
        self._redraw = redraw

        # Registered categories first, then any the dataset adds
        known = list(category_registry.categories()) if category_registry is not None else []
        for event in self.events:
            if event.category not in known:
                known.append(event.category)
        self.known_categories = known

        self.state = ViewState(
            zoom=zoom_manager,
            active_categories=set(known),
            device_pixel_ratio=device_pixel_ratio
        )

        self._hover_listeners = []
        self._selection_listeners = []
        self._filter_listeners = []

        self._handlers = {
            PointerMove: self._on_pointer_move,
            PointerClick: self._on_pointer_click,
            PointerLeave: self._on_pointer_leave,
            Dismiss: self._on_dismiss,
            ToggleCategory: self._on_toggle_category,
            ShowAllCategories: self._on_show_all_categories,
            ZoomTo: self._on_zoom,
            Resize: self._on_resize,
        }

    # ---- Public API ----

    def set_redraw_callback(self, redraw):
        self._redraw = redraw

    def add_hover_listener(self, listener):
        self._hover_listeners.append(listener)

    def add_selection_listener(self, listener):
        self._selection_listeners.append(listener)

    def add_filter_listener(self, listener):
        self._filter_listeners.append(listener)

    def dispatch(self, command):
        """
        Apply one command and redraw if it changed the view.

        Args:
            command: One of the command dataclasses in this module

        Returns:
            bool: True if a redraw was requested

        Raises:
            TypeError: If the command type is unknown
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unknown command: {command!r}")

        changed = handler(command)
        if changed:
            self.request_redraw()
        return changed

    def request_redraw(self):
        if self._redraw is not None:
            self._redraw(self.state)

    def tooltip(self):
        """
        Get the hover tooltip to display, if any.

        Returns:
            tuple or None: (event, (x, y)) while hovering with nothing selected
        """
        if self.state.hovered is None or self.state.selected is not None:
            return None
        return (self.state.hovered, self.state.pointer)

    @property
    def hovered(self):
        return self.state.hovered

    @property
    def selected(self):
        return self.state.selected

    @property
    def active_categories(self):
        return set(self.state.active_categories)

    # ---- Transitions ----

    def _on_pointer_move(self, command):
        hit = self.hit_tester.hit_test(command.x, command.y, self.state)

        if hit is not None:
            self.state.pointer = (command.x, command.y)

        if hit is self.state.hovered:
            # Same target; only the tooltip anchor moved
            if hit is not None:
                self._notify_hover()
            return False

        self.state.hovered = hit
        if hit is None:
            self.state.pointer = None
        self._notify_hover()
        return True

    def _on_pointer_click(self, command):
        hit = self.hit_tester.hit_test(command.x, command.y, self.state)
        previous = self.state.selected
        self.state.selected = hit

        if hit is None:
            logger.debug("Click on empty canvas, selection cleared")
        else:
            logger.debug(f"Selected event: {hit.title} ({hit.year})")

        if hit is not previous:
            self._notify_selection()
        return True

    def _on_pointer_leave(self, command):
        if self.state.hovered is None:
            return False
        self.state.hovered = None
        self.state.pointer = None
        self._notify_hover()
        return True

    def _on_dismiss(self, command):
        previous = self.state.selected
        self.state.selected = None
        if previous is not None:
            self._notify_selection()
        return True

    def _on_toggle_category(self, command):
        active = self.state.active_categories
        category = command.category

        if category in active:
            if len(active) == 1:
                logger.debug(f"Refusing to deactivate the last active category '{category}'")
                return False
            active.discard(category)
        else:
            active.add(category)

        self._notify_filter()
        self._drop_hidden_hover()
        return True

    def _on_show_all_categories(self, command):
        self.state.active_categories.update(self.known_categories)
        self._notify_filter()
        return True

    def _on_zoom(self, command):
        self.state.zoom.set_transform(command.k, command.translate_x)
        self._drop_hidden_hover()
        return True

    def _on_resize(self, command):
        self.state.zoom.resize(command.width, command.height)
        if command.device_pixel_ratio:
            self.state.device_pixel_ratio = float(command.device_pixel_ratio)
        logger.debug(f"Resized to {command.width}x{command.height} @ {self.state.device_pixel_ratio}x")
        self._drop_hidden_hover()
        return True

    def _drop_hidden_hover(self):
        """Clear the hover once its event is no longer drawn."""
        hovered = self.state.hovered
        if hovered is None:
            return
        if any(p.event is hovered for p in visible_placements(self.events, self.state)):
            return
        self.state.hovered = None
        self.state.pointer = None
        self._notify_hover()

    # ---- Notifications ----

    def _notify_hover(self):
        for listener in self._hover_listeners:
            listener(self.state.hovered, self.state.pointer)

    def _notify_selection(self):
        for listener in self._selection_listeners:
            listener(self.state.selected)

    def _notify_filter(self):
        active = [c for c in self.known_categories if c in self.state.active_categories]
        # Categories toggled on that no event or registry entry uses
        active += sorted(c for c in self.state.active_categories if c not in self.known_categories)
        for listener in self._filter_listeners:
            listener(active)
