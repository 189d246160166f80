"""
Tooltip Manager - Text for labels, tooltips and the detail panel.

This module centralizes how years and events are turned into display text so
the canvas labels and the external tooltip/detail panels read the same way.
"""

import html


def format_year(year):
    """
    Format a year for display.

    Args:
        year (int): Year, negative for BC

    Returns:
        str: "776 BC" for -776, "1971" for 1971
    """
    year = int(year)
    if year < 0:
        return f"{-year} BC"
    return str(year)


class TooltipManager:
    """
    Builds display text for hovered and selected events.

    The tooltip and detail panel themselves live outside the canvas; they
    call into this class with the events the controller reports.
    """

    # Tooltip is drawn this far from the pointer (logical pixels)
    POINTER_OFFSET = (14, 14)

    CANVAS_TOOLTIPS = {
        'pan_hint': 'Drag to pan the timeline',
        'zoom_hint': 'Use the mouse wheel or +/- to zoom, 0 to reset',
        'select_hint': 'Click an event for details, Esc to dismiss',
        'filter_hint': 'Toggle categories to filter; at least one stays on',
    }

    def __init__(self, category_registry):
        """
        Initialize the tooltip manager.

        Args:
            category_registry (CategoryRegistry): Source of category labels
        """
        self.category_registry = category_registry

    def tooltip_text(self, event):
        """
        Short HTML tooltip for a hovered event.

        Args:
            event (Event): Hovered event

        Returns:
            str: Tooltip markup
        """
        label = html.escape(self.category_registry.label_for(event.category))
        return (
            f"<b>{html.escape(event.title)}</b><br>"
            f"{format_year(event.year)} &middot; {label}"
        )

    def detail_text(self, event):
        """
        Plain-text details for a selected event.

        Args:
            event (Event): Selected event

        Returns:
            str: Multi-line description
        """
        label = self.category_registry.label_for(event.category)
        lines = [
            event.title,
            f"{format_year(event.year)} | {label} | significance {event.significance}/5",
        ]
        if event.description:
            lines.append('')
            lines.append(event.description)
        return '\n'.join(lines)

    def tooltip_position(self, pointer):
        """
        Where to place the tooltip for a pointer position.

        Args:
            pointer (tuple): (x, y) pointer position in logical pixels

        Returns:
            tuple: (x, y) tooltip anchor
        """
        dx, dy = self.POINTER_OFFSET
        return (pointer[0] + dx, pointer[1] + dy)

    @classmethod
    def get_canvas_tooltip(cls, key):
        """
        Get a hint for a canvas interaction.

        Args:
            key (str): Hint key

        Returns:
            str: Hint text, empty for unknown keys
        """
        return cls.CANVAS_TOOLTIPS.get(key, '')
