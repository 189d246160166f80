"""Centralized style definitions for the Chronoview timeline."""

# Unified Color Palette
class Colors:
    # Dark canvas base colors
    BG_PRIMARY = "#0F172A"      # Canvas background
    BG_PANELS = "#1E293B"       # Panel background

    # Text Colors
    TEXT_PRIMARY = "#E2E8F0"    # Event titles
    TEXT_SECONDARY = "#94A3B8"  # Year sub-labels
    TEXT_MUTED = "#64748B"      # Tick labels

    # Accent Colors
    HIGHLIGHT = "#FFFFFF"       # Hovered/selected dots

    # Axis Colors
    AXIS_LINE = "#475569"
    AXIS_TICK = "#334155"

    # Fallback for categories missing from the registry
    UNKNOWN_CATEGORY = "#FFFFFF"


class TimelineStyles:
    """Font and sizing constants shared by the renderer and the launcher."""

    FONT_FAMILY = "Segoe UI"

    # Point sizes
    TICK_FONT_SIZE = 9
    TITLE_FONT_SIZE = 10
    TITLE_FONT_SIZE_EMPHASIZED = 12
    YEAR_FONT_SIZE = 8
    YEAR_FONT_SIZE_EMPHASIZED = 9

    AXIS_LINE_WIDTH = 1.5
    TICK_LENGTH = 6

    FILTER_BUTTON_STYLE = """
        QPushButton {
            background-color: #1E293B;
            color: #94A3B8;
            border: 1px solid #334155;
            border-radius: 12px;
            padding: 4px 12px;
            font-size: 11px;
            font-family: 'Segoe UI', sans-serif;
        }

        QPushButton:checked {
            color: #FFFFFF;
            border: 1px solid %s;
        }
    """
