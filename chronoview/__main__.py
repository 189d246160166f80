"""
Launch the timeline viewer.

Usage:
    python -m chronoview events.json [--config view.json] [--debug]
"""

import argparse
import logging
import sys

from PyQt5.QtCore import QPoint
from PyQt5.QtWidgets import (QApplication, QHBoxLayout, QLabel, QPushButton,
                             QToolTip, QVBoxLayout, QWidget)

from chronoview.data.category_registry import CategoryRegistry
from chronoview.data.event_loader import load_events
from chronoview.styles import Colors, TimelineStyles
from chronoview.timeline_canvas import TimelineCanvas
from chronoview.utils.error_handler import ErrorHandler, TimelineError, setup_logging
from chronoview.utils.tooltip_manager import TooltipManager
from chronoview.utils.view_config import ViewConfig

logger = logging.getLogger('chronoview')


class TimelineWindow(QWidget):
    """Minimal host window: category toggles, the canvas and a detail line."""

    def __init__(self, events, view_config, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Chronoview")

        registry = CategoryRegistry.from_config(view_config)
        self.tooltip_manager = TooltipManager(registry)
        self.canvas = TimelineCanvas(events, registry, view_config=view_config)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)

        button_row = QHBoxLayout()
        self.filter_buttons = {}
        for category in self.canvas.controller.known_categories:
            button = QPushButton(registry.label_for(category))
            button.setCheckable(True)
            button.setChecked(True)
            button.setStyleSheet(TimelineStyles.FILTER_BUTTON_STYLE % registry.color_for(category))
            button.setToolTip(TooltipManager.get_canvas_tooltip('filter_hint'))
            button.clicked.connect(lambda _checked, c=category: self._on_filter_clicked(c))
            button_row.addWidget(button)
            self.filter_buttons[category] = button
        button_row.addStretch()
        layout.addLayout(button_row)

        layout.addWidget(self.canvas, 1)

        self.detail_label = QLabel(TooltipManager.get_canvas_tooltip('select_hint'))
        self.detail_label.setWordWrap(True)
        self.detail_label.setStyleSheet(f"color: {Colors.TEXT_PRIMARY};")
        layout.addWidget(self.detail_label)

        self.setStyleSheet(f"background-color: {Colors.BG_PANELS};")

        self.canvas.event_hovered.connect(self._show_tooltip)
        self.canvas.event_selected.connect(self._show_details)
        self.canvas.categories_changed.connect(self._sync_filter_buttons)

    def _show_tooltip(self, event, position):
        tooltip = self.canvas.controller.tooltip()
        if tooltip is None:
            QToolTip.hideText()
            return
        x, y = self.tooltip_manager.tooltip_position(tooltip[1])
        QToolTip.showText(
            self.canvas.mapToGlobal(QPoint(int(x), int(y))),
            self.tooltip_manager.tooltip_text(event),
            self.canvas
        )

    def _show_details(self, event):
        if event is None:
            self.detail_label.setText(TooltipManager.get_canvas_tooltip('select_hint'))
        else:
            QToolTip.hideText()
            self.detail_label.setText(self.tooltip_manager.detail_text(event))

    def _on_filter_clicked(self, category):
        self.canvas.toggle_category(category)
        # A refused toggle leaves the set unchanged, so buttons follow the controller
        self._sync_filter_buttons(self.canvas.active_categories())

    def _sync_filter_buttons(self, active):
        for category, button in self.filter_buttons.items():
            button.setChecked(category in active)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog='chronoview', description='Interactive event timeline viewer')
    parser.add_argument('dataset', help='JSON file with the events to display')
    parser.add_argument('--config', help='JSON view configuration (categories, canvas size)')
    parser.add_argument('--log-file', help='Also write logs to this file')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO, args.log_file)

    app = QApplication.instance() or QApplication(sys.argv)
    error_handler = ErrorHandler()

    try:
        view_config = ViewConfig(args.config)
        events = load_events(args.dataset)
    except TimelineError as e:
        error_handler.handle_error(e, "starting the timeline viewer", show_dialog=True)
        return 1

    window = TimelineWindow(events, view_config)
    window.show()
    logger.info(f"Showing {len(events)} events")
    return app.exec_()


if __name__ == '__main__':
    sys.exit(main())
