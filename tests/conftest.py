"""Pytest configuration for chronoview."""

import os
from pathlib import Path

# Qt must pick the offscreen platform before any QApplication exists
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from chronoview.data.category_registry import CategoryRegistry
from chronoview.data.event_loader import load_events
from chronoview.interaction.view_state import ViewState
from chronoview.rendering.zoom_manager import ZoomManager
from chronoview.utils.view_config import ViewConfig

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(scope="session")
def qapp():
    from PyQt5.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def sample_events():
    return load_events(FIXTURES / "sample_events.json")


@pytest.fixture
def registry():
    return CategoryRegistry.from_config(ViewConfig())


@pytest.fixture
def zoom():
    return ZoomManager(width=1200, height=600)


@pytest.fixture
def make_state(zoom):
    """Build a ViewState with every category of the given events active."""

    def _make(events, **kwargs):
        categories = kwargs.pop("active_categories", None)
        if categories is None:
            categories = {event.category for event in events}
        return ViewState(zoom=kwargs.pop("zoom", zoom), active_categories=set(categories), **kwargs)

    return _make
