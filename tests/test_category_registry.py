"""Tests for category color and label lookup."""

from chronoview.data.category_registry import CategoryRegistry, CategoryStyle
from chronoview.utils.view_config import ViewConfig


def test_registered_category(registry):
    assert registry.color_for("war") == "#EF4444"
    assert registry.label_for("war") == "War & Conflict"


def test_unknown_category_falls_back():
    registry = CategoryRegistry({"war": {"color": "#EF4444", "label": "War"}})
    assert registry.lookup("folklore") == CategoryStyle(color=CategoryRegistry.DEFAULT_COLOR, label="folklore")
    assert "folklore" not in registry


def test_registration_order_is_kept():
    registry = CategoryRegistry()
    registry.register("b", "#000000")
    registry.register("a", "#111111", "Alpha")
    assert registry.categories() == ["b", "a"]
    assert registry.label_for("b") == "b"
    assert len(registry) == 2


def test_register_replaces_style():
    registry = CategoryRegistry({"war": {"color": "#EF4444"}})
    registry.register("war", "#000000", "Conflict")
    assert registry.lookup("war") == CategoryStyle("#000000", "Conflict")
    assert registry.categories() == ["war"]


def test_from_config_follows_config_categories():
    config = ViewConfig()
    config.set_category("folklore", "#123456", "Folklore")
    registry = CategoryRegistry.from_config(config)
    assert registry.categories()[-1] == "folklore"
    assert registry.color_for("folklore") == "#123456"
