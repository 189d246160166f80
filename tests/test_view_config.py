"""Tests for the view configuration file."""

import json

import pytest

from chronoview.rendering.zoom_manager import ZoomManager
from chronoview.utils.error_handler import ConfigError
from chronoview.utils.view_config import ViewConfig


def test_defaults_without_file():
    config = ViewConfig()
    assert config.get_canvas_size() == (1200, 600)
    assert config.get_viewport_settings()['min_scale'] == 0.3
    assert config.get_viewport_settings()['max_scale'] == 100.0
    assert list(config.get_categories())[:2] == ['politics', 'war']


def test_missing_file_uses_defaults(tmp_path):
    config = ViewConfig(str(tmp_path / "nothing.json"))
    assert config.config == ViewConfig.DEFAULT_CONFIG


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "view.json"
    path.write_text("", encoding="utf-8")
    assert ViewConfig(str(path)).config == ViewConfig.DEFAULT_CONFIG


def test_partial_sections_are_merged(tmp_path):
    path = tmp_path / "view.json"
    path.write_text(json.dumps({"viewport": {"max_scale": 50}, "canvas": {"width": 900}}), encoding="utf-8")

    config = ViewConfig(str(path))

    assert config.get_viewport_settings()['max_scale'] == 50
    assert config.get_viewport_settings()['margin'] == 60
    assert config.get_canvas_size() == (900, 600)


def test_categories_replace_defaults(tmp_path):
    path = tmp_path / "view.json"
    path.write_text(json.dumps({"categories": {"art": {"color": "#FF00FF", "label": "Art"}}}), encoding="utf-8")
    assert ViewConfig(str(path)).get_categories() == {"art": {"color": "#FF00FF", "label": "Art"}}


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", "{\"canvas\": 3}"])
def test_invalid_files_raise_config_error(tmp_path, content):
    path = tmp_path / "view.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        ViewConfig(str(path))


def test_save_and_reload(tmp_path):
    path = str(tmp_path / "nested" / "view.json")
    config = ViewConfig(path)
    config.set_category("folklore", "#123456")
    config.save()

    reloaded = ViewConfig(path)
    assert reloaded.get_categories()["folklore"] == {"color": "#123456", "label": "folklore"}


def test_instances_do_not_share_state():
    first = ViewConfig()
    first.set_category("folklore", "#123456")
    assert "folklore" not in ViewConfig().get_categories()
    assert "folklore" not in ViewConfig.DEFAULT_CONFIG['categories']


def test_reset_to_defaults():
    config = ViewConfig()
    config.set_category("folklore", "#123456")
    config.reset_to_defaults()
    assert config.config == ViewConfig.DEFAULT_CONFIG


def test_zoom_manager_from_config(tmp_path):
    path = tmp_path / "view.json"
    path.write_text(json.dumps({"viewport": {"max_scale": 20}, "canvas": {"width": 800, "height": 400}}),
                    encoding="utf-8")

    zoom = ZoomManager.from_config(ViewConfig(str(path)))
    zoom.set_transform(50, 0)

    assert zoom.scale == 20
    assert (zoom.width, zoom.height) == (800, 400)
