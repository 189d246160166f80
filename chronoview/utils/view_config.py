"""
View Configuration Manager for Chronoview
Handles loading and saving viewport, canvas and category settings.
"""

import copy
import json
import logging
import os

from chronoview.utils.error_handler import ConfigError

logger = logging.getLogger(__name__)


class ViewConfig:
    """
    Manages timeline view settings.

    Settings are layered: built-in defaults first, then any values found in
    the JSON configuration file. Sections not present in the file keep their
    defaults.
    """

    DEFAULT_CONFIG = {
        'viewport': {
            'margin': 60,
            'domain_start': -3200,
            'domain_end': 2030,
            'min_scale': 0.3,
            'max_scale': 100.0
        },
        'canvas': {
            'width': 1200,
            'height': 600,
            'background': '#0F172A'
        },
        'categories': {
            'politics': {'color': '#3B82F6', 'label': 'Politics'},
            'war': {'color': '#EF4444', 'label': 'War & Conflict'},
            'science': {'color': '#10B981', 'label': 'Science'},
            'technology': {'color': '#00FFFF', 'label': 'Technology'},
            'culture': {'color': '#8B5CF6', 'label': 'Culture & Arts'},
            'religion': {'color': '#F59E0B', 'label': 'Religion'},
            'exploration': {'color': '#1ABC9C', 'label': 'Exploration'},
            'economy': {'color': '#E67E22', 'label': 'Economy'}
        }
    }

    SECTIONS = ('viewport', 'canvas', 'categories')

    def __init__(self, config_file=None):
        """
        Initialize view configuration manager.

        Args:
            config_file: Path to configuration file (optional)

        Raises:
            ConfigError: If the file exists but is not valid JSON
        """
        self.config_file = config_file
        # Deep copy to avoid reference issues between instances
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file and os.path.exists(config_file):
            self.load()

    def load(self):
        """Load view settings from the configuration file."""
        if not self.config_file or not os.path.exists(self.config_file):
            return

        # Empty file means "use defaults"
        if os.path.getsize(self.config_file) == 0:
            return

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid configuration file: {self.config_file}",
                details=f"{self.config_file}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be an object: {self.config_file}")

        for section in self.SECTIONS:
            if section not in data:
                continue
            if not isinstance(data[section], dict):
                raise ConfigError(f"Configuration section '{section}' must be an object")
            if section == 'categories':
                # A category table replaces the defaults instead of extending them
                self.config['categories'] = copy.deepcopy(data['categories'])
            else:
                self.config[section].update(data[section])

        logger.info(f"Loaded view configuration from {self.config_file}")

    def save(self):
        """Save view settings to the configuration file."""
        if not self.config_file:
            return

        existing_data = {}
        if os.path.exists(self.config_file) and os.path.getsize(self.config_file) > 0:
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    existing_data = json.load(f)
            except json.JSONDecodeError:
                # File exists but is not valid JSON, start fresh
                existing_data = {}

        existing_data.update(copy.deepcopy(self.config))

        config_dir = os.path.dirname(self.config_file)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(existing_data, f, indent=2)

        logger.debug(f"Saved view configuration to {self.config_file}")

    def get_viewport_settings(self):
        """
        Get the viewport settings section.

        Returns:
            dict: margin, domain_start, domain_end, min_scale, max_scale
        """
        return dict(self.config['viewport'])

    def get_canvas_size(self):
        """
        Get the initial logical canvas size.

        Returns:
            tuple: (width, height)
        """
        canvas = self.config['canvas']
        return int(canvas.get('width', 1200)), int(canvas.get('height', 600))

    def get_background_color(self):
        return self.config['canvas'].get('background', '#0F172A')

    def get_categories(self):
        """
        Get the category table.

        Returns:
            dict: Mapping of category name to {'color': ..., 'label': ...}
        """
        return copy.deepcopy(self.config['categories'])

    def set_category(self, category, color, label=None):
        """
        Register or replace a category entry.

        Args:
            category (str): Category key as used by events
            color (str): Display color (hex string)
            label (str): Display label (defaults to the category key)
        """
        self.config['categories'][category] = {
            'color': color,
            'label': label or category
        }

    def reset_to_defaults(self):
        """Reset all settings to defaults."""
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
