"""
Category Registry - Static category to color/label lookup.

Every lookup is total: categories missing from the registry resolve to a
default color and to the raw category string as label.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass

from chronoview.styles import Colors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryStyle:
    color: str
    label: str


class CategoryRegistry:
    """
    Ordered mapping of category name to display color and label.

    Registration order is kept so filter buttons and legends list categories
    in a stable order.
    """

    DEFAULT_COLOR = Colors.UNKNOWN_CATEGORY

    def __init__(self, categories=None):
        """
        Initialize the registry.

        Args:
            categories (dict): Optional mapping of name -> {'color': ..., 'label': ...}
        """
        self._styles = OrderedDict()
        self._warned = set()
        for name, entry in (categories or {}).items():
            entry = entry or {}
            self.register(name, entry.get('color', self.DEFAULT_COLOR), entry.get('label'))

    @classmethod
    def from_config(cls, view_config):
        return cls(view_config.get_categories())

    def register(self, category, color, label=None):
        """
        Add or replace a category.

        Args:
            category (str): Category key
            color (str): Display color (hex string)
            label (str): Display label (defaults to the key)
        """
        self._styles[category] = CategoryStyle(color=color, label=label or category)

    def lookup(self, category):
        """
        Resolve a category to its style.

        Args:
            category (str): Category key

        Returns:
            CategoryStyle: Registered style, or the default style for unknown keys
        """
        style = self._styles.get(category)
        if style is not None:
            return style

        if category not in self._warned:
            # Log once per category, lookups happen on every frame
            self._warned.add(category)
            logger.debug(f"Category '{category}' is not registered, using default style")
        return CategoryStyle(color=self.DEFAULT_COLOR, label=str(category))

    def color_for(self, category):
        return self.lookup(category).color

    def label_for(self, category):
        return self.lookup(category).label

    def categories(self):
        """Registered category keys in registration order."""
        return list(self._styles.keys())

    def __contains__(self, category):
        return category in self._styles

    def __len__(self):
        return len(self._styles)

    def __repr__(self):
        return f"CategoryRegistry(categories={self.categories()!r})"
