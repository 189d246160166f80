"""Viewport transform, level-of-detail filtering, layout and drawing."""
