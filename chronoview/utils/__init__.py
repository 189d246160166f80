"""
Utility helpers for the timeline viewer.
Includes error handling, logging setup, configuration and display text.
"""

from .error_handler import (ErrorHandler, ErrorSeverity, TimelineError, DataLoadError,
                            ConfigError, RenderError, setup_logging)
from .view_config import ViewConfig
from .tooltip_manager import TooltipManager, format_year

__all__ = [
    'ErrorHandler',
    'ErrorSeverity',
    'TimelineError',
    'DataLoadError',
    'ConfigError',
    'RenderError',
    'setup_logging',
    'ViewConfig',
    'TooltipManager',
    'format_year',
]
