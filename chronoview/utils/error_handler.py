"""
Error Handler Utility
=====================

This module provides centralized error handling utilities for the timeline viewer,
including the exception hierarchy, logging setup and user-facing error dialogs.

Author: Chronoview Development Team
Version: 1.0
"""

import logging
import os
import sys
import traceback
from datetime import datetime
from typing import Optional, Callable, Any
from PyQt5.QtWidgets import QMessageBox
from PyQt5.QtCore import QObject, pyqtSignal

# Configure logger
logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(log_level: int = logging.INFO, log_file: Optional[str] = None,
                  logger_name: str = 'chronoview') -> logging.Logger:
    """
    Configure logging for the application.

    Library modules only create module-level loggers; handlers are installed
    here, once, by the launcher.

    Args:
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG)
        log_file: Optional file to write logs to
        logger_name: Name of the root application logger

    Returns:
        logging.Logger: The configured application logger
    """
    app_logger = logging.getLogger(logger_name)

    # Clear any existing handlers
    app_logger.handlers = []
    app_logger.setLevel(log_level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            app_logger.addHandler(file_handler)
        except OSError as e:
            app_logger.error(f"Failed to set up file logging: {e}")

    return app_logger


class ErrorSeverity:
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class TimelineError(Exception):
    """Base exception for timeline-related errors."""

    def __init__(self, message: str, details: Optional[str] = None,
                 severity: str = ErrorSeverity.ERROR):
        """
        Initialize timeline error.

        Args:
            message: User-friendly error message
            details: Technical details for logging
            severity: Error severity level
        """
        super().__init__(message)
        self.message = message
        self.details = details or message
        self.severity = severity


class DataLoadError(TimelineError):
    """Exception for dataset loading errors."""

    def __init__(self, message: str, source_path: Optional[str] = None,
                 original_error: Optional[Exception] = None,
                 recovery_suggestions: Optional[list] = None):
        """
        Initialize data load error.

        Args:
            message: User-friendly error message
            source_path: Path of the dataset file that failed to load
            original_error: Original exception that was caught
            recovery_suggestions: List of suggested recovery actions
        """
        details = f"{message}\n"
        if source_path:
            details += f"Dataset: {source_path}\n"
        if original_error:
            details += f"Original error: {original_error}\n"

        if recovery_suggestions:
            details += "\nSuggested actions:\n"
            for i, suggestion in enumerate(recovery_suggestions, 1):
                details += f"{i}. {suggestion}\n"

        super().__init__(message, details, ErrorSeverity.ERROR)
        self.source_path = source_path
        self.original_error = original_error
        self.recovery_suggestions = recovery_suggestions or []


class ConfigError(TimelineError):
    """Exception for configuration file errors."""
    pass


class RenderError(TimelineError):
    """Exception for rendering errors."""
    pass


class ErrorHandler(QObject):
    """
    Centralized error handler for the timeline viewer.

    Provides methods for logging detailed errors, keeping a short error
    history and optionally notifying the user with a message box.

    Signals:
        error_occurred: Emitted when an error is handled (severity, message, details)
    """

    error_occurred = pyqtSignal(str, str, str)  # severity, message, details

    def __init__(self, parent=None):
        """
        Initialize error handler.

        Args:
            parent: Parent widget for message boxes (dialogs are top-level without one)
        """
        super().__init__(parent)
        self.parent = parent
        self._error_count = 0
        self._last_errors = []  # Store last 10 errors
        self._max_stored_errors = 10

    def handle_error(self, error: Exception, context: str = "",
                     show_dialog: bool = True) -> None:
        """
        Handle an error with logging and optional user notification.

        Args:
            error: The exception that occurred
            context: Context description (e.g., "loading timeline data")
            show_dialog: Whether to show error dialog to user
        """
        self._error_count += 1

        if isinstance(error, TimelineError):
            message = error.message
            details = error.details
            severity = error.severity
        else:
            message = f"An unexpected error occurred while {context}" if context else "An unexpected error occurred"
            error_traceback = traceback.format_exc()
            details = f"Context: {context}\n{type(error).__name__}: {error}\n{error_traceback}"
            severity = ErrorSeverity.ERROR

        log_message = f"Error in {context}: {details}" if context else f"Error: {details}"

        if severity == ErrorSeverity.CRITICAL:
            logger.critical(log_message)
        elif severity == ErrorSeverity.ERROR:
            logger.error(log_message)
        elif severity == ErrorSeverity.WARNING:
            logger.warning(log_message)
        else:
            logger.info(log_message)

        self._store_error(severity, message, details)
        self.error_occurred.emit(severity, message, details)

        if show_dialog:
            self._show_error_dialog(message, details, severity)

    def _show_error_dialog(self, message: str, details: str, severity: str):
        """
        Show error dialog to user.

        Args:
            message: User-friendly error message
            details: Technical details
            severity: Error severity level
        """
        if severity == ErrorSeverity.CRITICAL:
            icon = QMessageBox.Critical
            title = "Critical Error"
        elif severity == ErrorSeverity.ERROR:
            icon = QMessageBox.Critical
            title = "Error"
        elif severity == ErrorSeverity.WARNING:
            icon = QMessageBox.Warning
            title = "Warning"
        else:
            icon = QMessageBox.Information
            title = "Information"

        msg_box = QMessageBox(self.parent)
        msg_box.setIcon(icon)
        msg_box.setWindowTitle(title)
        msg_box.setText(message)
        msg_box.setDetailedText(details)
        msg_box.addButton(QMessageBox.Ok)
        msg_box.exec_()

    def _store_error(self, severity: str, message: str, details: str):
        """
        Store error in history for later retrieval.

        Args:
            severity: Error severity
            message: Error message
            details: Error details
        """
        error_record = {
            'timestamp': datetime.now(),
            'severity': severity,
            'message': message,
            'details': details
        }

        self._last_errors.append(error_record)

        # Keep only last N errors
        if len(self._last_errors) > self._max_stored_errors:
            self._last_errors = self._last_errors[-self._max_stored_errors:]

    def get_error_history(self) -> list:
        """
        Get recent error history.

        Returns:
            list: List of error records
        """
        return self._last_errors.copy()

    def get_error_count(self) -> int:
        """
        Get total error count.

        Returns:
            int: Number of errors handled
        """
        return self._error_count

    def clear_error_history(self):
        """Clear error history and reset count."""
        self._last_errors.clear()
        self._error_count = 0

    @staticmethod
    def safe_execute(func: Callable, *args, default_return: Any = None,
                     error_handler: Optional['ErrorHandler'] = None,
                     context: str = "", **kwargs) -> Any:
        """
        Safely execute a function with error handling.

        Args:
            func: Function to execute
            *args: Positional arguments for function
            default_return: Value to return if function fails
            error_handler: ErrorHandler instance to use for handling errors
            context: Context description for error messages
            **kwargs: Keyword arguments for function

        Returns:
            Function return value, or default_return if error occurs
        """
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if error_handler:
                error_handler.handle_error(e, context, show_dialog=False)
            else:
                logger.error(f"Error in {context}: {e}")
            return default_return


def create_load_error_with_guidance(source_path: str, original_error: Exception) -> DataLoadError:
    """
    Create a dataset load error with specific guidance based on the error type.

    Args:
        source_path: Path to the dataset file
        original_error: The original exception

    Returns:
        DataLoadError: Configured error with recovery suggestions
    """
    error_str = str(original_error).lower()

    if isinstance(original_error, FileNotFoundError) or "no such file" in error_str:
        message = "Cannot find the event dataset"
        recovery_suggestions = [
            "Verify the dataset file exists at the specified path",
            "Pass the dataset path as the first command line argument",
        ]
    elif isinstance(original_error, PermissionError) or "permission" in error_str:
        message = "Permission denied while reading the event dataset"
        recovery_suggestions = [
            f"Check file permissions for: {source_path}",
            "Verify you have read access to the dataset directory",
        ]
    elif isinstance(original_error, ValueError):
        # json.JSONDecodeError is a ValueError subclass
        message = "The event dataset is not valid JSON"
        recovery_suggestions = [
            "Check the file for trailing commas or unquoted keys",
            "The dataset must be a list of events or an object with an 'events' list",
        ]
    else:
        message = "Failed to read the event dataset"
        recovery_suggestions = [
            f"Check the dataset file: {source_path}",
            "Check the error log for more details",
        ]

    if os.path.exists(source_path):
        recovery_suggestions.append(f"Dataset file size: {os.path.getsize(source_path):,} bytes")

    return DataLoadError(
        message=message,
        source_path=source_path,
        original_error=original_error,
        recovery_suggestions=recovery_suggestions
    )
