"""Tests for the error types, error handler and logging setup."""

import logging

from PyQt5.QtWidgets import QMessageBox

from chronoview.utils.error_handler import (DataLoadError, ErrorHandler, ErrorSeverity, RenderError,
                                            TimelineError, create_load_error_with_guidance,
                                            setup_logging)


def test_data_load_error_details():
    error = DataLoadError("Cannot read", source_path="events.json",
                          original_error=OSError("disk"), recovery_suggestions=["Retry"])
    assert error.message == "Cannot read"
    assert "Dataset: events.json" in error.details
    assert "1. Retry" in error.details
    assert error.severity == ErrorSeverity.ERROR


def test_guidance_for_missing_file(tmp_path):
    error = create_load_error_with_guidance(str(tmp_path / "x.json"), FileNotFoundError("gone"))
    assert error.message == "Cannot find the event dataset"
    assert len(error.recovery_suggestions) == 2


def test_handle_error_records_history(qapp):
    handler = ErrorHandler()
    received = []
    handler.error_occurred.connect(lambda *args: received.append(args))

    handler.handle_error(RenderError("Frame failed", severity=ErrorSeverity.WARNING), "rendering",
                         show_dialog=False)

    assert handler.get_error_count() == 1
    assert handler.get_error_history()[0]['message'] == "Frame failed"
    assert received == [(ErrorSeverity.WARNING, "Frame failed", "Frame failed")]


def test_history_keeps_last_ten(qapp):
    handler = ErrorHandler()
    for i in range(12):
        handler.handle_error(TimelineError(f"error {i}"), show_dialog=False)

    history = handler.get_error_history()
    assert len(history) == 10
    assert history[0]['message'] == "error 2"
    assert handler.get_error_count() == 12

    handler.clear_error_history()
    assert handler.get_error_count() == 0


def test_safe_execute_returns_default(qapp):
    handler = ErrorHandler()

    def explode():
        raise RuntimeError("boom")

    assert ErrorHandler.safe_execute(explode, default_return=False,
                                     error_handler=handler, context="testing") is False
    assert handler.get_error_count() == 1
    assert ErrorHandler.safe_execute(lambda a, b=0: a + b, 1, b=2) == 3


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "chronoview.log"
    logger = setup_logging(logging.DEBUG, str(log_file), logger_name="chronoview.test_setup")

    logger.info("hello timeline")
    for handler in logger.handlers:
        handler.flush()

    assert "hello timeline" in log_file.read_text(encoding="utf-8")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_handle_error_shows_dialog(qapp, monkeypatch):
    shown = []

    def fake_exec(box):
        shown.append((box.windowTitle(), box.text(), box.icon()))
        return QMessageBox.Ok

    monkeypatch.setattr(QMessageBox, "exec_", fake_exec)
    handler = ErrorHandler()

    handler.handle_error(DataLoadError("Cannot find the event dataset"), "loading")
    handler.handle_error(TimelineError("Odd config", severity=ErrorSeverity.WARNING), show_dialog=False)

    assert shown == [("Error", "Cannot find the event dataset", QMessageBox.Critical)]


def test_warning_dialog_uses_warning_icon(qapp, monkeypatch):
    shown = []
    monkeypatch.setattr(QMessageBox, "exec_", lambda box: shown.append((box.windowTitle(), box.icon())))

    ErrorHandler().handle_error(TimelineError("Odd config", severity=ErrorSeverity.WARNING))

    assert shown == [("Warning", QMessageBox.Warning)]
