"""Tests for logging configuration and request logging."""

import json
import logging

import pytest
import structlog
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from calculator.config import Settings
from calculator.main import app
from calculator.observability.logger import (
    COMBINED_LOG_FILE,
    ERROR_LOG_FILE,
    EXCEPTIONS_LOG_FILE,
    EventQueueHandler,
    configure_logging,
    get_logger,
)


@pytest.fixture
def restore_logging():
    """Undo global logging configuration after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()


def read_json_lines(path):
    return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_file_logging_disabled(self, restore_logging):
        settings = Settings(LOG_TO_FILES=False)
        assert configure_logging(settings) is None

    def test_writes_combined_and_error_logs(self, tmp_path, restore_logging):
        settings = Settings(LOG_TO_FILES=True, LOG_DIR=str(tmp_path / "logs"))
        sinks = configure_logging(settings)
        sinks.start()

        logger = get_logger("calculator.test")
        logger.info("operation_succeeded", operation="add", result=3.0)
        logger.error("operation_rejected", error_code="DIVISION_BY_ZERO")
        sinks.close()

        combined = read_json_lines(tmp_path / "logs" / COMBINED_LOG_FILE)
        errors = read_json_lines(tmp_path / "logs" / ERROR_LOG_FILE)

        assert [entry["event"] for entry in combined] == [
            "operation_succeeded",
            "operation_rejected",
        ]
        assert combined[0]["service"] == "calculator-microservice"
        assert combined[0]["level"] == "info"
        assert "timestamp" in combined[0]
        assert [entry["event"] for entry in errors] == ["operation_rejected"]

    def test_log_files_are_appended(self, tmp_path, restore_logging):
        settings = Settings(LOG_TO_FILES=True, LOG_DIR=str(tmp_path))
        for _ in range(2):
            sinks = configure_logging(settings)
            sinks.start()
            get_logger().info("server_started")
            sinks.close()

        assert len(read_json_lines(tmp_path / COMBINED_LOG_FILE)) == 2

    def test_exceptions_rendered_in_file(self, tmp_path, restore_logging):
        settings = Settings(LOG_TO_FILES=True, LOG_DIR=str(tmp_path))
        sinks = configure_logging(settings)
        sinks.start()
        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            get_logger().error("unhandled_exception", exc_info=exc)
        sinks.close()

        (entry,) = read_json_lines(tmp_path / ERROR_LOG_FILE)
        assert entry["event"] == "unhandled_exception"
        assert entry["exception"][0]["exc_type"] == "RuntimeError"

    def test_exceptions_log_only_holds_exceptions(self, tmp_path, restore_logging):
        settings = Settings(LOG_TO_FILES=True, LOG_DIR=str(tmp_path))
        sinks = configure_logging(settings)
        sinks.start()

        logger = get_logger()
        logger.info("operation_succeeded")
        logger.error("operation_rejected", error_code="NEGATIVE_RADICAND")
        try:
            raise ValueError("bad state")
        except ValueError as exc:
            logger.error("unhandled_exception", exc_info=exc)
        sinks.close()

        (entry,) = read_json_lines(tmp_path / EXCEPTIONS_LOG_FILE)
        assert entry["event"] == "unhandled_exception"
        assert entry["exception"][0]["exc_type"] == "ValueError"
        assert len(read_json_lines(tmp_path / ERROR_LOG_FILE)) == 2

    def test_close_releases_files_and_root_handler(self, tmp_path, restore_logging):
        sinks = configure_logging(Settings(LOG_TO_FILES=True, LOG_DIR=str(tmp_path)))
        sinks.start()
        assert sinks.queue_handler in logging.getLogger().handlers

        sinks.close()

        assert sinks.queue_handler not in logging.getLogger().handlers
        assert len(sinks.handlers) == 3
        assert all(handler.stream is None for handler in sinks.handlers)


class TestRequestLogging:
    """Tests for RequestLoggingMiddleware."""

    def test_logs_start_and_completion(self):
        client = TestClient(app)
        with capture_logs() as logs:
            client.get("/divide", params={"num1": "1", "num2": "0"})

        events = [entry["event"] for entry in logs]
        assert events == ["request_started", "operation_rejected", "request_completed"]

        completed = logs[-1]
        assert completed["status"] == 400
        assert completed["method"] == "GET"
        assert completed["url"] == "/divide?num1=1&num2=0"
        assert completed["duration_ms"] >= 0

        rejected = logs[1]
        assert rejected["log_level"] == "error"
        assert rejected["error_code"] == "DIVISION_BY_ZERO"

    def test_not_found_logged_as_warning(self):
        client = TestClient(app)
        with capture_logs() as logs:
            client.get("/nope")

        warnings = [entry for entry in logs if entry["log_level"] == "warning"]
        assert [entry["event"] for entry in warnings] == ["endpoint_not_found"]

    def test_internal_error_logged_with_completion(self):
        from unittest.mock import patch

        client = TestClient(app, raise_server_exceptions=False)
        with capture_logs() as logs, patch(
            "calculator.arithmetic.service.compute", side_effect=ZeroDivisionError("x")
        ):
            client.get("/add", params={"num1": "1", "num2": "2"})

        events = [entry["event"] for entry in logs]
        assert "unhandled_exception" in events
        completed = [entry for entry in logs if entry["event"] == "request_completed"]
        assert completed[0]["status"] == 500


def test_lifespan_logs_startup_and_shutdown(restore_logging):
    from unittest.mock import MagicMock, patch

    logger = MagicMock()
    with patch("calculator.main.get_logger", return_value=logger):
        with TestClient(app) as client:
            assert client.get("/health").status_code == 200

    events = [call.args[0] for call in logger.info.call_args_list]
    assert events == ["server_started", "server_stopped"]


def test_lifespan_closes_log_files_on_shutdown(tmp_path, restore_logging):
    """Shutdown releases the file sinks opened at startup."""
    from unittest.mock import patch

    created = []

    def configure_and_record(settings):
        sinks = configure_logging(settings)
        created.append(sinks)
        return sinks

    settings = Settings(LOG_TO_FILES=True, LOG_DIR=str(tmp_path))
    with patch("calculator.main.settings", settings), patch(
        "calculator.main.configure_logging", side_effect=configure_and_record
    ):
        with TestClient(app) as client:
            assert client.get("/health").status_code == 200

    (sinks,) = created
    assert all(handler.stream is None for handler in sinks.handlers)
    assert not any(
        isinstance(handler, EventQueueHandler) for handler in logging.getLogger().handlers
    )
    events = [entry["event"] for entry in read_json_lines(tmp_path / COMBINED_LOG_FILE)]
    assert events[0] == "server_started"
    assert events[-1] == "server_stopped"
