"""Unit tests for the structured logging configuration.

Verifies that ``configure_logging()`` produces well-formed output and that
the ``panel_id_var`` context variable is propagated into log records.
"""

from __future__ import annotations

import json
import logging
from io import StringIO

from feedtui.core.logging_config import configure_logging, panel_id_var

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _capture_log_output(log_level: str, message: str) -> str:
    """Emit a single log record and capture the raw text the handler writes."""
    configure_logging(log_level)

    buffer = StringIO()
    root = logging.getLogger()
    original_streams = []
    for handler in root.handlers:
        if hasattr(handler, "stream"):
            original_streams.append((handler, handler.stream))
            handler.stream = buffer

    logging.getLogger("test.logging_config").info(message)

    for handler, stream in original_streams:
        handler.flush()
        handler.stream = stream

    return buffer.getvalue()


def _find(output: str, event: str) -> dict | None:
    lines = [line for line in output.strip().splitlines() if line.strip()]
    records = [json.loads(line) for line in lines]
    return next((r for r in records if r.get("event") == event), None)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestConfigureLoggingJson:
    """Verify INFO-level JSON output."""

    def test_logging_produces_json(self) -> None:
        output = _capture_log_output("INFO", "test_message_json")

        lines = [line for line in output.strip().splitlines() if line.strip()]
        assert lines, "Expected at least one log line, got none"
        for line in lines:
            assert isinstance(json.loads(line), dict)

    def test_json_contains_required_fields(self) -> None:
        target = _find(_capture_log_output("INFO", "required_fields_test"), "required_fields_test")

        assert target is not None
        assert "timestamp" in target
        assert target["level"] == "info"
        assert target["logger"] == "test.logging_config"

    def test_httpx_is_quietened(self) -> None:
        configure_logging("INFO")

        assert logging.getLogger("httpx").level == logging.WARNING


class TestPanelIdContextVar:
    def test_panel_id_appears_in_json_output(self) -> None:
        token = panel_id_var.set("archive-0-1")
        try:
            output = _capture_log_output("INFO", "panel_id_propagation_test")
        finally:
            panel_id_var.reset(token)

        target = _find(output, "panel_id_propagation_test")
        assert target is not None
        assert target.get("panel_id") == "archive-0-1"

    def test_no_panel_id_when_var_unset(self) -> None:
        target = _find(_capture_log_output("INFO", "no_panel_id_test"), "no_panel_id_test")

        assert target is not None
        assert target.get("panel_id") is None


class TestConfigureLoggingIdempotent:
    def test_calling_twice_does_not_duplicate_handlers(self) -> None:
        configure_logging("INFO")
        configure_logging("INFO")

        assert len(logging.getLogger().handlers) == 1

    def test_debug_level_sets_root_level(self) -> None:
        configure_logging("debug")

        assert logging.getLogger().level == logging.DEBUG
