"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from castors.config.logging import configure_logging
from castors.registry.loader import ConverterLoader


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("castors").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_is_warning(self) -> None:
        configure_logging()
        assert logging.getLogger("castors").level == logging.WARNING

    def test_console_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, stream=stream)
        structlog.get_logger("castors.test").warning("hello world", key="val")
        output = stream.getvalue()
        assert "hello world" in output
        assert "key" in output

    def test_json_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        structlog.get_logger("castors.test").warning("json test", answer=42)
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "castors.test"
        assert "timestamp" in parsed

    def test_rebuild_summary_rendered_as_json(self, castors_anchor: type) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        ConverterLoader([castors_anchor], settings=None).load()
        events = [json.loads(line) for line in stream.getvalue().splitlines()]
        summary = [e for e in events if e["event"].startswith("Using ")]
        assert summary
        assert summary[0]["logger"] == "castors.registry.loader"
        assert summary[0]["level"] == "debug"

    def test_quiet_when_not_verbose(self, castors_anchor: type) -> None:
        stream = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=stream)
        ConverterLoader([castors_anchor], settings=None).load()
        assert stream.getvalue() == ""

    def test_third_party_debug_is_suppressed(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        logging.getLogger("pluggy").debug("hook noise")
        logging.getLogger("someone.else").info("app noise")
        assert stream.getvalue() == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1


@pytest.fixture
def castors_anchor() -> type:
    from castors.converters.builtins import ObjectToObject

    return ObjectToObject
