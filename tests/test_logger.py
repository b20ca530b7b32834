"""Tests for core/logger.py."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from config.settings import Settings
from core.logger import redact_secrets, setup_logging


class TestLogger:

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        httpx_level = logging.getLogger("httpx").level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)
        logging.getLogger("httpx").setLevel(httpx_level)
        structlog.reset_defaults()

    def test_setup_installs_single_handler(self) -> None:
        setup_logging(force=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_setup_idempotent(self) -> None:
        setup_logging(force=True)
        handler = logging.getLogger().handlers[0]
        setup_logging()
        assert logging.getLogger().handlers[0] is handler

    def test_level_from_settings(self) -> None:
        setup_logging(Settings(LOG_LEVEL="debug"), force=True)
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_dev_console_output(self, capsys) -> None:
        setup_logging(Settings(APP_ENV="dev"), force=True)
        structlog.get_logger("tests.logger").warning("logger_test.event", answer=42)
        out = capsys.readouterr().out
        assert "logger_test.event" in out
        assert "answer=42" in out

    def test_json_output_masks_keys(self, capsys) -> None:
        setup_logging(Settings(APP_ENV="prod"), force=True)
        structlog.get_logger("tests.logger").warning(
            "logger_test.secret", private_key="0x" + "11" * 32, agent_address="0xabc"
        )
        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "logger_test.secret"
        assert record["private_key"] == "***"
        assert record["agent_address"] == "0xabc"
        assert record["logger"] == "tests.logger"
        assert record["level"] == "warning"

    def test_stdlib_records_rendered_as_json(self, capsys) -> None:
        setup_logging(Settings(APP_ENV="prod"), force=True)
        logging.getLogger("tests.plain").warning("plain record")
        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "plain record"


class TestRedactSecrets:

    def test_masks_only_secret_fields(self) -> None:
        event = {"event": "x", "key": "deadbeef", "address": "0x1"}
        assert redact_secrets(None, "info", event) == {
            "event": "x",
            "key": "***",
            "address": "0x1",
        }
