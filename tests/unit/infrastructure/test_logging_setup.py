"""Tests for the structlog/stdlib logging configuration."""

from __future__ import annotations

import logging

import structlog

from matchcast.infrastructure.config import AppConfig
from matchcast.infrastructure.logging.setup import (
    _add_record_created_timestamp_utc,
    _drop_color_message,
    build_logging_config,
)


def _renderer(cfg: dict) -> object:
    return cfg["formatters"]["structlog"]["processors"][-1]


class TestBuildLoggingConfig:
    def test_prod_defaults_to_json(self) -> None:
        cfg = build_logging_config(AppConfig(environment="prod"))
        assert isinstance(_renderer(cfg), structlog.processors.JSONRenderer)

    def test_dev_defaults_to_console(self) -> None:
        cfg = build_logging_config(AppConfig(environment="dev"))
        assert isinstance(_renderer(cfg), structlog.dev.ConsoleRenderer)

    def test_explicit_format_wins(self) -> None:
        cfg = build_logging_config(AppConfig(environment="dev", log_format="json"))
        assert isinstance(_renderer(cfg), structlog.processors.JSONRenderer)

    def test_level_applied_everywhere(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="ERROR"))

        assert cfg["root"]["level"] == "ERROR"
        assert cfg["loggers"]["uvicorn"]["level"] == "ERROR"
        assert cfg["loggers"]["uvicorn.access"]["level"] == "ERROR"
        assert cfg["loggers"]["httpx"]["level"] == "ERROR"

    def test_httpx_quieter_at_info(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="INFO"))
        assert cfg["loggers"]["httpx"]["level"] == "WARNING"
        assert cfg["loggers"]["httpcore"]["level"] == "WARNING"

    def test_handlers_use_structlog_formatter(self) -> None:
        cfg = build_logging_config(AppConfig())
        assert cfg["handlers"]["default"]["formatter"] == "structlog"
        assert cfg["handlers"]["access"]["formatter"] == "structlog"

    def test_base_config_not_mutated(self) -> None:
        build_logging_config(AppConfig(log_level="DEBUG"))
        cfg = build_logging_config(AppConfig(log_level="INFO"))
        assert cfg["loggers"]["uvicorn"]["level"] == "INFO"


class TestProcessors:
    def test_drop_color_message(self) -> None:
        out = _drop_color_message(None, None, {"event": "x", "color_message": "y"})
        assert out == {"event": "x"}

    def test_foreign_record_gets_utc_timestamp(self) -> None:
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "m", None, None)
        record.created = 0.0

        out = _add_record_created_timestamp_utc(None, None, {"_record": record})

        assert out["timestamp"] == "1970-01-01T00:00:00Z"

    def test_structlog_events_untouched(self) -> None:
        assert _add_record_created_timestamp_utc(None, None, {"event": "x"}) == {
            "event": "x"
        }
