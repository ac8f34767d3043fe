"""structlog on top of stdlib logging, shared with uvicorn.

Application code logs through ``structlog.get_logger(__name__)`` with an
event name plus key/value context. uvicorn, httpx and any other stdlib
logger are rendered by the same ProcessorFormatter, so one process emits
one format: coloured console lines in dev/test, JSON lines in prod.
"""

from __future__ import annotations

import copy
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

import structlog
from uvicorn.config import LOGGING_CONFIG as UVICORN_LOGGING_CONFIG

from matchcast.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)

# Loggers that are chatty at INFO and only interesting when something breaks.
_QUIET_LOGGERS = ("httpx", "httpcore")


def _drop_color_message(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    # uvicorn attaches "color_message", which duplicates the event text.
    event_dict.pop("color_message", None)
    return event_dict


def _add_record_created_timestamp_utc(
    _: Any, __: Any, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    Stamp foreign (non-structlog) LogRecords with the time they were created.

    ProcessorFormatter sets event_dict["_record"] for foreign records.
    """
    record = event_dict.get("_record")
    if isinstance(record, logging.LogRecord):
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        event_dict["timestamp"] = dt.isoformat().replace("+00:00", "Z")
    return event_dict


def _foreign_pre_chain() -> list[structlog.typing.Processor]:
    return [
        _drop_color_message,
        structlog.contextvars.merge_contextvars,
        _add_record_created_timestamp_utc,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]


def _renderer(config: AppConfig) -> structlog.typing.Processor:
    if config.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _quiet_level(level: str) -> str:
    return "WARNING" if level in ("DEBUG", "INFO") else level


def build_logging_config(config: AppConfig) -> dict[str, Any]:
    """
    dictConfig for ``uvicorn.run(log_config=...)``.

    Starts from uvicorn's own LOGGING_CONFIG so its handlers and logger
    names stay intact, then swaps every handler onto the structlog
    formatter. ``config.log_level`` applies to uvicorn's loggers and the
    root logger; httpx/httpcore stay one notch quieter.
    """
    cfg = copy.deepcopy(UVICORN_LOGGING_CONFIG)
    cfg["disable_existing_loggers"] = False

    cfg["formatters"]["structlog"] = {
        "()": structlog.stdlib.ProcessorFormatter,
        "foreign_pre_chain": _foreign_pre_chain(),
        "processors": [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(config),
        ],
    }
    for handler in cfg["handlers"].values():
        handler["formatter"] = "structlog"

    level = config.log_level
    for logger_cfg in cfg["loggers"].values():
        logger_cfg["level"] = level
    for name in _QUIET_LOGGERS:
        cfg["loggers"][name] = {
            "handlers": ["default"],
            "level": _quiet_level(level),
            "propagate": False,
        }

    cfg["root"] = {"handlers": ["default"], "level": level}
    return cfg


def configure_logging(config: AppConfig) -> dict[str, Any]:
    """Configure structlog and stdlib logging; return the uvicorn log_config."""
    structlog.configure(
        processors=[
            _drop_color_message,
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    cfg = build_logging_config(config)
    logging.config.dictConfig(cfg)
    log.info(
        "logging_configured",
        log_format=config.log_format,
        log_level=config.log_level,
        environment=config.environment,
    )
    return cfg
