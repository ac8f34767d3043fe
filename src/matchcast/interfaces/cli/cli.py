from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from matchcast.infrastructure.config import load_config
from matchcast.infrastructure.logging.setup import configure_logging
from matchcast.interfaces.app import create_app

log = structlog.get_logger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 7000

# argparse dest -> flat config key understood by load_config()
_FLAT_OVERRIDES: dict[str, str] = {
    "environment": "environment",
    "log_level": "log_level",
    "log_format": "log_format",
    "content_api_url": "content_api_base_url",
    "unlock_api_url": "unlock_api_base_url",
}


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="matchcast",
        description="Stremio addon for live media with premium link unlocking.",
    )

    server = parser.add_argument_group("server")
    server.add_argument("--host", help="Bind host (overrides HOST env).")
    server.add_argument("--port", type=int, help="Bind port (overrides PORT env).")

    sources = parser.add_argument_group("configuration sources")
    sources.add_argument("--config", help="Path to YAML config file.")
    sources.add_argument("--dotenv", help="Path to .env file.")

    overrides = parser.add_argument_group("overrides (highest precedence)")
    overrides.add_argument("--environment", choices=["dev", "test", "prod"])
    overrides.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    overrides.add_argument("--log-format", choices=["json", "console"])
    overrides.add_argument(
        "--content-api-url", metavar="URL", help="Content API base URL."
    )
    overrides.add_argument(
        "--unlock-api-url", metavar="URL", help="Unlock service base URL."
    )
    overrides.add_argument(
        "--max-items",
        type=int,
        metavar="N",
        help="Max items per catalog response.",
    )

    return parser.parse_args(list(argv) if argv is not None else None)


def build_cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect the override flags that were actually given."""
    overrides: dict[str, Any] = {
        key: getattr(args, dest)
        for dest, key in _FLAT_OVERRIDES.items()
        if getattr(args, dest) is not None
    }
    if args.max_items is not None:
        overrides["catalog"] = {"max_items": args.max_items}
    return overrides


def _bind_address(args: argparse.Namespace) -> tuple[str, int]:
    host = args.host or os.getenv("HOST") or DEFAULT_HOST
    port = args.port if args.port is not None else int(os.getenv("PORT", DEFAULT_PORT))
    return host, port


def start(argv: Iterable[str] | None = None) -> None:
    """
    Process entrypoint.

    Config is loaded once here and handed to create_app(); logging is
    configured before uvicorn starts so its own records go through structlog.
    """
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    host, port = _bind_address(args)

    config = load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides=build_cli_overrides(args),
    )

    log_config = configure_logging(config)
    log.info(
        "matchcast_starting",
        host=host,
        port=port,
        premium_enabled=config.premium_enabled,
        config=config.to_sectioned_dict(),
    )

    uvicorn.run(create_app(config), host=host, port=port, log_config=log_config)


if __name__ == "__main__":
    raise SystemExit(start())
