"""
Entry point — start the focus daemon.

Usage:
    focusd
    focusd --port 9029 --config-dir ~/.config/focus
    python -m focusd.main
    uvicorn focusd.api.app:app --host 127.0.0.1 --port 9029
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import uvicorn

from .api.app import create_app
from .config import config


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Local focus scheduling daemon")
    parser.add_argument("--host", default=config.api_host, help="Bind address")
    parser.add_argument("--port", type=int, default=config.api_port, help="Bind port")
    parser.add_argument("--config-dir", type=Path, default=config.config_dir,
                        help="Directory of focus configuration files")
    parser.add_argument("--timezone", default=config.timezone,
                        help="IANA timezone for schedule windows (default: local time)")
    parser.add_argument("--no-reload", action="store_true",
                        help="Read configurations once at startup only")
    parser.add_argument("--log-level", default=config.log_level,
                        choices=["debug", "info", "warning", "error"])
    args = parser.parse_args(argv)

    config.api_host = args.host
    config.api_port = args.port
    config.config_dir = args.config_dir.expanduser()
    config.timezone = args.timezone
    config.reload_on_change = config.reload_on_change and not args.no_reload
    config.log_level = args.log_level

    configure_logging(config.log_level)
    uvicorn.run(
        create_app(config),
        host=config.api_host,
        port=config.api_port,
        log_level=config.log_level,
    )


if __name__ == "__main__":
    main()
