#!/usr/bin/env python3
"""
uniproxy-auth - Main Entry Point

Thin orchestration layer that:
1. Loads configuration (environment or proxy config file)
2. Configures logging
3. Checks panel connectivity or runs the sync loop until signalled
"""

import argparse
import logging
import signal
import sys
import threading
from typing import List, Optional

from .config.provider import ConfigProvider, EnvConfigProvider, FileConfigProvider
from .errors import ConfigError, FetchError, InitializationError
from .logging_config import configure_logging
from .modules.auth import AuthFactory
from .modules.panel import PanelClient

logger = logging.getLogger(__name__)


def _config_provider(args: argparse.Namespace) -> ConfigProvider:
    if args.config:
        return FileConfigProvider(args.config)
    return EnvConfigProvider()


def check(provider: ConfigProvider) -> int:
    """Fetch the user list once and report how many users the node has."""
    config = provider.get_panel_config()
    if not config.enabled:
        print("Panel authentication is disabled")
        return 0

    client = PanelClient(config)
    try:
        users = client.fetch_users()
    except FetchError as e:
        logger.error(f"Panel check failed: {e}")
        return 1
    finally:
        client.close()

    print(f"Panel reachable: {len(users)} user(s) for node {config.node_id}")
    return 0


def run(provider: ConfigProvider) -> int:
    """Run the sync loop until SIGINT or SIGTERM, then flush once more."""
    try:
        authenticator = AuthFactory.build(provider)
    except InitializationError as e:
        logger.error(str(e))
        return 1

    stop = threading.Event()

    def _handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, shutting down")
        stop.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    with authenticator:
        stop.wait()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uniproxy-auth",
        description="Panel authentication and traffic reporting for proxy nodes",
    )
    parser.add_argument(
        "--config",
        help="Proxy config file (JSON or YAML) with a 'v2board' section; "
        "defaults to PANEL_* environment variables",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("check", help="Fetch the user list once")
    subparsers.add_parser("run", help="Run the sync loop until interrupted")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        provider = _config_provider(args)
        if args.command == "check":
            return check(provider)
        return run(provider)
    except ConfigError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
