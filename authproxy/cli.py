"""
Command line entry point.

Usage:
    authproxy                          # reads ./config.yaml (or $CONFIG_PATH)
    authproxy --config /etc/proxy.yaml
    authproxy -c proxy.yaml --host 127.0.0.1
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv

from authproxy.config import get_settings
from authproxy.errors import ConfigError, SocketBindError
from authproxy.logging import get_logger
from authproxy.main import create_app
from authproxy.server import DEFAULT_BIND_HOST, ProxyServer, bind_socket
from authproxy.services.proxy_config import parse_proxy_config, read_config_file, redact_secret

logger = get_logger(__name__)


def build_parser(default_config: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="authproxy", description="Authenticating reverse proxy")
    parser.add_argument(
        "-c", "--config",
        default=default_config,
        help=f"Path to the YAML config file (env: CONFIG_PATH, default: {default_config})"
    )
    parser.add_argument(
        "--host",
        default=DEFAULT_BIND_HOST,
        help=f"Address to listen on (default: {DEFAULT_BIND_HOST})"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Load config, bind, serve until interrupted. Returns the process exit code."""
    load_dotenv()
    args = build_parser(get_settings().config_path).parse_args(argv)

    try:
        contents = read_config_file(args.config)
        config = parse_proxy_config(contents, args.config)
    except ConfigError as e:
        logger.error(str(e))
        return 1

    print(redact_secret(contents))
    logger.info(f"Loaded config from {args.config}, forwarding to {config.backend_url}")

    try:
        sock = bind_socket(args.host, config.port)
    except SocketBindError as e:
        logger.error(str(e))
        return 1

    server = ProxyServer(uvicorn.Config(create_app(config), lifespan="on"))
    logger.info(f"Listening on {args.host}:{config.port}")
    try:
        asyncio.run(server.serve(sockets=[sock]))
    finally:
        sock.close()

    if not server.started:
        logger.error("Server failed to start")
        return 1
    logger.info("Server shut down gracefully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
