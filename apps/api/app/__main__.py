"""Run the signaling server: ``python -m app [--port 8080] [--https] ...``."""
from __future__ import annotations

import argparse
import logging
from typing import Sequence

import uvicorn

from .core.config import Settings, get_settings, parse_duration
from .core.logging_config import setup_logging
from .main import create_app
from .services.network import get_lan_ip

logger = logging.getLogger("app")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="app", description="Peer-to-peer screen share signaling server")
    parser.add_argument("--port", type=int, help="Server port")
    parser.add_argument("--stun", dest="stun_server", help="STUN server URL")
    parser.add_argument("--token-expiry", type=parse_duration, help="Token expiry, e.g. 30m")
    parser.add_argument("--sweep-interval", type=parse_duration, help="Expired-session sweep interval, e.g. 1m")
    parser.add_argument("--https", dest="enable_https", action="store_true", default=None, help="Serve over TLS")
    parser.add_argument("--cert", dest="tls_cert_file", help="Path to TLS certificate file")
    parser.add_argument("--key", dest="tls_key_file", help="Path to TLS private key file")
    return parser


def resolve_settings(argv: Sequence[str] | None = None) -> Settings:
    """Layer command-line flags over environment settings."""

    args = build_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return get_settings().model_copy(update=overrides)


def main(argv: Sequence[str] | None = None) -> None:
    settings = resolve_settings(argv)
    setup_logging(settings.log_level)

    protocol = "HTTPS" if settings.enable_https else "HTTP"
    logger.info("%s server listening on %s:%s", protocol, settings.host, settings.port)
    logger.info("LAN IP: %s", get_lan_ip() or "unknown")

    ssl_options: dict[str, str] = {}
    if settings.enable_https:
        logger.info("TLS certificate: %s", settings.tls_cert_file)
        logger.info("TLS private key: %s", settings.tls_key_file)
        ssl_options = {"ssl_certfile": settings.tls_cert_file, "ssl_keyfile": settings.tls_key_file}
    else:
        logger.warning("Running in HTTP mode; browsers only allow screen capture over HTTPS or on localhost")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        **ssl_options,
    )


if __name__ == "__main__":
    main()
