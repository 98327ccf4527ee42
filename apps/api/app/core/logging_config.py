"""Logging configuration for the signaling server."""
from __future__ import annotations

import logging


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single console handler to the root logger."""

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if not any(isinstance(h, logging.StreamHandler) for h in root_logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Every API call is already logged by the router.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root_logger


def mask_token(token: str | None) -> str:
    """Shorten a session token for log output."""

    if not token:
        return "<empty>"
    return f"{token[:8]}..."
