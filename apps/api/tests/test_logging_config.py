"""Tests for logging setup and token masking."""
from __future__ import annotations

import logging

from app.core.logging_config import mask_token, setup_logging


def test_mask_token_keeps_prefix_only() -> None:
    assert mask_token("abcdefghijkl") == "abcdefgh..."
    assert mask_token("") == "<empty>"
    assert mask_token(None) == "<empty>"


def test_setup_logging_quiets_access_log() -> None:
    root_logger = logging.getLogger()
    access_logger = logging.getLogger("uvicorn.access")
    previous = (root_logger.level, access_logger.level)
    try:
        assert setup_logging("debug") is root_logger
        assert root_logger.level == logging.DEBUG
        assert access_logger.level == logging.WARNING
    finally:
        root_logger.setLevel(previous[0])
        access_logger.setLevel(previous[1])
