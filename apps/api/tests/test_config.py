"""Tests for settings parsing and command-line overrides."""
from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from app import __main__ as entrypoint
from app.core.config import Settings, parse_duration


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("30m", timedelta(minutes=30)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("45s", timedelta(seconds=45)),
        ("1.5h", timedelta(minutes=90)),
        ("250ms", timedelta(milliseconds=250)),
    ],
)
def test_parse_duration(text: str, expected: timedelta) -> None:
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "m", "30", "30x", "1h 30m", "h30"])
def test_parse_duration_rejects_garbage(text: str) -> None:
    with pytest.raises(ValueError):
        parse_duration(text)


def test_defaults(monkeypatch) -> None:
    for name in ("PORT", "TOKEN_EXPIRY", "SWEEP_INTERVAL", "STUN_SERVER", "TOKEN_BYTES", "ENABLE_HTTPS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.token_expiry == timedelta(minutes=30)
    assert settings.sweep_interval == timedelta(minutes=1)
    assert settings.token_bytes == 9
    assert settings.stun_server == "stun:stun.l.google.com:19302"
    assert settings.enable_https is False


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "9443")
    monkeypatch.setenv("TOKEN_EXPIRY", "10m")
    monkeypatch.setenv("SWEEP_INTERVAL", "15")
    monkeypatch.setenv("ENABLE_HTTPS", "true")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")

    settings = Settings(_env_file=None)

    assert settings.port == 9443
    assert settings.token_expiry == timedelta(minutes=10)
    assert settings.sweep_interval == timedelta(seconds=15)
    assert settings.enable_https is True
    assert settings.cors_allow_origins == ["https://a.example", "https://b.example"]


def test_rejects_non_positive_expiry() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, token_expiry=timedelta())


def test_rejects_short_tokens() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, token_bytes=4)


def test_command_line_flags_override_settings(monkeypatch) -> None:
    monkeypatch.setattr(entrypoint, "get_settings", lambda: Settings(_env_file=None, port=8080))

    settings = entrypoint.resolve_settings(
        ["--port", "9000", "--token-expiry", "5m", "--https", "--cert", "c.pem", "--key", "k.pem"]
    )

    assert settings.port == 9000
    assert settings.token_expiry == timedelta(minutes=5)
    assert settings.enable_https is True
    assert settings.tls_cert_file == "c.pem"
    assert settings.tls_key_file == "k.pem"
    assert settings.stun_server == "stun:stun.l.google.com:19302"


def test_command_line_without_flags_keeps_settings(monkeypatch) -> None:
    monkeypatch.setattr(entrypoint, "get_settings", lambda: Settings(_env_file=None, port=7000))

    settings = entrypoint.resolve_settings([])

    assert settings.port == 7000
    assert settings.enable_https is False
