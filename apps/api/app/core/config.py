"""Application configuration for the signaling server."""
from __future__ import annotations

import re
from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_DURATION_UNITS = {
    "h": "hours",
    "m": "minutes",
    "s": "seconds",
    "ms": "milliseconds",
}


def parse_duration(value: str) -> timedelta:
    """Parse Go-style durations such as ``30m``, ``1h30m`` or ``45s``."""

    text = value.strip()
    position = 0
    total = timedelta()
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        amount, unit = match.groups()
        total += timedelta(**{_DURATION_UNITS[unit]: float(amount)})
        position = match.end()
    if not text or position != len(text):
        raise ValueError(f"invalid duration: {value!r}")
    return total


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_env: str = Field(default="development")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)
    cors_allow_origins: Annotated[list[str], NoDecode] = Field(default_factory=list)
    log_level: str = Field(default="INFO")

    stun_server: str = Field(default="stun:stun.l.google.com:19302")
    token_expiry: timedelta = Field(default=timedelta(minutes=30))
    sweep_interval: timedelta = Field(default=timedelta(minutes=1))
    token_bytes: int = Field(default=9, ge=6, description="Random bytes per session token")

    enable_https: bool = Field(default=False)
    tls_cert_file: str = Field(default="certs/server.crt")
    tls_key_file: str = Field(default="certs/server.key")

    @field_validator("token_expiry", "sweep_interval", mode="before")
    @classmethod
    def _parse_go_duration(cls, value: object) -> object:
        """Accept ``30m``-style values alongside seconds and ISO-8601 durations."""

        if not isinstance(value, str):
            return value
        text = value.strip()
        if text and text[-1] in "hms":
            return parse_duration(text)
        try:
            return timedelta(seconds=float(text))
        except ValueError:
            return value

    @field_validator("token_expiry", "sweep_interval")
    @classmethod
    def _positive(cls, value: timedelta) -> timedelta:
        if value <= timedelta():
            raise ValueError("duration must be positive")
        return value

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        """Allow comma-separated env values for CORS origins."""

        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
