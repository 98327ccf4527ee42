"""Signaling session entities."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime


class SessionStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    EXPIRED = "expired"


@dataclass(frozen=True, slots=True)
class SessionDescription:
    """An SDP offer or answer. The SDP body is opaque to the server."""

    type: str
    sdp: str

    def is_valid(self) -> bool:
        return bool(self.type) and bool(self.sdp)


@dataclass(slots=True)
class Session:
    """One screen-share handshake between a sender and a viewer."""

    token: str
    created_at: datetime
    expires_at: datetime
    status: SessionStatus = SessionStatus.PENDING
    offer: SessionDescription | None = None
    answer: SessionDescription | None = None
    revision: int = field(default=0, compare=False)

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def is_active(self, now: datetime) -> bool:
        return self.status is SessionStatus.ACTIVE and not self.is_expired(now)

    def can_accept_offer(self, now: datetime) -> bool:
        return self.status is SessionStatus.PENDING and not self.is_expired(now)

    def can_accept_answer(self, now: datetime) -> bool:
        return self.status is SessionStatus.ACTIVE and self.answer is None and not self.is_expired(now)

    def effective_status(self, now: datetime) -> SessionStatus:
        """Return the stored status, overlaid with ``EXPIRED`` once past the TTL."""

        if self.is_expired(now):
            return SessionStatus.EXPIRED
        return self.status
