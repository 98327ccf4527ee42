"""Expose signaling entities."""
from .session import Session, SessionDescription, SessionStatus

__all__ = [
    "Session",
    "SessionDescription",
    "SessionStatus",
]
