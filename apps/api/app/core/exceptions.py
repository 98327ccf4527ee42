"""Error taxonomy for the signaling core.

Every failure raised by the session store or the handshake policy is a
``SignalingError`` carrying an ``ErrorKind``. Presentation (HTTP status,
user-facing wording) is decided by the router, never here.
"""
from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    MALFORMED = "malformed"
    ORDERING = "ordering"
    CONFLICT = "conflict"
    FATAL = "fatal"


class SignalingError(Exception):
    """Base class for store and policy failures."""

    kind: ErrorKind = ErrorKind.FATAL
    default_message = "signaling error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class SessionNotFoundError(SignalingError):
    kind = ErrorKind.NOT_FOUND
    default_message = "session not found"


class SessionExpiredError(SignalingError):
    kind = ErrorKind.EXPIRED
    default_message = "session expired"


class InvalidOfferError(SignalingError):
    kind = ErrorKind.MALFORMED
    default_message = "invalid offer"


class InvalidAnswerError(SignalingError):
    kind = ErrorKind.MALFORMED
    default_message = "invalid answer"


class OfferNotFoundError(SignalingError):
    kind = ErrorKind.ORDERING
    default_message = "offer not found"


class AnswerNotFoundError(SignalingError):
    kind = ErrorKind.ORDERING
    default_message = "answer not found"


class OfferNotAcceptedError(SignalingError):
    """The session already holds an offer."""

    kind = ErrorKind.ORDERING
    default_message = "session cannot accept offer"


class SessionNotReadyError(SignalingError):
    """An answer arrived before the offer."""

    kind = ErrorKind.ORDERING
    default_message = "session not ready for answer"


class AnswerAlreadyExistsError(SignalingError):
    kind = ErrorKind.ORDERING
    default_message = "answer already exists"


class SessionConflictError(SignalingError):
    """The stored session changed between a caller's read and write."""

    kind = ErrorKind.CONFLICT
    default_message = "session was modified concurrently"


class TokenGenerationError(SignalingError):
    kind = ErrorKind.FATAL
    default_message = "failed to generate token"


class TokenCollisionError(SignalingError):
    kind = ErrorKind.FATAL
    default_message = "generated token collides with a live session"
