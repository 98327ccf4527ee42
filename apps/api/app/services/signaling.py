"""Offer/answer handshake policy on top of the session repository.

A sender creates a session, posts its offer, then polls for the answer. The
viewer fetches the offer with the same token and posts its answer. The rules
below decide which of those requests are legal for the current session state.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.exceptions import (
    AnswerAlreadyExistsError,
    AnswerNotFoundError,
    InvalidAnswerError,
    InvalidOfferError,
    OfferNotAcceptedError,
    OfferNotFoundError,
    SessionConflictError,
    SessionExpiredError,
    SessionNotReadyError,
)
from ..models.session import Session, SessionDescription, SessionStatus
from ..repositories.sessions import MemorySessionRepository


@dataclass(slots=True)
class CreateSessionResult:
    token: str


class HandshakeService:
    """Create sessions and move them through pending -> active."""

    def __init__(self, repository: MemorySessionRepository, ttl: timedelta) -> None:
        self._repository = repository
        self._ttl = ttl

    def create_session(self) -> CreateSessionResult:
        session = self._repository.create_session(self._ttl)
        return CreateSessionResult(token=session.token)

    def submit_offer(self, token: str, offer: SessionDescription | None) -> None:
        if offer is None or not offer.is_valid():
            raise InvalidOfferError()

        while True:
            now = self._repository.now()
            session = self._load(token, now)
            if not session.can_accept_offer(now):
                raise OfferNotAcceptedError()

            session.offer = offer
            session.status = SessionStatus.ACTIVE
            try:
                self._repository.update_session(session)
            except SessionConflictError:
                continue
            return

    def get_offer(self, token: str) -> SessionDescription:
        session = self._load(token)
        if session.offer is None:
            raise OfferNotFoundError()
        return session.offer

    def submit_answer(self, token: str, answer: SessionDescription | None) -> None:
        if answer is None or not answer.is_valid():
            raise InvalidAnswerError()

        while True:
            now = self._repository.now()
            session = self._load(token, now)
            if not session.can_accept_answer(now):
                if session.answer is not None:
                    raise AnswerAlreadyExistsError()
                raise SessionNotReadyError()

            # Status stays ACTIVE; the handshake counts as active until expiry.
            session.answer = answer
            try:
                self._repository.update_session(session)
            except SessionConflictError:
                continue
            return

    def get_answer(self, token: str) -> SessionDescription:
        session = self._load(token)
        if session.answer is None:
            raise AnswerNotFoundError()
        return session.answer

    def active_session_count(self) -> int:
        return self._repository.active_session_count()

    def _load(self, token: str, now: datetime | None = None) -> Session:
        """Fetch a snapshot, raising ``SessionExpiredError`` for unswept expired sessions."""

        session = self._repository.get_session(token)
        if now is None:
            now = self._repository.now()
        if session.is_expired(now):
            raise SessionExpiredError()
        return session
