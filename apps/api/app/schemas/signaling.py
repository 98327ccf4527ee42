"""Data contracts for the signaling endpoints."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..models.session import SessionDescription


class SessionDescriptionPayload(BaseModel):
    """An RTCSessionDescription as serialized by the browser."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(default="", description="offer or answer")
    sdp: str = Field(default="", description="Opaque SDP body")

    def to_domain(self) -> SessionDescription:
        return SessionDescription(type=self.type, sdp=self.sdp)

    @classmethod
    def from_domain(cls, description: SessionDescription) -> "SessionDescriptionPayload":
        return cls(type=description.type, sdp=description.sdp)


class CreateSessionResponse(BaseModel):
    token: str


class SubmitDescriptionRequest(BaseModel):
    """Body of ``POST /api/offer`` and ``POST /api/answer``."""

    token: str = Field(default="", description="Session token from /api/new")
    sdp: SessionDescriptionPayload | None = Field(default=None, description="Offer or answer description")


class ServerInfoResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    host: str
    lan_ip: str = Field(default="", alias="lanIP")
