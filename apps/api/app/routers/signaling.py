"""HTTP polling endpoints for the offer/answer handshake."""
from __future__ import annotations

import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ..core import exceptions as errors
from ..core.logging_config import mask_token
from ..schemas import signaling as schemas
from ..services import network
from ..services.signaling import HandshakeService

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_STATUS: dict[type[errors.SignalingError], int] = {
    errors.SessionNotFoundError: status.HTTP_404_NOT_FOUND,
    errors.SessionExpiredError: status.HTTP_410_GONE,
    errors.InvalidOfferError: status.HTTP_400_BAD_REQUEST,
    errors.InvalidAnswerError: status.HTTP_400_BAD_REQUEST,
    errors.OfferNotFoundError: status.HTTP_404_NOT_FOUND,
    errors.AnswerNotFoundError: status.HTTP_404_NOT_FOUND,
    errors.OfferNotAcceptedError: status.HTTP_409_CONFLICT,
    errors.AnswerAlreadyExistsError: status.HTTP_409_CONFLICT,
    errors.SessionNotReadyError: status.HTTP_400_BAD_REQUEST,
}


def get_handshake_service(request: Request) -> HandshakeService:
    """FastAPI dependency returning the service built in ``create_app``."""

    return request.app.state.handshake_service


def _log_call(request: Request) -> None:
    client = request.client.host if request.client else "unknown"
    logger.info("API: %s %s from %s", request.method, request.url.path, client)


def _raise_http(exc: errors.SignalingError) -> NoReturn:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("Unexpected signaling failure: %s", exc)
        raise HTTPException(status_code=status_code, detail="internal server error") from exc
    raise HTTPException(status_code=status_code, detail=exc.message) from exc


@router.post("/new", response_model=schemas.CreateSessionResponse)
async def create_session(
    request: Request,
    service: HandshakeService = Depends(get_handshake_service),
) -> schemas.CreateSessionResponse:
    """Start a sender session and return its one-time token."""

    _log_call(request)
    try:
        result = service.create_session()
    except (errors.TokenGenerationError, errors.TokenCollisionError) as exc:
        logger.error("Error creating session: %s", exc)
        raise HTTPException(status_code=500, detail="failed to generate token") from exc

    logger.info("Sender session started with token: %s", mask_token(result.token))
    return schemas.CreateSessionResponse(token=result.token)


@router.post("/offer", status_code=status.HTTP_204_NO_CONTENT)
async def submit_offer(
    payload: schemas.SubmitDescriptionRequest,
    request: Request,
    service: HandshakeService = Depends(get_handshake_service),
) -> Response:
    """Store the sender's offer."""

    _log_call(request)
    logger.info("Sender posting offer for token: %s", mask_token(payload.token))
    offer = payload.sdp.to_domain() if payload.sdp is not None else None
    try:
        service.submit_offer(payload.token, offer)
    except errors.SignalingError as exc:
        logger.warning("Error submitting offer for token %s: %s", mask_token(payload.token), exc)
        _raise_http(exc)

    logger.info("Offer stored for token: %s (type: %s)", mask_token(payload.token), offer.type)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/offer", response_model=schemas.SessionDescriptionPayload)
async def get_offer(
    request: Request,
    token: str = "",
    service: HandshakeService = Depends(get_handshake_service),
) -> schemas.SessionDescriptionPayload:
    """Return the stored offer to the viewer."""

    _log_call(request)
    try:
        offer = service.get_offer(token)
    except errors.SignalingError as exc:
        logger.info("Offer unavailable for token %s: %s", mask_token(token), exc)
        _raise_http(exc)

    logger.info("Offer retrieved for token: %s", mask_token(token))
    return schemas.SessionDescriptionPayload.from_domain(offer)


@router.post("/answer", status_code=status.HTTP_204_NO_CONTENT)
async def submit_answer(
    payload: schemas.SubmitDescriptionRequest,
    request: Request,
    service: HandshakeService = Depends(get_handshake_service),
) -> Response:
    """Store the viewer's answer, completing the handshake."""

    _log_call(request)
    logger.info("Viewer posting answer for token: %s", mask_token(payload.token))
    answer = payload.sdp.to_domain() if payload.sdp is not None else None
    try:
        service.submit_answer(payload.token, answer)
    except errors.SignalingError as exc:
        logger.warning("Error submitting answer for token %s: %s", mask_token(payload.token), exc)
        _raise_http(exc)

    logger.info("WebRTC handshake completed for token: %s", mask_token(payload.token))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/answer", response_model=schemas.SessionDescriptionPayload)
async def get_answer(
    request: Request,
    token: str = "",
    service: HandshakeService = Depends(get_handshake_service),
) -> schemas.SessionDescriptionPayload:
    """Return the viewer's answer to the polling sender."""

    _log_call(request)
    try:
        answer = service.get_answer(token)
    except errors.SignalingError as exc:
        logger.info("Answer unavailable for token %s: %s", mask_token(token), exc)
        _raise_http(exc)

    logger.info("Answer retrieved for token: %s", mask_token(token))
    return schemas.SessionDescriptionPayload.from_domain(answer)


@router.get("/info", response_model=schemas.ServerInfoResponse)
def server_info(request: Request) -> schemas.ServerInfoResponse:
    """Report the request host and the server's LAN address.

    Plain ``def`` so FastAPI runs the socket lookups in its threadpool.
    """

    info = network.get_server_info(request.headers.get("host", ""))
    return schemas.ServerInfoResponse(host=info.host, lan_ip=info.lan_ip)
