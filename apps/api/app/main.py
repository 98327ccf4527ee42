"""FastAPI application for the screen-share signaling server."""
from __future__ import annotations

import base64
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from .core.config import Settings, get_settings
from .repositories.sessions import MemorySessionRepository
from .routers import signaling
from .services.signaling import HandshakeService
from .services.sweeper import SessionSweeper
from .web import pages

logger = logging.getLogger(__name__)

FAVICON_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR4nGMAAQAABQABDQottAAAAABJRU5ErkJggg=="
)

JS_MEDIA_TYPE = "application/javascript; charset=utf-8"

# Submit routes answer unparseable bodies the same way as empty descriptions.
INVALID_BODY_DETAIL = {
    "/api/offer": "invalid offer",
    "/api/answer": "invalid answer",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    logger.info("STUN server: %s", settings.stun_server)
    logger.info("Token expiry: %ss", int(settings.token_expiry.total_seconds()))

    sweeper: SessionSweeper = app.state.sweeper
    sweeper.start()
    try:
        yield
    finally:
        await sweeper.stop()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app together with its session store and sweeper."""

    settings = settings or get_settings()

    repository = MemorySessionRepository(token_bytes=settings.token_bytes)
    assets = pages.render_assets(settings.stun_server)

    app = FastAPI(title="Screen Share Signaling", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.session_repository = repository
    app.state.handshake_service = HandshakeService(repository, ttl=settings.token_expiry)
    app.state.sweeper = SessionSweeper(repository, interval=settings.sweep_interval)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(signaling.router, prefix="/api", tags=["signaling"])

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError) -> Response:
        detail = INVALID_BODY_DETAIL.get(request.url.path)
        if request.method != "POST" or detail is None:
            return await request_validation_exception_handler(request, exc)
        logger.warning("Rejected malformed body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": detail})

    @app.get("/", response_class=HTMLResponse, tags=["pages"])
    async def index() -> HTMLResponse:
        """Landing page linking to the sender."""

        return HTMLResponse(content=pages.INDEX_HTML)

    @app.head("/", tags=["meta"])
    async def index_head() -> Response:
        """Fast health checks issue HEAD /; answer with 200 to avoid noisy 405s."""

        return Response(status_code=200)

    @app.get("/sender", response_class=HTMLResponse, tags=["pages"])
    async def sender() -> HTMLResponse:
        return HTMLResponse(content=pages.SENDER_HTML)

    @app.get("/viewer", response_class=HTMLResponse, tags=["pages"])
    async def viewer() -> HTMLResponse:
        return HTMLResponse(content=pages.VIEWER_HTML)

    @app.get("/assets/sender.js", include_in_schema=False)
    async def sender_js() -> Response:
        return Response(content=assets.sender_js, media_type=JS_MEDIA_TYPE)

    @app.get("/assets/viewer.js", include_in_schema=False)
    async def viewer_js() -> Response:
        return Response(content=assets.viewer_js, media_type=JS_MEDIA_TYPE)

    @app.get("/assets/style.css", include_in_schema=False)
    async def style_css() -> Response:
        return Response(content=pages.STYLE_CSS, media_type="text/css; charset=utf-8")

    @app.get("/api/health", tags=["meta"])
    async def health() -> dict[str, object]:
        """Liveness check with the number of handshakes in flight."""

        return {"status": "ok", "active_sessions": app.state.handshake_service.active_session_count()}

    @app.head("/api/health", tags=["meta"])
    async def health_head() -> Response:
        """Allow HEAD for uptime monitors that only need the status code."""

        return Response(status_code=200)

    @app.get("/robots.txt", response_class=PlainTextResponse, include_in_schema=False)
    async def robots() -> PlainTextResponse:
        """Serve a minimal robots.txt to avoid 404 noise."""

        return PlainTextResponse("User-agent: *\nDisallow: /")

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon() -> Response:
        """Return a tiny placeholder favicon."""

        return Response(content=FAVICON_BYTES, media_type="image/png")

    return app


app = create_app()
