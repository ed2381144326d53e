"""clipbot - FastAPI Application Entry Point.

One public endpoint (GET /) that creates a Twitch clip and announces it in
Discord, plus health checks.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from clipbot.config import DEBUG, Settings, load_settings, logger
from clipbot.core.http_client import HttpClient
from clipbot.core.orchestrator import ClipOrchestrator
from clipbot.middleware import (
    ErrorSanitizationMiddleware,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
)
from clipbot.routers import clips
from clipbot.schemas import HealthResponse
from clipbot.version import __version__


# -----------------------------------------------------------------------------
# Application Factory
# -----------------------------------------------------------------------------

def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    debug: bool = DEBUG,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Settings are loaded and validated at startup when not given, so a
    missing credential stops the server instead of failing each request.
    ``transport`` replaces the outbound network layer (used in tests).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        resolved = settings or load_settings()
        http = HttpClient(timeout=resolved.http_timeout_seconds, transport=transport)
        app.state.settings = resolved
        app.state.orchestrator = ClipOrchestrator.from_settings(resolved, http)
        logger.info(
            "Starting clipbot v%s for broadcaster %s (announce delay %.1fs)",
            __version__,
            resolved.broadcaster_id,
            resolved.announce_delay_seconds,
        )
        yield
        logger.info("Shutting down clipbot")

    app = FastAPI(
        title="clipbot",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if debug else None,
        redoc_url="/redoc" if debug else None,
        openapi_url="/openapi.json" if debug else None,
    )

    # -------------------------------------------------------------------------
    # Middleware Stack (last added runs first)
    # -------------------------------------------------------------------------

    app.add_middleware(ErrorSanitizationMiddleware, debug=debug)
    app.add_middleware(RequestLoggingMiddleware, exclude_paths={"/health", "/healthz"})
    app.add_middleware(RequestIDMiddleware)

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with consistent format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # -------------------------------------------------------------------------
    # Health Check Endpoints
    # -------------------------------------------------------------------------

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    @app.get("/healthz", response_model=HealthResponse, include_in_schema=False)
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers and orchestrators."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            timestamp=datetime.now(timezone.utc),
        )

    app.include_router(clips.router)

    return app


app = create_app()


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "clipbot.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
