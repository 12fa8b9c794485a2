"""
FastAPI Application Factory & Configuration.

This module initializes the FastAPI application instance. It is responsible for:
1.  **Middleware Setup**: CORS for browser clients, origins taken from settings.
2.  **Exception Handling**: Global handlers so every error returns structured JSON.
3.  **Routing**: Mounting the moments, views and editing routers.
4.  **Lifecycle**: Configuring logging on startup.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`). This allows for:
-   Easy testing (spinning up separate app instances per test).
-   Settings changes (env overrides) taking effect on the next factory call.

The API is stateless: requests carry the events they operate on and responses
carry the recomputed views or edited events.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lifeline import __version__
from lifeline.api.routers import editing, moments, views
from lifeline.core.settings import get_logger, load_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    ASGI Lifespan context manager.

    - **Startup**: Configure the ``lifeline`` logger from settings.
    - **Shutdown**: Nothing to release; the API holds no state.
    """
    logger = get_logger("lifeline")
    logger.info("Lifeline API starting (env=%s)", load_settings().environment)
    yield
    logger.info("Lifeline API shutting down")


def create_app() -> FastAPI:
    """
    Construct and configure the Lifeline FastAPI application.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    cfg = load_settings()
    app = FastAPI(
        title="Lifeline API",
        description="Timeline aggregation and layout engine",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Global Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Catch-all handler to ensure unhandled exceptions return structured JSON.

        Instead of a generic 500 HTML page, we return:
        {
            "error": "Internal Server Error",
            "detail": "..." (str(exc)),
            "path": "/..."
        }
        """
        get_logger("lifeline.api").exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        """Map Python ValueErrors to HTTP 400 Bad Request."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Bad Request",
                "detail": str(exc),
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(moments.router)
    app.include_router(views.router)
    app.include_router(editing.router)

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Simple liveness probe."""
        return {
            "status": "ok",
            "environment": load_settings().environment,
            "version": __version__,
        }

    return app


__all__ = ["create_app"]
