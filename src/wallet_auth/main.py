# src/wallet_auth/main.py
"""Main entry point for the Wallet Auth application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wallet_auth.api.v1 import accounts_router, nonce_router, ping_router
from wallet_auth.core.errors import StorageUnavailable
from wallet_auth.core.settings import Settings, settings as default_settings
from wallet_auth.storage import Storage, open_storage

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once from the LOG_LEVEL setting."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def storage_unavailable_handler(request: Request, exc: StorageUnavailable) -> JSONResponse:
    logger.error("Storage unavailable while handling %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"Internal server error: {exc}"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"Internal server error: {exc}"},
    )


def create_app(settings: Settings | None = None, storage: Storage | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the environment-loaded settings.
        storage: Pre-built stores, mainly for tests; opened from ``settings`` otherwise.
    """
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Stateless request authentication with wallet signatures and nonces",
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.storage = storage or open_storage(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        max_age=settings.cors_max_age,
    )

    app.add_exception_handler(StorageUnavailable, storage_unavailable_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(nonce_router)
    app.include_router(ping_router)
    app.include_router(accounts_router)

    @app.on_event("startup")
    async def on_startup() -> None:
        await app.state.storage.initialize()

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await app.state.storage.close()

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    return app


app = create_app()
