"""FastAPI application factory and server entry point.

Every failure leaves the API as an ``{success: false, error}`` envelope.
Domain exceptions carry their own HTTP status; request body validation
failures map to 400 with per-field details; anything else is logged and
reported as a generic 500.

Example:
    $ IDLE_RPG_AUTH_JWT_SECRET=change-me idle-rpg
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from idle_rpg.api.deps import Services
from idle_rpg.api.routes import characters, game, health, users
from idle_rpg.api.schemas import envelope
from idle_rpg.core.config import Settings, get_settings
from idle_rpg.core.exceptions import IdleRpgError
from idle_rpg.core.logging import clear_context, configure_logging, get_logger


logger = get_logger(__name__)


def _validation_details(exc: RequestValidationError) -> list[dict[str, Any]]:
    details = []
    for error in exc.errors():
        # Drop the leading "body" / "path" / "query" location
        loc = [str(part) for part in error.get("loc", ())[1:]]
        details.append({"field": ".".join(loc) or None, "message": error.get("msg", "")})
    return details


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(IdleRpgError)
    async def handle_domain_error(request: Request, exc: IdleRpgError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Request failed", path=request.url.path, error=repr(exc))
        else:
            logger.info(
                "Request rejected",
                path=request.url.path,
                error=exc.message,
                status_code=exc.status_code,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=envelope(success=False, error=exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = _validation_details(exc)
        logger.info("Request validation failed", path=request.url.path, details=details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=envelope(success=False, error="Validation error", details=details),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=envelope(success=False, error="Internal server error"),
        )


def create_app(settings: Settings | None = None, services: Services | None = None) -> FastAPI:
    """Build the HTTP application.

    Args:
        settings: Application settings; loaded from the environment when omitted.
        services: Service container; built from ``settings`` when omitted.

    Returns:
        A configured FastAPI instance.
    """
    settings = settings or get_settings()

    app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug)
    app.state.settings = settings
    app.state.services = services or Services.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def reset_log_context(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        clear_context()
        try:
            return await call_next(request)
        finally:
            clear_context()

    _install_error_handlers(app)

    prefix = settings.server.api_prefix
    for router in (health.router, users.router, characters.router, game.router):
        app.include_router(router, prefix=prefix)

    logger.debug("Application created", prefix=prefix)
    return app


def main() -> None:
    """Run the API server with settings from the environment."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    logger.info(
        "Starting server",
        host=settings.server.host,
        port=settings.server.port,
        version=settings.app_version,
    )
    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
