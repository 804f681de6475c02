"""
FastAPI application entry point.

Importing this module loads nothing. Configuration is loaded once, by
build_app(), right before the application is built.
Everything below receives the snapshot explicitly: create_app() takes it
as an argument and stores it on app.state for the route dependencies.

For local development, with auto-reload:
    uvicorn asset_manager.main:build_app --factory --reload

Or, honouring HOST and PORT:
    python -m asset_manager.main
"""

import logging
import socket
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from . import __version__
from .api.routes import health, uploads
from .config.settings import Settings, get_settings, initialize

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Apply LOG_LEVEL to the root logger. Unknown names keep INFO."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        logger.warning("Unknown log level, keeping INFO", extra={"log_level": settings.log_level})
        level = logging.INFO
    logging.getLogger().setLevel(level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown with the address being served."""
    settings: Settings = app.state.settings

    logger.info(
        f"{settings.app_name} starting",
        extra={
            "version": __version__,
            "address": settings.server_address,
            "app_env": settings.app_env,
        }
    )

    yield

    logger.info(f"{settings.app_name} shutting down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory.

    Uses the given settings, or the process-wide snapshot when none is
    passed. Tests pass their own Settings instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last so it wraps CORS and sees the request first
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=settings.trusted_proxies)

    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    app.include_router(
        uploads.router,
        prefix="/api/v1/uploads",
        tags=["Uploads"],
    )

    logger.info(
        "FastAPI application created",
        extra={
            "title": settings.app_name,
            "allowed_origins": settings.allowed_origins,
        }
    )

    return app


def build_app() -> FastAPI:
    """
    Load configuration and build the application.

    This is the single place the process-wide snapshot gets loaded.
    uvicorn can call it directly with --factory.
    """
    initialize()
    settings = get_settings()
    configure_logging(settings)
    return create_app(settings)


def resolve_port(port: str) -> int:
    """
    Turn PORT into a port number.

    PORT may name a service ("http") instead of a number. An unknown name
    stops the process with a readable message rather than a traceback.
    """
    if port.isdigit():
        return int(port)
    try:
        return socket.getservbyname(port)
    except OSError:
        logger.error("PORT is not a number or a known service name", extra={"port": port})
        raise SystemExit(f"Invalid PORT {port!r}: not a number or a known service name")


def main() -> None:
    """Build the app once and serve it on HOST and PORT."""
    app = build_app()
    settings = get_settings()

    uvicorn.run(
        app,
        host=settings.server_host,
        port=resolve_port(settings.server_port),
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
