"""
FastAPI dependency injection.

The application keeps its settings snapshot on app.state, and routes
receive it through these dependencies. Tests can build an app around an
isolated Settings instance without touching the process-wide one.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

from ..config.settings import Settings

logger = logging.getLogger(__name__)

# API Key security scheme
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Provide the settings snapshot the application was built with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

async def verify_api_key(
    request: Request,
    settings: SettingsDep,
    api_key: str = Security(api_key_header),
) -> str | None:
    """
    Validate API key from request header.

    Paths listed in SKIPPED_API_ENDPOINTS pass without a key.
    Raises 403 if key is invalid or missing.
    """
    if request.url.path in settings.skipped_api_endpoints:
        return None

    if not api_key:
        logger.warning("Request missing API key", extra={"path": request.url.path})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="API key required. Provide X-API-Key header.",
        )

    if api_key not in settings.api_keys_list:
        logger.warning(
            "Invalid API key attempt",
            extra={"key_prefix": api_key[:8]}
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key",
        )

    return api_key


AuthenticatedClient = Annotated[str | None, Depends(verify_api_key)]
