"""
Health check endpoint.

Used by load balancers and deploy tooling to check the process is up.
It does not touch external dependencies, and /health is listed in the
default SKIPPED_API_ENDPOINTS so it needs no API key.
"""

from fastapi import APIRouter, status
from pydantic import BaseModel

from ... import __version__
from ..dependencies import AuthenticatedClient, SettingsDep

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    app_name: str
    environment: str
    production: bool


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns 200 if the service is running. Does not check dependencies.",
)
async def health_check(
    settings: SettingsDep,
    _client: AuthenticatedClient,
) -> HealthResponse:
    """
    Liveness check - is the process alive?

    Goes through the same API-key dependency as every other route, so
    removing /health from SKIPPED_API_ENDPOINTS puts it behind a key.
    """
    return HealthResponse(
        status="ok",
        version=__version__,
        app_name=settings.app_name,
        environment=settings.app_env,
        production=settings.is_production,
    )
