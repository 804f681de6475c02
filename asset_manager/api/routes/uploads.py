"""
Upload policy endpoint.

Frontends call this before offering a file picker, so the accepted MIME
types and size limits are defined once, in configuration.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from ..dependencies import AuthenticatedClient, SettingsDep

router = APIRouter()


class UploadPolicyResponse(BaseModel):
    """Accepted MIME types and byte limits per media category."""
    allowed_types: dict[str, list[str]]
    max_file_size: dict[str, int]


@router.get(
    "/policy",
    response_model=UploadPolicyResponse,
    summary="Upload policy",
)
async def get_upload_policy(
    settings: SettingsDep,
    _client: AuthenticatedClient,
) -> UploadPolicyResponse:
    return UploadPolicyResponse(
        allowed_types={
            "images": list(settings.allowed_image_types),
            "videos": list(settings.allowed_video_types),
            "documents": list(settings.allowed_document_types),
        },
        max_file_size=settings.max_file_size,
    )
