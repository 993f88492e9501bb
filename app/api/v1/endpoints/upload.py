"""Cover photo upload endpoint."""

from fastapi import APIRouter, Depends, File, UploadFile

from app.core.deps import CurrentUser
from app.domains.upload.service import CoverUploadService

router = APIRouter()


def get_upload_service() -> CoverUploadService:
    return CoverUploadService()


@router.post("/cover", summary="Upload an itinerary cover photo")
async def upload_cover(
    user: CurrentUser,
    file: UploadFile | None = File(None),
    service: CoverUploadService = Depends(get_upload_service),
) -> dict[str, str]:
    """Store a JPG, PNG or WebP image up to 5MB and return its public URL."""
    data = await file.read() if file is not None else None
    content_type = file.content_type if file is not None else None
    url = await service.upload_cover(user, data, content_type)
    return {"url": url}
