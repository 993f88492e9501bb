"""Share image endpoints."""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentUser
from app.domains.share.renderer import ImageRenderer
from app.domains.share.schemas import ShareRequest
from app.domains.share.service import ShareService
from app.infra.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


def get_image_renderer() -> ImageRenderer:
    return ImageRenderer()


def get_share_service(
    session: AsyncSession = Depends(get_db),
    renderer: ImageRenderer = Depends(get_image_renderer),
) -> ShareService:
    """Dependency for getting ShareService."""
    return ShareService(session, renderer)


@router.post(
    "/generate",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
    summary="Render an itinerary as a shareable PNG",
)
async def generate_share_image(
    request: ShareRequest,
    user: CurrentUser,
    service: ShareService = Depends(get_share_service),
) -> Response:
    """Render an owned or public itinerary in a style and format.

    Styles: clean, bold, minimal. Formats: story, square, portrait.
    """
    logger.info(
        "Share image requested by %s: itinerary=%s style=%s format=%s",
        user.id,
        request.itinerary_id,
        request.style,
        request.format,
    )
    image = await service.generate(user, request)
    return Response(
        content=image.content,
        media_type=image.media_type,
        headers={"Content-Disposition": f'attachment; filename="{image.filename}"'},
    )
