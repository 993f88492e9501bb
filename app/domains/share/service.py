"""Service for shareable trip images."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import Identity
from app.core.exceptions import Forbidden, InternalError, NotFoundError, ValidationError
from app.domains.itinerary.repository import ItineraryRepository
from app.domains.share.formats import TemplateFormat, TemplateStyle
from app.domains.share.renderer import ImageRenderer, RenderError, render_html
from app.domains.share.schemas import ShareImage, ShareRequest, ShareTemplateData

logger = logging.getLogger(__name__)


class ShareService:
    """Turns an itinerary into a branded PNG for social media.

    The requester must own the itinerary or the itinerary must be public.
    """

    def __init__(
        self,
        session: AsyncSession,
        renderer: ImageRenderer | None = None,
    ) -> None:
        self.session = session
        self.repository = ItineraryRepository(session)
        self.renderer = renderer or ImageRenderer()

    async def generate(self, identity: Identity, request: ShareRequest) -> ShareImage:
        """Render a share image for an itinerary.

        Raises:
            ValidationError: If a parameter is missing or unknown
            NotFoundError: If the itinerary does not exist
            Forbidden: If it is private and not the requester's
            InternalError: If the image could not be rendered
        """
        if not (request.itinerary_id and request.style and request.format):
            raise ValidationError("Missing required parameters")
        try:
            style = TemplateStyle(request.style)
        except ValueError:
            raise ValidationError("Invalid style. Must be clean, bold, or minimal") from None
        try:
            fmt = TemplateFormat(request.format)
        except ValueError:
            raise ValidationError(
                "Invalid format. Must be story, square, or portrait"
            ) from None

        try:
            itinerary_id = UUID(request.itinerary_id)
        except ValueError:
            raise NotFoundError("Itinerary not found") from None

        itinerary = await self.repository.get_full(itinerary_id)
        if itinerary is None:
            raise NotFoundError("Itinerary not found")
        if itinerary.user_id != identity.id and not itinerary.is_public:
            raise Forbidden("Access denied")

        day_count = len(itinerary.days)
        activity_count = sum(len(day.activities) for day in itinerary.days)
        data = ShareTemplateData(
            title=itinerary.title,
            destination=itinerary.destination,
            cover_photo_url=itinerary.cover_photo_url,
            day_count=day_count or None,
            activity_count=activity_count or None,
        )

        html = render_html(style, fmt, data)
        try:
            content = await self.renderer.render_png(html, fmt)
        except RenderError as e:
            logger.error("Share image for %s failed: %s", itinerary.id, e)
            raise InternalError("Failed to generate image") from e

        logger.info(
            "Generated %s/%s share image for itinerary %s",
            style.value,
            fmt.value,
            itinerary.id,
        )
        return ShareImage(content=content, filename=f"{itinerary.slug}-{fmt.value}.png")
