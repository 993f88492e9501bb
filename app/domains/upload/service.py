"""Service for cover photo uploads."""

import logging
import secrets

from app.core.auth import Identity
from app.core.config import settings
from app.core.exceptions import InternalError, ValidationError
from app.infra.storage import StorageClient, StorageError

logger = logging.getLogger(__name__)

# Content type -> stored file extension
ALLOWED_IMAGE_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class CoverUploadService:
    """Checks an uploaded image and stores it in the cover bucket."""

    def __init__(
        self,
        storage: StorageClient | None = None,
        bucket: str | None = None,
        max_bytes: int | None = None,
    ) -> None:
        self.storage = storage or StorageClient()
        self.bucket = bucket or settings.COVER_BUCKET
        self.max_bytes = max_bytes or settings.COVER_MAX_BYTES

    def object_path(self, identity: Identity, content_type: str) -> str:
        """Storage path for a new cover: one folder per user."""
        return f"{identity.id}/{secrets.token_hex(12)}.{ALLOWED_IMAGE_TYPES[content_type]}"

    async def upload_cover(
        self,
        identity: Identity,
        data: bytes | None,
        content_type: str | None,
    ) -> str:
        """Store a cover photo and return its public URL.

        Raises:
            ValidationError: If there is no file, or it has the wrong type or size
            InternalError: If storage rejected the upload
        """
        if data is None:
            raise ValidationError("No file provided")
        if content_type not in ALLOWED_IMAGE_TYPES:
            raise ValidationError("Invalid file type. Only JPG, PNG, and WebP are allowed.")
        if len(data) > self.max_bytes:
            raise ValidationError("File size exceeds 5MB limit")

        path = self.object_path(identity, content_type)
        try:
            async with self.storage as storage:
                url = await storage.upload(self.bucket, path, data, content_type)
        except StorageError as e:
            logger.error("Cover upload for user %s failed: %s %s", identity.id, e.message, e.details)
            raise InternalError("Failed to upload file") from e

        logger.info("Stored cover %s for user %s (%d bytes)", path, identity.id, len(data))
        return url
