"""Async client for the object storage REST API.

Objects are written with the service key and served from the bucket's
public path:

    POST {base}/storage/v1/object/{bucket}/{path}
    GET  {base}/storage/v1/object/public/{bucket}/{path}
"""

import logging
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage service rejects or fails a request."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class StorageClient:
    """Upload client for a storage bucket.

    Usage:
        async with StorageClient() as storage:
            url = await storage.upload("covers", "u1/a.png", data, "image/png")
    """

    def __init__(
        self,
        base_url: str | None = None,
        service_key: str | None = None,
        timeout: float | None = None,
        max_retries: int = 3,
    ):
        self.base_url = (base_url or settings.STORAGE_URL).rstrip("/")
        self.service_key = service_key if service_key is not None else settings.STORAGE_SERVICE_KEY
        self.timeout = timeout or settings.STORAGE_TIMEOUT
        self.max_retries = max_retries
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "StorageClient":
        """Enter async context."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._get_headers(),
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
        }

    def public_url(self, bucket: str, path: str) -> str:
        """Public URL of an object in a public bucket."""
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        """Store an object and return its public URL.

        Server errors and transport failures are retried up to
        ``max_retries`` times; client errors fail immediately.

        Raises:
            StorageError: If the object could not be stored
        """
        if not self._client:
            raise StorageError("Client not initialized. Use async context manager.")

        headers = {
            "Content-Type": content_type,
            "x-upsert": "true" if upsert else "false",
        }
        last_error: StorageError | None = None

        for attempt in range(self.max_retries):
            try:
                response = await self._client.post(
                    f"/storage/v1/object/{bucket}/{path}",
                    content=data,
                    headers=headers,
                )
                response.raise_for_status()
                return self.public_url(bucket, path)

            except httpx.HTTPStatusError as e:
                last_error = StorageError(
                    f"HTTP error: {e.response.status_code}",
                    details={"status_code": e.response.status_code, "body": e.response.text},
                )
                if e.response.status_code < 500:
                    raise last_error
                logger.warning("Upload attempt %d/%d failed: %s", attempt + 1, self.max_retries, e)

            except httpx.RequestError as e:
                last_error = StorageError(f"Request error: {str(e)}")
                logger.warning("Upload attempt %d/%d failed: %s", attempt + 1, self.max_retries, e)

        if last_error:
            raise last_error
        raise StorageError("Max retries exceeded")
