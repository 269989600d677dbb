"""Media upload gateway."""

import logging

from catalog_admin.core.cancellation import CancellationToken
from catalog_admin.gateways.base import ResourceGateway

logger = logging.getLogger(__name__)


class MediaGateway(ResourceGateway):
    """Uploads poster images and returns the URL the API stored them under."""

    PATH = "/api/media/images"

    @property
    def name(self) -> str:
        return "media"

    async def upload_image(
        self,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        token: CancellationToken | None = None,
    ) -> str:
        data = await self.client.request(
            self.PATH,
            "POST",
            token=token,
            files={"file": (filename, content, content_type)},
        )
        url = data["url"]
        logger.info(f"Uploaded {filename} to {url}")
        return url
