"""Series gateway."""

import logging
from typing import List

from catalog_admin.core.cancellation import CancellationToken
from catalog_admin.gateways.base import ResourceGateway
from catalog_admin.models.catalog import Series, SeriesCreate

logger = logging.getLogger(__name__)


class SeriesGateway(ResourceGateway):
    """Top level of the hierarchy; series have no parent."""

    PATH = "/api/series"

    @property
    def name(self) -> str:
        return "series"

    async def list(self, token: CancellationToken | None = None) -> List[Series]:
        """List every series in the order the API returns them."""
        return await self._get_many(self.PATH, Series, token)

    async def create(self, fields: SeriesCreate) -> Series:
        series = await self._post_one(self.PATH, fields.to_wire(), Series)
        logger.info(f"Created series {series.id} ({series.title!r})")
        return series
