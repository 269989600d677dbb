"""Season gateway."""

import logging
from operator import attrgetter
from typing import List

from catalog_admin.core.cancellation import CancellationToken
from catalog_admin.gateways.base import ResourceGateway
from catalog_admin.models.catalog import Season, SeasonCreate

logger = logging.getLogger(__name__)


class SeasonGateway(ResourceGateway):
    """Seasons scoped by their series."""

    @property
    def name(self) -> str:
        return "seasons"

    @staticmethod
    def path(series_id: str) -> str:
        return f"/api/series/{series_id}/seasons"

    async def list(
        self, series_id: str, token: CancellationToken | None = None
    ) -> List[Season]:
        """List the seasons of a series, ordered by number."""
        seasons = await self._get_many(self.path(series_id), Season, token)
        return sorted(seasons, key=attrgetter("number"))

    async def create(self, series_id: str, fields: SeasonCreate) -> Season:
        season = await self._post_one(self.path(series_id), fields.to_wire(), Season)
        logger.info(f"Created season {season.number} of series {series_id}")
        return season
