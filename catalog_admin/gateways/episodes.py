"""Episode gateway."""

import logging
from operator import attrgetter
from typing import List

from catalog_admin.core.cancellation import CancellationToken
from catalog_admin.gateways.base import ResourceGateway
from catalog_admin.models.catalog import Episode, EpisodeCreate

logger = logging.getLogger(__name__)


class EpisodeGateway(ResourceGateway):
    """Episodes scoped by their season."""

    @property
    def name(self) -> str:
        return "episodes"

    @staticmethod
    def path(season_id: str) -> str:
        return f"/api/seasons/{season_id}/episodes"

    async def list(
        self, season_id: str, token: CancellationToken | None = None
    ) -> List[Episode]:
        """List the episodes of a season, ordered by number."""
        episodes = await self._get_many(self.path(season_id), Episode, token)
        return sorted(episodes, key=attrgetter("number"))

    async def create(self, season_id: str, fields: EpisodeCreate) -> Episode:
        episode = await self._post_one(
            self.path(season_id), fields.to_wire(), Episode
        )
        logger.info(
            f"Created episode {episode.number} ({episode.title!r}) of season {season_id}"
        )
        return episode
