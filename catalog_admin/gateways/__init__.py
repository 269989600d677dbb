"""Gateways for each level of the catalog hierarchy."""

from catalog_admin.core.http import ApiClient
from catalog_admin.gateways.episodes import EpisodeGateway
from catalog_admin.gateways.media import MediaGateway
from catalog_admin.gateways.seasons import SeasonGateway
from catalog_admin.gateways.series import SeriesGateway


class Gateways:
    """All catalog gateways sharing one API client."""

    def __init__(self, client: ApiClient | None = None):
        self.client = client or ApiClient()
        self.series = SeriesGateway(self.client)
        self.seasons = SeasonGateway(self.client)
        self.episodes = EpisodeGateway(self.client)
        self.media = MediaGateway(self.client)

    async def aclose(self) -> None:
        await self.client.aclose()
