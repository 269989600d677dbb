"""Admin workflow: the shared series catalog and the three management panels."""

import logging
from typing import Callable

from catalog_admin.core.cancellation import CancellationToken
from catalog_admin.core.errors import ApiFailure, CancelledFailure, to_user_message
from catalog_admin.gateways import Gateways
from catalog_admin.gateways.series import SeriesGateway
from catalog_admin.models.catalog import (
    Episode,
    EpisodeCreate,
    Season,
    SeasonCreate,
    Series,
    SeriesCreate,
)
from catalog_admin.services.cascade import CascadingSelection, ErrorBanner

logger = logging.getLogger(__name__)


def _is_positive(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _report_failure(banner: ErrorBanner, exc: Exception, action: str) -> None:
    """Log a failed panel action and show its message."""
    if isinstance(exc, ApiFailure):
        logger.warning(f"{action} failed: {exc}")
    else:
        logger.exception(f"{action} failed unexpectedly")
    banner.show(to_user_message(exc))


class SeriesCatalog:
    """The one series list shared by every panel.

    Only the catalog writes to the list; panels read ``items`` and ask for a
    ``refresh`` after creating a series.
    """

    def __init__(self, gateway: SeriesGateway):
        self._gateway = gateway
        self._items: list[Series] = []
        self._token: CancellationToken | None = None
        self.loading = False
        self.error: str | None = None

    @property
    def items(self) -> tuple[Series, ...]:
        return tuple(self._items)

    def find(self, series_id: str) -> Series | None:
        for series in self._items:
            if series.id == series_id:
                return series
        return None

    def cancel(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._token = None
        self.loading = False

    async def refresh(self) -> None:
        """Reload the series list; a newer refresh supersedes an older one."""
        self.cancel()
        token = CancellationToken()
        self._token = token
        self.loading = True
        self.error = None
        try:
            series = await self._gateway.list(token)
        except CancelledFailure:
            logger.debug("Series refresh cancelled")
            return
        except Exception as exc:
            if token is not self._token:
                return
            if isinstance(exc, ApiFailure):
                logger.warning(f"Loading series failed: {exc}")
            else:
                logger.exception("Unexpected error while loading series")
            self.error = to_user_message(exc)
        else:
            if token is self._token and not token.cancelled:
                self._items = list(series)
        finally:
            if token is self._token:
                self.loading = False


class SeriesPanel:
    """Create series, optionally with an uploaded poster."""

    def __init__(self, catalog: SeriesCatalog, gateways: Gateways):
        self.catalog = catalog
        self._series = gateways.series
        self._media = gateways.media
        self._banner = ErrorBanner()

        self.title = ""
        self.description = ""
        self.poster_url = ""
        self.uploading = False
        self.submitting = False

    @property
    def error(self) -> str | None:
        return self._banner.message

    @property
    def can_submit(self) -> bool:
        return bool(self.title.strip()) and not self.submitting

    @property
    def can_upload(self) -> bool:
        return not self.uploading

    async def upload_poster(
        self,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> bool:
        """Upload a poster image and put its URL into the poster field."""
        if not self.can_upload:
            return False
        self.uploading = True
        self._banner.clear()
        try:
            self.poster_url = await self._media.upload_image(
                filename, content, content_type
            )
            return True
        except Exception as exc:
            _report_failure(self._banner, exc, f"Uploading poster {filename}")
            return False
        finally:
            self.uploading = False

    async def submit(self) -> Series | None:
        """Create a series from the form.

        On success the title and description are cleared and the shared
        catalog is refreshed. The poster URL is kept for the next series.
        """
        if not self.can_submit:
            return None
        self.submitting = True
        self._banner.clear()
        try:
            created = await self._series.create(
                SeriesCreate(
                    title=self.title.strip(),
                    description=_blank_to_none(self.description),
                    poster_url=_blank_to_none(self.poster_url),
                )
            )
            self.title = ""
            self.description = ""
            await self.catalog.refresh()
            return created
        except Exception as exc:
            _report_failure(self._banner, exc, "Creating series")
            return None
        finally:
            self.submitting = False


class SeasonsPanel:
    """List and create the seasons of the selected series."""

    def __init__(
        self,
        catalog: SeriesCatalog,
        gateways: Gateways,
        on_created: Callable[[str, Season], None] | None = None,
    ):
        self.catalog = catalog
        self._gateway = gateways.seasons
        self._banner = ErrorBanner()
        self.seasons: CascadingSelection[Season] = CascadingSelection(
            "seasons", gateways.seasons.list, self._banner
        )

        self.on_created = on_created
        self.number = 1
        self.submitting = False

    @property
    def series_id(self) -> str | None:
        return self.seasons.parent_id

    @property
    def error(self) -> str | None:
        return self._banner.message

    @property
    def can_submit(self) -> bool:
        return (
            self.series_id is not None
            and _is_positive(self.number)
            and not self.submitting
        )

    def select_series(self, series_id: str | None):
        return self.seasons.select(series_id)

    async def submit(self) -> Season | None:
        if not self.can_submit:
            return None
        series_id = self.series_id
        self.submitting = True
        self._banner.clear()
        try:
            season = await self._gateway.create(
                series_id, SeasonCreate(number=self.number)
            )
            self.seasons.merge(series_id, season)
            if self.on_created is not None:
                self.on_created(series_id, season)
            return season
        except Exception as exc:
            _report_failure(self._banner, exc, "Creating season")
            return None
        finally:
            self.submitting = False


class EpisodesPanel:
    """Pick a series, then one of its seasons, then list and create episodes."""

    def __init__(self, catalog: SeriesCatalog, gateways: Gateways):
        self.catalog = catalog
        self._gateway = gateways.episodes
        self._banner = ErrorBanner()
        self.seasons: CascadingSelection[Season] = CascadingSelection(
            "seasons", gateways.seasons.list, self._banner
        )
        self.episodes: CascadingSelection[Episode] = CascadingSelection(
            "episodes", gateways.episodes.list, self._banner
        )

        self.number = 1
        self.title = ""
        self.duration_seconds = 1400
        self.video_url = ""
        self.submitting = False

    @property
    def series_id(self) -> str | None:
        return self.seasons.parent_id

    @property
    def season_id(self) -> str | None:
        return self.episodes.parent_id

    @property
    def error(self) -> str | None:
        return self._banner.message

    @property
    def can_submit(self) -> bool:
        return (
            self.season_id is not None
            and bool(self.title.strip())
            and _is_positive(self.number)
            and _is_positive(self.duration_seconds)
            and not self.submitting
        )

    def select_series(self, series_id: str | None):
        # A season only means something within its series
        self.episodes.select(None)
        return self.seasons.select(series_id)

    def select_season(self, season_id: str | None):
        if season_id and not any(s.id == season_id for s in self.seasons.items):
            logger.warning(
                f"Season {season_id} is not a loaded season of series {self.series_id}"
            )
            return None
        return self.episodes.select(season_id)

    def season_created(self, series_id: str, season: Season) -> None:
        """Show a season created elsewhere when its series is selected here."""
        if series_id == self.series_id:
            self.seasons.merge(series_id, season)

    async def submit(self) -> Episode | None:
        if not self.can_submit:
            return None
        season_id = self.season_id
        self.submitting = True
        self._banner.clear()
        try:
            episode = await self._gateway.create(
                season_id,
                EpisodeCreate(
                    number=self.number,
                    title=self.title.strip(),
                    duration_seconds=self.duration_seconds,
                    video_url=_blank_to_none(self.video_url),
                ),
            )
            self.episodes.merge(season_id, episode)
            return episode
        except Exception as exc:
            _report_failure(self._banner, exc, "Creating episode")
            return None
        finally:
            self.submitting = False


class AdminWorkflow:
    """Composes the gateways, the shared catalog and the three panels."""

    def __init__(self, gateways: Gateways):
        self.gateways = gateways
        self.catalog = SeriesCatalog(gateways.series)
        self.series_panel = SeriesPanel(self.catalog, gateways)
        self.episodes_panel = EpisodesPanel(self.catalog, gateways)
        self.seasons_panel = SeasonsPanel(
            self.catalog, gateways, on_created=self.episodes_panel.season_created
        )

    async def start(self) -> None:
        """Fetch the series list once at workflow start."""
        await self.catalog.refresh()

    async def aclose(self) -> None:
        self.catalog.cancel()
        self.seasons_panel.seasons.cancel()
        self.episodes_panel.seasons.cancel()
        self.episodes_panel.episodes.cancel()
        await self.gateways.aclose()
