"""Admin console routes returning JSON views of the workflow panels."""

from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from catalog_admin.models.catalog import Episode, Season, Series
from catalog_admin.services.admin import (
    AdminWorkflow,
    EpisodesPanel,
    SeasonsPanel,
    SeriesCatalog,
    SeriesPanel,
)
from catalog_admin.services.cascade import LoadState

router = APIRouter()


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Views ---


class CatalogView(ApiModel):
    series: List[Series]
    loading: bool
    error: str | None = None


class SeriesPanelView(ApiModel):
    title: str
    description: str
    poster_url: str
    uploading: bool
    submitting: bool
    can_submit: bool
    error: str | None = None


class SeasonsPanelView(ApiModel):
    series_id: str | None = None
    state: LoadState
    seasons: List[Season]
    number: int
    submitting: bool
    can_submit: bool
    error: str | None = None


class EpisodesPanelView(ApiModel):
    series_id: str | None = None
    season_id: str | None = None
    seasons_state: LoadState
    seasons: List[Season]
    episodes_state: LoadState
    episodes: List[Episode]
    number: int
    title: str
    duration_seconds: int
    video_url: str
    submitting: bool
    can_submit: bool
    error: str | None = None


class WorkflowView(ApiModel):
    catalog: CatalogView
    series_panel: SeriesPanelView
    seasons_panel: SeasonsPanelView
    episodes_panel: EpisodesPanelView


def catalog_view(catalog: SeriesCatalog) -> CatalogView:
    return CatalogView(
        series=list(catalog.items), loading=catalog.loading, error=catalog.error
    )


def series_panel_view(panel: SeriesPanel) -> SeriesPanelView:
    return SeriesPanelView(
        title=panel.title,
        description=panel.description,
        poster_url=panel.poster_url,
        uploading=panel.uploading,
        submitting=panel.submitting,
        can_submit=panel.can_submit,
        error=panel.error,
    )


def seasons_panel_view(panel: SeasonsPanel) -> SeasonsPanelView:
    return SeasonsPanelView(
        series_id=panel.series_id,
        state=panel.seasons.state,
        seasons=list(panel.seasons.items),
        number=panel.number,
        submitting=panel.submitting,
        can_submit=panel.can_submit,
        error=panel.error,
    )


def episodes_panel_view(panel: EpisodesPanel) -> EpisodesPanelView:
    return EpisodesPanelView(
        series_id=panel.series_id,
        season_id=panel.season_id,
        seasons_state=panel.seasons.state,
        seasons=list(panel.seasons.items),
        episodes_state=panel.episodes.state,
        episodes=list(panel.episodes.items),
        number=panel.number,
        title=panel.title,
        duration_seconds=panel.duration_seconds,
        video_url=panel.video_url,
        submitting=panel.submitting,
        can_submit=panel.can_submit,
        error=panel.error,
    )


# --- Requests ---


class SeriesForm(ApiModel):
    title: str = ""
    description: str = ""
    poster_url: str | None = None  # None keeps the current poster field


class SeasonForm(ApiModel):
    number: int


class EpisodeForm(ApiModel):
    number: int
    title: str
    duration_seconds: int
    video_url: str = ""


class SeriesSelection(ApiModel):
    series_id: str | None = None


class EpisodesSelection(ApiModel):
    series_id: str | None = None
    season_id: str | None = None


def get_workflow(request: Request) -> AdminWorkflow:
    return request.app.state.workflow


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "catalog-admin"}


@router.get("/admin", response_model=WorkflowView)
async def admin_overview(workflow: AdminWorkflow = Depends(get_workflow)):
    """Return the catalog and every panel."""
    return WorkflowView(
        catalog=catalog_view(workflow.catalog),
        series_panel=series_panel_view(workflow.series_panel),
        seasons_panel=seasons_panel_view(workflow.seasons_panel),
        episodes_panel=episodes_panel_view(workflow.episodes_panel),
    )


# --- Series ---


@router.post("/admin/series/refresh", response_model=CatalogView)
async def refresh_series(workflow: AdminWorkflow = Depends(get_workflow)):
    await workflow.catalog.refresh()
    return catalog_view(workflow.catalog)


@router.post("/admin/series", response_model=SeriesPanelView)
async def create_series(
    form: SeriesForm, workflow: AdminWorkflow = Depends(get_workflow)
):
    """Fill the series form and submit it."""
    panel = workflow.series_panel
    if panel.submitting:
        raise HTTPException(status_code=409, detail="A series is being created")
    panel.title = form.title
    panel.description = form.description
    if form.poster_url is not None:
        panel.poster_url = form.poster_url
    if not panel.can_submit:
        raise HTTPException(status_code=400, detail="Series title is required")
    await panel.submit()
    return series_panel_view(panel)


@router.post("/admin/series/poster", response_model=SeriesPanelView)
async def upload_poster(
    file: UploadFile = File(...), workflow: AdminWorkflow = Depends(get_workflow)
):
    """Upload a poster and fill the poster URL of the series form."""
    panel = workflow.series_panel
    if not panel.can_upload:
        raise HTTPException(status_code=409, detail="A poster upload is in progress")
    content = await file.read()
    await panel.upload_poster(
        file.filename or "poster",
        content,
        file.content_type or "application/octet-stream",
    )
    return series_panel_view(panel)


# --- Seasons ---


@router.put("/admin/seasons/selection", response_model=SeasonsPanelView)
async def select_seasons_series(
    selection: SeriesSelection, workflow: AdminWorkflow = Depends(get_workflow)
):
    panel = workflow.seasons_panel
    panel.select_series(selection.series_id)
    await panel.seasons.wait()
    return seasons_panel_view(panel)


@router.post("/admin/seasons", response_model=SeasonsPanelView)
async def create_season(
    form: SeasonForm, workflow: AdminWorkflow = Depends(get_workflow)
):
    panel = workflow.seasons_panel
    if panel.submitting:
        raise HTTPException(status_code=409, detail="A season is being created")
    panel.number = form.number
    if not panel.can_submit:
        raise HTTPException(
            status_code=400,
            detail="Select a series and enter a positive season number",
        )
    await panel.submit()
    return seasons_panel_view(panel)


# --- Episodes ---


@router.put("/admin/episodes/selection", response_model=EpisodesPanelView)
async def select_episodes_parent(
    selection: EpisodesSelection, workflow: AdminWorkflow = Depends(get_workflow)
):
    """Select a series and, once its seasons are loaded, one of its seasons."""
    panel = workflow.episodes_panel
    if selection.series_id != panel.series_id:
        panel.select_series(selection.series_id)
    await panel.seasons.wait()
    panel.select_season(selection.season_id)
    if selection.season_id and panel.season_id != selection.season_id:
        raise HTTPException(
            status_code=404, detail="Season not found in the selected series"
        )
    await panel.episodes.wait()
    return episodes_panel_view(panel)


@router.post("/admin/episodes", response_model=EpisodesPanelView)
async def create_episode(
    form: EpisodeForm, workflow: AdminWorkflow = Depends(get_workflow)
):
    panel = workflow.episodes_panel
    if panel.submitting:
        raise HTTPException(status_code=409, detail="An episode is being created")
    panel.number = form.number
    panel.title = form.title
    panel.duration_seconds = form.duration_seconds
    panel.video_url = form.video_url
    if not panel.can_submit:
        raise HTTPException(
            status_code=400,
            detail="Select a season and fill in number, title and duration",
        )
    await panel.submit()
    return episodes_panel_view(panel)
