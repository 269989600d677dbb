"""Catalog models exchanged with the remote API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base model using the API's camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Series(CatalogModel):
    """A series as listed by the API."""

    id: str
    title: str
    description: Optional[str] = None
    poster_url: Optional[str] = None


class Season(CatalogModel):
    """A season belonging to one series."""

    id: str
    series_id: str
    number: int


class Episode(CatalogModel):
    """An episode belonging to one season."""

    id: str
    season_id: str
    number: int
    title: str
    duration_seconds: int
    video_url: Optional[str] = None  # None until a video is attached


class SeriesCreate(CatalogModel):
    title: str
    description: Optional[str] = None
    poster_url: Optional[str] = None


class SeasonCreate(CatalogModel):
    number: int


class EpisodeCreate(CatalogModel):
    number: int
    title: str
    duration_seconds: int
    video_url: Optional[str] = None
