"""Content catalog entries."""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CatalogModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Movie(_CatalogModel):
    """Movie or series as stored in the datastore's ``movies`` collection.

    ``video_url`` is either a storage-relative path served by the edge tier
    (``"42/index.m3u8"``), an absolute URL on the internal storage host, or
    an absolute URL on some external host.
    """

    id: str
    title: str
    description: str = ""
    thumbnail_url: str = ""
    cover_url: str = ""
    video_url: str = ""
    genre: list[str] = Field(default_factory=list)
    year: Optional[int] = None
    duration: str = ""
    rating: str = ""
    is_featured: bool = False
    views: int = 0
    type: Literal["movie", "series"] = "movie"
    audio_languages: list[str] = Field(default_factory=list)
    subtitle_languages: list[str] = Field(default_factory=list)


class MovieCreate(_CatalogModel):
    title: str
    description: str = ""
    thumbnail_url: str = ""
    cover_url: str = ""
    video_url: str = ""
    genre: list[str] = Field(default_factory=list)
    year: Optional[int] = None
    duration: str = ""
    rating: str = ""
    is_featured: bool = False
    type: Literal["movie", "series"] = "movie"
    audio_languages: list[str] = Field(default_factory=list)
    subtitle_languages: list[str] = Field(default_factory=list)


class MovieUpdate(_CatalogModel):
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    cover_url: Optional[str] = None
    video_url: Optional[str] = None
    genre: Optional[list[str]] = None
    year: Optional[int] = None
    duration: Optional[str] = None
    rating: Optional[str] = None
    is_featured: Optional[bool] = None
    type: Optional[Literal["movie", "series"]] = None
    audio_languages: Optional[list[str]] = None
    subtitle_languages: Optional[list[str]] = None
