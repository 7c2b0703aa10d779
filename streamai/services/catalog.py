"""Movie catalog reads and internal/external content classification."""
import logging
import re
from typing import Optional
from urllib.parse import unquote, urlsplit

from streamai.db import JsonStore
from streamai.models.movie import Movie
from streamai.models.stream import ContentItem, ExternalContent, InternalContent

logger = logging.getLogger(__name__)


def _canonical_path(path: str) -> str:
    # the edge tier signs the decoded URI
    return "/" + unquote(path).lstrip("/")


def classify_video_url(
    content_id: str,
    video_url: str,
    *,
    internal_host_pattern: str = "",
    manifest_extension: str = "m3u8",
) -> ContentItem:
    """Decide whether a movie is served by the edge tier or passed through.

    - no video URL, or an internal URL without a path:
      ``/{content_id}/index.{ext}`` on the edge tier
    - relative path: that path (percent-decoded) on the edge tier
    - absolute URL on a host matching ``internal_host_pattern``: its path
    - anything else absolute: external, untouched
    """
    default = InternalContent(content_id=content_id, path=f"/{content_id}/index.{manifest_extension}")
    video_url = (video_url or "").strip()
    if not video_url:
        return default

    parts = urlsplit(video_url)
    if not parts.scheme and not parts.netloc:
        if not parts.path.strip("/"):
            return default
        return InternalContent(content_id=content_id, path=_canonical_path(parts.path))

    host = parts.hostname or ""
    if internal_host_pattern and re.fullmatch(internal_host_pattern, host, flags=re.IGNORECASE):
        if not parts.path.strip("/"):
            return default
        return InternalContent(content_id=content_id, path=_canonical_path(parts.path))
    return ExternalContent(content_id=content_id, url=video_url)


class MovieCatalog:
    """Read access to the ``movies`` collection."""

    def __init__(self, store: JsonStore, *, internal_host_pattern: str = "", manifest_extension: str = "m3u8"):
        self.store = store
        self.internal_host_pattern = internal_host_pattern
        self.manifest_extension = manifest_extension

    async def list_movies(self) -> list[Movie]:
        return [Movie.model_validate(doc) for doc in await self.store.all("movies")]

    async def get_movie(self, movie_id: str) -> Optional[Movie]:
        doc = await self.store.find_one("movies", id=movie_id)
        if doc is None:
            return None
        return Movie.model_validate(doc)

    async def resolve(self, content_id: str) -> Optional[ContentItem]:
        movie = await self.get_movie(content_id)
        if movie is None:
            return None
        item = classify_video_url(
            movie.id,
            movie.video_url,
            internal_host_pattern=self.internal_host_pattern,
            manifest_extension=self.manifest_extension,
        )
        logger.debug("Resolved %s as %s content", content_id, item.kind)
        return item
