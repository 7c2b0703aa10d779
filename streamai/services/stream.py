"""Stream authorization: decide eligibility and issue signed edge URLs."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional, Protocol

from streamai.config import SigningConfig
from streamai.models.stream import AccessGrant, ContentItem, ExternalContent, Identity
from streamai.services import signing

logger = logging.getLogger(__name__)


class StreamAuthorizationError(Exception):
    status_code = 500
    detail = "Stream authorization failed"

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotFound(StreamAuthorizationError):
    status_code = 404
    detail = "Content not found"


class Unauthorized(StreamAuthorizationError):
    status_code = 401
    detail = "Not authenticated"


class Forbidden(StreamAuthorizationError):
    status_code = 403
    detail = "Account is not allowed to stream"


class InternalSigningFailure(StreamAuthorizationError):
    status_code = 500
    detail = "Stream signing is not configured"


class CatalogUnavailable(StreamAuthorizationError):
    status_code = 503
    detail = "Content catalog unavailable"


class ContentCatalog(Protocol):
    async def resolve(self, content_id: str) -> Optional[ContentItem]: ...


class StreamAuthorizer:
    """Issues access grants for catalog content.

    Stateless apart from the injected config and catalog; safe to share
    between concurrent requests.
    """

    def __init__(
        self,
        config: SigningConfig,
        catalog: ContentCatalog,
        *,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config
        self.catalog = catalog
        self.clock = clock

    async def authorize(
        self,
        content_id: str,
        identity: Optional[Identity],
        client_ip: Optional[str],
    ) -> AccessGrant:
        if identity is None or not identity.user_id:
            logger.warning("Stream authorization without identity for content %s", content_id)
            raise Unauthorized()
        if not identity.is_active:
            logger.warning("Inactive user %s requested content %s", identity.user_id, content_id)
            raise Forbidden()

        item = await self._resolve(content_id)
        if item is None:
            raise NotFound()

        if isinstance(item, ExternalContent):
            logger.info(
                "stream.authorize user=%s content=%s transport=passthrough",
                identity.user_id,
                content_id,
            )
            return AccessGrant(content_id=content_id, url=item.url, transport="passthrough")

        grant = self._sign(item.content_id, item.path, client_ip)
        logger.info(
            "stream.authorize user=%s content=%s transport=signed-hls expires=%s",
            identity.user_id,
            content_id,
            grant.expires,
        )
        return grant

    async def _resolve(self, content_id: str) -> Optional[ContentItem]:
        try:
            return await asyncio.wait_for(
                self.catalog.resolve(content_id),
                timeout=self.config.catalog_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error("Catalog lookup for %s timed out", content_id)
            raise CatalogUnavailable() from e
        except (OSError, ValueError) as e:
            # unreadable datastore, corrupt JSON or a malformed movie document
            logger.error("Catalog lookup for %s failed: %s", content_id, e)
            raise CatalogUnavailable() from e

    def _sign(self, content_id: str, path: str, client_ip: Optional[str]) -> AccessGrant:
        cfg = self.config
        if not cfg.secret or not cfg.edge_base_url:
            logger.error("Refusing to issue unsigned URL for %s: signing secret or edge host missing", content_id)
            raise InternalSigningFailure()
        bound_ip = None
        if cfg.bind_client_ip:
            if not client_ip:
                logger.error("IP binding enabled but no client address for %s", content_id)
                raise InternalSigningFailure("Client address unavailable for IP-bound link")
            bound_ip = client_ip

        expires = int(self.clock()) + cfg.validity_seconds
        sig = signing.sign(expires, path, cfg.secret, bound_ip)
        return AccessGrant(
            content_id=content_id,
            url=signing.build_url(cfg.edge_base_url, path, sig, expires),
            transport="signed-hls",
            path=path,
            expires=expires,
            client_ip=client_ip,
            signature=sig,
        )
