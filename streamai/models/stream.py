"""Secure delivery: content classification and access grants."""
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from streamai.models.user import UserRole

Transport = Literal["signed-hls", "passthrough"]


class Identity(BaseModel):
    """Verified caller identity handed over by the auth layer."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str = ""
    role: UserRole = UserRole.USER
    is_active: bool = True


class InternalContent(BaseModel):
    """Hosted on the internal storage tier; must be signed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["internal"] = "internal"
    content_id: str
    path: str  # canonical, leading slash


class ExternalContent(BaseModel):
    """Hosted elsewhere; handed out unmodified."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["external"] = "external"
    content_id: str
    url: str


ContentItem = Union[InternalContent, ExternalContent]


class AccessGrant(BaseModel):
    """Ephemeral result of a stream authorization. Never persisted."""

    model_config = ConfigDict(frozen=True)

    content_id: str
    url: str
    transport: Transport
    path: Optional[str] = None
    expires: Optional[int] = None
    client_ip: Optional[str] = None
    signature: Optional[str] = None


class StreamAuthorizeResponse(BaseModel):
    url: str
    transport: Transport
    expires: Optional[int] = None
