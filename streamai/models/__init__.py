"""Pydantic models for the datastore collections and the stream API."""
from streamai.models.user import (
    ProfileUpdate,
    PublicProfile,
    User,
    UserAdminUpdate,
    UserAdminView,
    UserCreate,
    UserPublic,
    UserRole,
)
from streamai.models.movie import Movie, MovieCreate, MovieUpdate
from streamai.models.stream import (
    AccessGrant,
    ContentItem,
    ExternalContent,
    Identity,
    InternalContent,
    StreamAuthorizeResponse,
)

__all__ = [
    "User",
    "UserRole",
    "UserCreate",
    "UserPublic",
    "UserAdminView",
    "UserAdminUpdate",
    "ProfileUpdate",
    "PublicProfile",
    "Movie",
    "MovieCreate",
    "MovieUpdate",
    "AccessGrant",
    "ContentItem",
    "ExternalContent",
    "Identity",
    "InternalContent",
    "StreamAuthorizeResponse",
]
