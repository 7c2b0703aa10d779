"""Accounts: viewers and administrators."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(BaseModel):
    """User record as stored in the datastore's ``users`` collection."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    email: EmailStr
    name: str
    hashed_password: str = Field(alias="password")
    role: UserRole = UserRole.USER
    avatar_url: str = ""
    watchlist: list[str] = Field(default_factory=list)
    is_watchlist_public: bool = False
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def public(self) -> "UserPublic":
        return UserPublic(**self.model_dump(exclude={"hashed_password", "is_active"}))


class UserCreate(BaseModel):
    email: EmailStr
    name: str
    password: str = Field(min_length=6)


class UserPublic(BaseModel):
    """User projection returned by the API (no password hash)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    email: str
    name: str
    role: UserRole
    avatar_url: str = ""
    watchlist: list[str] = []
    is_watchlist_public: bool = False
    created_at: Optional[datetime] = None


class UserAdminView(UserPublic):
    is_active: bool = True


class UserAdminUpdate(BaseModel):
    """Admin edit of any account; ``is_active=False`` revokes streaming access."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    avatar_url: Optional[str] = None
    password: Optional[str] = None
    is_active: Optional[bool] = None


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    avatar_url: Optional[str] = None
    is_watchlist_public: Optional[bool] = None
    password: Optional[str] = None


class PublicProfile(BaseModel):
    """Profile page of any user; the watchlist is hidden unless public or own."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    role: UserRole
    avatar_url: str = ""
    created_at: Optional[datetime] = None
    is_watchlist_public: bool = False
    watchlist: list[str] = []
