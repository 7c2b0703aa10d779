"""Shared dependencies: JWT auth, admin checks, client address, stream authorizer."""
from datetime import datetime, timedelta
from typing import Annotated, Optional

import bcrypt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from streamai.config import SigningConfig, settings
from streamai.db import JsonStore, get_store
from streamai.models.stream import Identity
from streamai.models.user import User, UserRole
from streamai.services.catalog import MovieCatalog
from streamai.services.stream import StreamAuthorizer

security = HTTPBearer(auto_error=False)


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def create_access_token(user: User) -> str:
    expire = datetime.utcnow() + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    to_encode = {
        "sub": user.id,
        "email": user.email,
        "role": user.role.value,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    store: Annotated[JsonStore, Depends(get_store)],
) -> User:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = credentials.credentials
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        user_id: str = payload.get("sub")
        if not user_id or payload.get("type") != "access":
            raise HTTPException(status_code=401, detail="Invalid token")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    doc = await store.find_one("users", id=user_id)
    if not doc:
        raise HTTPException(status_code=401, detail="User not found")
    user = User.model_validate(doc)
    if not user.is_active:
        raise HTTPException(status_code=403, detail="User is inactive")
    return user


async def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    store: Annotated[JsonStore, Depends(get_store)],
) -> Optional[User]:
    """Caller if a valid token was sent, None otherwise (public pages)."""
    if not credentials:
        return None
    try:
        return await get_current_user(credentials, store)
    except HTTPException:
        return None


def require_roles(*allowed: UserRole):
    allowed_values = [role.value for role in allowed]

    async def checker(user: Annotated[User, Depends(get_current_user)]):
        if user.role.value not in allowed_values:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user

    return checker


async def get_identity(user: Annotated[User, Depends(get_current_user)]) -> Identity:
    return Identity(user_id=user.id, email=user.email, role=user.role, is_active=user.is_active)


def get_client_ip(request: Request) -> Optional[str]:
    """Address the edge tier will see for this client.

    Behind a reverse proxy the socket peer is the proxy itself, so a trusted
    header (``CLIENT_IP_HEADER``, e.g. ``X-Real-IP``) takes precedence when
    configured. For list headers such as ``X-Forwarded-For`` only the
    right-most entry is used: it is the one appended by the trusted proxy,
    everything left of it comes from the client.
    """
    if settings.client_ip_header:
        forwarded = request.headers.get(settings.client_ip_header)
        if forwarded:
            entries = [e.strip() for e in forwarded.split(",") if e.strip()]
            if entries:
                return entries[-1]
    return request.client.host if request.client else None


def get_signing_config() -> SigningConfig:
    return SigningConfig.from_settings(settings)


def get_authorizer(
    store: Annotated[JsonStore, Depends(get_store)],
    config: Annotated[SigningConfig, Depends(get_signing_config)],
) -> StreamAuthorizer:
    catalog = MovieCatalog(
        store,
        internal_host_pattern=config.internal_host_pattern,
        manifest_extension=config.manifest_extension,
    )
    return StreamAuthorizer(config, catalog)


# Type aliases for route injection
CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
CurrentIdentity = Annotated[Identity, Depends(get_identity)]
AdminOnly = Annotated[User, Depends(require_roles(UserRole.ADMIN))]
Store = Annotated[JsonStore, Depends(get_store)]
ClientIP = Annotated[Optional[str], Depends(get_client_ip)]
Authorizer = Annotated[StreamAuthorizer, Depends(get_authorizer)]
