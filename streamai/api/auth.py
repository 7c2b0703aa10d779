"""JWT-based stateless authentication."""
import time
import uuid

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from streamai.api.deps import CurrentUser, Store, create_access_token, get_password_hash, verify_password
from streamai.models.user import User, UserCreate, UserPublic, UserRole

router = APIRouter()


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic


class LoginRequest(BaseModel):
    email: str
    password: str


@router.post("/register", response_model=TokenResponse)
async def register(data: UserCreate, store: Store):
    hashed = get_password_hash(data.password)

    def _insert(db: dict) -> User:
        users = db["users"]
        if any(u.get("email") == data.email for u in users):
            raise HTTPException(status_code=400, detail="User already exists")
        # First account on a fresh datastore administers the catalog
        user = User(
            id=f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}",
            email=data.email,
            name=data.name,
            hashed_password=hashed,
            role=UserRole.ADMIN if not users else UserRole.USER,
        )
        users.append(user.model_dump(mode="json", by_alias=True))
        return user

    user = await store.modify(_insert)
    return TokenResponse(access_token=create_access_token(user), user=user.public())


@router.post("/login", response_model=TokenResponse)
async def login(req: LoginRequest, store: Store):
    doc = await store.find_one("users", email=req.email)
    if not doc:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    user = User.model_validate(doc)
    if not user.is_active or not verify_password(req.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return TokenResponse(access_token=create_access_token(user), user=user.public())


@router.get("/me", response_model=UserPublic)
async def me(user: CurrentUser):
    return user.public()
