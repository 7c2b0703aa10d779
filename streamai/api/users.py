"""User management (admin) and public profiles."""
from typing import List

from fastapi import APIRouter, HTTPException

from streamai.api.deps import AdminOnly, OptionalUser, Store, get_password_hash
from streamai.models.user import PublicProfile, User, UserAdminUpdate, UserAdminView
from streamai.services.users import EmailTaken, delete_user, update_user

router = APIRouter()


def admin_view(user: User) -> UserAdminView:
    return UserAdminView(**user.model_dump(exclude={"hashed_password"}))


def user_changes(data) -> dict:
    """Datastore-keyed changes from an update body; blank passwords are ignored."""
    changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"password"}, by_alias=True, mode="json")
    if data.password and data.password.strip():
        changes["password"] = get_password_hash(data.password)
    return changes


@router.get("/", response_model=List[UserAdminView])
async def list_users(store: Store, admin: AdminOnly):
    return [admin_view(User.model_validate(doc)) for doc in await store.all("users")]


@router.get("/profile/{user_id}", response_model=PublicProfile)
async def get_profile(user_id: str, store: Store, viewer: OptionalUser):
    doc = await store.find_one("users", id=user_id)
    if not doc:
        raise HTTPException(status_code=404, detail="User not found")
    user = User.model_validate(doc)
    own = viewer is not None and viewer.id == user.id
    return PublicProfile(
        id=user.id,
        name=user.name,
        role=user.role,
        avatar_url=user.avatar_url,
        created_at=user.created_at,
        is_watchlist_public=user.is_watchlist_public,
        watchlist=user.watchlist if (user.is_watchlist_public or own) else [],
    )


@router.put("/{user_id}", response_model=UserAdminView)
async def admin_update_user(user_id: str, data: UserAdminUpdate, store: Store, admin: AdminOnly):
    """Edit any account. Setting ``isActive`` to false blocks login and streaming."""
    if user_id == admin.id and data.is_active is False:
        raise HTTPException(status_code=400, detail="Cannot deactivate your own admin account")
    try:
        user = await update_user(store, user_id, user_changes(data))
    except EmailTaken:
        raise HTTPException(status_code=400, detail="Email already registered")
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return admin_view(user)


@router.delete("/{user_id}")
async def admin_delete_user(user_id: str, store: Store, admin: AdminOnly):
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own admin account")
    if not await delete_user(store, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"success": True}
