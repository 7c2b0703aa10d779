"""Self-service profile and watchlist."""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from streamai.api.deps import CurrentUser, Store, create_access_token
from streamai.api.users import user_changes
from streamai.models.user import ProfileUpdate, UserPublic
from streamai.services.users import EmailTaken, toggle_watchlist, update_user

router = APIRouter()


class ProfileResponse(BaseModel):
    user: UserPublic
    token: str


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(data: ProfileUpdate, store: Store, user: CurrentUser):
    try:
        updated = await update_user(store, user.id, user_changes(data))
    except EmailTaken:
        raise HTTPException(status_code=400, detail="Email already registered")
    if updated is None:
        raise HTTPException(status_code=404, detail="User not found")
    # Email may have changed; hand out a token carrying the new claims
    return ProfileResponse(user=updated.public(), token=create_access_token(updated))


@router.put("/user/watchlist/{movie_id}", response_model=list[str])
async def toggle_watchlist_entry(movie_id: str, store: Store, user: CurrentUser):
    if not await store.find_one("movies", id=movie_id):
        raise HTTPException(status_code=404, detail="Movie not found")
    watchlist = await toggle_watchlist(store, user.id, movie_id)
    if watchlist is None:
        raise HTTPException(status_code=404, detail="User not found")
    return watchlist
