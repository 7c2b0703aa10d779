"""Account updates against the datastore."""
from typing import Any, Optional

from streamai.db import JsonStore
from streamai.models.user import User


class EmailTaken(Exception):
    pass


async def update_user(store: JsonStore, user_id: str, changes: dict[str, Any]) -> Optional[User]:
    """Merge datastore-keyed ``changes`` into a user; None if the user doesn't exist."""

    def _apply(db: dict) -> Optional[User]:
        users = db["users"]
        target = next((u for u in users if u.get("id") == user_id), None)
        if target is None:
            return None
        email = changes.get("email")
        if email and any(u.get("email") == email and u.get("id") != user_id for u in users):
            raise EmailTaken(email)
        target.update(changes)
        return User.model_validate(target)

    return await store.modify(_apply)


async def delete_user(store: JsonStore, user_id: str) -> bool:
    return await store.delete("users", user_id)


async def toggle_watchlist(store: JsonStore, user_id: str, movie_id: str) -> Optional[list[str]]:
    """Add ``movie_id`` to the user's watchlist, or remove it if present."""

    def _toggle(db: dict) -> Optional[list[str]]:
        target = next((u for u in db["users"] if u.get("id") == user_id), None)
        if target is None:
            return None
        watchlist = [m for m in target.get("watchlist") or [] if m != movie_id]
        if len(watchlist) == len(target.get("watchlist") or []):
            watchlist.append(movie_id)
        target["watchlist"] = watchlist
        return watchlist

    return await store.modify(_toggle)
