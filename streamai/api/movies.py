"""Catalog browsing (public) and management (admin)."""
import time
import uuid
from typing import List

from fastapi import APIRouter, HTTPException

from streamai.api.deps import AdminOnly, Store
from streamai.models.movie import Movie, MovieCreate, MovieUpdate
from streamai.services.catalog import MovieCatalog

router = APIRouter()


@router.get("/", response_model=List[Movie])
async def list_movies(store: Store):
    return await MovieCatalog(store).list_movies()


@router.get("/{movie_id}", response_model=Movie)
async def get_movie(movie_id: str, store: Store):
    movie = await MovieCatalog(store).get_movie(movie_id)
    if not movie:
        raise HTTPException(status_code=404, detail="Movie not found")
    return movie


@router.post("/", response_model=Movie)
async def create_movie(data: MovieCreate, store: Store, user: AdminOnly):
    movie = Movie(id=f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}", views=0, **data.model_dump())
    # Newest first, as the storefront lists them
    await store.insert("movies", movie.model_dump(mode="json", by_alias=True), prepend=True)
    return movie


@router.put("/{movie_id}", response_model=Movie)
async def update_movie(movie_id: str, data: MovieUpdate, store: Store, user: AdminOnly):
    changes = data.model_dump(exclude_unset=True, by_alias=True, mode="json")
    doc = await store.update("movies", movie_id, changes)
    if doc is None:
        raise HTTPException(status_code=404, detail="Movie not found")
    return Movie.model_validate(doc)


@router.delete("/{movie_id}")
async def delete_movie(movie_id: str, store: Store, user: AdminOnly):
    if not await store.delete("movies", movie_id):
        raise HTTPException(status_code=404, detail="Movie not found")
    return {"success": True}
