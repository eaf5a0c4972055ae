"""API routes returning JSON for the request workflow or external tools."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_radarr
from app.core.cache import CacheStats, cache_manager
from app.models.radarr import (
    QueueItem,
    RadarrMovie,
    RadarrMovieOptions,
    RadarrProfile,
    RadarrRootFolder,
    SystemStatus,
)
from app.services.radarr import RadarrAPI

router = APIRouter()

Radarr = Annotated[RadarrAPI, Depends(get_radarr)]


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "requestarr"}


# --- Radarr ---


@router.get("/radarr/movies", response_model=List[RadarrMovie])
async def list_movies(radarr: Radarr):
    """List every movie in the Radarr library."""
    return await radarr.get_movies()


@router.get("/radarr/movies/{movie_id}", response_model=RadarrMovie)
async def get_movie(movie_id: int, radarr: Radarr):
    return await radarr.get_movie(movie_id)


@router.get("/radarr/lookup/{tmdb_id}", response_model=RadarrMovie)
async def lookup_movie(tmdb_id: int, radarr: Radarr):
    """Resolve a TMDb id to Radarr's record (or lookup result)."""
    return await radarr.get_movie_by_tmdb_id(tmdb_id)


@router.post("/radarr/movies", response_model=RadarrMovie)
async def add_movie(options: RadarrMovieOptions, radarr: Radarr):
    """Add a movie to Radarr, or start monitoring an existing one.

    Already downloaded or monitored movies are returned unchanged.
    """
    return await radarr.add_movie(options)


@router.get("/radarr/profiles", response_model=List[RadarrProfile])
async def list_profiles(radarr: Radarr):
    return await radarr.get_profiles()


@router.get("/radarr/rootfolders", response_model=List[RadarrRootFolder])
async def list_root_folders(radarr: Radarr):
    return await radarr.get_root_folders()


@router.get("/radarr/queue", response_model=List[QueueItem])
async def list_queue(radarr: Radarr):
    """List in-progress downloads (first page of Radarr's queue)."""
    return await radarr.get_queue()


@router.get("/radarr/status", response_model=SystemStatus)
async def radarr_status(radarr: Radarr):
    """Test the Radarr connection by fetching its system status."""
    return await radarr.get_system_status()


# --- Cache Management ---


@router.get("/cache", response_model=List[CacheStats])
async def list_caches():
    """List all caches with their hit/miss counters."""
    return [cache.stats() for cache in cache_manager.get_all_caches()]


@router.post("/cache/{cache_id}/flush", response_model=CacheStats)
async def flush_cache(cache_id: str):
    """Drop every entry of a cache."""
    try:
        cache = cache_manager.get_cache(cache_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Cache not found")
    cache.flush()
    return cache.stats()
