"""Dependency injection for the shared Radarr adapter."""

import logging
from functools import lru_cache

from fastapi import HTTPException

from app.core.config import get_settings
from app.services.radarr import RadarrAPI

logger = logging.getLogger(__name__)


@lru_cache
def get_radarr_api() -> RadarrAPI:
    """Build the process-wide Radarr adapter from settings."""
    settings = get_settings()
    logger.info("Using Radarr at %s", RadarrAPI.build_radarr_url(settings))
    return RadarrAPI.from_settings(settings)


def get_radarr() -> RadarrAPI:
    """FastAPI dependency returning the Radarr adapter, 503 if unconfigured."""
    if not get_settings().radarr_configured:
        raise HTTPException(status_code=503, detail="Radarr is not configured")
    return get_radarr_api()
