"""Radarr API adapter."""

import logging
from typing import Any, List

from niquests.exceptions import RequestException

from app.core.cache import Cache, cache_manager
from app.core.config import Settings, get_settings
from app.models.radarr import (
    QueueItem,
    QueueResponse,
    RadarrMovie,
    RadarrMovieOptions,
    RadarrProfile,
    RadarrRootFolder,
    SystemStatus,
)
from app.services.external_api import ExternalAPI

logger = logging.getLogger(__name__)

API_PATH = "/api/v3"
LOOKUP_TTL = 3600

# Raised by the transport, or by pydantic/json when a response has the wrong shape
_READ_ERRORS = (RequestException, ValueError)


class RadarrError(Exception):
    """Domain exception for Radarr failures."""

    def __init__(self, message: str, original_exception: Exception | None = None):
        super().__init__(message)
        self.original_exception = original_exception


class RadarrTransportError(RadarrError):
    """A read request failed at the network or HTTP level."""

    def __init__(
        self,
        operation: str,
        original_exception: Exception,
    ):
        super().__init__(
            f"[Radarr] Failed to retrieve {operation}: {original_exception}",
            original_exception,
        )
        self.operation = operation


class MovieNotFoundError(RadarrError):
    """A TMDb id could not be resolved, whatever the underlying cause."""


class RadarrRejectedError(RadarrError):
    """A write did not take effect, or failed outright."""


class RadarrAPI(ExternalAPI):
    """Client for a single Radarr instance."""

    @staticmethod
    def build_radarr_url(settings: Settings, path: str = "") -> str:
        scheme = "https" if settings.radarr_use_ssl else "http"
        return (
            f"{scheme}://{settings.radarr_hostname}:{settings.radarr_port}"
            f"{settings.radarr_base_url or ''}{path}"
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RadarrAPI":
        settings = settings or get_settings()
        api_key = settings.radarr_api_key
        return cls(
            url=cls.build_radarr_url(settings, API_PATH),
            api_key=api_key.get_secret_value() if api_key else "",
            timeout=settings.radarr_timeout,
            retries=settings.radarr_retries,
            proxy=settings.proxy,
        )

    def __init__(
        self,
        url: str,
        api_key: str,
        cache: Cache | None = None,
        timeout: int = 30,
        retries: int = 0,
        proxy: str | None = None,
    ):
        super().__init__(
            url,
            params={"apikey": api_key},
            cache=cache if cache is not None else cache_manager.get_cache("radarr"),
            timeout=timeout,
            retries=retries,
            proxy=proxy,
        )

    async def get_movies(self) -> List[RadarrMovie]:
        try:
            data = await self.get("/movie")
            return [RadarrMovie.model_validate(m) for m in data]
        except _READ_ERRORS as e:
            raise RadarrTransportError("movies", e) from e

    async def get_movie(self, id: int) -> RadarrMovie:
        try:
            data = await self.get(f"/movie/{id}")
            return RadarrMovie.model_validate(data)
        except _READ_ERRORS as e:
            raise RadarrTransportError("movie", e) from e

    async def get_movie_by_tmdb_id(self, tmdb_id: int) -> RadarrMovie:
        """Resolve a TMDb id to Radarr's view of the movie.

        Radarr may return several candidates; the first one is used. An empty
        result and a failed request both raise MovieNotFoundError.
        """
        try:
            data = await self.get("/movie/lookup", params={"term": f"tmdb:{tmdb_id}"})
            if not data:
                raise MovieNotFoundError("Movie not found")
            return RadarrMovie.model_validate(data[0])
        except (MovieNotFoundError, LookupError, TypeError, *_READ_ERRORS) as e:
            logger.error("Error retrieving movie by TMDb ID %s: %s", tmdb_id, e)
            raise MovieNotFoundError("Movie not found", e) from e

    @staticmethod
    def _movie_payload(options: RadarrMovieOptions) -> dict[str, Any]:
        payload = {
            "title": options.title,
            "qualityProfileId": options.quality_profile_id,
            "titleSlug": str(options.tmdb_id),
            "minimumAvailability": options.minimum_availability,
            "tmdbId": options.tmdb_id,
            "year": options.year,
            "rootFolderPath": options.root_folder_path,
            "monitored": options.monitored,
            "addOptions": {"searchForMovie": options.search_now},
        }
        if options.profile_id is not None:
            payload["profileId"] = options.profile_id
        return payload

    async def add_movie(self, options: RadarrMovieOptions) -> RadarrMovie:
        """Add a movie to Radarr, or start monitoring it if it is already there.

        Movies that are downloaded or already monitored are returned unchanged
        without any write. A write only counts as successful when the returned
        record shows it took effect (monitored after an update, an id after a
        create). Every failure past the lookup surfaces as RadarrRejectedError.
        """
        movie = await self.get_movie_by_tmdb_id(options.tmdb_id)

        if movie.downloaded:
            logger.info(
                "Title already exists and is available. Skipping add and returning success"
            )
            return movie

        try:
            # movie exists in radarr but is neither downloaded nor monitored
            if movie.id and not movie.monitored:
                data = await self.put(
                    "/movie", {**movie.to_api(), **self._movie_payload(options)}
                )
                updated = RadarrMovie.model_validate(data)
                if not updated.monitored:
                    logger.error(
                        "Failed to update existing movie in Radarr: %s",
                        options.model_dump(),
                    )
                    raise RadarrRejectedError(
                        "Failed to update existing movie in Radarr"
                    )
                logger.info(
                    "Found existing title in Radarr and set it to monitored. Returning success"
                )
                logger.debug("Radarr update details: %s", data)
                return updated

            if movie.id:
                logger.info(
                    "Movie is already monitored in Radarr. Skipping add and returning success"
                )
                return movie

            data = await self.post("/movie", self._movie_payload(options))
            created = RadarrMovie.model_validate(data)
            if not created.id:
                logger.error("Failed to add movie to Radarr: %s", options.model_dump())
                raise RadarrRejectedError("Failed to add movie to Radarr")
            logger.info("Radarr accepted request")
            logger.debug("Radarr add details: %s", data)
            return created
        except (RadarrRejectedError, *_READ_ERRORS) as e:
            response = getattr(e, "response", None)
            logger.error(
                "Failed to add movie to Radarr. This might happen if the movie "
                "already exists, in which case you can safely ignore this error. "
                "error=%s options=%s response=%s",
                e,
                options.model_dump(),
                response.text if response is not None else None,
            )
            raise RadarrRejectedError("Failed to add movie to Radarr", e) from e

    async def get_profiles(self) -> List[RadarrProfile]:
        try:
            data = await self.get_rolling("/qualityProfile", ttl=LOOKUP_TTL)
            return [RadarrProfile.model_validate(p) for p in data]
        except _READ_ERRORS as e:
            raise RadarrTransportError("profiles", e) from e

    async def get_root_folders(self) -> List[RadarrRootFolder]:
        try:
            data = await self.get_rolling("/rootfolder", ttl=LOOKUP_TTL)
            return [RadarrRootFolder.model_validate(f) for f in data]
        except _READ_ERRORS as e:
            raise RadarrTransportError("root folders", e) from e

    async def get_queue(self) -> List[QueueItem]:
        """Return the queue records, dropping the pagination envelope."""
        try:
            data = await self.get("/queue")
            return QueueResponse.model_validate(data).records
        except _READ_ERRORS as e:
            raise RadarrTransportError("queue", e) from e

    async def get_system_status(self) -> SystemStatus:
        try:
            data = await self.get("/system/status")
            return SystemStatus.model_validate(data)
        except _READ_ERRORS as e:
            raise RadarrTransportError("system status", e) from e
