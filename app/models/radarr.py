"""Radarr API resources.

Radarr speaks camelCase JSON. Models expose snake_case attributes with
camelCase aliases and keep undeclared fields, so a record fetched from Radarr
can be sent back in full on update.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RadarrModel(BaseModel):
    """Base for Radarr resources."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    def to_api(self) -> dict:
        """Dump the fields Radarr sent (or that were set) with Radarr's names."""
        data = self.model_dump(by_alias=True, exclude_unset=True)
        data.update(self.model_extra or {})
        return data


class RadarrMovie(RadarrModel):
    """A movie as known to Radarr. ``id`` is 0 for lookup-only results."""

    id: int = 0
    title: str
    tmdb_id: int
    imdb_id: Optional[str] = None
    title_slug: Optional[str] = None
    year: Optional[int] = None
    monitored: bool = False
    is_available: bool = False
    downloaded: bool = False
    has_file: bool = False
    folder_name: Optional[str] = None
    path: Optional[str] = None
    profile_id: Optional[int] = None
    quality_profile_id: Optional[int] = None
    root_folder_path: Optional[str] = None
    minimum_availability: Optional[str] = None
    added: Optional[str] = None


class RadarrProfile(RadarrModel):
    """A quality profile."""

    id: int
    name: str


class UnmappedFolder(RadarrModel):
    name: str
    path: str


class RadarrRootFolder(RadarrModel):
    """A root folder Radarr stores movies under."""

    id: int
    path: str
    free_space: int = 0
    total_space: int = 0
    unmapped_folders: List[UnmappedFolder] = []


class QueueItem(RadarrModel):
    """An in-progress download tracked by Radarr."""

    id: int
    movie_id: int
    title: Optional[str] = None
    size: float = 0
    sizeleft: float = 0
    timeleft: Optional[str] = None
    estimated_completion_time: Optional[str] = None
    status: Optional[str] = None
    tracked_download_status: Optional[str] = None
    tracked_download_state: Optional[str] = None
    download_id: Optional[str] = None
    protocol: Optional[str] = None
    download_client: Optional[str] = None
    indexer: Optional[str] = None


class QueueResponse(RadarrModel):
    """Paginated queue envelope."""

    page: int = 1
    page_size: int = 0
    sort_key: Optional[str] = None
    sort_direction: Optional[str] = None
    total_records: int = 0
    records: List[QueueItem] = []


class SystemStatus(RadarrModel):
    """Subset of ``/system/status`` used to test a connection."""

    version: str
    url_base: Optional[str] = None
    app_name: Optional[str] = None
    instance_name: Optional[str] = None


class RadarrMovieOptions(BaseModel):
    """A request to add (or start monitoring) a movie in Radarr."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    quality_profile_id: int
    minimum_availability: str
    profile_id: Optional[int] = None
    year: int
    root_folder_path: str
    tmdb_id: int
    monitored: bool = True
    search_now: bool = False
