import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from fastapi.testclient import TestClient

from app.api.deps import get_radarr
from app.core.cache import cache_manager
from app.main import app
from app.models.radarr import QueueItem, RadarrMovie, RadarrProfile
from app.services.radarr import (
    MovieNotFoundError,
    RadarrRejectedError,
    RadarrTransportError,
)


@pytest.fixture
def radarr_mock():
    """Swap the Radarr dependency for a mock for the duration of a test."""
    mock = MagicMock()
    app.dependency_overrides[get_radarr] = lambda: mock
    yield mock
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "requestarr"}


def test_list_movies(client, radarr_mock):
    radarr_mock.get_movies = AsyncMock(
        return_value=[RadarrMovie(id=1, title="The Matrix", tmdb_id=603)]
    )

    response = client.get("/api/radarr/movies")

    assert response.status_code == 200
    data = response.json()
    assert data[0]["tmdbId"] == 603
    assert data[0]["title"] == "The Matrix"


def test_add_movie_returns_record(client, radarr_mock):
    radarr_mock.add_movie = AsyncMock(
        return_value=RadarrMovie(id=42, title="The Matrix", tmdb_id=603, monitored=True)
    )

    response = client.post(
        "/api/radarr/movies",
        json={
            "title": "The Matrix",
            "qualityProfileId": 4,
            "minimumAvailability": "released",
            "year": 1999,
            "rootFolderPath": "/movies",
            "tmdbId": 603,
        },
    )

    assert response.status_code == 200
    assert response.json()["id"] == 42
    options = radarr_mock.add_movie.await_args.args[0]
    assert options.tmdb_id == 603
    assert options.monitored is True
    assert options.search_now is False


def test_lookup_not_found_maps_to_404(client, radarr_mock):
    radarr_mock.get_movie_by_tmdb_id = AsyncMock(
        side_effect=MovieNotFoundError("Movie not found")
    )

    response = client.get("/api/radarr/lookup/603")

    assert response.status_code == 404
    assert response.json() == {"detail": "Movie not found"}


def test_rejected_add_maps_to_502(client, radarr_mock):
    radarr_mock.add_movie = AsyncMock(
        side_effect=RadarrRejectedError("Failed to add movie to Radarr")
    )

    response = client.post(
        "/api/radarr/movies",
        json={
            "title": "The Matrix",
            "qualityProfileId": 4,
            "minimumAvailability": "released",
            "year": 1999,
            "rootFolderPath": "/movies",
            "tmdbId": 603,
        },
    )

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to add movie to Radarr"


def test_transport_error_maps_to_502(client, radarr_mock):
    radarr_mock.get_profiles = AsyncMock(
        side_effect=RadarrTransportError("profiles", ConnectionError("refused"))
    )

    response = client.get("/api/radarr/profiles")

    assert response.status_code == 502
    assert response.json()["detail"] == "[Radarr] Failed to retrieve profiles: refused"


def test_profiles_and_queue(client, radarr_mock):
    radarr_mock.get_profiles = AsyncMock(
        return_value=[RadarrProfile(id=4, name="HD-1080p")]
    )
    radarr_mock.get_queue = AsyncMock(
        return_value=[QueueItem(id=5, movie_id=7, status="downloading")]
    )

    assert client.get("/api/radarr/profiles").json() == [{"id": 4, "name": "HD-1080p"}]
    queue = client.get("/api/radarr/queue").json()
    assert queue[0]["movieId"] == 7


def test_unconfigured_radarr_returns_503(client):
    with patch("app.api.deps.get_settings") as mock_settings:
        mock_settings.return_value = MagicMock(radarr_configured=False)
        response = client.get("/api/radarr/movies")

    assert response.status_code == 503


def test_cache_listing_and_flush(client):
    radarr_cache = cache_manager.get_cache("radarr")
    radarr_cache.set("key", ["value"], ttl=60)

    listing = client.get("/api/cache").json()
    assert any(c["id"] == "radarr" and c["keys"] >= 1 for c in listing)

    response = client.post("/api/cache/radarr/flush")
    assert response.status_code == 200
    assert response.json()["keys"] == 0
    assert radarr_cache.get("key") is None


def test_flush_unknown_cache_is_404(client):
    response = client.post("/api/cache/nope/flush")
    assert response.status_code == 404
