import pytest

from app.core.cache import Cache
from app.services.radarr import RadarrAPI
from fakes import FakeTimer


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def cache(timer):
    return Cache("test", "Test", timer=timer)


@pytest.fixture
def radarr(cache):
    return RadarrAPI(url="http://radarr:7878/api/v3", api_key="secret", cache=cache)
