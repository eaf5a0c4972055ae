import pytest
from pydantic import ValidationError

from app.core.cache import Cache
from app.core.config import Settings
from fakes import FakeTimer


def test_base_url_is_normalised():
    assert Settings(radarr_base_url="/radarr/").radarr_base_url == "/radarr"
    assert Settings(radarr_base_url="").radarr_base_url == ""


def test_base_url_must_start_with_slash():
    with pytest.raises(ValidationError):
        Settings(radarr_base_url="radarr")


def test_invalid_proxy_rejected():
    with pytest.raises(ValidationError):
        Settings(proxy="ftp://proxy:21")


def test_radarr_configured():
    assert not Settings().radarr_configured
    assert not Settings(radarr_hostname="radarr").radarr_configured
    assert Settings(radarr_hostname="radarr", radarr_api_key="k").radarr_configured


def test_cache_entries_expire_independently():
    timer = FakeTimer()
    cache = Cache("c", "C", timer=timer)
    cache.set("short", 1, ttl=10)
    cache.set("long", 2, ttl=100)

    timer.advance(50)

    assert cache.get("short") is None
    assert cache.get("long") == 2
    stats = cache.stats()
    assert (stats.hits, stats.misses, stats.keys) == (1, 1, 1)
