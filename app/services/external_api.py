"""Generic async client for a single external service."""

import json
import logging
from typing import Any

import niquests

from app.core.cache import Cache

logger = logging.getLogger(__name__)

DEFAULT_TTL = 60


class ExternalAPI:
    """Base class for external service adapters.

    Wraps a ``niquests.AsyncSession`` bound to one base URL. ``params`` and
    ``headers`` (usually authentication) are merged into every request.
    When a cache is given, ``get_rolling`` serves idempotent GETs from it.
    """

    def __init__(
        self,
        base_url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        cache: Cache | None = None,
        timeout: int = 30,
        retries: int = 0,
        proxy: str | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.params = dict(params or {})
        self.cache = cache
        self.timeout = timeout
        self.session = niquests.AsyncSession(retries=retries)
        self.session.headers.update({"Accept": "application/json"})
        if headers:
            self.session.headers.update(headers)
        if proxy:
            self.session.proxies = {"http": proxy, "https": proxy}

    async def aclose(self) -> None:
        """Properly close the internal HTTP session."""
        if hasattr(self, "session") and self.session:
            await self.session.close()

    def _merge_params(self, params: dict[str, Any] | None) -> dict[str, Any]:
        return {**self.params, **(params or {})}

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_payload: Any = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s params=%s", method, url, params)
        response = await self.session.request(
            method,
            url,
            params=self._merge_params(params),
            json=json_payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json_payload: Any) -> Any:
        return await self._request("POST", path, json_payload=json_payload)

    async def put(self, path: str, json_payload: Any) -> Any:
        return await self._request("PUT", path, json_payload=json_payload)

    def cache_key(self, path: str, params: dict[str, Any] | None = None) -> str:
        """Key a request by base URL, path and the merged query parameters."""
        merged = json.dumps(self._merge_params(params), sort_keys=True, default=str)
        return f"{self.base_url}{path}{merged}"

    async def get_rolling(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        ttl: float = DEFAULT_TTL,
    ) -> Any:
        """GET ``path``, serving from the cache while the entry is live.

        Only successful responses are stored. Concurrent misses on the same
        key are not coalesced, the last response to arrive wins.
        """
        if self.cache is None:
            return await self.get(path, params)

        key = self.cache_key(path, params)
        cached_data = self.cache.get(key)
        if cached_data is not None:
            return cached_data

        data = await self.get(path, params)
        self.cache.set(key, data, ttl)
        return data
