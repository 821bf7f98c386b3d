"""HTTP client that reports each request as an instrumented event."""

from collections import OrderedDict
from typing import Any

import httpx

from ..event_bus import Instrumenter
from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CACHE_ENTRIES = 128


class InstrumentedHTTPClient:
    """httpx.AsyncClient wrapper with a bounded in-process GET cache.

    The cache keeps at most `max_entries` responses and evicts the least
    recently used one first.
    """

    def __init__(
        self,
        instrumenter: Instrumenter,
        client: httpx.AsyncClient | None = None,
        action: str = "request",
        cache: bool = True,
        max_entries: int = DEFAULT_CACHE_ENTRIES,
    ):
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive: {max_entries}")
        self._instrumenter = instrumenter
        self._client = client or httpx.AsyncClient()
        self._action = action
        self._cache_enabled = cache
        self._max_entries = max_entries
        self._cache: OrderedDict[tuple[str, str], httpx.Response] = OrderedDict()

    async def request(
        self, method: str, url: str, params: Any = None
    ) -> httpx.Response:
        """Send a request; raises httpx.HTTPStatusError on non-2xx."""
        method = method.upper()
        key = (url, str(httpx.QueryParams(params or {})))
        cached = method == "GET" and self._cache_enabled and key in self._cache

        async def send() -> httpx.Response:
            if cached:
                self._cache.move_to_end(key)
                return self._cache[key]
            return await self._client.request(method, url, params=params)

        response = await self._instrumenter.ainstrument(
            self._action,
            {"method": method, "url": url, "params": params, "cached": cached},
            send,
        )
        response.raise_for_status()

        if method == "GET" and self._cache_enabled and not cached:
            self._store(key, response)
        return response

    def _store(self, key: tuple[str, str], response: httpx.Response) -> None:
        self._cache[key] = response
        while len(self._cache) > self._max_entries:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug("Evicted cached response for %s", evicted[0])

    async def get(self, url: str, params: Any = None) -> httpx.Response:
        return await self.request("GET", url, params=params)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "InstrumentedHTTPClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
