from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..errors import CacheUnavailable, FetchFailed
from ..storage.base import PageStore
from ..utils.http import Transport
from ..utils.parsing import DEFAULT_FRAGMENT_SUFFIXES, normalize_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchOutcome:
    """Either a page body or the FetchFailed that prevented getting one."""

    url: str
    body: Optional[str] = None
    error: Optional[FetchFailed] = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and self.body is not None


class Fetcher:
    """
    Cache-first page fetcher with write-through.

    Every URL is normalized before it is looked up, fetched or stored. A miss
    costs exactly one transport call; there are no retries.
    """

    def __init__(
        self,
        store: PageStore,
        transport: Transport,
        *,
        fragment_suffixes: Iterable[str] = DEFAULT_FRAGMENT_SUFFIXES,
    ) -> None:
        self.store = store
        self.transport = transport
        self.fragment_suffixes = tuple(fragment_suffixes)
        self.network_requests = 0
        self.cache_hits = 0
        self.failures = 0

    async def fetch(self, url: str, *, timeout: Optional[float] = None) -> FetchOutcome:
        url = normalize_url(url, self.fragment_suffixes)

        cached = self._read_cache(url)
        if cached is not None:
            self.cache_hits += 1
            logger.debug("Loaded from cache: %s", url)
            return FetchOutcome(url=url, body=cached, from_cache=True)

        self.network_requests += 1
        try:
            body = await self.transport(url, timeout=timeout)
        except FetchFailed as exc:
            self.failures += 1
            logger.warning("Fetch failed for %s: %s", url, exc.cause)
            return FetchOutcome(url=url, error=exc)

        self._write_cache(url, body)
        return FetchOutcome(url=url, body=body)

    def _read_cache(self, url: str) -> Optional[str]:
        try:
            return self.store.get(url)
        except CacheUnavailable as exc:
            logger.warning("Cache read failed, fetching from network: %s", exc)
            return None

    def _write_cache(self, url: str, body: str) -> None:
        try:
            self.store.put(url, body)
        except CacheUnavailable as exc:
            logger.warning("Cache write failed, continuing without caching %s: %s", url, exc)
