from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .fetcher import Fetcher
from ..adapters.base import Item

logger = logging.getLogger(__name__)

# (html, page_url) -> items on that page
ExtractItems = Callable[[str, str], List[Item]]


@dataclass
class PageResult:
    url: str
    items: List[Item] = field(default_factory=list)
    error: Optional[BaseException] = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchScheduler:
    """
    Fetches and extracts a batch of pages concurrently.
    - Concurrency capped by a semaphore (at most ``max_concurrency`` in flight).
    - Results come back in input order, one per URL.
    - A failing page never affects its siblings; the batch itself never raises.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        extract: ExtractItems,
        *,
        max_concurrency: int = 15,
        timeout: Optional[float] = None,
    ) -> None:
        if max_concurrency <= 0:
            raise ValueError("max_concurrency must be > 0")
        self.fetcher = fetcher
        self.extract = extract
        self.max_concurrency = max_concurrency
        self.timeout = timeout

    async def run_batch(self, urls: Sequence[str]) -> List[PageResult]:
        if not urls:
            return []
        sem = asyncio.Semaphore(min(len(urls), self.max_concurrency))

        async def run_one(url: str) -> PageResult:
            async with sem:
                outcome = await self.fetcher.fetch(url, timeout=self.timeout)
            if not outcome.ok:
                return PageResult(url=outcome.url, error=outcome.error)
            try:
                items = self.extract(outcome.body, outcome.url)
            except Exception as exc:  # broad catch to keep the round moving
                logger.warning("Extraction failed on %s: %r", outcome.url, exc)
                return PageResult(url=outcome.url, error=exc, from_cache=outcome.from_cache)
            logger.info("Extracted %s items from %s", len(items), outcome.url)
            return PageResult(url=outcome.url, items=list(items), from_cache=outcome.from_cache)

        return list(await asyncio.gather(*(run_one(u) for u in urls)))
