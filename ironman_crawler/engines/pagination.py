from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .aggregator import Aggregator
from .base import Category
from .scheduler import BatchScheduler, PageResult
from ..utils.parsing import page_url

logger = logging.getLogger(__name__)


@dataclass
class PaginationState:
    next_page_number: int = 1
    exhausted: bool = False
    rounds: int = 0


class PaginationWalker:
    """
    Walks one category's numbered listing pages in rounds of ``batch_size``.

    The listing gives no page count or "last page" marker, so the walk ends at
    the first round whose pages yield zero items in total. A round where every
    page failed looks the same and also ends the walk.
    """

    def __init__(
        self,
        category: Category,
        scheduler: BatchScheduler,
        aggregator: Aggregator,
        *,
        batch_size: int = 15,
        page_param: str = "page",
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be > 0")
        self.category = category
        self.scheduler = scheduler
        self.aggregator = aggregator
        self.batch_size = batch_size
        self.page_param = page_param
        self.state = PaginationState()

    @property
    def exhausted(self) -> bool:
        return self.state.exhausted

    def next_batch(self) -> List[str]:
        """Page URLs for the next round; advances the page counter unconditionally."""
        start = self.state.next_page_number
        urls = [
            page_url(self.category.source_url, n, self.page_param)
            for n in range(start, start + self.batch_size)
        ]
        self.state.next_page_number = start + self.batch_size
        return urls

    async def run_round(self) -> int:
        """Run one round and return the number of items it yielded (duplicates included)."""
        if self.state.exhausted:
            raise RuntimeError(f"pagination of {self.category.name!r} is already exhausted")

        urls = self.next_batch()
        results: List[PageResult] = await self.scheduler.run_batch(urls)
        self.state.rounds += 1

        failed = [r for r in results if not r.ok]
        if failed:
            logger.warning(
                "%s: %s of %s pages failed in round %s",
                self.category.name, len(failed), len(results), self.state.rounds,
            )

        yielded = [item for r in results for item in r.items]
        if not yielded:
            self.state.exhausted = True
            self.category.exhausted = True
            logger.debug("%s: round %s yielded nothing, pagination exhausted",
                         self.category.name, self.state.rounds)
            return 0

        self.aggregator.merge(self.category, yielded)
        logger.info("  Processed %s pages. Total series: %s", len(urls), len(self.category.records))
        return len(yielded)

    async def walk(self) -> Category:
        while not self.state.exhausted:
            await self.run_round()
        return self.category
