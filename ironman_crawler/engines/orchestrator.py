from __future__ import annotations

import logging
from typing import List, Set

from .aggregator import Aggregator
from .base import Category, CrawlEngine, CrawlReport
from .fetcher import Fetcher
from .pagination import PaginationWalker
from .scheduler import BatchScheduler
from ..adapters.base import CategoryLink
from ..adapters.registry import AdapterRegistry
from ..config import CrawlConfig
from ..errors import SeedUnreachable
from ..storage import FilePageStore, MemoryPageStore, PageStore
from ..utils.http import HttpTransport, Transport, create_session
from ..utils.parsing import normalize_url

logger = logging.getLogger(__name__)


class CrawlOrchestrator(CrawlEngine):
    """
    Seed page -> categories -> one pagination walk per category, in order.
    - Engine owns HTTP, caching and pagination.
    - Adapters own page parsing.
    - Only pages within one round run concurrently; categories run one after another.
    """
    def __init__(
        self,
        config: CrawlConfig,
        registry: AdapterRegistry | None = None,
        *,
        store: PageStore | None = None,
        transport: Transport | None = None,
    ) -> None:
        self.config = config
        self.registry = registry or AdapterRegistry()
        self.registry.discover_entry_points()
        self.store = store
        self.transport = transport
        self.aggregator = Aggregator(config.fragment_suffixes)

    def _build_store(self) -> PageStore:
        if self.store is not None:
            return self.store
        if self.config.use_cache:
            return FilePageStore(self.config.cache_dir)
        return MemoryPageStore()

    async def crawl(self) -> CrawlReport:
        logger.info("Starting crawl...")
        session = None
        transport = self.transport
        if transport is None:
            session = create_session()
            transport = HttpTransport(
                session,
                headers=self.config.headers,
                timeout=self.config.request_timeout,
            )
        fetcher = Fetcher(self._build_store(), transport, fragment_suffixes=self.config.fragment_suffixes)
        try:
            return await self._crawl(fetcher)
        finally:
            if session is not None:
                await session.close()

    async def _crawl(self, fetcher: Fetcher) -> CrawlReport:
        cfg = self.config
        seed_url = normalize_url(cfg.seed_url, cfg.fragment_suffixes)
        logger.info("Visiting seed page: %s", seed_url)

        seed = await fetcher.fetch(seed_url, timeout=cfg.seed_timeout)
        if not seed.ok:
            raise SeedUnreachable(seed_url, seed.error.cause if seed.error else None)
        if seed.from_cache:
            logger.info("Seed page loaded from cache.")

        logger.info("Extracting categories...")
        links = self.registry.match(seed_url).extract_categories(seed.body, seed_url)
        categories = self.select_categories(links)
        logger.info("Found %s categories.", len(categories))

        pages_requested = 0
        total = len(categories)
        for index, category in enumerate(categories):
            logger.info("Extracting series for category: %s (%s/%s)", category.name, index + 1, total)
            walker = self._walker_for(category, fetcher)
            try:
                await walker.walk()
            except Exception:
                # A broken category keeps what it has; the rest of the run goes on.
                logger.exception("Category %s aborted after %s rounds", category.name, walker.state.rounds)
            pages_requested += walker.state.next_page_number - 1
            logger.info("Finished %s. Unique series: %s", category.name, len(category.records))

        return CrawlReport(
            categories=categories,
            pages_requested=pages_requested,
            network_requests=fetcher.network_requests,
            cache_hits=fetcher.cache_hits,
            failures=fetcher.failures,
        )

    def select_categories(self, links: List[CategoryLink]) -> List[Category]:
        """
        Turn seed-page links into categories, skipping the reserved "all" tab,
        unnamed entries and repeated names (compared case-insensitively, like the
        reserved name).
        """
        reserved = self.config.reserved_category.strip().lower()
        seen: Set[str] = set()
        out: List[Category] = []
        for link in links:
            name = link.name.strip()
            if not name or name.lower() == reserved:
                continue
            if name.lower() in seen:
                logger.debug("Skipping duplicate category %s (%s)", name, link.url)
                continue
            seen.add(name.lower())
            out.append(Category(name=name, source_url=normalize_url(link.url, self.config.fragment_suffixes)))
        return out

    def _walker_for(self, category: Category, fetcher: Fetcher) -> PaginationWalker:
        adapter = self.registry.match(category.source_url)
        scheduler = BatchScheduler(
            fetcher,
            adapter.extract_items,
            max_concurrency=self.config.batch_size,
        )
        return PaginationWalker(
            category,
            scheduler,
            self.aggregator,
            batch_size=self.config.batch_size,
            page_param=self.config.page_param,
        )

