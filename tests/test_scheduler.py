from __future__ import annotations

import pytest

from ironman_crawler.adapters.ironman import IronmanAdapter
from ironman_crawler.engines.fetcher import Fetcher
from ironman_crawler.engines.scheduler import BatchScheduler
from ironman_crawler.storage import MemoryPageStore
from tests.helpers import FakeTransport, listing_html, series


def make_scheduler(transport, **kwargs) -> BatchScheduler:
    return BatchScheduler(Fetcher(MemoryPageStore(), transport), IronmanAdapter().extract_items, **kwargs)


@pytest.mark.asyncio()
async def test_results_follow_input_order() -> None:
    urls = [f"https://example.com/list?page={n}" for n in range(1, 6)]
    transport = FakeTransport({u: listing_html([series(i)]) for i, u in enumerate(urls)}, delay=0.001)

    results = await make_scheduler(transport).run_batch(urls)

    assert [r.url for r in results] == urls
    assert [r.items[0].title for r in results] == [f"Series {i}" for i in range(5)]


@pytest.mark.asyncio()
async def test_failed_page_does_not_affect_siblings() -> None:
    urls = [f"https://example.com/list?page={n}" for n in (1, 2, 3)]
    transport = FakeTransport(
        {urls[0]: listing_html([series(1)]), urls[2]: listing_html([series(3), series(4)])},
        failing=[urls[1]],
    )

    results = await make_scheduler(transport).run_batch(urls)

    assert [r.ok for r in results] == [True, False, True]
    assert results[1].items == []
    assert sum(len(r.items) for r in results) == 3


@pytest.mark.asyncio()
async def test_extraction_error_is_isolated() -> None:
    def extract(html, url):
        if url.endswith("page=2"):
            raise ValueError("unexpected markup")
        return IronmanAdapter().extract_items(html, url)

    urls = ["https://example.com/list?page=1", "https://example.com/list?page=2"]
    transport = FakeTransport({u: listing_html([series(7)]) for u in urls})
    scheduler = BatchScheduler(Fetcher(MemoryPageStore(), transport), extract)

    results = await scheduler.run_batch(urls)

    assert results[0].ok and len(results[0].items) == 1
    assert isinstance(results[1].error, ValueError)


@pytest.mark.asyncio()
async def test_in_flight_fetches_never_exceed_ceiling() -> None:
    urls = [f"https://example.com/list?page={n}" for n in range(1, 11)]
    transport = FakeTransport(delay=0.01)

    await make_scheduler(transport, max_concurrency=3).run_batch(urls)

    assert len(transport.calls) == 10
    assert transport.max_in_flight == 3


@pytest.mark.asyncio()
async def test_whole_batch_runs_concurrently_within_ceiling() -> None:
    urls = [f"https://example.com/list?page={n}" for n in range(1, 5)]
    transport = FakeTransport(delay=0.01)

    await make_scheduler(transport, max_concurrency=15).run_batch(urls)

    assert transport.max_in_flight == 4


@pytest.mark.asyncio()
async def test_empty_batch() -> None:
    assert await make_scheduler(FakeTransport()).run_batch([]) == []


def test_rejects_non_positive_ceiling() -> None:
    with pytest.raises(ValueError):
        make_scheduler(FakeTransport(), max_concurrency=0)
