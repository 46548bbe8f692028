from __future__ import annotations

import asyncio
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ironman_crawler.config import CrawlConfig
from ironman_crawler.errors import FetchFailed

SEED = "https://ithelp.ithome.com.tw/2024ironman/"
BASE = "https://ithelp.ithome.com.tw"


def seed_html(categories: Iterable[Tuple[str, str]]) -> str:
    """Seed page markup with one class-bar entry per (name, href)."""
    entries = "".join(
        f'<li class="class-bar-item"><a href="{href}">{name}</a></li>' for name, href in categories
    )
    return f"<html><body><ul class=\"class-bar\">{entries}</ul></body></html>"


def listing_html(items: Iterable[Tuple[str, str]]) -> str:
    """Category listing markup with one articles-box per (title, href)."""
    boxes = "".join(
        '<div class="articles-box">'
        f'<h3 class="articles-topic"><a href="{href}">{title}</a></h3>'
        "</div>"
        for title, href in items
    )
    return f"<html><body>{boxes}</body></html>"


def series(n: int) -> Tuple[str, str]:
    return (f"Series {n}", f"{BASE}/users/2016{n:04d}/ironman/{7000 + n}")


class FakeTransport:
    """
    Transport double. Unknown URLs answer with an empty listing, the way the
    real site answers page numbers past the end.
    """

    def __init__(
        self,
        pages: Optional[Dict[str, str]] = None,
        *,
        failing: Iterable[str] = (),
        delay: float = 0.0,
    ) -> None:
        self.pages = dict(pages or {})
        self.failing: Set[str] = set(failing)
        self.delay = delay
        self.calls: List[str] = []
        self.timeouts: List[Optional[float]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, url: str, *, timeout: Optional[float] = None) -> str:
        self.calls.append(url)
        self.timeouts.append(timeout)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if url in self.failing:
                raise FetchFailed(url, "HTTP 503")
            return self.pages.get(url, listing_html([]))
        finally:
            self.in_flight -= 1


def build_config(tmp_path, **overrides) -> CrawlConfig:
    """Return a fully-populated CrawlConfig for tests."""
    cfg = CrawlConfig(
        seed_url=SEED,
        batch_size=2,
        seed_timeout=1.0,
        request_timeout=2.0,
        headers={"User-Agent": "test-suite"},
        cache_dir=str(tmp_path / "cache"),
        output_path=str(tmp_path / "topics.md"),
    )
    for key, value in overrides.items():
        setattr(cfg, key, value)
    return cfg
