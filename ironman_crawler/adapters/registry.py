from __future__ import annotations

import logging
from typing import List
from importlib import metadata

from .base import SiteAdapter
from .ironman import IronmanAdapter

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """
    Registry for available adapters.
    Supports the built-in default, config-defined dotted classes, and entry-point plugins.
    """
    def __init__(self, default: SiteAdapter | None = None) -> None:
        self._adapters: List[SiteAdapter] = [default or IronmanAdapter()]

    # ---- Introspection / Management ----

    def register(self, adapter: SiteAdapter) -> None:
        self._adapters.append(adapter)

    @property
    def adapters(self) -> List[SiteAdapter]:
        return list(self._adapters)

    def match(self, url: str) -> SiteAdapter:
        # Prefer registered adapters over the default (kept first in list).
        for a in self._adapters[1:]:
            if a.matches(url):
                return a
        return self._adapters[0]

    # ---- Discovery ----

    def discover_entry_points(self, group: str = "ironman_crawler.adapters") -> int:
        """
        Discover third-party adapters installed as entry points.
        Returns count of newly registered adapters.
        """
        added = 0
        for ep in metadata.entry_points().select(group=group):
            try:
                adapter_cls = ep.load()
                self.register(adapter_cls())
            except Exception as exc:
                # Plugins are optional; a broken one must not stop the crawl.
                logger.warning("Skipping adapter plugin %s: %r", ep.name, exc)
                continue
            added += 1
        return added
