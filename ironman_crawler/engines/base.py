from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List
from abc import ABC, abstractmethod

from ..adapters.base import Item


@dataclass
class Category:
    """
    A category discovered on the seed page and the items found under it.
    Records are keyed by item URL; dict order is first-seen order.
    """
    name: str
    source_url: str
    records: Dict[str, Item] = field(default_factory=dict)
    exhausted: bool = False

    @property
    def items(self) -> List[Item]:
        return list(self.records.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "url": self.source_url,
            "series": [item.to_dict() for item in self.records.values()],
        }


@dataclass
class CrawlReport:
    categories: List[Category] = field(default_factory=list)
    pages_requested: int = 0
    network_requests: int = 0
    cache_hits: int = 0
    failures: int = 0

    @property
    def item_count(self) -> int:
        return sum(len(c.records) for c in self.categories)


class CrawlEngine(ABC):
    """
    Abstract engine interface. Implementations own the crawl lifecycle.
    """
    @abstractmethod
    async def crawl(self) -> CrawlReport:  # pragma: no cover - interface
        ...
