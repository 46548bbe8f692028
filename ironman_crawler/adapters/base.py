from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Protocol


@dataclass(frozen=True)
class Item:
    """A series listed under a category. Identity is the URL alone."""

    title: str
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "url": self.url}


@dataclass(frozen=True)
class CategoryLink:
    """A category entry as found on the seed page, before filtering."""

    name: str
    url: str


class SiteAdapter(Protocol):
    """
    Interface for site-specific parsing logic.
    Keep this small and stable so adapters rarely break across upgrades.
    """

    name: str
    domains: List[str]  # e.g. ["example.com", "www.example.com"]

    def matches(self, url: str) -> bool:
        """Return True if this adapter should handle the given URL."""
        ...

    def extract_categories(self, html: str, base_url: str) -> List[CategoryLink]:
        """Return every category linked from the seed page, in page order."""
        ...

    def extract_items(self, html: str, base_url: str) -> List[Item]:
        """
        Return the items listed on one category page.
        An empty list is a valid answer and means the page has no items.
        Engine owns the HTTP, caching and pagination.
        """
        ...
