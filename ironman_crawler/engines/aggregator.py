from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from .base import Category
from ..adapters.base import Item
from ..utils.parsing import DEFAULT_FRAGMENT_SUFFIXES, normalize_url


class Aggregator:
    """Merges items into a category, de-duplicated by normalized URL in first-seen order."""

    def __init__(self, fragment_suffixes: Iterable[str] = DEFAULT_FRAGMENT_SUFFIXES) -> None:
        self.fragment_suffixes = tuple(fragment_suffixes)

    def merge(self, category: Category, items: Iterable[Item]) -> int:
        """
        Add ``items`` to ``category.records`` and return how many new URLs were added.
        A URL seen again keeps its position but takes the latest title.
        """
        added = 0
        for item in items:
            url = normalize_url(item.url, self.fragment_suffixes)
            if url != item.url:
                item = replace(item, url=url)
            if url not in category.records:
                added += 1
            category.records[url] = item
        return added
