from __future__ import annotations

from typing import List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from .base import CategoryLink, Item
from ..utils.parsing import absolutize


class IronmanAdapter:
    """Adapter for the iThome Ironman contest listings (categories and their series)."""

    name = "ithome-ironman"
    domains = ["ithelp.ithome.com.tw"]

    category_selector = ".class-bar-item a"
    item_selector = ".articles-box .articles-topic a"

    def matches(self, url: str) -> bool:
        netloc = urlparse(url).netloc.lower()
        return netloc in self.domains

    def extract_categories(self, html: str, base_url: str) -> List[CategoryLink]:
        soup = BeautifulSoup(html, "html.parser")
        out: List[CategoryLink] = []
        for anchor in soup.select(self.category_selector):
            name = anchor.get_text(strip=True)
            url = absolutize(anchor.get("href"), base_url)
            if name and url:
                out.append(CategoryLink(name=name, url=url))
        return out

    def extract_items(self, html: str, base_url: str) -> List[Item]:
        soup = BeautifulSoup(html, "html.parser")
        out: List[Item] = []
        for anchor in soup.select(self.item_selector):
            item = self._item_from_anchor(anchor, base_url)
            if item:
                out.append(item)
        return out

    def _item_from_anchor(self, anchor, base_url: str) -> Optional[Item]:
        title = anchor.get_text(strip=True)
        url = absolutize(anchor.get("href"), base_url)
        if not title or not url:
            return None
        return Item(title=title, url=url)
