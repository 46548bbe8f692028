from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import parse_qsl, urlencode, urljoin, urlparse, urlunparse

DEFAULT_FRAGMENT_SUFFIXES = ("#ir-list",)


def normalize_url(url: str, suffixes: Iterable[str] = DEFAULT_FRAGMENT_SUFFIXES) -> str:
    """
    Strip known non-semantic fragment suffixes (e.g. the "#ir-list" anchor the
    listing links carry) so the result can serve as identity and cache key.

    Repeated suffixes are all removed, which makes the function idempotent.
    """
    suffixes = tuple(s for s in suffixes if s)
    url = url.strip()
    stripped = True
    while stripped:
        stripped = False
        for suffix in suffixes:
            if url.endswith(suffix):
                url = url[: -len(suffix)]
                stripped = True
    return url


def page_url(base_url: str, page_number: int, param: str = "page") -> str:
    """
    Build the listing URL for ``page_number`` of a category.

    ``param`` is set in the query string, replacing any existing value, while
    other query parameters keep their order. The fragment is dropped.
    """
    if page_number < 1:
        raise ValueError(f"page_number must be >= 1, got {page_number}")
    parts = urlparse(base_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != param]
    query.append((param, str(page_number)))
    return urlunparse(parts._replace(query=urlencode(query), fragment=""))


def absolutize(href: Optional[str], base_url: str) -> Optional[str]:
    """Resolve ``href`` against ``base_url``; returns None for empty or non-http links."""
    if not href:
        return None
    href = href.strip()
    if not href:
        return None
    resolved = urljoin(base_url, href)
    if urlparse(resolved).scheme not in ("http", "https"):
        return None
    return resolved
