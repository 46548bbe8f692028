from __future__ import annotations

import hashlib
from typing import Optional, Protocol


def key_for(url: str) -> str:
    """Content-addressable key of a normalized URL (md5 hex digest)."""
    return hashlib.md5(url.encode("utf-8")).hexdigest()


class PageStore(Protocol):
    """
    Cache of raw page bodies keyed by normalized URL.
    get() never touches the network; both methods raise CacheUnavailable on storage errors.
    """

    def get(self, url: str) -> Optional[str]:
        ...

    def put(self, url: str, body: str) -> None:
        ...
