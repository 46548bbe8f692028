from __future__ import annotations

from typing import Optional


class CrawlerError(Exception):
    """Base class for every error raised by the crawler."""


class CacheUnavailable(CrawlerError):
    """The page cache could not be read or written."""

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"page cache unavailable at {path}: {cause!r}")


class FetchFailed(CrawlerError):
    """A single network fetch failed (timeout, connection error, non-2xx status)."""

    def __init__(self, url: str, cause: Optional[BaseException | str] = None) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"fetch failed for {url}: {cause!r}")


class SeedUnreachable(CrawlerError):
    """The seed page could not be obtained, so no category can be discovered."""

    def __init__(self, url: str, cause: Optional[BaseException] = None) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"seed page {url} is unreachable: {cause}")
