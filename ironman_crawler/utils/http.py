from __future__ import annotations

import asyncio
from typing import Awaitable, Dict, Optional, Protocol
from aiohttp import ClientSession, ClientTimeout
import aiohttp
import logging

from ..errors import FetchFailed

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Turns a URL into a raw document, raising FetchFailed on any transport error."""

    def __call__(self, url: str, *, timeout: Optional[float] = None) -> Awaitable[str]:
        ...


async def fetch_text(
    session: ClientSession,
    url: str,
    *,
    timeout: float = 30.0,
    headers: Optional[Dict[str, str]] = None,
) -> str:
    """
    Fetch a URL once and return the body text. Raises FetchFailed on failure.
    """
    try:
        async with session.get(url, headers=headers or {}, timeout=ClientTimeout(total=timeout)) as resp:
            resp.raise_for_status()
            if not 200 <= resp.status < 300:
                raise FetchFailed(url, f"HTTP {resp.status}")
            return await resp.text()
    except aiohttp.ClientResponseError as exc:
        logger.debug("fetch_text got status %s for %s", exc.status, url)
        raise FetchFailed(url, exc) from exc
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.debug("fetch_text failed for %s: %r", url, exc)
        raise FetchFailed(url, exc) from exc
    except UnicodeDecodeError as exc:
        logger.debug("fetch_text could not decode body of %s: %r", url, exc)
        raise FetchFailed(url, exc) from exc


class HttpTransport:
    """
    aiohttp-backed transport with a fixed header set and default timeout.
    """

    def __init__(
        self,
        session: ClientSession,
        *,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 30.0,
    ) -> None:
        self.session = session
        self.headers = dict(headers or {})
        self.timeout = timeout

    async def __call__(self, url: str, *, timeout: Optional[float] = None) -> str:
        return await fetch_text(
            self.session,
            url,
            timeout=timeout if timeout is not None else self.timeout,
            headers=self.headers,
        )


def create_session() -> ClientSession:
    """
    Create a shared aiohttp ClientSession.
    """
    # Note: caller is responsible for closing the session (await session.close()).
    connector = aiohttp.TCPConnector(limit=0)  # unlimited; concurrency managed via semaphore
    return aiohttp.ClientSession(connector=connector)
