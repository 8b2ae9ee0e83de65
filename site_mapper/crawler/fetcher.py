# site_mapper/crawler/fetcher.py
"""
Fetcher module: downloads a page over HTTP and returns the absolute links found on it.

Crawler workers are plain threads, so :class:`HttpFetcher` runs one private
asyncio loop on a background thread and exposes a blocking, thread-safe
:meth:`HttpFetcher.fetch` on top of a shared aiohttp session.
"""
from __future__ import annotations

import asyncio
import random
import threading
from typing import Any, Coroutine, Iterable, List, Optional, Protocol, Sequence, TypeVar

from aiohttp import ClientError, ClientSession, ClientTimeout, InvalidURL

from site_mapper.config import CrawlConfig
from site_mapper.crawler.link_extractor import extract_links
from site_mapper.logger import logger

_T = TypeVar("_T")

_HTML_TYPES = ("text/html", "application/xhtml+xml")


class FetchError(Exception):
    """A page could not be downloaded or is not an HTML document."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class LinkFetcher(Protocol):
    """Anything able to turn a URL into the absolute links found on that page."""

    def fetch(self, url: str) -> Iterable[str]:
        """Return absolute link URLs, or raise :class:`FetchError`."""
        ...


class HttpFetcher:
    """aiohttp based :class:`LinkFetcher` with timeout and retry/backoff."""

    _RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)

    def __init__(self, config: CrawlConfig, *, backoff: float = 1.0) -> None:
        self.config = config
        self.backoff = backoff
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._session: Optional[ClientSession] = None

    def __enter__(self) -> HttpFetcher:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        """Start the background loop and the HTTP session."""
        if self._loop is not None:
            return
        loop = asyncio.new_event_loop()
        thread = threading.Thread(target=loop.run_forever, name="http-fetcher", daemon=True)
        thread.start()
        self._loop, self._thread = loop, thread
        self._session = self._call(self._open_session())

    def close(self) -> None:
        """Close the session and stop the background loop."""
        if self._loop is None or self._thread is None:
            return
        try:
            if self._session is not None and not self._session.closed:
                self._call(self._session.close())
        finally:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join()
            self._loop.close()
            self._loop = None
            self._thread = None
            self._session = None

    def fetch(self, url: str) -> List[str]:
        """Download *url* and return the absolute links on it. Safe to call from any thread."""
        if self._loop is None:
            raise RuntimeError("HttpFetcher is not open")
        return self._call(self._fetch(url))

    def _call(self, coro: Coroutine[Any, Any, _T]) -> _T:
        assert self._loop is not None
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()

    async def _open_session(self) -> ClientSession:
        return ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )

    async def _fetch(self, url: str) -> List[str]:
        if self._session is None:
            raise RuntimeError("Session not initialized")
        attempts = 0
        while True:
            try:
                async with self._session.get(url) as resp:
                    if resp.status in self._RETRY_STATUS:
                        raise ClientError(f"retryable status {resp.status}")
                    if resp.status >= 400:
                        raise FetchError(url, f"HTTP {resp.status}")
                    mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                    if mime not in _HTML_TYPES:
                        raise FetchError(url, f"unsupported content type {mime or 'unknown'!r}")
                    text = await resp.text(errors="replace")
                    return extract_links(text, str(resp.url))
            except InvalidURL as exc:
                raise FetchError(url, "invalid URL") from exc
            except asyncio.TimeoutError as exc:
                # no retry on timeout
                raise FetchError(url, f"timed out after {self.config.timeout} s") from exc
            except ClientError as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    raise FetchError(url, str(exc) or type(exc).__name__) from exc
                delay = min(60.0, self.backoff * (2 ** attempts + random.random()))
                logger.debug(
                    "Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, delay
                )
                await asyncio.sleep(delay)


__all__ = ["FetchError", "LinkFetcher", "HttpFetcher"]
