# site_mapper/crawler/models.py
"""
Data models for the SiteMapper crawler.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


@dataclass(slots=True)
class Page:
    """A crawled (or pending) URL and the eligible links found on it."""

    url: str
    links: List[str] = field(default_factory=list)


class Sitemap:
    """Thread-safe, append-only mapping of crawled URL to its :class:`Page`.

    Workers add pages concurrently; the coordinator hands the object to the
    caller only after every worker has stopped.
    """

    def __init__(self, seed_url: str = "") -> None:
        self.seed_url = seed_url
        self._pages: Dict[str, Page] = {}
        self._lock = threading.Lock()

    def add_page(self, page: Page) -> None:
        with self._lock:
            if page.url in self._pages:
                raise ValueError(f"page already recorded: {page.url}")
            self._pages[page.url] = page

    def get(self, url: str) -> Optional[Page]:
        with self._lock:
            return self._pages.get(url)

    def pages(self) -> List[Page]:
        """Snapshot of the recorded pages, in insertion order."""
        with self._lock:
            return list(self._pages.values())

    def urls(self) -> List[str]:
        with self._lock:
            return list(self._pages)

    def as_dict(self) -> Dict[str, List[str]]:
        """Plain ``{url: links}`` copy, convenient for reports and comparisons."""
        with self._lock:
            return {url: list(page.links) for url, page in self._pages.items()}

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._pages

    def __len__(self) -> int:
        with self._lock:
            return len(self._pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages())

    def __repr__(self) -> str:
        return f"Sitemap(seed_url={self.seed_url!r}, pages={len(self)})"
