# File: tests/conftest.py
import logging
import threading
import time
from typing import Dict, Iterable, List

import pytest

from site_mapper.crawler.fetcher import FetchError
from site_mapper.crawler.models import Page, Sitemap


class FakeFetcher:
    """In-memory link graph standing in for the HTTP fetcher.

    Unknown URLs and URLs listed in *failing* raise FetchError, like a 404.
    Every call is recorded so tests can check how often a URL was fetched.
    """

    def __init__(
        self,
        graph: Dict[str, List[str]],
        failing: Iterable[str] = (),
        delay: float = 0.0,
    ) -> None:
        self.graph = graph
        self.failing = set(failing)
        self.delay = delay
        self.calls: List[str] = []
        self._lock = threading.Lock()

    def fetch(self, url: str) -> List[str]:
        with self._lock:
            self.calls.append(url)
        if self.delay:
            time.sleep(self.delay)
        if url in self.failing or url not in self.graph:
            raise FetchError(url, "HTTP 404")
        return list(self.graph[url])


@pytest.fixture()
def fake_fetcher_factory():
    """Return the FakeFetcher class so tests can build graphs inline."""
    return FakeFetcher


@pytest.fixture()
def example_graph() -> Dict[str, List[str]]:
    """
    Small site: the seed links to /a twice (with and without the trailing slash)
    and to another host.
    """
    return {
        "http://example.com": [
            "http://example.com/a",
            "http://example.com/a/",
            "http://other.com",
        ],
        "http://example.com/a": [],
    }


@pytest.fixture()
def sample_sitemap() -> Sitemap:
    sitemap = Sitemap("http://example.com")
    sitemap.add_page(Page("http://example.com", ["http://example.com/b", "http://example.com/a"]))
    sitemap.add_page(Page("http://example.com/b", ["http://example.com"]))
    sitemap.add_page(Page("http://example.com/a", []))
    return sitemap


@pytest.fixture(autouse=True)
def reset_project_logger():
    """The CLI reconfigures the global logger; restore defaults so caplog keeps working."""
    lg = logging.getLogger("SiteMapper")
    yield
    lg.handlers.clear()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)


@pytest.fixture()
def letter_name():
    """Letter-only page names: 0 -> "aaa", 1 -> "aab", ... (trailing digits are normalized away)."""

    def _name(index: int, width: int = 3) -> str:
        name = ""
        for _ in range(width):
            index, rem = divmod(index, 26)
            name = chr(ord("a") + rem) + name
        return name

    return _name
