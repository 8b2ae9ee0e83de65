# site_mapper/crawler/worker.py
"""
Crawler worker: repeatedly takes a page from the frontier, fetches it, queues the
new links it finds and records the page in the sitemap.
"""
from __future__ import annotations

import enum
import logging

from site_mapper.crawler.fetcher import FetchError, LinkFetcher
from site_mapper.crawler.frontier import Frontier
from site_mapper.crawler.models import Page, Sitemap
from site_mapper.crawler.urls import LinkFilter
from site_mapper.logger import logger


class WorkerState(enum.Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    LINKING = "linking"
    RECORDING = "recording"
    STOPPED = "stopped"


class Worker:
    """One slot of the crawler pool.

    A worker stops as soon as it finds the frontier empty. Siblings that are
    still crawling may add more pages afterwards; they drain those themselves,
    so the crawl is complete once every worker has stopped.
    """

    def __init__(
        self,
        name: str,
        frontier: Frontier,
        sitemap: Sitemap,
        fetcher: LinkFetcher,
        link_filter: LinkFilter,
        *,
        verbose: bool = False,
    ) -> None:
        self.name = name
        self.frontier = frontier
        self.sitemap = sitemap
        self.fetcher = fetcher
        self.link_filter = link_filter
        self.verbose = verbose
        self.state = WorkerState.IDLE

    def run(self) -> int:
        """Crawl until the frontier is empty; return the number of pages recorded."""
        recorded = 0
        while True:
            self.state = WorkerState.IDLE
            page = self.frontier.take()
            if page is None:
                self.state = WorkerState.STOPPED
                logger.debug("%s stopped after %d pages", self.name, recorded)
                return recorded
            if self.crawl(page):
                recorded += 1

    def crawl(self, page: Page) -> bool:
        """Fetch *page*, queue its eligible links and record it. False if the fetch failed."""
        self.state = WorkerState.FETCHING
        try:
            raw_links = list(self.fetcher.fetch(page.url))
        except FetchError as exc:
            logger.error("Error reading %s: %s", page.url, exc.reason)
            return False
        except Exception:
            logger.exception("Unexpected error while crawling %s", page.url)
            return False

        self.state = WorkerState.LINKING
        links = []
        for raw in raw_links:
            link = self.link_filter.accept(raw)
            if link is None:
                continue
            # recorded even when a sibling already queued it
            self.frontier.try_enqueue(link)
            links.append(link)

        self.state = WorkerState.RECORDING
        page.links = links
        self.sitemap.add_page(page)
        logger.log(
            logging.INFO if self.verbose else logging.DEBUG,
            "Crawled %s. Found %d valid links",
            page.url,
            len(links),
        )
        return True


__all__ = ["Worker", "WorkerState"]
