# site_mapper/crawler/coordinator.py
"""
Crawl coordinator: seeds the frontier, runs the worker pool and returns the sitemap.
"""
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Iterable, List

from site_mapper.crawler.fetcher import LinkFetcher
from site_mapper.crawler.frontier import Frontier
from site_mapper.crawler.models import Sitemap
from site_mapper.crawler.urls import LinkFilter, extract_authority, normalize_url
from site_mapper.crawler.worker import Worker
from site_mapper.logger import logger


class CrawlCoordinator:
    """Breadth-first, single-host crawl driven by a fixed pool of worker threads.

    Each call to :meth:`start_crawling` builds a fresh frontier and sitemap,
    so a coordinator can be reused but never shares state between crawls.
    """

    def __init__(
        self,
        seed_url: str,
        fetcher: LinkFetcher,
        number_of_threads: int = 4,
        disallowed: Iterable[str] = (),
        *,
        verbose: bool = False,
        prime_seed: bool = True,
    ) -> None:
        if number_of_threads < 1:
            raise ValueError("number_of_threads must be >= 1")
        self.seed_url = seed_url
        self.fetcher = fetcher
        self.number_of_threads = number_of_threads
        self.disallowed = tuple(disallowed)
        self.verbose = verbose
        self.prime_seed = prime_seed

    def start_crawling(self) -> Sitemap:
        """Crawl the seed's host and block until every worker has stopped."""
        seed = normalize_url(self.seed_url)
        if not seed:
            raise ValueError(f"seed URL is empty after normalization: {self.seed_url!r}")
        if extract_authority(seed) != extract_authority(self.seed_url):
            logger.warning(
                "Seed %s was normalized to %s, which changes its host or port",
                self.seed_url,
                seed,
            )

        frontier = Frontier()
        sitemap = Sitemap(seed)
        link_filter = LinkFilter(seed, self.disallowed)
        frontier.try_enqueue(seed)

        logger.info("Crawl started: %s (%d workers)", seed, self.number_of_threads)
        start = time.monotonic()

        if self.prime_seed and (page := frontier.take()) is not None:
            self._make_worker("primer", frontier, sitemap, link_filter).crawl(page)

        workers: List[Worker] = [
            self._make_worker(f"worker-{i}", frontier, sitemap, link_filter)
            for i in range(self.number_of_threads)
        ]
        with ThreadPoolExecutor(
            max_workers=self.number_of_threads, thread_name_prefix="crawler"
        ) as executor:
            futures = [executor.submit(w.run) for w in workers]
            wait(futures)
        # worker bugs surface here, after the whole pool has stopped
        recorded = sum(f.result() for f in futures)

        duration = time.monotonic() - start
        logger.info(
            "Crawl finished: %d pages (%d by the pool) in %.2f s",
            len(sitemap),
            recorded,
            duration,
        )
        return sitemap

    def _make_worker(
        self, name: str, frontier: Frontier, sitemap: Sitemap, link_filter: LinkFilter
    ) -> Worker:
        return Worker(name, frontier, sitemap, self.fetcher, link_filter, verbose=self.verbose)


__all__ = ["CrawlCoordinator"]
