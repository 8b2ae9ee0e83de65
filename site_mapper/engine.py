# File: site_mapper/engine.py
"""site_mapper.engine: orchestration layer wiring the HTTP fetcher to the crawl coordinator."""

from __future__ import annotations

from site_mapper.config import CrawlConfig
from site_mapper.crawler.coordinator import CrawlCoordinator
from site_mapper.crawler.fetcher import HttpFetcher
from site_mapper.crawler.models import Sitemap
from site_mapper.logger import logger

__all__ = ["Engine", "start_crawl"]


class Engine:
    """Facade for the CLI and tests: run the crawl described by a config, return the sitemap."""

    def __init__(self, config: CrawlConfig) -> None:
        self.config = config

    def run(self) -> Sitemap:
        """Crawl ``config.seed_url`` with an :class:`HttpFetcher` and return the sitemap."""
        cfg = self.config
        logger.info("Starting crawl of %s", cfg.seed_url)
        try:
            with HttpFetcher(cfg) as fetcher:
                coordinator = CrawlCoordinator(
                    str(cfg.seed_url),
                    fetcher,
                    number_of_threads=cfg.threads,
                    disallowed=cfg.disallowed_prefixes,
                    verbose=cfg.verbose,
                    prime_seed=cfg.prime_seed,
                )
                return coordinator.start_crawling()
        except Exception as exc:
            logger.error("Crawl failed: %s", exc)
            raise


def start_crawl(cfg: CrawlConfig) -> Sitemap:
    """Run a crawl for *cfg* and return the resulting :class:`Sitemap`."""
    return Engine(cfg).run()
