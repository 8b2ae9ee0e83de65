"""site_mapper.crawler: concurrent same-host crawler producing a sitemap."""

from site_mapper.crawler.coordinator import CrawlCoordinator
from site_mapper.crawler.fetcher import FetchError, HttpFetcher, LinkFetcher
from site_mapper.crawler.frontier import Frontier
from site_mapper.crawler.models import Page, Sitemap
from site_mapper.crawler.urls import LinkFilter, is_allowed, is_same_domain, normalize_url
from site_mapper.crawler.worker import Worker, WorkerState

__all__ = [
    "CrawlCoordinator",
    "FetchError",
    "Frontier",
    "HttpFetcher",
    "LinkFetcher",
    "LinkFilter",
    "Page",
    "Sitemap",
    "Worker",
    "WorkerState",
    "is_allowed",
    "is_same_domain",
    "normalize_url",
]
