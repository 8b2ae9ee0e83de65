# File: tests/test_worker.py
import logging

import pytest

from site_mapper.crawler.frontier import Frontier
from site_mapper.crawler.models import Page, Sitemap
from site_mapper.crawler.urls import LinkFilter
from site_mapper.crawler.worker import Worker, WorkerState

SEED = "http://example.com"


def make_worker(fetcher, *, disallowed=(), verbose=False):
    frontier = Frontier()
    sitemap = Sitemap(SEED)
    worker = Worker(
        "worker-test",
        frontier,
        sitemap,
        fetcher,
        LinkFilter(SEED, tuple(disallowed)),
        verbose=verbose,
    )
    return worker, frontier, sitemap


def test_run_on_empty_frontier_stops_immediately(fake_fetcher_factory):
    fetcher = fake_fetcher_factory({})
    worker, _, _ = make_worker(fetcher)
    assert worker.run() == 0
    assert worker.state is WorkerState.STOPPED
    assert fetcher.calls == []


def test_crawl_records_filtered_links_and_queues_new_ones(fake_fetcher_factory, example_graph):
    worker, frontier, sitemap = make_worker(fake_fetcher_factory(example_graph))
    page = Page(SEED)

    assert worker.crawl(page)

    assert sitemap.get(SEED).links == ["http://example.com/a", "http://example.com/a"]
    assert len(frontier) == 1
    assert frontier.take().url == "http://example.com/a"
    assert "http://other.com" not in frontier


def test_links_recorded_even_if_already_seen(fake_fetcher_factory):
    fetcher = fake_fetcher_factory({SEED: ["http://example.com/b"]})
    worker, frontier, sitemap = make_worker(fetcher)
    frontier.try_enqueue("http://example.com/b")
    frontier.take()

    worker.crawl(Page(SEED))

    assert sitemap.get(SEED).links == ["http://example.com/b"]
    assert len(frontier) == 0


def test_disallowed_links_are_dropped(fake_fetcher_factory):
    fetcher = fake_fetcher_factory({SEED: ["http://example.com/private/x", "http://example.com/ok"]})
    worker, frontier, sitemap = make_worker(fetcher, disallowed=["http://example.com/private"])

    worker.crawl(Page(SEED))

    assert sitemap.get(SEED).links == ["http://example.com/ok"]
    assert "http://example.com/private/x" not in frontier


def test_fetch_failure_is_logged_and_page_discarded(fake_fetcher_factory, caplog):
    worker, frontier, sitemap = make_worker(fake_fetcher_factory({}))
    frontier.try_enqueue("http://example.com/missing")

    with caplog.at_level(logging.ERROR, logger="SiteMapper"):
        assert worker.run() == 0

    assert len(sitemap) == 0
    assert "Error reading http://example.com/missing: HTTP 404" in caplog.text
    assert worker.state is WorkerState.STOPPED


def test_unexpected_fetcher_error_does_not_escape(caplog):
    class BrokenFetcher:
        def fetch(self, url):
            raise RuntimeError("boom")

    worker, frontier, sitemap = make_worker(BrokenFetcher())
    frontier.try_enqueue(SEED)

    with caplog.at_level(logging.ERROR, logger="SiteMapper"):
        assert worker.run() == 0

    assert len(sitemap) == 0
    assert "Unexpected error while crawling http://example.com" in caplog.text


def test_run_drains_pages_it_discovers(fake_fetcher_factory):
    graph = {
        SEED: ["http://example.com/a"],
        "http://example.com/a": ["http://example.com/b", SEED],
        "http://example.com/b": [],
    }
    fetcher = fake_fetcher_factory(graph)
    worker, frontier, sitemap = make_worker(fetcher)
    frontier.try_enqueue(SEED)

    assert worker.run() == 3
    assert sitemap.urls() == [SEED, "http://example.com/a", "http://example.com/b"]
    assert fetcher.calls == sitemap.urls()


@pytest.mark.parametrize("verbose,expected", [(True, True), (False, False)])
def test_verbose_logs_each_page_at_info(fake_fetcher_factory, caplog, verbose, expected):
    fetcher = fake_fetcher_factory({SEED: ["http://example.com/a"]})
    worker, _, _ = make_worker(fetcher, verbose=verbose)

    with caplog.at_level(logging.INFO, logger="SiteMapper"):
        worker.crawl(Page(SEED))

    assert ("Crawled http://example.com. Found 1 valid links" in caplog.text) is expected
