# File: tests/test_frontier.py
import threading
from concurrent.futures import ThreadPoolExecutor

from site_mapper.crawler.frontier import Frontier


def test_take_on_empty_frontier_returns_none():
    assert Frontier().take() is None


def test_fifo_order():
    frontier = Frontier()
    for url in ("http://example.com", "http://example.com/a", "http://example.com/b"):
        assert frontier.try_enqueue(url)
    assert [frontier.take().url for _ in range(3)] == [
        "http://example.com",
        "http://example.com/a",
        "http://example.com/b",
    ]
    assert frontier.take() is None


def test_url_is_admitted_only_once_even_after_it_was_taken():
    frontier = Frontier()
    assert frontier.try_enqueue("http://example.com/a")
    page = frontier.take()
    assert page.url == "http://example.com/a"
    assert page.links == []
    assert not frontier.try_enqueue("http://example.com/a")
    assert frontier.take() is None
    assert "http://example.com/a" in frontier
    assert frontier.seen == frozenset({"http://example.com/a"})


def test_len_counts_pending_pages():
    frontier = Frontier()
    frontier.try_enqueue("http://example.com/a")
    frontier.try_enqueue("http://example.com/b")
    frontier.try_enqueue("http://example.com/a")
    assert len(frontier) == 2
    frontier.take()
    assert len(frontier) == 1


def test_concurrent_try_enqueue_admits_exactly_once():
    frontier = Frontier()
    n_threads = 16
    barrier = threading.Barrier(n_threads)

    def offer(_):
        barrier.wait()
        return frontier.try_enqueue("http://example.com/a")

    with ThreadPoolExecutor(max_workers=n_threads) as executor:
        results = list(executor.map(offer, range(n_threads)))

    assert results.count(True) == 1
    assert len(frontier) == 1


def test_concurrent_enqueue_of_many_urls_keeps_each_once():
    frontier = Frontier()
    urls = [f"http://example.com/{chr(ord('a') + i % 26)}{chr(ord('a') + i // 26)}" for i in range(200)]

    def offer_all(_):
        return sum(frontier.try_enqueue(u) for u in urls)

    with ThreadPoolExecutor(max_workers=8) as executor:
        admitted = sum(executor.map(offer_all, range(8)))

    assert admitted == len(set(urls))
    taken = []
    while (page := frontier.take()) is not None:
        taken.append(page.url)
    assert sorted(taken) == sorted(set(urls))
