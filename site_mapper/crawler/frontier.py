# site_mapper/crawler/frontier.py
"""
Frontier: FIFO of pages waiting to be crawled plus the set of every URL ever admitted.
"""
from __future__ import annotations

import threading
from collections import deque
from typing import Deque, FrozenSet, Optional, Set

from site_mapper.crawler.models import Page


class Frontier:
    """Shared work queue of a crawl.

    The seen set is the only dedup authority: a URL is admitted into the
    queue at most once for the whole crawl, however many workers offer it.
    :meth:`take` never blocks, so a worker can observe "currently empty"
    and stop instead of waiting for siblings that may never add anything.
    """

    def __init__(self) -> None:
        self._pending: Deque[Page] = deque()
        self._seen: Set[str] = set()
        self._lock = threading.Lock()

    def try_enqueue(self, url: str) -> bool:
        """Admit *url* unless it was seen before. Returns True if a page was queued."""
        with self._lock:
            if url in self._seen:
                return False
            self._seen.add(url)
            self._pending.append(Page(url))
            return True

    def take(self) -> Optional[Page]:
        """Pop the oldest pending page, or return None if the queue is empty right now."""
        with self._lock:
            if not self._pending:
                return None
            return self._pending.popleft()

    @property
    def seen(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._seen)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)


__all__ = ["Frontier"]
