# site_mapper/crawler/urls.py
"""
URL normalization and the filter chain deciding which links enter the frontier.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple
from urllib.parse import urlsplit


def normalize_url(url: str) -> str:
    """
    Strip trailing non-letter characters (``/``, ``#``, digits, ...).

    ``http://example.com/`` and ``http://example.com#`` both collapse to
    ``http://example.com``. An input made only of non-letters becomes ``""``.
    """
    end = len(url)
    while end and not url[end - 1].isalpha():
        end -= 1
    return url[:end]


def is_allowed(url: str, disallowed: Iterable[str]) -> bool:
    """Return True if no disallowed prefix is a prefix of *url*."""
    return not any(url.startswith(prefix) for prefix in disallowed)


def extract_host(url: str) -> Optional[str]:
    """Lower-cased hostname of *url*, or None when it has none or cannot be parsed."""
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def extract_authority(url: str) -> Optional[str]:
    """Lower-cased ``host[:port]`` part of *url*, or None when it cannot be parsed."""
    try:
        return urlsplit(url).netloc.lower()
    except ValueError:
        return None


def is_same_domain(url: str, reference_url: str) -> bool:
    """Return True if both URLs point to the same host (scheme, port and path ignored)."""
    host = extract_host(url)
    return host is not None and host == extract_host(reference_url)


@dataclass(frozen=True)
class LinkFilter:
    """Eligibility chain for discovered links, anchored to the crawl's seed URL."""

    seed_url: str
    disallowed: Tuple[str, ...] = field(default_factory=tuple)

    def accept(self, raw_link: str) -> Optional[str]:
        """Return the normalized link if it may be recorded and crawled, else None."""
        if not raw_link:
            return None
        link = normalize_url(raw_link)
        if not link:
            return None
        if not is_allowed(link, self.disallowed):
            return None
        if not is_same_domain(link, self.seed_url):
            return None
        return link


__all__ = [
    "normalize_url",
    "is_allowed",
    "extract_host",
    "extract_authority",
    "is_same_domain",
    "LinkFilter",
]
