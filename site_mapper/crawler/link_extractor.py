# site_mapper/crawler/link_extractor.py
"""
Link extraction for SiteMapper: absolute URLs of every ``<a href>`` on a page.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

_SKIPPED_SCHEMES = ("mailto:", "javascript:", "tel:", "data:")


def extract_links(html: str, page_url: str) -> List[str]:
    """
    Return absolute URLs of all anchors in *html*, in document order.

    Relative hrefs are resolved against ``<base href>`` when present, otherwise
    against *page_url*. Empty, fragment-only, mailto:, javascript:, tel: and
    data: anchors are skipped. No domain filtering happens here.
    """
    soup = BeautifulSoup(html, "html.parser")
    base_url = page_url
    base_tag = soup.find("base", href=True)
    if isinstance(base_tag, Tag):
        base_href = base_tag.get("href")
        if isinstance(base_href, str) and base_href.strip():
            base_url = urljoin(page_url, base_href.strip())

    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.startswith("#") or raw.lower().startswith(_SKIPPED_SCHEMES):
            continue
        try:
            absolute = urljoin(base_url, raw)
        except ValueError:
            # malformed href, e.g. an unterminated IPv6 literal
            continue
        if absolute:
            links.append(absolute)
    return links


__all__ = ["extract_links"]
