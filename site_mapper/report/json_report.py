# site_mapper/report/json_report.py

"""
JSON report for SiteMapper.

Serializes a Sitemap into a file.
"""
import json
from pathlib import Path
from typing import Any, Dict

from site_mapper.crawler.models import Sitemap


def sitemap_to_dict(sitemap: Sitemap) -> Dict[str, Any]:
    """Plain, JSON-ready view of *sitemap*; pages are sorted by URL for stable output."""
    return {
        "seed_url": sitemap.seed_url,
        "pages": [
            {"url": page.url, "links": list(page.links)}
            for page in sorted(sitemap.pages(), key=lambda p: p.url)
        ],
    }


def render_json(sitemap: Sitemap, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *sitemap* as JSON at the given path.

    :param sitemap: result of a crawl
    :param output_path: path of the JSON file
    :param pretty: indent the output by 2 spaces
    :return: Path of the saved file

    Example:
    ```python
    from site_mapper.report.json_report import render_json
    report_path = render_json(sitemap, 'reports/sitemap.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(sitemap_to_dict(sitemap), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
