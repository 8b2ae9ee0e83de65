"""site_mapper.report: JSON and HTML sitemap reports used by the CLI."""

from site_mapper.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from site_mapper.report.json_report import render_json, sitemap_to_dict

__all__ = ["DEFAULT_TEMPLATE_DIR", "render_html", "render_json", "sitemap_to_dict"]
