"""site_mapper.report.html_report: HTML sitemap report rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_mapper.crawler.models import Sitemap
from site_mapper.report.json_report import sitemap_to_dict

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "sitemap.html.j2"


def render_html(
    sitemap: Sitemap,
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Render the HTML report from the template and save it at the given path.

    Args:
        sitemap: result of a crawl.
        template_dir: directory holding ``sitemap.html.j2``; None uses the bundled one.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    data = sitemap_to_dict(sitemap)
    context: dict[str, Any] = {
        "seed_url": data["seed_url"],
        "pages": data["pages"],
        "link_count": sum(len(p["links"]) for p in data["pages"]),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
