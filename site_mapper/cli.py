#!/usr/bin/env python3
"""
Command line entry point of the SiteMapper crawler.

Commands:
  crawl     Crawl a site and print/save its sitemap
  config    Show the effective configuration

Common options:
  --config PATH       Path to a YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only if omitted)
  --log-format FORMAT Logging format (e.g. "%(asctime)s %(levelname)s %(message)s")

crawl options:
  --url URL           Seed URL (overrides seed_url); trailing non-letters are
                      stripped, so end it with a path, e.g. http://localhost:8080/index
  --threads N         Number of workers (overrides threads)
  --disallow PREFIX   Disallowed URL prefix, repeatable (overrides disallowed_prefixes)
  --verbose           Log every crawled page
  --json PATH         Save the JSON sitemap to a file
  --html PATH         Save the HTML sitemap to a file
  --template DIR      Directory with the Jinja2 template
  --pretty            Indent JSON printed to stdout

Also:
  --version, -v       Show the SiteMapper version

Example:
  site_mapper crawl --url https://example.com --threads 8 --disallow https://example.com/admin --json sitemap.json
"""
import json
import sys
from pathlib import Path

import click

from site_mapper import __version__
from site_mapper.config import load_config
from site_mapper.logger import init_logging
from site_mapper.engine import start_crawl
from site_mapper.report.json_report import render_json, sitemap_to_dict
from site_mapper.report.html_report import render_html

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (logs go to stderr if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteMapper command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def _load(ctx, **overrides):
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--url', '-u', 'seed_url',
    default=None,
    help=(
        'Seed URL of the crawl. Trailing non-letter characters (slashes, digits) are stripped, '
        'so a URL ending in a port loses it: use e.g. http://localhost:8080/index'
    )
)
@click.option('--threads', '-n', 'threads', type=int, default=None, help='Number of crawler workers')
@click.option(
    '--disallow', '-d', 'disallowed',
    multiple=True,
    help='Disallowed URL prefix (repeatable)'
)
@click.option('--verbose', is_flag=True, help='Log every crawled page')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON sitemap to a file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the HTML sitemap to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with the sitemap.html.j2 template (bundled one by default)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent JSON printed to stdout (2 spaces)'
)
@click.pass_context
def crawl(ctx, seed_url, threads, disallowed, verbose, json_output, html_output, template_dir, pretty):
    """Crawl a site and produce its sitemap."""
    cfg = _load(
        ctx,
        seed_url=seed_url,
        threads=threads,
        disallowed_prefixes=list(disallowed) or None,
        verbose=verbose or None,
    )
    try:
        sitemap = start_crawl(cfg)
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    # No output file: print to stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        click.echo(json.dumps(sitemap_to_dict(sitemap), ensure_ascii=False, indent=indent))
        return

    if json_output:
        try:
            saved_json = render_json(sitemap, json_output)
            click.echo(f'JSON sitemap: {saved_json}')
        except Exception as e:
            print_error(f'Failed to save JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(sitemap, template_dir, html_output)
            click.echo(f'HTML sitemap: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = _load(ctx)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
