# === FILE: site_preview/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for site_preview.

Commands:
  preview   Resolve title, hero image and favicon for one or more URLs
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config file (defaults are used when omitted)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Also write logs to a rotating file
  --log-format FORMAT Logging format (e.g. "%(asctime)s %(levelname)s %(message)s")

preview options:
  --json PATH         Save the JSON report to a file
  --pretty            Indent JSON output (2 spaces)
  --timeout SEC       Timeout for the whole run (seconds)

Also:
  --version, -v       Show the site_preview version

Example:
  site-preview --config configs/default.yaml preview https://example.com/ --pretty
"""
import sys
import asyncio
import json
from pathlib import Path

import click

from site_preview import __version__
from site_preview.config import load_config
from site_preview.engine import preview_urls
from site_preview.logger import init_logging
from site_preview.report.json_report import previews_to_data, render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='site_preview, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Also write logs to this file (rotated at 5 MiB)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """site_preview command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('preview', context_settings=CONTEXT_SETTINGS)
@click.argument('urls', nargs=-1, required=True)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent JSON output (2 spaces)'
)
@click.option(
    '--timeout', 'run_timeout',
    type=float,
    default=None,
    help='Timeout for the whole run (seconds)'
)
@click.pass_context
def preview(ctx, urls, json_output, pretty, run_timeout):
    """Resolve title, hero image and favicon for URLS."""
    cfg = ctx.obj['config']
    try:
        if run_timeout:
            previews = asyncio.run(
                asyncio.wait_for(preview_urls(cfg, urls), timeout=run_timeout)
            )
        else:
            previews = asyncio.run(preview_urls(cfg, urls))
    except asyncio.TimeoutError:
        print_error(f'Preview did not finish within {run_timeout} seconds')
    except Exception as e:
        print_error(f'Preview failed: {e}')

    if json_output:
        try:
            saved = render_json(previews, json_output, pretty=pretty)
        except OSError as e:
            print_error(f'Failed to save JSON: {e}')
        click.echo(f'JSON report: {saved}')
        return

    indent = 2 if pretty else None
    click.echo(json.dumps(previews_to_data(previews), ensure_ascii=False, indent=indent))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the current configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
