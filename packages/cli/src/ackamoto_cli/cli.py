"""CLI entry point for ackamoto.

Commands:
  build     — scan pull requests and write the static report page
  scan      — same scan, printed to the terminal instead of a file
  classify  — show which marker a single comment body carries
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from ackamoto_cli.commands.build import build_cmd
from ackamoto_cli.commands.classify import classify_cmd
from ackamoto_cli.commands.scan import scan_cmd


def _build_renderer(config: dict):
    """Instantiate the output renderer from the ``format`` setting.

    format: html → HtmlRenderer (default)
    format: json → JsonRenderer
    """
    output_format = config.get("format", "html")

    if output_format == "html":
        from ackamoto_render.html_page import HtmlRenderer

        return HtmlRenderer(project_name=config.get("project_name", "Bitcoin Core"))

    if output_format == "json":
        from ackamoto_render.json_feed import JsonRenderer

        return JsonRenderer()

    raise click.UsageError(f"Unknown output format: {output_format!r}. Choose 'html' or 'json'.")


def _build_fetcher(config: dict):
    from ackamoto_core.config import resolve_pr_limit
    from ackamoto_core.gh.pull_request import GithubFetcher

    return GithubFetcher(
        repo_name=config["repo"],
        token=config.get("github_token"),
        limit=resolve_pr_limit(config),
        state=config.get("state", "all"),
        request_delay=float(config.get("request_delay", 0.2)),
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("ackamoto"),
    prog_name="ackamoto",
)
@click.option(
    "--config",
    "config_path",
    default=".ackamoto.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="ACKAMOTO_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Track ACKs and NACKs on a GitHub project's pull requests."""
    from ackamoto_core.config import load_config

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)

    config = load_config(config_path)

    ctx.obj["config"] = config


main.add_command(build_cmd)
main.add_command(scan_cmd)
main.add_command(classify_cmd)
