"""build command — scan pull requests and write the static report page."""

from __future__ import annotations

import click
from rich.console import Console

from ackamoto_core.config import apply_overrides
from ackamoto_core.models import ErrorReport, Mode
from ackamoto_core.pipeline import build_report

console = Console()


def run_options(f):
    """Options shared by every command that runs a scan."""
    f = click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum pull requests to scan. Overrides config.")(f)
    f = click.option("--repo", default=None, help="GitHub repository (owner/name). Overrides config.")(f)
    f = click.option(
        "--mode",
        type=click.Choice([m.value for m in Mode]),
        default=None,
        help="Track ACKs or NACKs. Overrides config.",
    )(f)
    return f


def resolve_run_config(ctx, **overrides) -> tuple[dict, Mode]:
    config = apply_overrides(ctx.obj.get("config", {}) if ctx.obj else {}, overrides)
    try:
        mode = Mode(config.get("mode", "ack"))
    except ValueError:
        raise click.UsageError(f"Unknown mode: {config.get('mode')!r}. Choose 'ack' or 'nack'.")
    if not config.get("github_token"):
        console.print("[yellow]Warning: No GITHUB_TOKEN found. API requests will be limited.[/yellow]")
    return config, mode


@click.command("build")
@run_options
@click.option("--output", "-o", default=None, help="Path of the page to write. Overrides config.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "json"]),
    default=None,
    help="Output format. Overrides config.",
)
@click.pass_context
def build_cmd(ctx, mode: str | None, repo: str | None, limit: int | None, output: str | None, output_format: str | None):
    """Build the ACK/NACK report page.

    Scans the most recent pull requests, classifies every comment and
    overwrites the output file. If no pull requests can be fetched an error
    page is written instead; the command still exits successfully so the
    next scheduled run can try again.

    \b
    Optional environment variables:
      GITHUB_TOKEN   Raises the number of pull requests scanned per run
    """
    from ackamoto_cli.cli import _build_fetcher, _build_renderer

    config, run_mode = resolve_run_config(ctx, mode=mode, repo=repo, limit=limit)
    config = apply_overrides(config, {"output": output, "format": output_format})

    renderer = _build_renderer(config)
    fetcher = _build_fetcher(config)
    try:
        outcome = build_report(fetcher, run_mode, bot_accounts=config.get("bot_accounts") or ())
    finally:
        fetcher.close()

    path = renderer.write(outcome, config.get("output", "index.html"))

    if isinstance(outcome, ErrorReport):
        console.print(f"[red]{outcome.message}[/red]")
        console.print(f"[yellow]Wrote error page to {path}[/yellow]")
        return

    console.print(f"[green]Generated {path} ({outcome.signal_count} {run_mode.value.upper()}s).[/green]")
