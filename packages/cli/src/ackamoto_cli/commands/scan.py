"""scan command — print the grouped signals instead of writing a page."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ackamoto_cli.commands.build import resolve_run_config, run_options
from ackamoto_core.models import ErrorReport
from ackamoto_core.pipeline import build_report

console = Console()


@click.command("scan")
@run_options
@click.option("--excerpts", is_flag=True, help="Show the comment excerpt under each entry.")
@click.pass_context
def scan_cmd(ctx, mode: str | None, repo: str | None, limit: int | None, excerpts: bool):
    """Scan pull requests and print the signals grouped by date.

    Useful for checking the classifier against live data without touching
    the published page.
    """
    from ackamoto_cli.cli import _build_fetcher

    config, run_mode = resolve_run_config(ctx, mode=mode, repo=repo, limit=limit)

    fetcher = _build_fetcher(config)
    try:
        outcome = build_report(fetcher, run_mode, bot_accounts=config.get("bot_accounts") or ())
    finally:
        fetcher.close()

    if isinstance(outcome, ErrorReport):
        raise click.ClickException(outcome.message)

    if outcome.is_empty:
        console.print(f"[yellow]No {run_mode.value.upper()}s found.[/yellow]")
        return

    for group in outcome.groups:
        table = Table(title=group.date, show_header=True, header_style="bold cyan")
        table.add_column("PR", style="bold", no_wrap=True)
        table.add_column("Title", max_width=48)
        table.add_column("Kind", no_wrap=True)
        table.add_column("Commenter", no_wrap=True)
        table.add_column("Time", no_wrap=True)
        for signal in group.signals:
            title = escape(signal.pr_title)
            if excerpts and signal.excerpt:
                title = f"{title}\n[dim]{escape(signal.excerpt)}[/dim]"
            table.add_row(
                f"#{signal.pr_number}",
                title,
                signal.kind,
                escape(signal.author),
                signal.timestamp.strftime("%H:%M"),
            )
        console.print(table)

    console.print(f"\n[bold]{outcome.signal_count} {run_mode.value.upper()}s across {len(outcome.groups)} day(s).[/bold]")
