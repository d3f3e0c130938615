"""classify command — check a single comment body against the marker table."""

from __future__ import annotations

import click
from rich.console import Console

from ackamoto_core.classifier import classify
from ackamoto_core.models import Mode

console = Console()


@click.command("classify")
@click.argument("text")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in Mode]),
    default="ack",
    show_default=True,
    help="Marker vocabulary to use.",
)
def classify_cmd(text: str, mode: str):
    """Print the marker kind TEXT would be classified as. Use '-' to read stdin."""
    if text == "-":
        text = click.get_text_stream("stdin").read()

    kind = classify(text, mode)
    if kind is None:
        console.print("no marker")
        return
    console.print(f"[bold]{kind}[/bold]")
