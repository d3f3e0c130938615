"""Run orchestration: fetch, classify, aggregate."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from rich.console import Console

from ackamoto_core.aggregator import DEFAULT_BOT_ACCOUNTS, aggregate, collect_signals
from ackamoto_core.gh.base import BaseFetcher, FetchError
from ackamoto_core.models import ErrorReport, Mode, Report, Signal

console = Console()
logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Unable to fetch data from GitHub API. This may be due to rate limiting."
_PROGRESS_EVERY = 10


def build_report(
    fetcher: BaseFetcher,
    mode: Mode | str,
    bot_accounts: Iterable[str] = DEFAULT_BOT_ACCOUNTS,
    now: datetime | None = None,
) -> Report | ErrorReport:
    """Scan the fetcher's pull requests and return the grouped signals.

    Returns an ErrorReport only when no pull request could be listed. Pull
    requests whose comments fail to load simply contribute nothing.
    """
    mode = Mode(mode)
    generated_at = now or datetime.now(timezone.utc)
    bot_accounts = tuple(bot_accounts or ())

    console.print("Fetching pull requests...")
    try:
        pull_requests = fetcher.list_review_requests()
    except FetchError as e:
        logger.error("Failed to fetch pull requests: %s", e)
        return ErrorReport(mode=mode, message=FETCH_FAILED_MESSAGE, generated_at=generated_at)

    if not pull_requests:
        logger.error("No pull requests returned by the source.")
        return ErrorReport(mode=mode, message=FETCH_FAILED_MESSAGE, generated_at=generated_at)

    console.print(f"Found {len(pull_requests)} pull requests")

    signals: list[Signal] = []
    total = len(pull_requests)
    for i, request in enumerate(pull_requests):
        if i % _PROGRESS_EVERY == 0:
            console.print(f"[dim]Processing PR {i + 1}/{total}[/dim]")
        comments = fetcher.list_comments(request.number)
        signals.extend(collect_signals(request, comments, mode, bot_accounts))

    groups = aggregate(signals)
    console.print(f"Found {len(signals)} {mode.value.upper()}s total")
    return Report(mode=mode, groups=groups, generated_at=generated_at)
