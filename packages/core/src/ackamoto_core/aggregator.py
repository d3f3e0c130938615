"""Turn fetched comments into ordered, date-grouped signals."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ackamoto_core.classifier import classify
from ackamoto_core.models import Comment, DateGroup, Mode, ReviewRequest, Signal, as_utc

logger = logging.getLogger(__name__)

MAX_EXCERPT_CHARS = 200
ELLIPSIS = "..."
DEFAULT_BOT_ACCOUNTS = ("bitcoin-core-ci",)


def is_automated_author(login: str, bot_accounts: Iterable[str] = DEFAULT_BOT_ACCOUNTS) -> bool:
    """Return True for CI and bot accounts whose comments must never become signals."""
    name = (login or "").lower()
    if "bot" in name:
        return True
    return name in {account.lower() for account in bot_accounts}


def _lines(text: str) -> list[str]:
    """Split on line feeds only; a CRLF pair counts as one break.

    Unlike str.splitlines, form feeds, lone carriage returns and Unicode
    separators stay inside the line.
    """
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def build_excerpt(body: str, limit: int = MAX_EXCERPT_CHARS) -> str:
    """Return the leading whole lines of ``body`` that fit within ``limit`` characters.

    The first line that would push the excerpt past the limit is dropped and
    replaced by an ellipsis; lines are never cut in the middle.
    """
    excerpt = ""
    for line in _lines(body or ""):
        if len(excerpt) + len(line) > limit:
            excerpt += ELLIPSIS
            break
        excerpt += line + "\n"
    return excerpt.strip()


def make_signal(request: ReviewRequest, comment: Comment, kind: str) -> Signal:
    return Signal(
        pr_number=request.number,
        pr_title=request.title,
        pr_url=request.url,
        author=comment.author,
        author_url=comment.author_url,
        comment_url=comment.url,
        timestamp=as_utc(comment.created_at),
        excerpt=build_excerpt(comment.body),
        kind=kind,
    )


def collect_signals(
    request: ReviewRequest,
    comments: Iterable[Comment],
    mode: Mode | str,
    bot_accounts: Iterable[str] = DEFAULT_BOT_ACCOUNTS,
) -> list[Signal]:
    """Classify the comments of one pull request, skipping automated authors."""
    bot_accounts = tuple(bot_accounts or ())
    signals = []
    for comment in comments:
        if is_automated_author(comment.author, bot_accounts):
            logger.debug("Skipping comment by automated author %s on #%d", comment.author, request.number)
            continue
        kind = classify(comment.body, mode)
        if kind is None:
            continue
        signals.append(make_signal(request, comment, kind))
    return signals


def sort_signals(signals: Iterable[Signal]) -> list[Signal]:
    """Most recent first. Stable, so re-sorting a sorted list is a no-op."""
    return sorted(signals, key=lambda s: s.timestamp, reverse=True)


def group_by_date(signals: Sequence[Signal]) -> list[DateGroup]:
    """Partition signals by UTC calendar date, newest date first.

    Members keep the order they have in ``signals``.
    """
    by_date: dict[str, list[Signal]] = {}
    for signal in signals:
        by_date.setdefault(signal.date_key, []).append(signal)
    return [DateGroup(date=day, signals=by_date[day]) for day in sorted(by_date, reverse=True)]


def aggregate(signals: Iterable[Signal]) -> list[DateGroup]:
    return group_by_date(sort_signals(signals))
