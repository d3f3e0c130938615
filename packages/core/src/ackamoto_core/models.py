"""Data model shared by the classifier, aggregator, fetchers and renderers.

Every object here is created fresh for a single run and discarded once the
page has been written — nothing is persisted between runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Mode(str, Enum):
    """Which marker vocabulary a run classifies for."""

    ACK = "ack"
    NACK = "nack"


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime. Naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class ReviewRequest:
    """A pull request as listed by the source."""

    number: int
    title: str
    url: str


@dataclass(frozen=True)
class Comment:
    """One discussion comment on a pull request."""

    body: str
    author: str
    author_url: str
    created_at: datetime
    url: str


@dataclass(frozen=True)
class Signal:
    """A comment that matched a marker under the active mode."""

    pr_number: int
    pr_title: str
    pr_url: str
    author: str
    author_url: str
    comment_url: str
    timestamp: datetime
    excerpt: str
    kind: str

    @property
    def date_key(self) -> str:
        return as_utc(self.timestamp).strftime("%Y-%m-%d")


@dataclass
class DateGroup:
    date: str  # YYYY-MM-DD, UTC
    signals: list[Signal] = field(default_factory=list)


@dataclass
class Report:
    """Outcome of a run whose listing succeeded. ``groups`` may be empty."""

    mode: Mode
    groups: list[DateGroup] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_empty(self) -> bool:
        return not self.groups

    @property
    def signal_count(self) -> int:
        return sum(len(g.signals) for g in self.groups)

    def signals(self) -> list[Signal]:
        """All signals in page order."""
        return [s for g in self.groups for s in g.signals]


@dataclass
class ErrorReport:
    """Outcome of a run where no pull requests could be retrieved."""

    mode: Mode
    message: str
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
