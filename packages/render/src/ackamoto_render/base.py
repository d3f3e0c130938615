"""Abstract renderer interface.

The CLI depends on BaseRenderer, not a concrete output format, so the HTML
page and the JSON feed are interchangeable. Renderers receive either a
Report (possibly empty) or an ErrorReport and never confuse the two.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ackamoto_core.models import ErrorReport, Report


class BaseRenderer(ABC):
    """Serializes a run outcome into one static artifact."""

    @abstractmethod
    def render_report(self, report: Report) -> str:
        """Render a successful run. ``report.groups`` may be empty."""

    @abstractmethod
    def render_error(self, error: ErrorReport) -> str:
        """Render a run that could not retrieve any data."""

    def render(self, outcome: Report | ErrorReport) -> str:
        if isinstance(outcome, ErrorReport):
            return self.render_error(outcome)
        if isinstance(outcome, Report):
            return self.render_report(outcome)
        raise TypeError(f"Cannot render {type(outcome).__name__}")

    def write(self, outcome: Report | ErrorReport, path: str | Path) -> Path:
        """Render ``outcome`` and overwrite ``path`` with it."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.render(outcome), encoding="utf-8")
        return target
