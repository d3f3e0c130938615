"""Machine-readable JSON feed of the same data the HTML page shows."""

from __future__ import annotations

import json

from ackamoto_core.models import ErrorReport, Report, Signal
from ackamoto_render.base import BaseRenderer


def signal_to_dict(signal: Signal) -> dict:
    return {
        "pr_number": signal.pr_number,
        "pr_title": signal.pr_title,
        "pr_url": signal.pr_url,
        "commenter": signal.author,
        "commenter_url": signal.author_url,
        "comment_url": signal.comment_url,
        "date": signal.timestamp.isoformat(),
        "comment_snippet": signal.excerpt,
        "ack_type": signal.kind,
    }


class JsonRenderer(BaseRenderer):
    def __init__(self, indent: int | None = 2):
        self.indent = indent

    def render_report(self, report: Report) -> str:
        payload = {
            "mode": report.mode.value,
            "generated_at": report.generated_at.isoformat(),
            "total": report.signal_count,
            "groups": [
                {"date": g.date, "signals": [signal_to_dict(s) for s in g.signals]} for g in report.groups
            ],
        }
        return json.dumps(payload, indent=self.indent, ensure_ascii=False)

    def render_error(self, error: ErrorReport) -> str:
        payload = {
            "mode": error.mode.value,
            "generated_at": error.generated_at.isoformat(),
            "error": error.message,
        }
        return json.dumps(payload, indent=self.indent, ensure_ascii=False)
