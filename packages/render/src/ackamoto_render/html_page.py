"""Static HTML page for the ACK/NACK report.

Page skeletons live in ``templates/`` and are filled with ``string.Template``;
all text coming from GitHub is escaped before substitution.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from pathlib import Path
from string import Template

from ackamoto_core.models import DateGroup, ErrorReport, Mode, Report, Signal
from ackamoto_render.base import BaseRenderer

TEMPLATES_DIR = Path(__file__).parent / "templates"

DATE_HEADER = Template(
    """
    <h2 class="date-header">$date</h2>

    <div class="acks-container">
"""
)
ENTRY = Template(
    """        <div class="ack-entry">
            <a href="$pr_url" target="_blank" class="pr-number">#$pr_number</a>
            <div class="pr-title" title="$title_attr">$title</div>
            <div class="ack-type">$kind</div>
            <a href="$comment_url" target="_blank" class="commenter">$author</a>
        </div>
"""
)
GROUP_FOOTER = "    </div>\n"


@dataclass(frozen=True)
class Branding:
    site_name: str  # also the logo file stem and domain
    label: str
    title: str


BRANDING: dict[Mode, Branding] = {
    Mode.ACK: Branding(site_name="ackamoto", label="ACK", title="ACKamoto"),
    Mode.NACK: Branding(site_name="nackamoto", label="NACK", title="NACKamoto"),
}


def _esc(value) -> str:
    return html.escape(str(value), quote=True)


class HtmlRenderer(BaseRenderer):
    def __init__(self, project_name: str = "Bitcoin Core", templates_dir: str | Path | None = None):
        self.project_name = project_name
        self.templates_dir = Path(templates_dir) if templates_dir else TEMPLATES_DIR

    def _load(self, name: str) -> Template:
        path = self.templates_dir / name
        if not path.exists():
            raise FileNotFoundError(f"Template not found: {path}")
        return Template(path.read_text(encoding="utf-8"))

    def _page_fields(self, mode: Mode) -> dict:
        brand = BRANDING[Mode(mode)]
        return {
            "page_title": _esc(f"{self.project_name} {brand.label}s - {brand.site_name}.com"),
            "heading": _esc(f"{self.project_name} {brand.label}s"),
            "site_name": brand.site_name,
            "site_title": brand.title,
        }

    def render_entry(self, signal: Signal) -> str:
        return ENTRY.substitute(
            pr_url=_esc(signal.pr_url),
            pr_number=signal.pr_number,
            title_attr=_esc(signal.pr_title),
            title=_esc(signal.pr_title),
            kind=_esc(signal.kind),
            comment_url=_esc(signal.comment_url),
            author=_esc(signal.author),
        )

    def render_group(self, group: DateGroup) -> str:
        rows = "".join(self.render_entry(s) for s in group.signals)
        return DATE_HEADER.substitute(date=_esc(group.date.upper())) + rows + GROUP_FOOTER

    def render_report(self, report: Report) -> str:
        content = "".join(self.render_group(g) for g in report.groups)
        return self._load("report.html").substitute(
            **self._page_fields(report.mode),
            last_updated=report.generated_at.strftime("%Y-%m-%d %H:%M UTC"),
            content=content,
        )

    def render_error(self, error: ErrorReport) -> str:
        return self._load("error.html").substitute(
            **self._page_fields(error.mode),
            message=_esc(error.message),
        )
