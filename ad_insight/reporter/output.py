"""Report output generation - renders analyzed reports and saves them to files."""

from __future__ import annotations

import json
import re
from datetime import datetime
from html import escape
from pathlib import Path
from typing import Any

from ad_insight.models import ParsedData
from ad_insight.utils.logging import get_logger

logger = get_logger(__name__)


def render_markdown(parsed: ParsedData, title: str = "Ad Insight Report") -> str:
    """Render a ParsedData record as a Markdown report."""
    s = parsed.stats
    lines = [
        f"# {title}",
        "",
        f"**Date range:** {s.date_range}",
        "",
        "## Summary",
        "",
        "| Metric | Value |",
        "|---|---|",
        f"| Winning ads | {s.total_winning} |",
        f"| Underperforming ads | {s.total_losing} |",
        f"| Win rate | {s.win_rate}% |",
        "",
    ]

    if parsed.keywords:
        lines += ["## Top Keywords", "", "| Keyword | Count | Weight |", "|---|---|---|"]
        lines += [f"| {k.word} | {k.count} | {k.normalized_count:.2f} |" for k in parsed.keywords]
        lines.append("")

    if parsed.formats:
        lines += ["## Winning Formats", "", "| Format | Count |", "|---|---|"]
        lines += [f"| {f.name} | {f.count} |" for f in parsed.formats]
        lines.append("")

    if parsed.themes:
        lines += ["## Theme Scores", "", "| Theme | Score |", "|---|---|"]
        lines += [f"| {t.name} | {t.count:g} |" for t in parsed.themes]
        lines.append("")

    lines += ["## Audience Mix (placeholder)", "", "| Audience | Share |", "|---|---|"]
    lines += [f"| {a.name} | {a.count}% |" for a in parsed.audiences]
    lines.append("")

    lines += ["## Winning Ads", ""]
    lines += [f"- {ad}" for ad in parsed.winning_ads] or ["- None detected"]
    lines += ["", "## Underperforming Ads", ""]
    lines += [f"- {ad}" for ad in parsed.losing_ads] or ["- None detected"]
    lines.append("")

    return "\n".join(lines)


class ReportWriter:
    """Write analyzed reports to disk."""

    def __init__(self, config: dict[str, Any]):
        r_cfg = config.get("reporting", {})
        self.output_dir = Path(r_cfg.get("output_dir", "output/reports"))
        self.format = r_cfg.get("format", "markdown")
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def save_report(self, parsed: ParsedData, name: str = "report") -> Path:
        """Save the parsed report to disk.

        Returns path to the saved report file.
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        safe_name = "".join(
            c if c.isalnum() or c in "-_ " else "" for c in name
        )[:50].strip().replace(" ", "_") or "report"
        stem = f"{timestamp}_{safe_name}"

        if self.format == "json":
            return self._save_json(parsed, stem)
        elif self.format == "html":
            return self._save_html(parsed, stem)
        return self._save_markdown(parsed, stem)

    def _save_markdown(self, parsed: ParsedData, stem: str) -> Path:
        path = self.output_dir / f"{stem}.md"
        path.write_text(render_markdown(parsed), encoding="utf-8")
        logger.info(f"Report saved: {path}")
        return path

    def _save_json(self, parsed: ParsedData, stem: str) -> Path:
        path = self.output_dir / f"{stem}.json"
        path.write_text(json.dumps(parsed.to_json_dict(), indent=2), encoding="utf-8")
        logger.info(f"Report saved: {path}")
        return path

    def _save_html(self, parsed: ParsedData, stem: str) -> Path:
        path = self.output_dir / f"{stem}.html"
        html_content = _simple_md_to_html(render_markdown(parsed))

        html = f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Ad Insight Report - {escape(parsed.stats.date_range)}</title>
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
               max-width: 900px; margin: 0 auto; padding: 2rem; line-height: 1.6; }}
        table {{ border-collapse: collapse; width: 100%; margin: 1rem 0; }}
        th, td {{ border: 1px solid #ddd; padding: 0.5rem; text-align: left; }}
        th {{ background: #f5f5f5; }}
        h1 {{ color: #1a1a1a; }}
        h2 {{ color: #333; border-bottom: 2px solid #eee; padding-bottom: 0.5rem; }}
    </style>
</head>
<body>
{html_content}
</body>
</html>"""
        path.write_text(html, encoding="utf-8")
        logger.info(f"Report saved: {path}")
        return path


def _bold(text: str) -> str:
    return re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)


def _simple_md_to_html(md: str) -> str:
    """Bare-bones markdown to HTML for the tables and lists render_markdown emits."""
    html_lines = []
    in_table = False
    header_done = False
    in_list = False

    for line in md.split("\n"):
        line = escape(line, quote=False)
        if line.startswith("## "):
            html_lines.append(f"<h2>{line[3:]}</h2>")
        elif line.startswith("# "):
            html_lines.append(f"<h1>{line[2:]}</h1>")
        elif line.startswith("|"):
            if not in_table:
                html_lines.append("<table>")
                in_table, header_done = True, False
            if line.startswith("|---"):
                header_done = True
                continue
            cells = [c.strip() for c in line.split("|")[1:-1]]
            tag = "td" if header_done else "th"
            html_lines.append("<tr>" + "".join(f"<{tag}>{c}</{tag}>" for c in cells) + "</tr>")
        elif line.startswith("- "):
            if not in_list:
                html_lines.append("<ul>")
                in_list = True
            html_lines.append(f"<li>{_bold(line[2:])}</li>")
        elif line.strip() == "":
            if in_table:
                html_lines.append("</table>")
                in_table = False
            if in_list:
                html_lines.append("</ul>")
                in_list = False
        else:
            html_lines.append(f"<p>{_bold(line)}</p>")

    if in_table:
        html_lines.append("</table>")
    if in_list:
        html_lines.append("</ul>")

    return "\n".join(html_lines)
