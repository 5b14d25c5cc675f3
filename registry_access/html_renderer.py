"""
HTML Renderer — Turns an AccessReport into a self-contained HTML page.

The page has four parts, each rebuilt from scratch on every call:

  file info       "Loaded CSV file: <name> with <rows> rows and <cols> columns."
  groups list     one link per group plus "Total User Groups: <n>"
  matrix          "Has Access to Module" grid with Yes/No cells per group
  group sections  per group, the explicitly granted modules or a note that
                  points to the Default group

The renderer holds no state; everything it shows comes from the report.
Every piece of registry text is HTML-escaped before it lands in the page.
"""

import html
import logging
import re
from pathlib import Path
from typing import List, Union

from .report import AccessReport
from .settings import DEFAULT_GROUP

logger = logging.getLogger(__name__)

YES_COLOR = "lightgreen"
NO_COLOR = "lightcoral"

MATRIX_DISCLAIMER = (
    "This table shows which user groups have access to specific modules (tables). "
    "A 'Yes' indicates the presence of explicit settings in the Registry, while a "
    "'No' indicates no explicit permissions found."
)
MATRIX_CORNER_HEADER = "Has Access to Module"
SECTION_INTRO = "Modules with specific access settings:"

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>__TITLE__</title>
<style>
  body { font-family: sans-serif; margin: 2em; }
  table { border-collapse: collapse; }
  th, td { border: 1px solid #999; padding: 4px 8px; text-align: left; }
  .group-info { margin-bottom: 1.5em; }
</style>
</head>
<body>
<h1>__TITLE__</h1>
<p id="fileInfo">__FILE_INFO__</p>
<h2>User Groups</h2>
<div id="groupsList">
__GROUPS__
</div>
<h2>Group Permissions</h2>
<div id="groupPermTable">
__MATRIX__
</div>
<h2>Group Details</h2>
<div id="groupSection">
__SECTIONS__
</div>
</body>
</html>
"""
_PLACEHOLDER = re.compile(r"__(TITLE|FILE_INFO|GROUPS|MATRIX|SECTIONS)__")


def esc(value) -> str:
    return html.escape(str(value)) if value is not None else ""


def group_anchor(group: str) -> str:
    """Anchor id for a group: whitespace runs become a single hyphen."""
    return re.sub(r"\s+", "-", group)


def render_file_info(report: AccessReport) -> str:
    return esc(
        f"Loaded CSV file: {report.source} with {report.row_count} rows "
        f"and {report.column_count} columns."
    )


def render_groups_list(report: AccessReport) -> str:
    items = [
        f'  <li><a href="#{esc(group_anchor(group))}">{esc(group)}</a></li>'
        for group in report.groups
    ]
    lines = ["<ul>"] + items + ["</ul>"]
    lines.append(f"<p>Total User Groups: {len(report.groups)}</p>")
    return "\n".join(lines)


def render_permission_table(report: AccessReport) -> str:
    matrix = report.matrix
    lines = [f"<p>{esc(MATRIX_DISCLAIMER)}</p>", "<table>"]

    header = "".join(f"<th>{esc(group)}</th>" for group in matrix.groups)
    lines.append(f"  <tr><th>{esc(MATRIX_CORNER_HEADER)}</th>{header}</tr>")

    for module, presence in matrix.rows():
        cells = "".join(
            f'<td style="background-color: {YES_COLOR if present else NO_COLOR}">'
            f'{"Yes" if present else "No"}</td>'
            for present in presence
        )
        lines.append(f"  <tr><td>{esc(module)}</td>{cells}</tr>")

    lines.append("</table>")
    return "\n".join(lines)


def render_group_sections(report: AccessReport) -> str:
    fallback_note = (
        "No module access settings specified. See "
        f'<a href="#{esc(group_anchor(DEFAULT_GROUP))}">{esc(DEFAULT_GROUP)}</a> '
        "to see what applies."
    )

    blocks: List[str] = []
    for group, modules in report.explanations.items():
        lines = [
            '<div class="group-info">',
            f'  <h3 id="{esc(group_anchor(group))}">{esc(group)}</h3>',
            f"  <p>{esc(SECTION_INTRO)}</p>",
            "  <ul>",
        ]
        if report.explanations.needs_fallback(group):
            lines.append(f"    <li>{fallback_note}</li>")
        else:
            lines.extend(f"    <li>{esc(module)}</li>" for module in modules)
        lines.extend(["  </ul>", "</div>"])
        blocks.append("\n".join(lines))

    return "\n".join(blocks)


def render_report(report: AccessReport, title: str = "Registry Access Report") -> str:
    """Render the full HTML page for a report."""
    parts = {
        "TITLE": esc(title),
        "FILE_INFO": render_file_info(report),
        "GROUPS": render_groups_list(report),
        "MATRIX": render_permission_table(report),
        "SECTIONS": render_group_sections(report),
    }
    # Single pass so registry text that looks like a placeholder stays literal
    return _PLACEHOLDER.sub(lambda m: parts[m.group(1)], HTML_TEMPLATE)


def write_html_report(report: AccessReport, output_path: Union[str, Path],
                      title: str = "Registry Access Report") -> Path:
    """Render the report and write it to output_path.

    Returns:
        Path to the generated HTML file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_report(report, title), encoding="utf-8")

    logger.info("HTML report: %s (%.0f KB)", output_path, output_path.stat().st_size / 1024)
    return output_path
