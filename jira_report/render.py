"""Write report artifacts: the JSON summary and the HTML report.

Functions:
    write_summary(sections, path)                                    -> Path
    render_html(template, sections, user_name)                       -> str
    render_report(sections, user_name, user_email, template, dir)    -> Path
    safe_token(email)                                                -> str
"""

import json
import re
from pathlib import Path

from jira_report.models import SectionSummary

SUMMARY_PATH = "jira_issues_summary.json"

CHART_DATA_MARKER = "const chartData = __CHART_DATA__;"
USER_NAME_MARKER = "const userName = __USER_NAME__;"

_UNSAFE_CHARS = re.compile(r"[@.]")


class TemplateError(Exception):
    """Raised when the report template is missing or lacks a marker."""


def _dump(sections: list[SectionSummary]) -> str:
    return json.dumps([s.to_dict() for s in sections], indent=2, ensure_ascii=False)


def _script_literal(text: str) -> str:
    """Make JSON *text* safe inside a ``<script>`` block.

    ``<``, ``>`` and ``&`` only occur inside JSON strings, where the
    ``\\u`` escapes decode to the same characters.
    """
    return (
        text.replace("<", "\\u003c")
            .replace(">", "\\u003e")
            .replace("&", "\\u0026")
    )


def write_summary(sections: list[SectionSummary], path: str = SUMMARY_PATH) -> Path:
    """Dump all sections to *path* for inspection; always overwrites."""
    out = Path(path)
    out.write_text(_dump(sections), encoding="utf-8")
    return out


def safe_token(email: str) -> str:
    """``a.b@example.com`` -> ``a_b_example_com``."""
    return _UNSAFE_CHARS.sub("_", email or "")


def render_html(template: str, sections: list[SectionSummary], user_name: str) -> str:
    """Replace the two marker lines in *template* with JSON literals.

    Raises:
        TemplateError: if either marker is absent.
    """
    missing = [m for m in (CHART_DATA_MARKER, USER_NAME_MARKER) if m not in template]
    if missing:
        raise TemplateError(
            "Report template is missing marker(s): " + ", ".join(f"'{m}'" for m in missing)
        )

    html = template.replace(
        CHART_DATA_MARKER, f"const chartData = {_script_literal(_dump(sections))};", 1
    )
    name = _script_literal(json.dumps(user_name, ensure_ascii=False))
    return html.replace(USER_NAME_MARKER, f"const userName = {name};", 1)


def render_report(
    sections: list[SectionSummary],
    user_name: str,
    user_email: str,
    template_path: str = "report_template.html",
    output_dir: str = "reports",
) -> Path:
    """Render the HTML report to ``<output_dir>/jira_report.<token>.html``.

    Raises:
        TemplateError: if the template file is missing or lacks a marker.
    """
    template_file = Path(template_path)
    if not template_file.exists():
        raise TemplateError(f"Report template not found: '{template_path}'")

    html = render_html(template_file.read_text(encoding="utf-8"), sections, user_name)

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out = out_dir / f"jira_report.{safe_token(user_email)}.html"
    out.write_text(html, encoding="utf-8")
    return out
