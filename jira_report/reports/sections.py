"""Aggregate raw Jira issues into report sections.

Functions:
    build_section(title, issues)  -> SectionSummary
"""

from datetime import datetime
from typing import Any

from dateutil import parser as dtparser

from jira_report.models import SectionSummary, TableRow

UNKNOWN = "Unknown"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_section(title: str, issues: list[dict]) -> SectionSummary:
    """Bucket *issues* by created month, issue type and status.

    Every issue adds exactly one to each bucket map and one table row, so the
    three map totals, ``total_issues`` and ``len(table_rows)`` always agree.
    Rows keep the input order; bucket keys keep first-seen order.
    """
    section = SectionSummary(title=title, total_issues=len(issues))

    for issue in issues:
        fields = issue.get("fields") or {}

        created = _parse_timestamp(fields.get("created"))
        resolved = _parse_timestamp(fields.get("resolutiondate"))

        month = created.strftime("%Y-%m") if created else UNKNOWN
        issue_type = _name_of(fields.get("issuetype"))
        status = _name_of(fields.get("status"))

        _increment(section.monthly_volume, month)
        _increment(section.issue_type_counts, issue_type)
        _increment(section.status_counts, status)

        section.table_rows.append(TableRow(
            key=issue.get("key", ""),
            summary=fields.get("summary") or "",
            status=status,
            issue_type=issue_type,
            created=_format_date(created),
            resolved=_format_date(resolved),
        ))

    return section


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _increment(counts: dict[str, int], key: str) -> None:
    counts[key] = counts.get(key, 0) + 1


def _name_of(value: Any) -> str:
    """Return ``value["name"]`` for Jira's ``{"name": ...}`` objects."""
    if isinstance(value, dict) and value.get("name"):
        return value["name"]
    return UNKNOWN


def _parse_timestamp(raw: str | None) -> datetime | None:
    """Parse a Jira timestamp such as ``2024-03-14T10:00:00.000+0000``.

    The calendar date is taken as written; no conversion to local time.
    Unparseable values are treated like missing ones.
    """
    if not raw:
        return None
    try:
        return dtparser.parse(raw)
    except (ValueError, OverflowError):
        return None


def _format_date(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d") if value else ""
