"""Fetch -> aggregate -> write, one query at a time.

Functions:
    collect_sections(client, queries, fields, progress)  -> list[SectionSummary]
    generate(config, client, progress)                    -> ReportResult
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from jira_report.client import JiraClient
from jira_report.config import Config
from jira_report.models import Query, SectionSummary
from jira_report.render import SUMMARY_PATH, render_report, write_summary
from jira_report.reports.queries import build_queries, search_fields
from jira_report.reports.sections import build_section

Progress = Callable[[int, int], None]


@dataclass
class ReportResult:
    sections: list[SectionSummary]
    summary_path: Path
    report_path: Path


def collect_sections(
    client: JiraClient,
    queries: list[Query],
    fields: list[str],
    progress: Progress | None = None,
) -> list[SectionSummary]:
    """Run each query to completion before starting the next one.

    Client errors propagate unchanged; nothing is returned for a partial run.
    """
    sections: list[SectionSummary] = []
    for query in queries:
        issues = client.search(query.jql, fields, progress=progress)
        sections.append(build_section(query.title, issues))
    return sections


def generate(
    config: Config,
    client: JiraClient,
    progress: Progress | None = None,
    summary_path: str = SUMMARY_PATH,
) -> ReportResult:
    """Build every section, then write the JSON summary and the HTML report.

    All fetching happens before the first write, so a failed request leaves
    no output files behind.
    """
    sections = collect_sections(
        client,
        build_queries(config),
        search_fields(config.qa_engineer_field),
        progress=progress,
    )
    summary = write_summary(sections, summary_path)
    report = render_report(
        sections,
        config.user_name,
        config.email,
        template_path=config.template,
        output_dir=config.output_dir,
    )
    return ReportResult(sections=sections, summary_path=summary, report_path=report)
