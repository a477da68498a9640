"""The saved searches the report is built from.

Functions:
    build_queries(config)                  -> list[Query]
    search_fields(qa_engineer_field=None)  -> list[str]
"""

import re

from jira_report.config import Config
from jira_report.models import Query

# Fields every query asks Jira for
_BASE_FIELDS = ("issuetype", "status", "created", "resolutiondate", "summary")

_BUG_TYPES = 'Bug, "Acceptance bug"'
_QA_FIELD_NAME = '"QA Engineer"'
_CUSTOM_FIELD_RE = re.compile(r"^customfield_(\d+)$")


def build_queries(config: Config) -> list[Query]:
    """Return the three report queries, in the order they are rendered."""
    project = config.project
    user = f'"{config.email}"'
    return [
        Query(
            title="Tickets created",
            jql=f"project = {project} AND reporter in ({user})",
        ),
        Query(
            title="Bugs created",
            jql=f"project = {project} AND issuetype in ({_BUG_TYPES}) AND reporter in ({user})",
        ),
        Query(
            title="Worked as QA",
            jql=f"project = {project} AND {qa_clause(config.qa_engineer_field)} in ({user})",
        ),
    ]


def search_fields(qa_engineer_field: str | None = None) -> list[str]:
    fields = list(_BASE_FIELDS)
    if qa_engineer_field:
        fields.append(qa_engineer_field)
    return fields


def qa_clause(qa_engineer_field: str | None) -> str:
    """JQL reference to the QA-engineer field.

    ``customfield_10050`` becomes ``cf[10050]``; without a configured id the
    field is referenced by its display name.
    """
    if qa_engineer_field:
        match = _CUSTOM_FIELD_RE.match(qa_engineer_field)
        if match:
            return f"cf[{match.group(1)}]"
        return f'"{qa_engineer_field}"'
    return _QA_FIELD_NAME
