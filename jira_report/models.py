"""Data models for Jira reports.

Contains dataclasses used to structure and serialize the JSON output:
    - Query           one named JQL search
    - TableRow        one flattened issue
    - SectionSummary  aggregated statistics + rows for one query

Key names in ``to_dict()`` are camelCase because the HTML template reads them.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Query:
    title: str
    jql: str


@dataclass
class TableRow:
    key: str
    summary: str
    status: str
    issue_type: str
    created: str
    resolved: str

    def to_dict(self) -> dict:
        return {
            "key":       self.key,
            "summary":   self.summary,
            "status":    self.status,
            "issueType": self.issue_type,
            "created":   self.created,
            "resolved":  self.resolved,
        }


@dataclass
class SectionSummary:
    """Aggregated view of one query's result set.

    The count mappings are plain dicts, so iteration follows the order in
    which each key was first seen.
    """

    title: str
    total_issues: int = 0
    monthly_volume: dict[str, int] = field(default_factory=dict)
    issue_type_counts: dict[str, int] = field(default_factory=dict)
    status_counts: dict[str, int] = field(default_factory=dict)
    table_rows: list[TableRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title":           self.title,
            "totalIssues":     self.total_issues,
            "monthlyVolume":   dict(self.monthly_volume),
            "issueTypeCounts": dict(self.issue_type_counts),
            "statusCounts":    dict(self.status_counts),
            "tableRows":       [row.to_dict() for row in self.table_rows],
        }
