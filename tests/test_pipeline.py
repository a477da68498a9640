"""Tests for jira_report/reports/pipeline.py"""

import json
from pathlib import Path

import pytest

from jira_report.client import AuthenticationError, JiraClient
from jira_report.config import Config
from jira_report.models import Query
from jira_report.render import CHART_DATA_MARKER, USER_NAME_MARKER
from jira_report.reports.pipeline import collect_sections, generate

BASE   = "https://acme.atlassian.net"
SEARCH = f"{BASE}/rest/api/2/search"
EMAIL  = "a.b@example.com"


@pytest.fixture
def config(tmp_path) -> Config:
    template = tmp_path / "report_template.html"
    template.write_text(
        f"<script>\n{CHART_DATA_MARKER}\n{USER_NAME_MARKER}\n</script>\n", encoding="utf-8"
    )
    return Config(url=BASE, email=EMAIL, token="tok", user_name="A B",
                  template=str(template))


@pytest.fixture
def client() -> JiraClient:
    return JiraClient(url=BASE, email=EMAIL, token="tok")


def _page(keys: list, total: int | None = None) -> dict:
    return {"total": len(keys) if total is None else total,
            "issues": [{"key": k, "fields": {"status": {"name": "Open"}}} for k in keys]}


# ---------------------------------------------------------------------------
# collect_sections()
# ---------------------------------------------------------------------------

def test_collect_sections_runs_queries_in_order(client, requests_mock):
    responses = [{"json": _page(["APP-1", "APP-2"])}, {"json": _page(["APP-3"])}]
    requests_mock.get(SEARCH, responses)
    queries = [Query("first", "project = APP"), Query("second", "project = WEB")]

    sections = collect_sections(client, queries, ["status"])

    assert [s.title for s in sections] == ["first", "second"]
    assert [s.total_issues for s in sections] == [2, 1]
    jqls = [r.qs["jql"][0] for r in requests_mock.request_history]
    assert jqls == ["project = app", "project = web"]


def test_each_query_finishes_before_the_next(client, requests_mock):
    responses = [
        {"json": _page([f"APP-{i}" for i in range(50)], total=60)},
        {"json": _page([f"APP-{i}" for i in range(50, 60)], total=60)},
        {"json": _page(["WEB-1"])},
    ]
    requests_mock.get(SEARCH, responses)
    queries = [Query("first", "project = APP"), Query("second", "project = WEB")]

    sections = collect_sections(client, queries, ["status"])

    assert [s.total_issues for s in sections] == [60, 1]
    history = requests_mock.request_history
    assert [r.qs["startat"][0] for r in history] == ["0", "50", "0"]


# ---------------------------------------------------------------------------
# generate()
# ---------------------------------------------------------------------------

def test_generate_with_no_issues_writes_both_files(config, client, requests_mock, tmp_path):
    requests_mock.get(SEARCH, json=_page([]))

    result = generate(config, client)

    assert requests_mock.call_count == 3
    assert [s.total_issues for s in result.sections] == [0, 0, 0]
    assert all(s.table_rows == [] for s in result.sections)

    summary = json.loads((tmp_path / "jira_issues_summary.json").read_text(encoding="utf-8"))
    assert [s["title"] for s in summary] == ["Tickets created", "Bugs created", "Worked as QA"]
    assert result.report_path == Path("reports/jira_report.a_b_example_com.html")
    assert (tmp_path / "reports" / "jira_report.a_b_example_com.html").exists()


def test_generate_reports_progress(config, client, requests_mock):
    requests_mock.get(SEARCH, json=_page(["APP-1"]))
    calls = []
    generate(config, client, progress=lambda done, total: calls.append((done, total)))
    assert calls == [(1, 1), (1, 1), (1, 1)]


def test_generate_sends_qa_field(config, client, requests_mock):
    config.qa_engineer_field = "customfield_10050"
    requests_mock.get(SEARCH, json=_page([]))
    generate(config, client)
    assert requests_mock.last_request.qs["fields"][0].endswith(",customfield_10050")


def test_generate_401_writes_no_files(config, client, requests_mock, tmp_path):
    requests_mock.get(SEARCH, status_code=401, json={"errorMessages": ["Unauthorized"]})

    with pytest.raises(AuthenticationError, match="Unauthorized"):
        generate(config, client)

    assert not (tmp_path / "jira_issues_summary.json").exists()
    assert not (tmp_path / "reports").exists()


def test_generate_failure_on_last_query_writes_no_files(config, client, requests_mock, tmp_path):
    responses = [
        {"json": _page(["APP-1"])},
        {"json": _page(["APP-2"])},
        {"status_code": 401},
    ]
    requests_mock.get(SEARCH, responses)

    with pytest.raises(AuthenticationError):
        generate(config, client)

    assert not (tmp_path / "jira_issues_summary.json").exists()
    assert not (tmp_path / "reports").exists()
