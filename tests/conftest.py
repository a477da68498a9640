"""Shared fixtures: keep the developer's Jira settings out of the tests."""

import pytest

_ENV_VARS = (
    "JIRA_BASE_URL",
    "JIRA_EMAIL",
    "JIRA_API_TOKEN",
    "JIRA_QA_ENGINEER_FIELD",
    "JIRA_USER",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # No stray jira-report.yaml / .env / report files from the repo root
    monkeypatch.chdir(tmp_path)
