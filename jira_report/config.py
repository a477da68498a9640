"""Configuration loading and validation.

Usage:
    config = load("jira-report.yaml")        # raises ConfigError on bad config
    generate_template("jira-report.yaml")    # writes example file to disk

Values come from (lowest to highest precedence) the YAML file, a ``.env``
file in the working directory, and the process environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv

DEFAULT_CONFIG_PATH = "jira-report.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------

@dataclass
class Config:
    url: str
    email: str
    token: str
    qa_engineer_field: str | None = None
    user_name: str = ""
    project: str = "APP"
    template: str = "report_template.html"
    output_dir: str = "reports"


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str | None = None) -> Config:
    """Load and validate configuration.

    Environment variables JIRA_BASE_URL, JIRA_EMAIL, JIRA_API_TOKEN,
    JIRA_QA_ENGINEER_FIELD and JIRA_USER override file values. When
    *config_path* is None the default file is read if present, so a run
    driven purely by the environment needs no YAML file at all.

    Raises:
        ConfigError: if an explicit file is missing, the file is malformed,
                     or required fields are absent.
    """
    load_dotenv(find_dotenv(usecwd=True))

    if config_path is None:
        path = Path(DEFAULT_CONFIG_PATH)
        raw = _read_yaml(path) if path.exists() else {}
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(
                f"Config file not found: '{config_path}'\n"
                "Run `python -m jira_report init` to generate a template."
            )
        raw = _read_yaml(path)

    server = _section(raw, "server", path)
    report = _section(raw, "report", path)

    url   = os.environ.get("JIRA_BASE_URL")  or server.get("url",   "")
    email = os.environ.get("JIRA_EMAIL")     or server.get("email", "")
    token = os.environ.get("JIRA_API_TOKEN") or server.get("token", "")
    qa_field = os.environ.get("JIRA_QA_ENGINEER_FIELD") or report.get("qa_engineer_field")
    user_name = os.environ.get("JIRA_USER") or report.get("user_name") or ""

    config = Config(
        url=str(url).strip(),
        email=str(email).strip(),
        token=str(token).strip(),
        qa_engineer_field=str(qa_field).strip() if qa_field else None,
        user_name=str(user_name),
        project=str(report.get("project") or "APP"),
        template=str(report.get("template") or "report_template.html"),
        output_dir=str(report.get("output_dir") or "reports"),
    )
    _validate(config)
    return config


def _read_yaml(path: Path) -> dict:
    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{path}': {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{path}' must be a YAML mapping at the top level.")
    return raw


def _section(raw: dict, name: str, path: Path) -> dict:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' in '{path}' must be a YAML mapping.")
    return value


def _validate(config: Config) -> None:
    """Raise ConfigError if required fields are missing."""
    errors: list[str] = []

    if not config.url:
        errors.append(
            "  - 'server.url' is missing (or set the JIRA_BASE_URL environment variable)"
        )
    if not config.email:
        errors.append(
            "  - 'server.email' is missing (or set the JIRA_EMAIL environment variable)"
        )
    if not config.token:
        errors.append(
            "  - 'server.token' is missing (or set the JIRA_API_TOKEN environment variable)"
        )

    if errors:
        raise ConfigError("Invalid configuration:\n" + "\n".join(errors))


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = """\
server:
  url: "https://your-company.atlassian.net"
  email: "you@example.com"
  token: "xxxxxxxxxxxx"          # Generate at: https://id.atlassian.com/manage-profile/security/api-tokens

report:
  project: "APP"
  qa_engineer_field: "customfield_10050"   # Optional: field holding the QA engineer
  user_name: "Your Name"                   # Shown in the HTML report
  template: "report_template.html"
  output_dir: "reports"
"""


def generate_template(output_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write a template jira-report.yaml to *output_path*.

    Raises:
        ConfigError: if the file already exists (to avoid overwriting secrets).
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
