"""Jira REST API client.

Usage:
    client = JiraClient(url="https://acme.atlassian.net", email="me@acme.com", token="xxx")
    data   = client.get("myself")
    issues = client.search('project = APP', fields=["status", "created"])
"""

from typing import Any, Callable

import requests

PAGE_SIZE = 50
API_PREFIX = "/rest/api/2/"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class JiraClientError(Exception):
    """Base exception for all client errors."""


class AuthenticationError(JiraClientError):
    """Raised on HTTP 401 — invalid email/token pair."""


class PermissionDeniedError(JiraClientError):
    """Raised on HTTP 403 — the account may not run this search."""


class NotFoundError(JiraClientError):
    """Raised on HTTP 404 — wrong base URL or API path."""


class NetworkError(JiraClientError):
    """Raised on connection timeout or unreachable server."""


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class JiraClient:
    """Thin wrapper around the Jira REST API (v2)."""

    def __init__(self, url: str, email: str, token: str, timeout: int = 30) -> None:
        self.base_url = url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        # Jira Cloud auth: account email as username, API token as password
        self._session.auth = (email, token)
        self._session.headers.update({"Accept": "application/json"})

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def get(self, path: str, params: dict[str, Any] | None = None) -> dict:
        """Perform a single GET request and return the parsed JSON response.

        Raises:
            AuthenticationError:   HTTP 401
            PermissionDeniedError: HTTP 403
            NotFoundError:         HTTP 404
            JiraClientError:       Any other non-2xx response
            NetworkError:          Timeout or connection failure
        """
        return self._request(path, params or {})

    def search(
        self,
        jql: str,
        fields: list[str],
        progress: Callable[[int, int], None] | None = None,
    ) -> list[dict]:
        """Fetch every issue matching *jql* and return them as a flat list.

        Jira paginates ``/search`` via ``startAt`` and ``maxResults``; the
        number of matches is reported in ``total``. ``startAt`` advances by
        the number of issues actually returned, since Jira may hand back
        fewer than ``maxResults``. A response without an ``issues`` list is
        treated as the end of the data.

        Args:
            jql:      Filter expression
            fields:   Issue fields to return; empty names are skipped
            progress: Called as ``progress(fetched, total)`` after each page
        """
        all_issues: list[dict] = []
        start_at = 0
        total = 0
        field_list = ",".join(f for f in fields if f)

        while True:
            data = self.get("search", {
                "jql":        jql,
                "startAt":    start_at,
                "maxResults": PAGE_SIZE,
                "fields":     field_list,
            })

            issues = data.get("issues")
            if issues is None:
                break

            all_issues.extend(issues)
            total = data.get("total", len(all_issues))
            start_at += len(issues)

            if progress is not None:
                progress(len(all_issues), total)

            if len(all_issues) >= total or not issues:
                break

        return all_issues

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _request(self, path: str, params: dict[str, Any]) -> dict:
        url = f"{self.base_url}{API_PREFIX}{path.lstrip('/')}"
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.exceptions.Timeout as exc:
            raise NetworkError(
                f"Request timed out after {self._timeout}s while contacting '{url}'"
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            raise NetworkError(
                f"Unable to reach Jira server at '{self.base_url}'"
            ) from exc

        if response.status_code == 401:
            raise AuthenticationError(
                "Authentication failed — check the account email and API token."
                + _detail_suffix(response)
            )
        if response.status_code == 403:
            raise PermissionDeniedError(
                f"Access denied to {url}" + _detail_suffix(response)
            )
        if response.status_code == 404:
            raise NotFoundError(
                f"Resource not found: {url}" + _detail_suffix(response)
            )
        if not response.ok:
            raise JiraClientError(
                f"Unexpected response {response.status_code} from {url}"
                + _detail_suffix(response)
            )

        return response.json()


def _error_detail(response: requests.Response) -> str:
    """Extract the error text Jira put in the response body, if any.

    Jira reports failures as ``{"errorMessages": [...], "errors": {field: msg}}``;
    anything else falls back to the (truncated) raw body.
    """
    try:
        body = response.json()
    except ValueError:
        return response.text[:200].strip()

    if not isinstance(body, dict):
        return response.text[:200].strip()

    raw_messages = body.get("errorMessages") or []
    if isinstance(raw_messages, str):
        raw_messages = [raw_messages]
    messages = list(raw_messages)
    errors = body.get("errors") or {}
    if isinstance(errors, dict):
        messages.extend(f"{field}: {msg}" for field, msg in errors.items())
    return "; ".join(str(m) for m in messages)


def _detail_suffix(response: requests.Response) -> str:
    detail = _error_detail(response)
    return f": {detail}" if detail else ""
