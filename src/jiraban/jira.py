"""Fetch issues from the Jira REST API."""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from jiraban.config import Config
from jiraban.models import Issue, RichTextNode

logger = logging.getLogger(__name__)

FIELDS = "key,summary,description,status,created,priority,issuetype"


class FetchError(Exception):
    """Issues could not be retrieved from Jira."""


def _session_with_retries() -> requests.Session:
    """A session that retries transient failures of idempotent requests."""
    s = requests.Session()
    retry = Retry(
        total=2,
        backoff_factor=0.3,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )
    s.mount("http://", HTTPAdapter(max_retries=retry))
    s.mount("https://", HTTPAdapter(max_retries=retry))
    return s


def base_url(host: str) -> str:
    """Jira base URL for a host, defaulting to https."""
    host = host.rstrip("/")
    if host.startswith(("http://", "https://")):
        return host
    return f"https://{host}"


def parse_issue(data: dict[str, Any]) -> Issue:
    """Map one issue from a search response.

    Raises KeyError or TypeError if a required field is missing.
    """
    fields = data["fields"]
    status = fields["status"]
    category = status.get("statusCategory") or {}
    priority = fields.get("priority") or {}
    issue_type = fields.get("issuetype") or {}

    description = fields.get("description")
    if isinstance(description, dict):
        description = RichTextNode.from_dict(description)
    elif not isinstance(description, str):
        description = None

    return Issue(
        key=data["key"],
        title=fields.get("summary") or "",
        status=status["name"],
        created=fields.get("created") or "",
        status_category=category.get("key"),
        priority=priority.get("name"),
        issue_type=issue_type.get("name") or "Task",
        description=description,
    )


class JiraClient:
    """Read-only client for the Jira issue search."""

    def __init__(self, config: Config, session: requests.Session | None = None):
        self.config = config
        self.base_url = base_url(config.jira_host)
        self.session = session or _session_with_retries()
        self.session.headers["Accept"] = "application/json"
        if config.jira_user:
            self.session.auth = (config.jira_user, config.jira_token)
        else:
            self.session.headers["Authorization"] = f"Bearer {config.jira_token}"

    def browse_url(self, key: str) -> str:
        return f"{self.base_url}/browse/{key}"

    def search_url(self) -> str:
        """Search endpoint for the configured API version.

        Cloud's v3 search lives at /search/jql and pages by token; v2 and
        Server keep /search with startAt offsets.
        """
        api = f"{self.base_url}/rest/api/{self.config.api_version}"
        return f"{api}/search/jql" if self.config.api_version == "3" else f"{api}/search"

    def fetch_issues(self) -> list[Issue]:
        """Run the configured JQL and return every matching issue.

        Raises FetchError on any transport, HTTP or response format problem.
        Nothing is returned until every page has been read.
        """
        url = self.search_url()
        token_paging = self.config.api_version == "3"
        issues: list[Issue] = []
        seen: set[str] = set()
        start_at = 0
        page_token = None

        while True:
            params: dict[str, Any] = {
                "jql": self.config.jql,
                "fields": FIELDS,
                "maxResults": self.config.page_size,
            }
            if token_paging:
                if page_token:
                    params["nextPageToken"] = page_token
            else:
                params["startAt"] = start_at

            data = self._get(url, params)
            raw_issues = data.get("issues") or []
            for raw in raw_issues:
                try:
                    issue = parse_issue(raw)
                except (KeyError, TypeError, AttributeError) as e:
                    raise FetchError(f"malformed issue in search response: missing {e}") from e
                if issue.key in seen:
                    logger.warning("duplicate issue %s in search results, keeping the first", issue.key)
                    continue
                seen.add(issue.key)
                issues.append(issue)

            logger.debug("fetched page of %d issues", len(raw_issues))

            if not raw_issues or data.get("isLast"):
                break
            if token_paging:
                page_token = data.get("nextPageToken")
                if not page_token:
                    break
                continue
            start_at += len(raw_issues)
            total = data.get("total")
            if total is None or start_at >= total:
                break

        return issues

    def _get(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise FetchError(f"request to {url} failed: {e}") from e

        if not resp.ok:
            raise FetchError(f"Jira API error {resp.status_code}: {resp.text}")

        try:
            data = resp.json()
        except ValueError as e:
            raise FetchError(f"invalid JSON from {url}") from e
        if not isinstance(data, dict):
            raise FetchError(f"unexpected response from {url}")
        return data
