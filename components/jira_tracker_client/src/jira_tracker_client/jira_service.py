"""
Thin wrapper around the Jira REST API v3.

This is the "remote issue service" the JiraClient depends on: every method
maps to exactly one HTTP request and every failure surfaces as a
RemoteServiceError. No caching, retries or write gating happen here.

Dependencies:
    uv add requests
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any
from urllib.parse import quote

import requests
from requests.auth import HTTPBasicAuth

from jira_tracker_client.jira_issue import JiraIssue, build_comment, build_issue, build_server_info, text_to_adf
from tracker_client_interface.errors import InvariantViolation, IssueNotFoundError, RemoteServiceError
from tracker_client_interface.issue import Comment, ServerInfo

logger = logging.getLogger(__name__)


class JiraService:
    """
    Args:
        base_url:   Jira instance root URL (e.g. 'https://myorg.atlassian.net')
        user_email: Email associated with the Jira account
        api_token:  API token generated from Atlassian account settings
        timeout:    Passed to every request; None leaves the requests default
        session:    Optional pre-built requests.Session, e.g. with proxies or adapters mounted
    """

    _API_PREFIX = "/rest/api/3"

    def __init__(
        self,
        base_url: str,
        user_email: str,
        api_token: str,
        *,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.auth = HTTPBasicAuth(user_email, api_token)
        self._session.headers.update({"Accept": "application/json", "Content-Type": "application/json"})

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Internal HTTP helpers
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        #comment and issue payloads hand out absolute "self" links, use those as-is
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}{self._API_PREFIX}{path}"

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            raise RemoteServiceError(f"Jira request {method} {url} failed: {exc}") from exc
        self._raise_for_status(response)
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        # Jira answers some writes with 204 No Content
        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteServiceError(
                f"Jira returned invalid JSON from {response.url}", status_code=response.status_code
            ) from exc

    def _get(self, path: str, params: dict | None = None, *, required: tuple[str, ...] = ()) -> dict:
        """GET a JSON object, raising RemoteServiceError if Jira answers with anything else."""
        response = self._request("GET", path, params=params)
        data = self._json(response)
        self._expect_object(data, response, required)
        return data

    @staticmethod
    def _expect_object(data: Any, response: requests.Response, required: tuple[str, ...] = ()) -> None:
        if not isinstance(data, dict) or any(name not in data for name in required):
            raise RemoteServiceError(
                f"Unexpected Jira response from {response.url}: {data!r:.200}", status_code=response.status_code
            )

    def _post(self, path: str, body: dict) -> Any:
        return self._json(self._request("POST", path, json=body))

    def _put(self, path: str, body: dict) -> Any:
        return self._json(self._request("PUT", path, json=body))

    def _delete(self, path: str) -> None:
        self._request("DELETE", path)

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if response.status_code == 404:
            raise IssueNotFoundError(f"Resource not found: {response.url}", status_code=404)
        if not response.ok:
            try:
                detail = response.json()
            except ValueError:
                detail = response.text
            raise RemoteServiceError(
                f"Jira API error {response.status_code}: {detail}", status_code=response.status_code
            )

    # ------------------------------------------------------------------
    # Remote issue service operations
    # ------------------------------------------------------------------

    def fetch_server_info(self) -> ServerInfo:
        return build_server_info(self._get("/serverInfo"))

    def fetch_issue(self, key: str) -> JiraIssue:
        data = self._get(f"/issue/{quote(key, safe='')}", required=("key",))
        return build_issue(data, self._base_url)

    def search_by_query(self, query: str, max_results: int, fields: Iterable[str]) -> list[JiraIssue]:
        """Run a JQL search and return a single page of at most max_results issues.

        A malformed page fails the whole search, no partial list is returned.
        """
        response = self._request(
            "GET",
            "/search/jql",
            params={"jql": query, "maxResults": max_results, "fields": ",".join(fields)},
        )
        data = self._json(response)
        self._expect_object(data, response)
        issues = data.get("issues", [])
        if not isinstance(issues, list):
            raise RemoteServiceError(
                f"Unexpected Jira search response from {response.url}: 'issues' is not a list",
                status_code=response.status_code,
            )
        for issue in issues:
            self._expect_object(issue, response, ("key",))
        return [build_issue(issue, self._base_url) for issue in issues]

    def add_comment(self, comments_url: str, comment: Comment) -> Comment:
        data = self._post(comments_url, {"body": text_to_adf(comment.body)})
        return build_comment(data) if data else comment

    def update_comment(self, comment: Comment) -> None:
        self._put(_comment_locator(comment), {"body": text_to_adf(comment.body)})

    def delete_comment(self, comment: Comment) -> None:
        self._delete(_comment_locator(comment))


def _comment_locator(comment: Comment) -> str:
    if not comment.self_url:
        raise InvariantViolation("Comment has no self URL; only comments fetched from Jira can be changed")
    return comment.self_url
