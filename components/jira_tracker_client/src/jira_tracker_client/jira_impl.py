"""
A thin wrapper around the Jira REST API which

1. enforces the configured WriteMode: in a dry run comment mutations are only logged
2. keeps the client on a single issue when JIRA_RESTRICT_TO_ISSUE is set
3. caches issues and server info so the same data is not fetched twice in one run

The client is single-threaded: the caches are plain attributes with no locking.
"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar, Union
from urllib.parse import quote, urljoin

from jira_tracker_client.config import JiraConfig, validate_base_url
from jira_tracker_client.jira_service import JiraService
from tracker_client_interface.client import IssueTrackerClient
from tracker_client_interface.issue import Comment, Issue, ServerInfo

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Upper bound on a search; there is no pagination beyond the first page
SEARCH_MAX_RESULTS = 1000
SEARCH_FIELDS = ("summary", "comment")

# ---------------------------------------------------------------------------
# One-time fetch state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NotFetched:
    """Value has not been fetched yet."""


@dataclass(frozen=True)
class Fetched(Generic[T]):
    """Value has been fetched once and is kept for the lifetime of the client."""

    value: T


_NOT_FETCHED = NotFetched()

# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------

class JiraClient(IssueTrackerClient):
    """
    Args:
        config:  Validated JiraConfig
        service: Remote service to talk to. Built from config when omitted; pass one in
                 to share a session or to substitute a test double.

    Raises:
        ConfigurationError: If config.base_url is malformed
    """

    def __init__(self, config: JiraConfig, *, service: JiraService | None = None) -> None:
        self._config = config
        self._base_url = validate_base_url(config.base_url)
        self._write_mode = config.write_mode
        self._restriction = config.restriction
        self._service = service if service is not None else JiraService(
            self._base_url, config.username, config.api_token
        )
        self._issues_by_key: dict[str, Issue] = {}
        self._server_info: Union[NotFetched, Fetched[ServerInfo]] = _NOT_FETCHED

    @property
    def config(self) -> JiraConfig:
        return self._config

    # ------------------------------------------------------------------
    # IssueTrackerClient contract
    # ------------------------------------------------------------------

    def get_server_info(self) -> ServerInfo:
        state = self._server_info
        if isinstance(state, NotFetched):
            #a failure raises before the state changes, so the next call retries
            state = Fetched(self._service.fetch_server_info())
            self._server_info = state
        return state.value

    def get_issue(self, key: str) -> Issue:
        """Fetch a single Jira issue by key, at most once per client."""
        self._restriction.require(key)

        cached = self._issues_by_key.get(key)
        if cached is None:
            logger.debug("Fetching card info for %s", key)
            cached = self._service.fetch_issue(key)
            self._issues_by_key[key] = cached
        return cached

    def search_issues(self, query: str) -> list[Issue]:
        """
        Notes on usage:
            Results are not added to the get_issue() cache.
            With a restricted key the search still runs as given, every other issue is dropped afterwards.
        """
        logger.debug("Searching issues: %s", query)
        found = self._service.search_by_query(query, SEARCH_MAX_RESULTS, SEARCH_FIELDS)

        #dict keeps insertion order, setdefault keeps the first occurrence of a key
        issues: dict[str, Issue] = {}
        for issue in self._restriction.filter(found):
            issues.setdefault(issue.key, issue)
        return list(issues.values())

    def add_comment(self, issue: Issue, comment: Comment) -> None:
        if self._write_mode.is_live:
            logger.info("Adding comment to %s", issue.key)
            self._service.add_comment(issue.comments_url, comment)
        else:
            logger.info("Not adding comment to %s:\n%s", issue.key, comment.body)

    def update_comment(self, comment: Comment) -> None:
        if self._write_mode.is_live:
            logger.info("Updating comment %s", comment.self_url)
            self._service.update_comment(comment)
        else:
            logger.info("Not updating comment %s:\n%s", comment.self_url, comment.body)

    def delete_comment(self, issue: Issue, comment: Comment) -> None:
        if self._write_mode.is_live:
            logger.info("Deleting comment %s on %s", comment.self_url, issue.key)
            self._service.delete_comment(comment)
        else:
            logger.info("Not deleting comment %s on %s:\n%s", comment.self_url, issue.key, comment.body)

    def get_view_url(self, issue: Issue) -> str:
        base_url = validate_base_url(self._config.base_url)
        return urljoin(f"{base_url}/", f"browse/{quote(issue.key, safe='')}")


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(*, interactive: bool = False) -> JiraClient:
    """Return a JiraClient configured from environment variables.

    See jira_tracker_client.config for the variables read. If "interactive = True"
    and any required variable is missing, the user will be prompted.
    """
    config = JiraConfig.from_env(interactive=interactive)
    logger.debug("Creating Jira client for %r", config)
    return JiraClient(config)
