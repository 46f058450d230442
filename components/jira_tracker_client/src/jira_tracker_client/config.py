"""
Configuration
-------------
The client is configured by a frozen JiraConfig. It can be built directly or
read from the environment with JiraConfig.from_env():

    JIRA_BASE_URL           https://myorg.atlassian.net
    JIRA_USER_EMAIL         me@example.com
    JIRA_API_TOKEN          <token from https://id.atlassian.com/manage-profile/security/api-tokens>
    JIRA_WRITE_ENABLED      true to post comments, anything else is a dry run (default)
    JIRA_RESTRICT_TO_ISSUE  optional issue key, e.g. ABC-1, to only ever touch that issue
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from getpass import getpass
from urllib.parse import urlsplit

from tracker_client_interface.errors import ConfigurationError
from tracker_client_interface.policy import IssueKeyRestriction, WriteMode

_TRUTHY = {"1", "true", "yes", "on"}


def validate_base_url(base_url: str) -> str:
    """Return base_url without a trailing slash, or raise ConfigurationError if malformed."""
    try:
        parts = urlsplit(base_url)
        parts.port  # raises ValueError for a non-numeric or out of range port
    except ValueError as exc:
        raise ConfigurationError(f"Malformed Jira base URL {base_url!r}: {exc}") from exc
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"Malformed Jira base URL {base_url!r}: expected http(s)://host[/path]")
    if parts.query or parts.fragment:
        raise ConfigurationError(f"Malformed Jira base URL {base_url!r}: query and fragment are not allowed")
    return base_url.rstrip("/")


@dataclass(frozen=True)
class JiraConfig:
    """
    Args:
        base_url:              Jira instance root URL (e.g. 'https://myorg.atlassian.net')
        username:              Email associated with the Jira account
        api_token:             API token generated from Atlassian account settings
        write_mode:            WriteMode.LIVE to really mutate comments, WriteMode.DRY_RUN to only log
        restrict_to_issue_key: When set, the client only ever touches this one issue
    """

    base_url: str
    username: str
    api_token: str
    write_mode: WriteMode = WriteMode.DRY_RUN
    restrict_to_issue_key: str | None = None

    @property
    def write_enabled(self) -> bool:
        return self.write_mode.is_live

    @property
    def restriction(self) -> IssueKeyRestriction:
        return IssueKeyRestriction(self.restrict_to_issue_key)

    def __repr__(self) -> str:
        #never leak the token into logs
        return (
            f"JiraConfig(base_url={self.base_url!r}, username={self.username!r}, "
            f"write_mode={self.write_mode.value!r}, restrict_to_issue_key={self.restrict_to_issue_key!r})"
        )

    @classmethod
    def from_env(cls, *, interactive: bool = False) -> JiraConfig:
        """Build a JiraConfig from environment variables.

        If "interactive = True" and any required variable is missing, the user will be prompted.

        Raises:
            ConfigurationError: If required variables are missing and interactive is False.
        """
        base_url = os.environ.get("JIRA_BASE_URL", "")
        username = os.environ.get("JIRA_USER_EMAIL", "")
        api_token = os.environ.get("JIRA_API_TOKEN", "")

        if interactive:
            if not base_url:
                base_url = input("Jira base URL (e.g. https://myorg.atlassian.net): ").strip()
            if not username:
                username = input("Jira user email: ").strip()
            if not api_token:
                api_token = getpass("Jira API token: ")
        else:
            #collects the missing fields and raises an error alerting to the missing values
            missing = [name for name, val in [
                ("JIRA_BASE_URL", base_url),
                ("JIRA_USER_EMAIL", username),
                ("JIRA_API_TOKEN", api_token),
            ] if not val]
            if missing:
                raise ConfigurationError(
                    f"Missing required environment variables: {', '.join(missing)}. "
                    "Set them or use interactive=True."
                )

        write_enabled = os.environ.get("JIRA_WRITE_ENABLED", "").strip().lower() in _TRUTHY
        restrict_to = os.environ.get("JIRA_RESTRICT_TO_ISSUE", "").strip() or None

        return cls(
            base_url=base_url,
            username=username,
            api_token=api_token,
            write_mode=WriteMode.from_flag(write_enabled),
            restrict_to_issue_key=restrict_to,
        )
