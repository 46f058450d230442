"""Jira Issue, Comment and ServerInfo builders."""
from __future__ import annotations

from typing import Any

from tracker_client_interface.issue import Comment, Issue, ServerInfo

# ------------------------------------------------------------------
# Issue implementation
# ------------------------------------------------------------------
class JiraIssue(Issue):
    """Concrete Issue backed by a Jira issue API response.

    Construct via the module-level ``build_issue()`` factory rather than
    instantiating directly.

    Args:
        key:          The Jira issue key (e.g. 'PROJ-42').
        raw_data:     The whole issue payload from the Jira REST API response.
        comments_url: Where new comments for this issue are posted.
    """

    def __init__(self, key: str, raw_data: dict, comments_url: str) -> None:
        self._key = key
        self._raw = raw_data
        self._comments_url = comments_url
        self._comments = _parse_comments(self.fields.get("comment"))

    @property
    def key(self) -> str:
        return self._key

    @property
    def title(self) -> str:
        #Jira calls "title" a "summary"
        return self.fields.get("summary") or ""

    @property
    def comments_url(self) -> str:
        return self._comments_url

    @property
    def comments(self) -> list[Comment]:
        return list(self._comments)

    @property
    def fields(self) -> dict[str, Any]:
        fields = self._raw.get("fields")
        return fields if isinstance(fields, dict) else {}


def _parse_comments(raw: Any) -> list[Comment]:
    #search results carry {"comments": [...], "total": n}, older payloads a bare list
    if isinstance(raw, dict):
        raw = raw.get("comments")
    if not isinstance(raw, list):
        return []
    return [build_comment(item) for item in raw if isinstance(item, dict)]


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def build_issue(raw_data: dict, base_url: str) -> JiraIssue:
    """Return a JiraIssue from a Jira REST API issue response.

    Args:
        raw_data: The issue payload, containing at least ``key``.
        base_url: The Jira instance base URL, used when the payload has no ``self`` link.

    Returns:
        A JiraIssue instance conforming to the Issue contract.

    """
    key = raw_data["key"]
    self_url = raw_data.get("self")
    if self_url:
        comments_url = f"{self_url.rstrip('/')}/comment"
    else:
        comments_url = f"{base_url.rstrip('/')}/rest/api/3/issue/{key}/comment"
    return JiraIssue(key, raw_data, comments_url)


def build_comment(raw_data: dict) -> Comment:
    """Return a Comment from a Jira comment payload; the body may be ADF or plain text."""
    body = raw_data.get("body")
    if isinstance(body, dict):
        body = _extract_adf_text(body)
    author = raw_data.get("author") or {}
    return Comment(
        body=body or "",
        self_url=raw_data.get("self"),
        id=raw_data.get("id"),
        author=author.get("emailAddress") or author.get("displayName") or None,
        created=raw_data.get("created"),
        updated=raw_data.get("updated"),
    )


def build_server_info(raw_data: dict) -> ServerInfo:
    return ServerInfo(
        base_url=raw_data.get("baseUrl", ""),
        version=raw_data.get("version", ""),
        version_numbers=tuple(raw_data.get("versionNumbers") or ()),
        deployment_type=raw_data.get("deploymentType"),
        build_number=raw_data.get("buildNumber"),
        server_title=raw_data.get("serverTitle"),
        raw=raw_data,
    )


# ---------------------------------------------------------------------------
# ADF - Jira Cloud stores comment bodies in Atlassian Document Format
# ---------------------------------------------------------------------------

_INLINE_CONTAINERS = {"paragraph", "heading"}


def text_to_adf(text: str) -> dict:
    """Convert plain text to an ADF document, one paragraph per line."""
    if not isinstance(text, str):
        raise TypeError("Input must be a string")
    #ADF rejects empty text nodes, so blank lines become empty paragraphs
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": line}] if line else []}
            for line in text.split("\n")
        ],
    }


def _extract_adf_text(node: dict) -> str:
    """Recursively extract plain text from an ADF document node."""
    if not isinstance(node, dict):
        return ""
    node_type = node.get("type")
    if node_type == "text":
        return node.get("text", "")
    if node_type == "hardBreak":
        return "\n"
    parts = [_extract_adf_text(child) for child in node.get("content") or []]
    if node_type in _INLINE_CONTAINERS:
        return "".join(parts)
    return "\n".join(parts)
