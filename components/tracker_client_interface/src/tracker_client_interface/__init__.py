from tracker_client_interface.client import IssueTrackerClient
from tracker_client_interface.errors import (
    ConfigurationError,
    InvariantViolation,
    IssueNotFoundError,
    RemoteServiceError,
    TrackerClientError,
)
from tracker_client_interface.issue import Comment, Issue, ServerInfo
from tracker_client_interface.policy import IssueKeyRestriction, WriteMode

__all__ = [
    "Comment",
    "ConfigurationError",
    "InvariantViolation",
    "Issue",
    "IssueKeyRestriction",
    "IssueNotFoundError",
    "IssueTrackerClient",
    "RemoteServiceError",
    "ServerInfo",
    "TrackerClientError",
    "WriteMode",
]
