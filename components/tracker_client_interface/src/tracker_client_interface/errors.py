"""Error taxonomy shared by every issue tracker client."""


class TrackerClientError(Exception):
    """Base exception for all issue tracker client errors."""


class ConfigurationError(TrackerClientError):
    """Raised when the client configuration is unusable (e.g. a malformed base URL)."""


class InvariantViolation(TrackerClientError):
    """Raised when a caller breaks a usage contract of the client.

    This is a programming error, e.g. asking for an issue key other than the
    single key the client has been restricted to. It is never retried or
    silently corrected.
    """


class RemoteServiceError(TrackerClientError):
    """Raised when the remote issue service fails (network, auth, server error)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class IssueNotFoundError(RemoteServiceError):
    """Raised when a requested issue or resource does not exist."""
