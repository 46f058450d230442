"""Core client contract definitions."""

from abc import ABC, abstractmethod

from tracker_client_interface.issue import Comment, Issue, ServerInfo

__all__ = ["IssueTrackerClient"]


class IssueTrackerClient(ABC):
    """Narrow view of an issue tracker used by the TODO automation."""

    # ------------------------------------------------------------------
    # Server identity
    # ------------------------------------------------------------------
    @abstractmethod
    def get_server_info(self) -> ServerInfo:
        """Get the server identity."""
        """
        Notes on usage: Fetched at most once per client; a failed fetch is not remembered.

        Raises:
            RemoteServiceError: If the tracker could not be reached

        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Issue access
    # ------------------------------------------------------------------
    @abstractmethod
    def get_issue(self, key: str) -> Issue:
        """Get an issue."""
        """Args:
            key: The unique key of the issue

        Notes on usage: Repeated calls for the same key return the same cached Issue

        Returns:
            The corresponding Issue instance

        Raises:
            InvariantViolation: If the client is restricted to a different key
            IssueNotFoundError: If no issue with that key exists
            RemoteServiceError: If the fetch fails

        """
        raise NotImplementedError

    @abstractmethod
    def search_issues(self, query: str) -> list[Issue]:
        """Search issues, with their comments included."""
        """Args:
            query: Tracker query string (JQL for Jira)

        Returns:
            Issues in the order the tracker returned them, without duplicate keys

        Raises:
            RemoteServiceError: If the search fails. No partial results are returned

        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Comment mutations
    # ------------------------------------------------------------------
    @abstractmethod
    def add_comment(self, issue: Issue, comment: Comment) -> None:
        """Add a comment to an issue."""
        raise NotImplementedError

    @abstractmethod
    def update_comment(self, comment: Comment) -> None:
        """Replace the body of an existing comment."""
        raise NotImplementedError

    @abstractmethod
    def delete_comment(self, issue: Issue, comment: Comment) -> None:
        """Delete a comment from an issue."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------
    @abstractmethod
    def get_view_url(self, issue: Issue) -> str:
        """Return the URL a person can open to view the issue."""
        raise NotImplementedError
