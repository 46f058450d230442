"""Write and scoping policies applied by issue tracker clients."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from tracker_client_interface.errors import InvariantViolation
from tracker_client_interface.issue import Issue

IssueT = TypeVar("IssueT", bound=Issue)


class WriteMode(str, Enum):
    """Whether comment mutations reach the tracker or are only logged."""

    LIVE = "live"
    DRY_RUN = "dry_run"

    @classmethod
    def from_flag(cls, write_enabled: bool) -> WriteMode:
        return cls.LIVE if write_enabled else cls.DRY_RUN

    @property
    def is_live(self) -> bool:
        return self is WriteMode.LIVE


@dataclass(frozen=True)
class IssueKeyRestriction:
    """Confines a client to a single issue key, or to nothing if key is None.

    Used for debugging against one issue: fetches of any other key are a
    usage error, searches silently drop every other issue.
    """

    key: str | None = None

    @property
    def active(self) -> bool:
        return self.key is not None

    def allows(self, issue_key: str) -> bool:
        return self.key is None or issue_key == self.key

    def require(self, issue_key: str) -> None:
        """Raise InvariantViolation if issue_key is outside the restriction."""
        if not self.allows(issue_key):
            raise InvariantViolation(
                f"Client is restricted to issue {self.key!r}, got request for {issue_key!r}"
            )

    def filter(self, issues: Iterable[IssueT]) -> Iterator[IssueT]:
        return (issue for issue in issues if self.allows(issue.key))
