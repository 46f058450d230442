"""Issue contract - Core issue, comment and server identity representation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any


#frozen so that a comment handed back to the caller can't drift from what the tracker holds
#use with_body() to get an edited copy for update_comment()
@dataclass(frozen=True)
class Comment:
    """A text annotation attached to exactly one Issue.

    ``self_url`` is the locator the tracker uses for update and delete. It is
    None for a comment that has not been created on the tracker yet.
    """

    body: str
    self_url: str | None = None
    id: str | None = None
    author: str | None = None
    created: str | None = None
    updated: str | None = None

    def with_body(self, body: str) -> Comment:
        """Return a copy of this comment carrying a new body."""
        return replace(self, body=body)


@dataclass(frozen=True)
class ServerInfo:
    """Identity of the remote tracker instance."""

    base_url: str
    version: str
    version_numbers: tuple[int, ...] = ()
    deployment_type: str | None = None
    build_number: int | None = None
    server_title: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


class Issue(ABC):
    """Abstract base class representing an issue."""

    @property
    @abstractmethod
    def key(self) -> str:
        """Return the unique key of the issue (e.g. 'ABC-1')."""
        raise NotImplementedError

    @property
    @abstractmethod
    def title(self) -> str:
        """Return the title of the issue."""
        raise NotImplementedError

    @property
    @abstractmethod
    def comments_url(self) -> str:
        """Return the locator new comments are posted to."""
        raise NotImplementedError

    @property
    @abstractmethod
    def comments(self) -> list[Comment]:
        """Return the comments included with the issue payload.

        Comments are only present when the tracker returned them inline. The
        list is a snapshot and is not updated by comment mutations.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def fields(self) -> dict[str, Any]:
        """Return the tracker-defined fields, uninterpreted."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<Issue key={self.key!r} title={self.title!r}>"
