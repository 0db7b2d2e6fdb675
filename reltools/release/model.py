"""Capabilities the release domain consumes, and the concrete entities behind them.

The notifier only relies on the protocols; any object with the right
attributes works (fetched pull requests, test doubles).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from reltools.core.result import Result
from reltools.release.errors import ReleaseError

__all__ = [
    "Author",
    "AuthorLike",
    "CommentClient",
    "CommentLocation",
    "Issue",
    "MergeRequest",
    "PickSubject",
    "PreparationMergeRequest",
    "PreparationTarget",
    "ReleaseIssue",
]


class CommentLocation(Protocol):
    """Anything comments can be posted on."""

    @property
    def repo(self) -> str: ...

    @property
    def identifier(self) -> int: ...


class AuthorLike(Protocol):
    @property
    def username(self) -> str | None: ...


class PickSubject(CommentLocation, Protocol):
    """A merged change that a pick was attempted for."""

    @property
    def author(self) -> AuthorLike | None: ...

    @property
    def title(self) -> str: ...

    @property
    def url(self) -> str: ...


class ReleaseIssue(CommentLocation, Protocol):
    @property
    def url(self) -> str: ...

    @property
    def description(self) -> str: ...


class PreparationTarget(CommentLocation, Protocol):
    """The merge request that collects a stable branch's picks."""

    @property
    def url(self) -> str: ...

    @property
    def pick_destination(self) -> str: ...

    @property
    def release_issue(self) -> ReleaseIssue: ...


class CommentClient(Protocol):
    def post_comment(self, location: CommentLocation, body: str) -> Result[None, ReleaseError]:
        """Post `body` on `location`. Failures come back as Err, never raised."""
        ...


@dataclass(frozen=True, slots=True)
class Author:
    username: str | None


@dataclass(frozen=True, slots=True)
class MergeRequest:
    repo: str  # owner/name
    identifier: int
    title: str
    url: str
    author: Author | None
    source_branch: str | None = None
    target_branch: str | None = None


@dataclass(frozen=True, slots=True)
class Issue:
    repo: str
    identifier: int
    title: str
    url: str
    description: str


@dataclass(frozen=True, slots=True)
class PreparationMergeRequest:
    merge_request: MergeRequest
    release_issue: Issue

    @property
    def repo(self) -> str:
        return self.merge_request.repo

    @property
    def identifier(self) -> int:
        return self.merge_request.identifier

    @property
    def url(self) -> str:
        return self.merge_request.url

    @property
    def pick_destination(self) -> str:
        """How comments refer to the place picks land: `` `branch` (url) ``."""
        branch = self.merge_request.source_branch
        if branch:
            return f"`{branch}` ({self.url})"
        return self.url
