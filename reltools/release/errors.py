"""Error types for the release domain.

Two families live here:

- Exceptions for inputs that must never reach the domain (a malformed version
  string, an unknown pick status). They propagate to the caller, which aborts
  the release action.
- `ReleaseError`, the payload carried by `Err` when a collaborator (gh, the
  comment transport) fails. Those are values, not exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

__all__ = [
    "InvalidStatusError",
    "MalformedVersionError",
    "ReleaseError",
    "ReleaseErrorKind",
    "ReleaseToolsError",
]


class ReleaseToolsError(ValueError):
    """Base class for release domain input errors."""


class MalformedVersionError(ReleaseToolsError):
    def __init__(self, text: str, reason: str | None = None) -> None:
        self.text = text
        self.reason = reason
        message = f"malformed version: {text!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidStatusError(ReleaseToolsError):
    def __init__(self, status: object) -> None:
        self.status = status
        super().__init__(f"invalid pick status: {status!r} (expected success, denied or failure)")


ReleaseErrorKind = Literal[
    "gh_missing",
    "gh_auth_required",
    "invalid_input",
    "not_found",
    "comment_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
