"""Outcome of a single cherry-pick attempt."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from reltools.release.errors import InvalidStatusError
from reltools.release.model import PickSubject

__all__ = ["PickOutcome", "PickStatus"]


class PickStatus(StrEnum):
    SUCCESS = "success"
    # Policy refused the pick (missing severity label, wrong milestone, ...).
    DENIED = "denied"
    # The pick itself failed, typically a merge conflict.
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class PickOutcome:
    """Classification of one attempt to apply `subject` to a stable branch.

    `detail` explains a denial and is only kept for `denied` outcomes; it is
    dropped for the other statuses.
    """

    subject: PickSubject
    status: PickStatus
    detail: str | None = None

    def __post_init__(self) -> None:
        status: object = self.status
        if not isinstance(status, PickStatus):
            try:
                status = PickStatus(status)
            except ValueError:
                raise InvalidStatusError(self.status) from None
            object.__setattr__(self, "status", status)

        if status is not PickStatus.DENIED or not self.detail:
            object.__setattr__(self, "detail", None)

    @classmethod
    def success(cls, subject: PickSubject) -> PickOutcome:
        return cls(subject, PickStatus.SUCCESS)

    @classmethod
    def denied(cls, subject: PickSubject, reason: str | None = None) -> PickOutcome:
        return cls(subject, PickStatus.DENIED, reason)

    @classmethod
    def failure(cls, subject: PickSubject) -> PickOutcome:
        return cls(subject, PickStatus.FAILURE)

    @property
    def is_success(self) -> bool:
        return self.status is PickStatus.SUCCESS

    @property
    def is_denied(self) -> bool:
        return self.status is PickStatus.DENIED

    @property
    def is_failure(self) -> bool:
        return self.status is PickStatus.FAILURE

    @property
    def title(self) -> str:
        return self.subject.title

    @property
    def url(self) -> str:
        return self.subject.url

    def to_markdown(self) -> str:
        return f"[{self.title}]({self.url})"
