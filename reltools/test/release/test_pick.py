from __future__ import annotations

import pytest

from reltools.release.errors import InvalidStatusError
from reltools.release.model import Author, MergeRequest
from reltools.release.pick import PickOutcome, PickStatus


def _mr(title: str = "Fix X", url: str = "https://x/1") -> MergeRequest:
    return MergeRequest(
        repo="acme/app", identifier=1, title=title, url=url, author=Author("liz.lemon")
    )


def test_status_from_enum_and_string() -> None:
    assert PickOutcome(_mr(), PickStatus.SUCCESS).status is PickStatus.SUCCESS
    assert PickOutcome(_mr(), "denied").status is PickStatus.DENIED  # type: ignore[arg-type]


@pytest.mark.parametrize("status", ["ok", "", "SUCCESS", None, 1])
def test_invalid_status(status: object) -> None:
    with pytest.raises(InvalidStatusError):
        PickOutcome(_mr(), status)  # type: ignore[arg-type]


def test_detail_kept_for_denied() -> None:
    outcome = PickOutcome.denied(_mr(), "needs P1 label")
    assert outcome.is_denied
    assert outcome.detail == "needs P1 label"


@pytest.mark.parametrize("status", [PickStatus.SUCCESS, PickStatus.FAILURE])
def test_detail_dropped_for_other_statuses(status: PickStatus) -> None:
    assert PickOutcome(_mr(), status, "ignored").detail is None


def test_empty_detail_is_absent() -> None:
    assert PickOutcome.denied(_mr(), "").detail is None


def test_predicates() -> None:
    assert PickOutcome.success(_mr()).is_success
    assert PickOutcome.failure(_mr()).is_failure
    assert not PickOutcome.failure(_mr()).is_success


def test_projections() -> None:
    outcome = PickOutcome.success(_mr())
    assert outcome.title == "Fix X"
    assert outcome.url == "https://x/1"
    assert outcome.to_markdown() == "[Fix X](https://x/1)"


def test_immutable() -> None:
    outcome = PickOutcome.success(_mr())
    with pytest.raises(AttributeError):
        outcome.status = PickStatus.FAILURE  # type: ignore[misc]
