from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from reltools.core.result import Err, Ok, Result
from reltools.release.errors import ReleaseError
from reltools.release.model import Author, CommentLocation, Issue, MergeRequest
from reltools.release.notifier import DEFAULT_DOCS_URL, PickNotifier
from reltools.release.pick import PickOutcome
from reltools.release.version import VersionIdentifier

UNLABEL = '/unlabel ~"Pick into 11.4"'


@dataclass
class RecordingClient:
    posts: list[tuple[CommentLocation, str]] = field(default_factory=list)

    def post_comment(self, location: CommentLocation, body: str) -> Result[None, ReleaseError]:
        self.posts.append((location, body))
        return Ok(None)

    @property
    def bodies(self) -> list[str]:
        return [body for _, body in self.posts]


class FailingClient:
    def __init__(self) -> None:
        self.calls = 0

    def post_comment(self, location: CommentLocation, body: str) -> Result[None, ReleaseError]:
        self.calls += 1
        return Err(ReleaseError(kind="comment_failed", message="boom"))


@dataclass(frozen=True)
class PrepTarget:
    repo: str = "acme/app"
    identifier: int = 1
    url: str = "https://example.com/prep"
    pick_destination: str = "https://example.com/prep"
    release_issue: Issue = field(
        default_factory=lambda: Issue(
            repo="acme/app",
            identifier=4,
            title="Release 11.4.1",
            url="https://example.com/issue",
            description="",
        )
    )


def _mr(
    identifier: int = 3, *, username: str | None = "liz.lemon", author: bool = True
) -> MergeRequest:
    return MergeRequest(
        repo="acme/app",
        identifier=identifier,
        title=f"Fix {identifier}",
        url=f"https://x/{identifier}",
        author=Author(username) if author else None,
    )


def _notifier(
    version: str = "11.4.1", client: RecordingClient | FailingClient | None = None
) -> tuple[PickNotifier, RecordingClient | FailingClient]:
    c = client if client is not None else RecordingClient()
    notifier = PickNotifier(
        VersionIdentifier.parse(version),
        target=PrepTarget(),
        client=c,
        docs_url="https://docs.example.com/releases",
    )
    return notifier, c


class TestComment:
    def test_success(self) -> None:
        notifier, client = _notifier()
        subject = _mr()

        result = notifier.comment(PickOutcome.success(subject))

        assert result == Ok(True)
        assert isinstance(client, RecordingClient)
        assert len(client.posts) == 1
        location, body = client.posts[0]
        assert location is subject
        assert "Automatically picked into https://example.com/prep" in body
        assert "will merge into\n`11-4-stable`" in body
        assert "ready for `11.4.1`." in body
        assert body.count(UNLABEL) == 1

    def test_denied_with_reason(self) -> None:
        notifier, client = _notifier()

        notifier.comment(PickOutcome.denied(_mr(), "needs P1 label"))

        assert isinstance(client, RecordingClient)
        body = client.bodies[0]
        assert body.startswith("@liz.lemon This merge request")
        assert "could not automatically be picked into\n`11-4-stable`" in body
        assert "for `11.4.1`:\n\n* needs P1 label\n\nThis requires manual intervention." in body
        assert "https://docs.example.com/releases" in body
        assert body.count("/unlabel") == 1
        assert UNLABEL in body

    def test_denied_uses_default_docs_url(self) -> None:
        client = RecordingClient()
        notifier = PickNotifier(
            VersionIdentifier.parse("11.4.1"), target=PrepTarget(), client=client, docs_url=None
        )

        notifier.comment(PickOutcome.denied(_mr()))

        assert f"[the release process documentation]({DEFAULT_DOCS_URL})" in client.bodies[0]

    def test_denied_without_reason(self) -> None:
        notifier, client = _notifier()

        notifier.comment(PickOutcome.denied(_mr()))

        assert isinstance(client, RecordingClient)
        body = client.bodies[0]
        assert "for `11.4.1`. This requires manual intervention.\n\n" in body
        assert "* \n" not in body
        assert "\n* " not in body

    def test_failure(self) -> None:
        notifier, client = _notifier()

        notifier.comment(PickOutcome.failure(_mr()))

        assert isinstance(client, RecordingClient)
        body = client.bodies[0]
        assert body.startswith("@liz.lemon This merge request")
        assert "@@" not in body
        assert "for `11.4.1` and will need manual" in body
        assert "You can either:" in body
        assert "* Create a new MR targeting the source branch of https://example.com/prep" in body
        assert body.count("/unlabel") == 1

    @pytest.mark.parametrize("subject", [_mr(author=False), _mr(username=None), _mr(username="")])
    def test_unknown_author_omits_mention(self, subject: MergeRequest) -> None:
        notifier, client = _notifier()

        notifier.comment(PickOutcome.failure(subject))
        notifier.comment(PickOutcome.denied(subject))

        assert isinstance(client, RecordingClient)
        for body in client.bodies:
            assert "@" not in body
            assert body.startswith("This merge request")

    def test_transport_failure_is_returned_unchanged(self) -> None:
        client = FailingClient()
        notifier, _ = _notifier(client=client)

        result = notifier.comment(PickOutcome.success(_mr()))

        assert isinstance(result, Err)
        assert result.error.kind == "comment_failed"
        assert client.calls == 1


class TestSummary:
    def test_picked_and_unpicked(self) -> None:
        notifier, client = _notifier()
        picked = [PickOutcome.success(_mr(1)), PickOutcome.success(_mr(2))]
        unpicked = [PickOutcome.failure(_mr(3))]

        assert notifier.summary(picked, unpicked) == Ok(True)

        assert isinstance(client, RecordingClient)
        location, body = client.posts[0]
        assert isinstance(location, PrepTarget)
        assert "Successfully picked the following merge requests:\n\n* https://x/1\n* https://x/2" in body
        assert "Failed to pick the following merge requests:\n\n* https://x/3" in body

    def test_only_picked(self) -> None:
        notifier, client = _notifier()

        notifier.summary([PickOutcome.success(_mr(1))], [])

        assert isinstance(client, RecordingClient)
        assert len(client.posts) == 1
        assert "Successfully picked" in client.bodies[0]
        assert "Failed to pick" not in client.bodies[0]

    def test_only_unpicked(self) -> None:
        notifier, client = _notifier()

        notifier.summary([], [PickOutcome.failure(_mr(1))])

        assert isinstance(client, RecordingClient)
        assert "Successfully picked" not in client.bodies[0]
        assert "Failed to pick" in client.bodies[0]

    def test_nothing_to_post(self) -> None:
        notifier, client = _notifier()

        assert notifier.summary([], []) == Ok(False)

        assert isinstance(client, RecordingClient)
        assert client.posts == []

    def test_suppressed_for_monthly(self) -> None:
        notifier, client = _notifier("11.4.0")

        assert notifier.summary([PickOutcome.success(_mr())], []) == Ok(False)

        assert isinstance(client, RecordingClient)
        assert client.posts == []

    def test_posted_for_rc(self) -> None:
        notifier, client = _notifier("11.4.0-rc2")

        assert notifier.summary([PickOutcome.success(_mr())], []) == Ok(True)


class TestBlogPostSummary:
    def test_posts_to_release_issue(self) -> None:
        notifier, client = _notifier()
        picked = [PickOutcome.success(_mr(1)), PickOutcome.success(_mr(2))]

        assert notifier.blog_post_summary(picked) == Ok(True)

        assert isinstance(client, RecordingClient)
        location, body = client.posts[0]
        assert location == PrepTarget().release_issue
        assert "The following merge requests were picked into https://example.com/prep:" in body
        assert "```\n* [Fix 1](https://x/1)\n* [Fix 2](https://x/2)\n```" in body

    def test_nothing_picked(self) -> None:
        notifier, client = _notifier()

        assert notifier.blog_post_summary([]) == Ok(False)

        assert isinstance(client, RecordingClient)
        assert client.posts == []

    @pytest.mark.parametrize("version", ["11.4.0", "11.4.0-rc1", "11.5.1-rc3"])
    def test_suppressed_for_monthly_and_rc(self, version: str) -> None:
        notifier, client = _notifier(version)

        assert notifier.blog_post_summary([PickOutcome.success(_mr())]) == Ok(False)

        assert isinstance(client, RecordingClient)
        assert client.posts == []


def test_custom_label_reference() -> None:
    client = RecordingClient()
    notifier = PickNotifier(
        VersionIdentifier.parse("11.4.1"),
        target=PrepTarget(),
        client=client,
        label_reference=lambda v: f"backport/{v.to_minor}",
    )

    notifier.comment(PickOutcome.success(_mr()))

    assert "/unlabel backport/11.4" in client.bodies[0]
