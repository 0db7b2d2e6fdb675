"""Cherry-pick notifications.

`PickNotifier` turns pick outcomes into the comments humans read: one per
attempted merge request, a summary on the preparation merge request, and a
blog-post-ready list on the release issue. It decides whether to post at all;
posting itself goes through the injected `CommentClient`.

Every public method returns `Ok(True)` when a comment was posted, `Ok(False)`
when the message was suppressed, or the client's `Err` unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from reltools.core.result import Err, Ok, Result
from reltools.release.errors import ReleaseError
from reltools.release.labels import pick_into_reference
from reltools.release.model import CommentClient, CommentLocation, PickSubject, PreparationTarget
from reltools.release.pick import PickOutcome, PickStatus
from reltools.release.version import VersionIdentifier

__all__ = ["DEFAULT_DOCS_URL", "LabelReference", "PickNotifier"]

DEFAULT_DOCS_URL = "https://about.gitlab.com/handbook/engineering/releases/#gitlabcom-releases-2"

LabelReference = Callable[[VersionIdentifier], str]


def _markdown_list(items: Sequence[str]) -> str:
    return "\n".join(f"* {item}" for item in items)


def _mention(subject: PickSubject) -> str:
    author = subject.author
    username = author.username if author is not None else None
    if not username:
        return ""
    return f"@{username} "


class PickNotifier:
    def __init__(
        self,
        version: VersionIdentifier,
        *,
        target: PreparationTarget,
        client: CommentClient,
        label_reference: LabelReference = pick_into_reference,
        docs_url: str | None = None,
    ) -> None:
        self.version = version
        self.target = target
        self._client = client
        self._label_reference = label_reference
        self._docs_url = docs_url or DEFAULT_DOCS_URL

    def comment(self, outcome: PickOutcome) -> Result[bool, ReleaseError]:
        """Tell the subject's author what happened to their pick."""
        match outcome.status:
            case PickStatus.SUCCESS:
                body = self.success_message(outcome)
            case PickStatus.DENIED:
                body = self.denied_message(outcome)
            case PickStatus.FAILURE:
                body = self.failure_message(outcome)

        return self._post(outcome.subject, body)

    def summary(
        self, picked: Sequence[PickOutcome], unpicked: Sequence[PickOutcome]
    ) -> Result[bool, ReleaseError]:
        """List picked and unpicked merge requests on the preparation merge request."""
        if self.version.is_monthly:
            return Ok(False)
        if not picked and not unpicked:
            return Ok(False)

        sections: list[str] = []
        if picked:
            sections.append(
                "Successfully picked the following merge requests:\n\n"
                f"{_markdown_list([p.url for p in picked])}\n"
            )
        if unpicked:
            sections.append(
                "Failed to pick the following merge requests:\n\n"
                f"{_markdown_list([p.url for p in unpicked])}\n"
            )

        return self._post(self.target, "\n".join(sections))

    def blog_post_summary(self, picked: Sequence[PickOutcome]) -> Result[bool, ReleaseError]:
        """Post the picked list on the release issue, ready to paste into the blog post."""
        if self.version.is_monthly or self.version.is_rc:
            return Ok(False)
        if not picked:
            return Ok(False)

        body = (
            f"The following merge requests were picked into {self.target.pick_destination}:\n"
            "\n"
            "```\n"
            f"{_markdown_list([p.to_markdown() for p in picked])}\n"
            "```\n"
        )
        return self._post(self.target.release_issue, body)

    # Message bodies

    @property
    def label(self) -> str:
        return self._label_reference(self.version)

    def success_message(self, outcome: PickOutcome) -> str:
        return (
            f"Automatically picked into {self.target.pick_destination}, will merge into\n"
            f"`{self.version.stable_branch}` ready for `{self.version}`.\n"
            "\n"
            f"/unlabel {self.label}\n"
        )

    def denied_message(self, outcome: PickOutcome) -> str:
        if outcome.detail:
            reason = f":\n\n* {outcome.detail}\n\n"
        else:
            reason = ". "

        return (
            f"{_mention(outcome.subject)}This merge request could not automatically be picked into\n"
            f"`{self.version.stable_branch}` for `{self.version}`{reason}"
            "This requires manual intervention.\n"
            "\n"
            "Please refer to\n"
            f"[the release process documentation]({self._docs_url})\n"
            "\n"
            f"/unlabel {self.label}\n"
        )

    def failure_message(self, outcome: PickOutcome) -> str:
        destination = self.target.pick_destination
        return (
            f"{_mention(outcome.subject)}This merge request could not automatically be picked into\n"
            f"`{self.version.stable_branch}` for `{self.version}` and will need manual\n"
            "intervention. You can either:\n"
            "\n"
            f"* Create a new MR targeting the source branch of {destination},\n"
            "  and assign to release managers, or\n"
            f"* Solve the conflicts against {destination}, and reassign\n"
            f"  the {self.label} label to this merge request.\n"
            "\n"
            f"/unlabel {self.label}\n"
        )

    def _post(self, location: CommentLocation, body: str) -> Result[bool, ReleaseError]:
        result = self._client.post_comment(location, body)
        if isinstance(result, Err):
            return result
        return Ok(True)
