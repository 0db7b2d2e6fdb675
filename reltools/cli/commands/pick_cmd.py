from __future__ import annotations

from collections.abc import Sequence

import typer

from reltools.cli.commands._helpers import (
    exit_with,
    fail_if_err,
    parse_version_or_exit,
    unwrap_or_exit,
)
from reltools.cli.context import CLIContext, build_context
from reltools.core.errors import ErrorCode
from reltools.core.result import Result
from reltools.release.errors import InvalidStatusError, ReleaseError
from reltools.release.model import CommentClient
from reltools.release.notifier import PickNotifier
from reltools.release.pick import PickOutcome, PickStatus
from reltools.services.dry_run import DryRunCommentClient
from reltools.services.gh import (
    GhCommentClient,
    ensure_gh_auth,
    ensure_gh_available,
    fetch_preparation_target,
    fetch_pull_request,
)


pick_app = typer.Typer(add_completion=False, no_args_is_help=True)

_VERSION_OPT = typer.Option(..., "--version", "-v", help="Release version, e.g. 11.4.1")
_TARGET_OPT = typer.Option(..., "--target", help="Preparation pull request number")
_ISSUE_OPT = typer.Option(..., "--release-issue", help="Release tracking issue number")
_REPO_OPT = typer.Option(None, "--repo", help="owner/name (overrides config)")
_DRY_RUN_OPT = typer.Option(False, "--dry-run", help="Print comments instead of posting")


def _resolve_repo(ctx: CLIContext, repo: str | None) -> str:
    slug = repo or ctx.config.comment_repo(ctx.flags)
    if slug is None:
        exit_with("no repository configured (github.repo)", code=ErrorCode.USER_ERROR)
    return slug


def _comment_client(ctx: CLIContext) -> CommentClient:
    if ctx.flags.dry_run:
        return DryRunCommentClient(ctx.console)
    return GhCommentClient(workspace_root=ctx.workspace_root)


def _build_notifier(
    ctx: CLIContext, *, version: str, repo: str, target: int, release_issue: int
) -> PickNotifier:
    v = parse_version_or_exit(version, security=ctx.flags.security)

    fail_if_err(ensure_gh_available(), ctx.console)
    fail_if_err(ensure_gh_auth(workspace_root=ctx.workspace_root), ctx.console)

    prep = unwrap_or_exit(
        fetch_preparation_target(
            workspace_root=ctx.workspace_root,
            repo=repo,
            number=target,
            release_issue=release_issue,
        ),
        ctx.console,
    )
    return PickNotifier(
        v,
        target=prep,
        client=_comment_client(ctx),
        docs_url=ctx.config.release.docs_url,
    )


def _outcomes(
    ctx: CLIContext, *, repo: str, numbers: Sequence[int], status: PickStatus
) -> list[PickOutcome]:
    out: list[PickOutcome] = []
    for number in numbers:
        mr = unwrap_or_exit(
            fetch_pull_request(workspace_root=ctx.workspace_root, repo=repo, number=number),
            ctx.console,
        )
        out.append(PickOutcome(mr, status))
    return out


def _report(ctx: CLIContext, result: Result[bool, ReleaseError], *, what: str) -> None:
    posted = unwrap_or_exit(result, ctx.console)
    if posted:
        ctx.console.success(f"{what} posted")
    else:
        ctx.console.info(f"{what} skipped (nothing to report for this release)")


@pick_app.command("comment")
def comment_cmd(
    version: str = _VERSION_OPT,
    pr: int = typer.Option(..., "--pr", help="Pull request the pick was attempted for"),
    status: str = typer.Option(..., "--status", help="success, denied or failure"),
    reason: str | None = typer.Option(None, "--reason", help="Why the pick was denied"),
    target: int = _TARGET_OPT,
    release_issue: int = _ISSUE_OPT,
    repo: str | None = _REPO_OPT,
    dry_run: bool = _DRY_RUN_OPT,
) -> None:
    """Comment on a pull request with the outcome of its pick."""
    ctx = build_context(dry_run=dry_run)
    slug = _resolve_repo(ctx, repo)
    notifier = _build_notifier(
        ctx, version=version, repo=slug, target=target, release_issue=release_issue
    )

    mr = unwrap_or_exit(
        fetch_pull_request(workspace_root=ctx.workspace_root, repo=slug, number=pr),
        ctx.console,
    )
    try:
        outcome = PickOutcome(mr, status, reason)  # type: ignore[arg-type]
    except InvalidStatusError as e:
        exit_with(str(e), code=ErrorCode.USER_ERROR)

    _report(ctx, notifier.comment(outcome), what=f"{outcome.status} comment on #{pr}")


@pick_app.command("summary")
def summary_cmd(
    version: str = _VERSION_OPT,
    target: int = _TARGET_OPT,
    release_issue: int = _ISSUE_OPT,
    picked: list[int] = typer.Option([], "--picked", help="Picked pull request number"),
    unpicked: list[int] = typer.Option([], "--unpicked", help="Unpicked pull request number"),
    repo: str | None = _REPO_OPT,
    dry_run: bool = _DRY_RUN_OPT,
) -> None:
    """Summarize picked and unpicked pull requests on the preparation pull request."""
    ctx = build_context(dry_run=dry_run)
    slug = _resolve_repo(ctx, repo)
    notifier = _build_notifier(
        ctx, version=version, repo=slug, target=target, release_issue=release_issue
    )

    picked_outcomes = _outcomes(ctx, repo=slug, numbers=picked, status=PickStatus.SUCCESS)
    unpicked_outcomes = _outcomes(ctx, repo=slug, numbers=unpicked, status=PickStatus.FAILURE)
    _report(ctx, notifier.summary(picked_outcomes, unpicked_outcomes), what="summary")


@pick_app.command("blog-post")
def blog_post_cmd(
    version: str = _VERSION_OPT,
    target: int = _TARGET_OPT,
    release_issue: int = _ISSUE_OPT,
    picked: list[int] = typer.Option([], "--picked", help="Picked pull request number"),
    repo: str | None = _REPO_OPT,
    dry_run: bool = _DRY_RUN_OPT,
) -> None:
    """Post the blog-post list of picked pull requests on the release issue."""
    ctx = build_context(dry_run=dry_run)
    slug = _resolve_repo(ctx, repo)
    notifier = _build_notifier(
        ctx, version=version, repo=slug, target=target, release_issue=release_issue
    )

    picked_outcomes = _outcomes(ctx, repo=slug, numbers=picked, status=PickStatus.SUCCESS)
    _report(ctx, notifier.blog_post_summary(picked_outcomes), what="blog post summary")
