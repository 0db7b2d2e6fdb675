from __future__ import annotations

import json
import shutil
from pathlib import Path
from time import sleep

from reltools.core.result import Err, Ok, Result
from reltools.core.structured import as_obj_list, as_str_dict, get_int, get_str, get_table
from reltools.platform.process import ProcessError
from reltools.platform.process import run as run_process
from reltools.release.errors import ReleaseError, ReleaseErrorKind
from reltools.release.model import (
    Author,
    CommentLocation,
    Issue,
    MergeRequest,
    PreparationMergeRequest,
)
from reltools.release.versions import parse_catalog
from reltools.services.timeouts import (
    GH_CATALOG_PAGE_SIZE,
    GH_READ_RETRY_ATTEMPTS,
    GH_READ_RETRY_DELAY_SECONDS,
    GH_TIMEOUT_SECONDS,
)


def _is_transient_gh_error(error: ProcessError) -> bool:
    text = f"{error.stderr}\n{error.stdout}".lower()
    markers = (
        "timed out",
        "timeout",
        "connection reset",
        "connection refused",
        "temporarily unavailable",
        "service unavailable",
        "bad gateway",
        "gateway timeout",
        "network is unreachable",
        "http 429",
        "http 500",
        "http 502",
        "http 503",
        "http 504",
    )
    return any(marker in text for marker in markers)


def _is_not_found(error: ProcessError) -> bool:
    return "http 404" in error.stderr.lower()


def run_gh_read(
    *,
    workspace_root: Path,
    cmd: list[str],
    kind: ReleaseErrorKind,
    message: str,
    hint: str | None = None,
    timeout: float = GH_TIMEOUT_SECONDS,
    retry_attempts: int = GH_READ_RETRY_ATTEMPTS,
) -> Result[str, ReleaseError]:
    attempts = max(1, retry_attempts)
    for attempt in range(attempts):
        result = run_process(cmd, cwd=workspace_root, timeout=timeout)
        if isinstance(result, Ok):
            return result

        error = result.error
        if attempt < attempts - 1 and _is_transient_gh_error(error):
            sleep(GH_READ_RETRY_DELAY_SECONDS * (attempt + 1))
            continue

        return Err(
            ReleaseError(
                kind="not_found" if _is_not_found(error) else kind,
                message=message,
                hint=error.stderr.strip() or hint,
            )
        )

    return Err(ReleaseError(kind=kind, message=message, hint=hint))


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is None:
        return Err(
            ReleaseError(
                kind="gh_missing",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(None)


def ensure_gh_auth(*, workspace_root: Path) -> Result[None, ReleaseError]:
    result = run_process(["gh", "auth", "status"], cwd=workspace_root, timeout=GH_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return Err(
            ReleaseError(
                kind="gh_auth_required",
                message="gh auth required",
                hint="Run: gh auth login",
            )
        )
    return Ok(None)


def gh_api_json(*, workspace_root: Path, endpoint: str) -> Result[object, ReleaseError]:
    result = run_gh_read(
        workspace_root=workspace_root,
        cmd=["gh", "api", endpoint],
        kind="invalid_input",
        message=f"gh api failed: {endpoint}",
        hint=endpoint,
    )
    if isinstance(result, Err):
        return result

    try:
        obj: object = json.loads(result.value)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"gh api returned invalid JSON: {e}",
                hint=endpoint,
            )
        )

    return Ok(obj)


def fetch_pull_request(
    *, workspace_root: Path, repo: str, number: int
) -> Result[MergeRequest, ReleaseError]:
    endpoint = f"repos/{repo}/pulls/{number}"
    obj = gh_api_json(workspace_root=workspace_root, endpoint=endpoint)
    if isinstance(obj, Err):
        return obj

    data = as_str_dict(obj.value)
    if data is None:
        return Err(ReleaseError(kind="invalid_input", message=f"unexpected payload: {endpoint}"))

    title = get_str(data, "title")
    url = get_str(data, "html_url")
    if title is None or url is None:
        return Err(
            ReleaseError(kind="invalid_input", message=f"missing title/html_url: {endpoint}")
        )

    # Deleted accounts come back without a user.
    author: Author | None = None
    user = get_table(data, "user")
    if user is not None:
        author = Author(username=get_str(user, "login"))

    head = get_table(data, "head") or {}
    base = get_table(data, "base") or {}
    return Ok(
        MergeRequest(
            repo=repo,
            identifier=get_int(data, "number") or number,
            title=title,
            url=url,
            author=author,
            source_branch=get_str(head, "ref"),
            target_branch=get_str(base, "ref"),
        )
    )


def fetch_issue(*, workspace_root: Path, repo: str, number: int) -> Result[Issue, ReleaseError]:
    endpoint = f"repos/{repo}/issues/{number}"
    obj = gh_api_json(workspace_root=workspace_root, endpoint=endpoint)
    if isinstance(obj, Err):
        return obj

    data = as_str_dict(obj.value)
    if data is None:
        return Err(ReleaseError(kind="invalid_input", message=f"unexpected payload: {endpoint}"))

    title = get_str(data, "title")
    url = get_str(data, "html_url")
    if title is None or url is None:
        return Err(
            ReleaseError(kind="invalid_input", message=f"missing title/html_url: {endpoint}")
        )

    body = data.get("body")
    return Ok(
        Issue(
            repo=repo,
            identifier=get_int(data, "number") or number,
            title=title,
            url=url,
            description=body if isinstance(body, str) else "",
        )
    )


def fetch_preparation_target(
    *, workspace_root: Path, repo: str, number: int, release_issue: int
) -> Result[PreparationMergeRequest, ReleaseError]:
    mr = fetch_pull_request(workspace_root=workspace_root, repo=repo, number=number)
    if isinstance(mr, Err):
        return mr

    issue = fetch_issue(workspace_root=workspace_root, repo=repo, number=release_issue)
    if isinstance(issue, Err):
        return issue

    return Ok(PreparationMergeRequest(merge_request=mr.value, release_issue=issue.value))


def fetch_version_catalog(
    *, workspace_root: Path, repo: str, page_size: int = GH_CATALOG_PAGE_SIZE
) -> Result[list[str], ReleaseError]:
    """Plain version strings of every published release in `repo`.

    Pages are requested until one comes back short.
    """
    tags: list[str] = []
    page = 1
    while True:
        obj = gh_api_json(
            workspace_root=workspace_root,
            endpoint=f"repos/{repo}/releases?per_page={page_size}&page={page}",
        )
        if isinstance(obj, Err):
            return obj

        raw = as_obj_list(obj.value)
        if raw is None:
            return Err(
                ReleaseError(kind="invalid_input", message=f"unexpected releases payload: {repo}")
            )

        for item in raw:
            d = as_str_dict(item)
            if d is None:
                continue
            if d.get("draft") is True:
                continue
            tag = get_str(d, "tag_name")
            if tag is not None:
                tags.append(tag)

        if len(raw) < page_size:
            break
        page += 1

    return Ok(parse_catalog(tags))


class GhCommentClient:
    """Posts comments through `gh api`.

    Pull requests and issues share the issue comments endpoint.
    """

    def __init__(self, *, workspace_root: Path) -> None:
        self._workspace_root = workspace_root

    def post_comment(self, location: CommentLocation, body: str) -> Result[None, ReleaseError]:
        endpoint = f"repos/{location.repo}/issues/{location.identifier}/comments"
        cmd = ["gh", "api", "--method", "POST", endpoint, "-f", f"body={body}"]
        result = run_process(cmd, cwd=self._workspace_root, timeout=GH_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="comment_failed",
                    message=f"failed to comment on {location.repo}#{location.identifier}",
                    hint=result.error.stderr.strip() or None,
                )
            )
        return Ok(None)
