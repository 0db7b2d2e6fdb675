from __future__ import annotations

import typer

from reltools.cli.commands._helpers import (
    exit_with,
    fail_if_err,
    parse_version_or_exit,
    unwrap_or_exit,
)
from reltools.cli.context import build_context
from reltools.core.errors import ErrorCode
from reltools.output.console import Style
from reltools.release.errors import MalformedVersionError
from reltools.release.labels import pick_into_label
from reltools.release.versions import latest_of, next_security_versions
from reltools.services.gh import ensure_gh_auth, ensure_gh_available, fetch_version_catalog


version_app = typer.Typer(add_completion=False, no_args_is_help=True)


@version_app.command("info")
def info_cmd(
    version: str = typer.Argument(..., help="Version, e.g. 11.4.1 or 11.4.0-rc3"),
) -> None:
    """Show the names derived from a version."""
    ctx = build_context()
    v = parse_version_or_exit(version, security=ctx.flags.security)

    rows = [
        ("version", str(v)),
        ("tag", v.tag),
        ("stable branch", v.stable_branch),
        ("pick label", pick_into_label(v)),
        ("monthly", "yes" if v.is_monthly else "no"),
        ("release candidate", "yes" if v.is_rc else "no"),
        ("security", "yes" if v.security else "no"),
        ("next patch", str(v.next_patch)),
        ("next minor", str(v.next_minor)),
        ("next major", str(v.next_major)),
    ]
    ctx.console.header(f"Version {v}")
    for label, value in rows:
        ctx.console.print(f"{label:<18} {value}")


@version_app.command("latest")
def latest_cmd(
    versions: list[str] = typer.Argument(..., help="Known versions (X.Y.Z)"),
    count: int = typer.Option(3, "--count", min=1, help="Number of minor series"),
) -> None:
    """Show the latest patch of the newest minor series."""
    ctx = build_context()
    try:
        found = latest_of(versions, count)
    except MalformedVersionError as e:
        exit_with(str(e), code=ErrorCode.USER_ERROR)

    for v in found:
        ctx.console.print(v)


@version_app.command("next-security")
def next_security_cmd(
    versions: list[str] | None = typer.Argument(
        None, help="Known versions; read from the repo's releases when omitted"
    ),
    repo: str | None = typer.Option(None, "--repo", help="owner/name (overrides config)"),
) -> None:
    """Propose the next security patch versions."""
    ctx = build_context()
    count = ctx.config.release.security_versions

    known = list(versions or [])
    if not known:
        slug = repo or ctx.config.github.repo
        if slug is None:
            exit_with(
                "no versions given and no repository configured (github.repo)",
                code=ErrorCode.USER_ERROR,
            )

        fail_if_err(ensure_gh_available(), ctx.console)
        fail_if_err(ensure_gh_auth(workspace_root=ctx.workspace_root), ctx.console)
        ctx.console.print(f"reading releases from {slug}", Style.DIM)
        known = unwrap_or_exit(
            fetch_version_catalog(workspace_root=ctx.workspace_root, repo=slug),
            ctx.console,
        )
        if not known:
            exit_with(f"no releases found in {slug}", code=ErrorCode.USER_ERROR)

    try:
        proposed = next_security_versions(known, count)
    except MalformedVersionError as e:
        exit_with(str(e), code=ErrorCode.USER_ERROR)

    for v in proposed:
        ctx.console.print(v)
