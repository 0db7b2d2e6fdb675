"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn, TypeVar

import typer

from reltools.core.errors import ErrorCode
from reltools.core.result import Err, Ok, Result
from reltools.output.console import ConsoleProtocol, Style
from reltools.release.errors import MalformedVersionError, ReleaseError
from reltools.release.version import VersionIdentifier

T = TypeVar("T")


def exit_with(err: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=int(code))


def release_error_code(kind: str) -> ErrorCode:
    if kind in {"gh_missing", "gh_auth_required"}:
        return ErrorCode.ENV_ERROR
    if kind in {"comment_failed"}:
        return ErrorCode.NETWORK_ERROR
    if kind in {"not_found", "invalid_input"}:
        return ErrorCode.USER_ERROR
    return ErrorCode.NETWORK_ERROR


def unwrap_or_exit(result: Result[T, ReleaseError], console: ConsoleProtocol) -> T:
    """Return the Ok value, or report the ReleaseError and exit."""
    if isinstance(result, Ok):
        return result.value

    error = result.error
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(release_error_code(error.kind)))


def parse_version_or_exit(text: str, *, security: bool = False) -> VersionIdentifier:
    try:
        version = VersionIdentifier.parse(text)
    except MalformedVersionError as e:
        exit_with(str(e), code=ErrorCode.USER_ERROR)
    return version.with_security(security)


def fail_if_err(result: Result[object, ReleaseError], console: ConsoleProtocol) -> None:
    if isinstance(result, Err):
        unwrap_or_exit(result, console)
