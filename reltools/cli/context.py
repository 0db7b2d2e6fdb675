from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from reltools.core.config import (
    Config,
    RuntimeFlags,
    config_path_from_env,
    load_config_or_default,
)
from reltools.core.errors import ErrorCode
from reltools.core.result import Err
from reltools.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    workspace_root: Path
    config: Config
    flags: RuntimeFlags
    console: ConsoleProtocol


def build_context(*, dry_run: bool = False) -> CLIContext:
    """Capture config and environment flags once for this invocation.

    `--dry-run` on the command line adds to `RELTOOLS_DRY_RUN`; it never
    turns it off.
    """
    environ = dict(os.environ)
    workspace_root = Path.cwd()

    config_path = config_path_from_env(environ)
    if not config_path.is_absolute():
        config_path = workspace_root / config_path

    config_result = load_config_or_default(config_path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    flags = RuntimeFlags.from_env(environ)
    if dry_run and not flags.dry_run:
        flags = RuntimeFlags(security=flags.security, dry_run=True)

    return CLIContext(
        workspace_root=workspace_root,
        config=config_result.value,
        flags=flags,
        console=RichConsole(),
    )
