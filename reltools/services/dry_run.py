from __future__ import annotations

from reltools.core.result import Ok, Result
from reltools.output.console import ConsoleProtocol, Style
from reltools.release.errors import ReleaseError
from reltools.release.model import CommentLocation


class DryRunCommentClient:
    """Comment client that shows what would be posted instead of posting it."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def post_comment(self, location: CommentLocation, body: str) -> Result[None, ReleaseError]:
        self._console.header(f"(dry-run) comment on {location.repo}#{location.identifier}")
        for line in body.rstrip("\n").splitlines():
            self._console.print(line, Style.DIM)
        return Ok(None)
