"""Release version identifiers.

A release version looks like `11.4.1`, `11.4.0-rc3` or `11.4.0-ee`. Every
branch and tag name the release process uses is derived from it:

    >>> v = VersionIdentifier.parse("11.4.0-rc3")
    >>> v.stable_branch
    '11-4-stable'
    >>> v.tag
    'v11.4.0-rc3'
    >>> str(v.next_patch)
    '11.4.1'

Identifiers are immutable and never persisted; they are rebuilt from the
authoritative version string whenever a release action needs one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from reltools.release.errors import MalformedVersionError

__all__ = ["VersionIdentifier"]


_VERSION_RE = re.compile(
    r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?:-rc([1-9]\d*))?(-ee)?"
)


@dataclass(frozen=True, slots=True)
class VersionIdentifier:
    major: int
    minor: int
    patch: int
    rc: int | None = None
    enterprise: bool = False
    # Not part of the textual form; set by the process context.
    security: bool = False

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise MalformedVersionError(
                    self._describe(), f"{name} must be a non-negative integer"
                )
        if self.rc is not None:
            if isinstance(self.rc, bool) or not isinstance(self.rc, int) or self.rc < 1:
                raise MalformedVersionError(self._describe(), "rc must be a positive integer")

    def _describe(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch} rc={self.rc}"

    @classmethod
    def parse(cls, text: str) -> VersionIdentifier:
        """Parse `MAJOR.MINOR.PATCH[-rcN][-ee]` exactly; surrounding whitespace is rejected.

        Raises:
            MalformedVersionError: text does not follow the grammar.
        """
        m = _VERSION_RE.fullmatch(text)
        if m is None:
            raise MalformedVersionError(text)
        rc = m.group(4)
        return cls(
            major=int(m.group(1)),
            minor=int(m.group(2)),
            patch=int(m.group(3)),
            rc=int(rc) if rc is not None else None,
            enterprise=m.group(5) is not None,
        )

    def __str__(self) -> str:
        text = self.to_patch
        if self.rc is not None:
            text += f"-rc{self.rc}"
        if self.enterprise:
            text += "-ee"
        return text

    # Ordering ignores edition and security: they name the same release.

    @property
    def sort_key(self) -> tuple[int, int, int, bool, int]:
        # A final release sorts after every rc of the same triple.
        return (self.major, self.minor, self.patch, self.rc is None, self.rc or 0)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __le__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self.sort_key <= other.sort_key

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self.sort_key > other.sort_key

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self.sort_key >= other.sort_key

    # Derived names

    @property
    def stable_branch(self) -> str:
        branch = f"{self.major}-{self.minor}-stable"
        if self.enterprise:
            branch += "-ee"
        return branch

    @property
    def tag(self) -> str:
        return f"v{self}"

    @property
    def to_minor(self) -> str:
        """`11.4`; used for milestone and monthly release naming."""
        return f"{self.major}.{self.minor}"

    @property
    def to_patch(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    # Predicates

    @property
    def is_rc(self) -> bool:
        return self.rc is not None

    @property
    def is_monthly(self) -> bool:
        """First release of a minor series: `X.Y.0` without rc."""
        return self.patch == 0 and self.rc is None

    # Successors and variants

    @property
    def next_patch(self) -> VersionIdentifier:
        return replace(self, patch=self.patch + 1, rc=None)

    @property
    def next_minor(self) -> VersionIdentifier:
        return replace(self, minor=self.minor + 1, patch=0, rc=None)

    @property
    def next_major(self) -> VersionIdentifier:
        return replace(self, major=self.major + 1, minor=0, patch=0, rc=None)

    @property
    def previous_patch(self) -> VersionIdentifier | None:
        if self.patch == 0:
            return None
        return replace(self, patch=self.patch - 1, rc=None)

    @property
    def without_rc(self) -> VersionIdentifier:
        return replace(self, rc=None)

    def to_ce(self) -> VersionIdentifier:
        return replace(self, enterprise=False)

    def to_ee(self) -> VersionIdentifier:
        return replace(self, enterprise=True)

    def with_security(self, security: bool = True) -> VersionIdentifier:
        return replace(self, security=security)
