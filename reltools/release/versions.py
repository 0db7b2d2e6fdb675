"""Operations over collections of versions.

    >>> latest_of(["1.0.0", "1.1.0", "1.1.1", "1.2.3"], 3)
    ['1.2.3', '1.1.1', '1.0.0']
    >>> next_security_versions(["1.0.0", "1.1.0", "1.1.1", "1.2.3"])
    ['1.2.4', '1.1.2', '1.0.1']
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from reltools.release.errors import MalformedVersionError
from reltools.release.version import VersionIdentifier

__all__ = [
    "DEFAULT_SERIES_COUNT",
    "compare",
    "latest",
    "latest_of",
    "next_security_versions",
    "next_versions",
    "parse_catalog",
]

# Security patches are prepared for this many minor series.
DEFAULT_SERIES_COUNT = 3


def compare(a: VersionIdentifier, b: VersionIdentifier) -> Literal[-1, 0, 1]:
    """Three-way comparison, suitable for `functools.cmp_to_key`."""
    if a.sort_key < b.sort_key:
        return -1
    if a.sort_key > b.sort_key:
        return 1
    return 0


def latest(
    versions: Iterable[VersionIdentifier], count: int = DEFAULT_SERIES_COUNT
) -> list[VersionIdentifier]:
    """Newest `count` versions, keeping only the latest patch of each minor series."""
    seen: set[tuple[int, int]] = set()
    out: list[VersionIdentifier] = []
    for version in sorted(versions, key=lambda v: v.sort_key, reverse=True):
        if len(out) >= count:
            break
        series = (version.major, version.minor)
        if series in seen:
            continue
        seen.add(series)
        out.append(version)
    return out


def latest_of(versions: Iterable[str], count: int = DEFAULT_SERIES_COUNT) -> list[str]:
    """String form of `latest`.

    Raises:
        MalformedVersionError: an entry is not a valid version.
    """
    parsed = [VersionIdentifier.parse(v) for v in versions]
    return [str(v) for v in latest(parsed, count)]


def next_versions(versions: Iterable[str]) -> list[str]:
    return [str(VersionIdentifier.parse(v).next_patch) for v in versions]


def next_security_versions(
    all_versions: Iterable[str], count: int = DEFAULT_SERIES_COUNT
) -> list[str]:
    """Upcoming security patch versions for the `count` newest minor series.

    Older series are ignored on purpose: they no longer receive security fixes.
    """
    return next_versions(latest_of(all_versions, count))


def parse_catalog(tags: Iterable[str]) -> list[str]:
    """Reduce release tag names to plain `X.Y.Z` version strings.

    Accepts `v1.2.3` and `1.2.3`. Release candidates, edition-tagged releases
    and anything unparseable are dropped.
    """
    out: list[str] = []
    for tag in tags:
        text = tag.strip().removeprefix("v")
        try:
            version = VersionIdentifier.parse(text)
        except MalformedVersionError:
            continue
        if version.is_rc or version.enterprise:
            continue
        out.append(str(version))
    return out
