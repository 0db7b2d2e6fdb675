"""Pick-into label naming.

Merge requests that should be backported carry a `Pick into X.Y` label; the
notifier removes it with an `/unlabel` quick action once a pick attempt is
done, whatever the outcome.
"""

from __future__ import annotations

from reltools.release.version import VersionIdentifier

__all__ = ["pick_into_label", "pick_into_reference"]


def pick_into_label(version: VersionIdentifier) -> str:
    return f"Pick into {version.to_minor}"


def pick_into_reference(version: VersionIdentifier) -> str:
    """The label as written in a quick action: `~"Pick into 11.4"`."""
    return f'~"{pick_into_label(version)}"'
