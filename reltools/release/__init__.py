"""Release domain: version naming and cherry-pick notifications.

Nothing in this package performs I/O on its own; collaborators (comment
transport, version catalog) are passed in by the caller.
"""

from .errors import InvalidStatusError, MalformedVersionError, ReleaseError
from .notifier import DEFAULT_DOCS_URL, PickNotifier
from .pick import PickOutcome, PickStatus
from .version import VersionIdentifier
from .versions import compare, latest, latest_of, next_security_versions, next_versions

__all__ = [
    "DEFAULT_DOCS_URL",
    "InvalidStatusError",
    "MalformedVersionError",
    "PickNotifier",
    "PickOutcome",
    "PickStatus",
    "ReleaseError",
    "VersionIdentifier",
    "compare",
    "latest",
    "latest_of",
    "next_security_versions",
    "next_versions",
]
