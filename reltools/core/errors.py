"""Error codes for CLI exit status.

These map to shell exit codes and are used consistently by every command.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    The numeric values should remain stable:
    - 0: Success
    - 1: User error (malformed version, bad arguments)
    - 2: Environment error (gh missing, not authenticated, bad config)
    - 4: Network error (API call failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
