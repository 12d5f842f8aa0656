"""Error codes for CLI exit status.

Every command maps its failure onto one of these values so CI jobs can tell
a broken build apart from a misconfigured project.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad option, unknown target, no repository)
    - 2: Environment error (project root not found)
    - 3: Build error (bundler failed, no platform collected)
    - 5: I/O error (unreadable package.json, manifest not written)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
