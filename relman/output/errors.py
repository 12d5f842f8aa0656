"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relman.core.errors import ErrorCode
from relman.output.console import Style
from relman.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from relman.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error.kind:
        case "invalid_input" | "unknown_target" | "missing_repo":
            return int(ErrorCode.USER_ERROR)
        case "bundle_failed" | "no_platforms":
            return int(ErrorCode.BUILD_ERROR)
        case "package_unreadable" | "write_failed":
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.BUILD_ERROR)
