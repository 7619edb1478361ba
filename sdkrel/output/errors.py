"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sdkrel.core.errors import ErrorCode
from sdkrel.output.console import Style
from sdkrel.release.errors import ReleaseError

if TYPE_CHECKING:
    from sdkrel.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    match error:
        case ReleaseError(kind="missing_head_dependencies" | "unknown_artifacts", details=items):
            for item in items:
                console.bullet(item)
        case _:
            pass
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error.kind:
        case "invalid_input" | "unknown_artifacts":
            return int(ErrorCode.USER_ERROR)
        case "invalid_catalog" | "invalid_release_config":
            return int(ErrorCode.CONFIG_ERROR)
        case "no_projects" | "missing_head_dependencies":
            return int(ErrorCode.RELEASE_ERROR)
        case "io_failed":
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
