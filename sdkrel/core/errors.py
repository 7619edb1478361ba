"""Process exit codes for ``sdkrel`` commands.

CI pipelines branch on these, so the values are fixed: a bad invocation, a
broken catalog and a refused release each exit differently.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    # bad option value, unknown artifact with --strict
    USER_ERROR = 1
    # unreadable sdkrel.toml, libraries.toml or release.json
    CONFIG_ERROR = 2
    # nothing to release, unreleased head dependencies
    RELEASE_ERROR = 3
    IO_ERROR = 5
