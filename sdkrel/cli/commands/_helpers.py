"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from sdkrel.core.result import Err, Result
from sdkrel.output.errors import print_release_error, release_error_exit_code
from sdkrel.release.errors import ReleaseError

if TYPE_CHECKING:
    from sdkrel.cli.context import CLIContext

T = TypeVar("T")


def unwrap_or_exit(result: Result[T, ReleaseError], ctx: CLIContext) -> T:
    """Return the value of an Ok result, or print the error and exit.

    This helper reduces boilerplate for the common pattern:
        if isinstance(result, Err):
            ctx.console.error(result.error.message)
            raise typer.Exit(code=...)
        value = result.value

    The exit code follows the error kind (see ``release_error_exit_code``).
    """
    if isinstance(result, Err):
        print_release_error(result.error, ctx.console)
        raise typer.Exit(code=release_error_exit_code(result.error))
    return result.value
