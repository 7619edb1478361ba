"""Error types for the release domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "invalid_input",
    "invalid_catalog",
    "invalid_release_config",
    "no_projects",
    "unknown_artifacts",
    "missing_head_dependencies",
    "io_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    ``details`` carries the offending items (artifact ids, paths) so the CLI
    can list them without parsing ``message``.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    details: tuple[str, ...] = ()
