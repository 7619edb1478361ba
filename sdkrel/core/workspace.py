"""Workspace detection and paths.

The workspace is the root directory of the SDK checkout. It is identified by
an ``sdkrel.toml`` config file or a ``libraries.toml`` catalog.

Detection order:
1. explicit root (``--root``)
2. ``SDKREL_ROOT`` environment variable
3. nearest ancestor of the current directory holding a marker file
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .config import CATALOG_FILE, CONFIG_FILE, Config
from .result import Err, Ok, Result

__all__ = [
    "ROOT_ENV_VAR",
    "Workspace",
    "WorkspaceError",
    "detect_workspace",
    "find_workspace_upward",
    "is_workspace_root",
]

ROOT_ENV_VAR = "SDKREL_ROOT"

_MARKERS = (CONFIG_FILE, CATALOG_FILE)


@dataclass(frozen=True, slots=True)
class WorkspaceError:
    """Error when workspace cannot be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Workspace:
    """A detected SDK workspace and its configured file locations."""

    root: Path
    config: Config = field(default_factory=Config)

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILE

    @property
    def catalog_path(self) -> Path:
        return self.root / self.config.paths.catalog

    @property
    def release_config_path(self) -> Path:
        """Path to the persisted release config (release.json)."""
        return self.root / self.config.paths.release_config

    @property
    def release_report_path(self) -> Path:
        return self.root / self.config.paths.release_report

    @property
    def build_dir(self) -> Path:
        return self.root / self.config.paths.build_dir

    def with_config(self, config: Config) -> Workspace:
        return Workspace(root=self.root, config=config)

    def __str__(self) -> str:
        return str(self.root)


def is_workspace_root(path: Path) -> bool:
    return any((path / marker).is_file() for marker in _MARKERS)


def find_workspace_upward(start: Path) -> Path | None:
    """Return the nearest directory at or above ``start`` that is a workspace root."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        if is_workspace_root(candidate):
            return candidate
    return None


def detect_workspace(
    root: Path | None = None,
    *,
    cwd: Path | None = None,
) -> Result[Workspace, WorkspaceError]:
    """Detect the workspace root.

    Args:
        root: Explicit root; must exist but need not hold a marker file.
        cwd: Directory to search upward from (defaults to the process cwd).
    """
    if root is not None:
        resolved = root.expanduser().resolve()
        if not resolved.is_dir():
            return Err(WorkspaceError(f"Workspace root is not a directory: {resolved}"))
        return Ok(Workspace(root=resolved))

    env = os.environ.get(ROOT_ENV_VAR)
    if env:
        resolved = Path(env).expanduser().resolve()
        if not resolved.is_dir():
            return Err(
                WorkspaceError(f"{ROOT_ENV_VAR} points to a missing directory: {resolved}")
            )
        return Ok(Workspace(root=resolved))

    start = cwd if cwd is not None else Path.cwd()
    found = find_workspace_upward(start)
    if found is None:
        return Err(
            WorkspaceError(
                f"No workspace found (looked for {' or '.join(_MARKERS)})",
                searched_from=start,
            )
        )
    return Ok(Workspace(root=found))
