from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from sdkrel.core.result import Err, Ok, Result
from sdkrel.release.errors import ReleaseError
from sdkrel.release.model import LibraryUnit, ReleaseSelection, ReleaseSet
from sdkrel.release.release_config import load_release_config_if_present
from sdkrel.release.resolver import parse_projects_property, resolve, unknown_artifact_ids


@dataclass(frozen=True, slots=True)
class ReleasingLibraries:
    """A resolved release plus what was asked for, for reporting."""

    release_set: ReleaseSet
    selection: ReleaseSelection
    unknown: tuple[str, ...] = ()

    @property
    def source(self) -> str:
        if self.selection.is_explicit:
            return "projectsToPublish"
        if self.selection.release_config is not None:
            return "release config"
        return "none"


def build_selection(
    *,
    projects: str | None,
    release_config_path: Path,
) -> Result[ReleaseSelection, ReleaseError]:
    """Turn the projects property and release.json into a selection.

    release.json is only read when no projects were given, so a broken file
    does not block an explicit release.
    """
    artifact_ids = parse_projects_property(projects)
    if artifact_ids is not None:
        return Ok(ReleaseSelection(artifact_ids=artifact_ids))

    loaded = load_release_config_if_present(path=release_config_path)
    if isinstance(loaded, Err):
        return loaded
    return Ok(ReleaseSelection(release_config=loaded.value))


def compute_releasing_libraries(
    *,
    catalog: Sequence[LibraryUnit],
    projects: str | None,
    release_config_path: Path,
) -> Result[ReleasingLibraries, ReleaseError]:
    selection = build_selection(projects=projects, release_config_path=release_config_path)
    if isinstance(selection, Err):
        return selection

    sel = selection.value
    unknown = unknown_artifact_ids(catalog, sel.artifact_ids) if sel.artifact_ids else ()
    return Ok(
        ReleasingLibraries(
            release_set=resolve(catalog, sel),
            selection=sel,
            unknown=unknown,
        )
    )
