from __future__ import annotations

from collections.abc import Iterable, Sequence

from sdkrel.core.config import RELEASE_CONFIG_FILE
from sdkrel.core.result import Err, Ok, Result
from sdkrel.release.errors import ReleaseError
from sdkrel.release.model import LibraryUnit, ReleaseSet
from sdkrel.release.resolver import unknown_artifact_ids


def validate_projects_to_publish(release_set: ReleaseSet) -> Result[None, ReleaseError]:
    """Refuse to continue a release with nothing in it."""
    if release_set.is_empty:
        return Err(
            ReleaseError(
                kind="no_projects",
                message=(
                    "No projects to release. "
                    "Ensure you've specified the projectsToPublish parameter, "
                    f"or have a valid {RELEASE_CONFIG_FILE} file at the root directory."
                ),
                hint="--projects a,b or PROJECTS_TO_PUBLISH=a,b",
            )
        )
    return Ok(None)


def check_head_dependencies(
    release_set: ReleaseSet,
    catalog: Sequence[LibraryUnit],
) -> Result[None, ReleaseError]:
    """Every catalog library a releasing library builds against must release too.

    Dependencies outside the catalog (third-party artifacts) are ignored.
    """
    known = {u.artifact_id for u in catalog}
    releasing = set(release_set.artifact_ids)

    missing: set[str] = set()
    for unit in release_set:
        for dep in unit.depends_on:
            if dep in known and dep not in releasing:
                missing.add(dep)

    if missing:
        ordered = tuple(sorted(missing))
        return Err(
            ReleaseError(
                kind="missing_head_dependencies",
                message="Releasing libraries depend on unreleased libraries:",
                hint="Add them to the release, or depend on a published version instead.",
                details=ordered,
            )
        )
    return Ok(None)


def check_unknown_artifacts(
    catalog: Sequence[LibraryUnit],
    requested: Iterable[str],
) -> Result[None, ReleaseError]:
    unknown = unknown_artifact_ids(catalog, requested)
    if unknown:
        return Err(
            ReleaseError(
                kind="unknown_artifacts",
                message="Unknown artifact ids:",
                hint="Check the artifact_id entries in the catalog.",
                details=unknown,
            )
        )
    return Ok(None)
