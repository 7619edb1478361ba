from __future__ import annotations

from pathlib import Path

from sdkrel.core.config import read_toml
from sdkrel.core.result import Err, Ok, Result
from sdkrel.core.structured import as_obj_list, as_str_dict, get_bool, get_str, get_str_tuple
from sdkrel.release.errors import ReleaseError
from sdkrel.release.model import LibraryUnit

type Catalog = tuple[LibraryUnit, ...]


def _invalid(message: str, path: Path) -> Err[ReleaseError]:
    return Err(ReleaseError(kind="invalid_catalog", message=message, hint=str(path)))


def symmetrize_co_releases(units: tuple[LibraryUnit, ...]) -> Catalog:
    """Make co-release links two-way.

    If A declares B, B also lists A. Declared order is kept and new back-links
    are appended in catalog order. Self-links are dropped.
    """
    links: dict[str, list[str]] = {}
    for unit in units:
        own = links.setdefault(unit.artifact_id, [])
        for companion in unit.co_release:
            if companion != unit.artifact_id and companion not in own:
                own.append(companion)

    for unit in units:
        for companion in unit.co_release:
            if companion == unit.artifact_id:
                continue
            back = links.setdefault(companion, [])
            if unit.artifact_id not in back:
                back.append(unit.artifact_id)

    return tuple(
        LibraryUnit(
            artifact_id=u.artifact_id,
            path=u.path,
            co_release=tuple(links[u.artifact_id]),
            publish_docs=u.publish_docs,
            depends_on=u.depends_on,
        )
        for u in units
    )


def parse_catalog(data: dict[str, object], *, path: Path) -> Result[Catalog, ReleaseError]:
    entries_obj = data.get("library", [])
    entries = as_obj_list(entries_obj)
    if entries is None:
        return _invalid("[[library]] must be an array of tables", path)

    units: list[LibraryUnit] = []
    seen_ids: set[str] = set()
    seen_paths: set[str] = set()
    for i, item in enumerate(entries):
        entry = as_str_dict(item)
        if entry is None:
            return _invalid(f"library #{i + 1} must be a table", path)

        artifact_id = get_str(entry, "artifact_id")
        if artifact_id is None:
            return _invalid(f"library #{i + 1} is missing artifact_id", path)

        project_path = get_str(entry, "path")
        if project_path is None:
            return _invalid(f"library {artifact_id} is missing path", path)

        if artifact_id in seen_ids:
            return _invalid(f"duplicate artifact_id: {artifact_id}", path)
        if project_path in seen_paths:
            return _invalid(f"library {artifact_id}: duplicate path {project_path}", path)
        seen_ids.add(artifact_id)
        seen_paths.add(project_path)

        releases_with = get_str_tuple(entry, "releases_with")
        if releases_with is None:
            return _invalid(f"library {artifact_id}: releases_with must be a list of strings", path)

        depends_on = get_str_tuple(entry, "depends_on")
        if depends_on is None:
            return _invalid(f"library {artifact_id}: depends_on must be a list of strings", path)

        publish_docs = True
        if "publish_docs" in entry:
            flag = get_bool(entry, "publish_docs")
            if flag is None:
                return _invalid(f"library {artifact_id}: publish_docs must be a boolean", path)
            publish_docs = flag

        units.append(
            LibraryUnit(
                artifact_id=artifact_id,
                path=project_path,
                co_release=releases_with,
                publish_docs=publish_docs,
                depends_on=depends_on,
            )
        )

    return Ok(symmetrize_co_releases(tuple(units)))


def load_catalog(path: Path) -> Result[Catalog, ReleaseError]:
    """Read libraries.toml into catalog entries.

    Any read or shape problem is a fatal ``invalid_catalog`` error; a partially
    parsed catalog is never returned.
    """
    match read_toml(path):
        case Ok(data):
            return parse_catalog(data, path=path)
        case Err(error):
            return _invalid(error.message, path)
