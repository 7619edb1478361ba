"""Release-set resolution.

Given the catalog of publishable libraries and a selection, compute the set
of libraries that must release together.

Explicit artifact ids are a convenience for developers who may not remember
every companion library, so they are expanded along co-release links. A
release config is the output of an earlier, already closed resolution and is
taken literally.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence

from sdkrel.release.model import LibraryUnit, ReleaseSelection, ReleaseSet

__all__ = [
    "expand_co_releases",
    "parse_projects_property",
    "resolve",
    "unknown_artifact_ids",
]


def _dedupe(units: Iterable[LibraryUnit]) -> list[LibraryUnit]:
    """Drop repeated artifact ids, keeping the first occurrence."""
    seen: set[str] = set()
    out: list[LibraryUnit] = []
    for unit in units:
        if unit.artifact_id in seen:
            continue
        seen.add(unit.artifact_id)
        out.append(unit)
    return out


def expand_co_releases(
    catalog: Sequence[LibraryUnit],
    seeds: Iterable[LibraryUnit],
) -> ReleaseSet:
    """Grow ``seeds`` to everything reachable through ``co_release`` links.

    Traversal is breadth-first over artifact ids. Each id resolves to its
    first catalog entry; ids that are not in the catalog are skipped, including
    seeds. The result is in catalog order.
    """
    units = _dedupe(catalog)
    by_id = {u.artifact_id: u for u in units}

    reached: set[str] = set()
    queue: deque[str] = deque()
    for seed in seeds:
        if seed.artifact_id in by_id and seed.artifact_id not in reached:
            reached.add(seed.artifact_id)
            queue.append(seed.artifact_id)

    while queue:
        current = by_id[queue.popleft()]
        for companion in current.co_release:
            if companion in reached or companion not in by_id:
                continue
            reached.add(companion)
            queue.append(companion)

    return ReleaseSet(tuple(u for u in units if u.artifact_id in reached))


def resolve(catalog: Sequence[LibraryUnit], selection: ReleaseSelection) -> ReleaseSet:
    """Compute the libraries to release for ``selection``.

    Never fails: unknown artifact ids are left out and an empty selection gives
    an empty set. Callers decide whether an empty set is acceptable.
    """
    if selection.artifact_ids is not None:
        requested = set(selection.artifact_ids)
        seeds = [u for u in catalog if u.artifact_id in requested]
        return expand_co_releases(catalog, seeds)

    if selection.release_config is not None:
        listed = set(selection.release_config.libraries)
        return ReleaseSet(tuple(_dedupe(u for u in catalog if u.path in listed)))

    return ReleaseSet()


def unknown_artifact_ids(
    catalog: Sequence[LibraryUnit],
    requested: Iterable[str],
) -> tuple[str, ...]:
    """Requested ids with no catalog entry, in request order."""
    known = {u.artifact_id for u in catalog}
    out: list[str] = []
    for artifact_id in requested:
        if artifact_id not in known and artifact_id not in out:
            out.append(artifact_id)
    return tuple(out)


def parse_projects_property(value: str | None) -> tuple[str, ...] | None:
    """Split a comma-separated ``projectsToPublish`` value into artifact ids.

    A missing or blank value means "not given" (None), which lets the release
    config take over. Splitting ``""`` would give an explicit empty selection
    instead; a blank property is treated as unset so an empty environment
    variable does not hide release.json. A value with only separators (``","``)
    is still an explicit empty selection.
    """
    if value is None or not value.strip():
        return None

    ids: list[str] = []
    for part in value.split(","):
        artifact_id = part.strip()
        if artifact_id and artifact_id not in ids:
            ids.append(artifact_id)
    return tuple(ids)
