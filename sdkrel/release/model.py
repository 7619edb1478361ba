from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

PlanKind = Literal[
    "publish",
    "semver",
    "validate_pom",
    "publish_local",
    "publish_all",
    "bom",
    "release_config",
]
BundleKind = Literal["m2repository", "kotlindoc", "bom"]


@dataclass(frozen=True, slots=True)
class LibraryUnit:
    """One independently publishable library."""

    artifact_id: str
    path: str  # project path, e.g. ":firebase-common"
    # Artifact ids that must be published in the same release as this one.
    co_release: tuple[str, ...] = ()
    publish_docs: bool = True
    # Project-level dependencies (artifact ids) built from HEAD.
    depends_on: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """A previously computed release, persisted as release.json."""

    name: str
    libraries: tuple[str, ...]  # project paths, in release order
    past_name: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseSelection:
    """What the caller asked to release.

    Explicit artifact ids win over the release config whenever they are given,
    even if the tuple is empty.
    """

    artifact_ids: tuple[str, ...] | None = None
    release_config: ReleaseConfig | None = None

    @property
    def is_explicit(self) -> bool:
        return self.artifact_ids is not None


@dataclass(frozen=True, slots=True)
class ReleaseSet:
    """The closed, deduplicated set of libraries releasing together, in catalog order."""

    units: tuple[LibraryUnit, ...] = ()

    def __iter__(self) -> Iterator[LibraryUnit]:
        return iter(self.units)

    def __len__(self) -> int:
        return len(self.units)

    def __contains__(self, artifact_id: object) -> bool:
        return any(u.artifact_id == artifact_id for u in self.units)

    @property
    def is_empty(self) -> bool:
        return not self.units

    @property
    def artifact_ids(self) -> tuple[str, ...]:
        return tuple(u.artifact_id for u in self.units)

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(u.path for u in self.units)


@dataclass(frozen=True, slots=True)
class PublishStep:
    """One externally executed step of a release workflow."""

    name: str
    depends_on: tuple[str, ...] = ()
    artifact_id: str | None = None  # None for aggregate steps
    outputs: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PublishPlan:
    kind: PlanKind
    steps: tuple[PublishStep, ...]
    release_set: ReleaseSet
