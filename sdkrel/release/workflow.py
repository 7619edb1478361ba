"""Release workflow plans.

A plan names the per-library steps an external build tool must run for a
release and how they depend on each other. Nothing here executes a step.
Step names follow the build tool's task naming: per-library steps are
``<project path>:<task>`` and aggregate steps are bare task names.
"""

from __future__ import annotations

from collections.abc import Sequence
from graphlib import TopologicalSorter

from sdkrel.core.config import RELEASE_CONFIG_FILE, RELEASE_REPORT_FILE
from sdkrel.release.bundle import BOM_DIR, BUILD_DIR_REPOSITORY_DIR, KOTLINDOC_DIR
from sdkrel.release.model import (
    LibraryUnit,
    PlanKind,
    PublishPlan,
    PublishStep,
    ReleaseSet,
)
from sdkrel.release.resolver import expand_co_releases

VALIDATE_PROJECTS_TO_PUBLISH_TASK = "validateProjectsToPublish"
CHECK_HEAD_DEPS_TASK = "checkHeadDependencies"
PUBLISH_RELEASING_LIBS_TO_BUILD_TASK = "publishReleasingLibrariesToBuildDir"
PUBLISH_RELEASING_LIBS_TO_LOCAL_TASK = "publishReleasingLibrariesToMavenLocal"
GENERATE_KOTLINDOC_FOR_RELEASE_TASK = "generateKotlindocForRelease"
SEMVER_CHECK_TASK = "semverCheckForRelease"
VALIDATE_POM_TASK = "validatePomForRelease"
BUILD_MAVEN_ZIP_TASK = "buildMavenZip"
BUILD_KOTLINDOC_ZIP_TASK = "buildKotlindocZip"
FIREBASE_PUBLISH_TASK = "firebasePublish"
PUBLISH_ALL_TO_BUILD_TASK = "publishAllToBuildDir"
GENERATE_BOM_TASK = "generateBom"
BUILD_BOM_ZIP_TASK = "buildBomZip"
RELEASE_GENERATOR_TASK = "generateReleaseConfig"

PUBLISH_TO_BUILD_DIR = "publishMavenAarPublicationToBuildDirRepository"
PUBLISH_TO_MAVEN_LOCAL = "publishMavenAarPublicationToMavenLocal"
KOTLINDOC = "kotlindoc"
SEMVER_CHECK = "semverCheck"
POM_VALIDATION = "isPomDependencyValid"

# Plans that do not act on the selected libraries.
SELECTION_FREE_PLANS: frozenset[PlanKind] = frozenset({"publish_all", "bom"})


def project_task(unit: LibraryUnit, task: str) -> str:
    return f"{unit.path}:{task}"


def _per_library(
    release_set: ReleaseSet,
    task: str,
    aggregate: str,
    *,
    aggregate_outputs: tuple[str, ...] = (),
) -> list[PublishStep]:
    steps = [
        PublishStep(name=project_task(u, task), artifact_id=u.artifact_id) for u in release_set
    ]
    steps.append(
        PublishStep(
            name=aggregate,
            depends_on=tuple(s.name for s in steps),
            outputs=aggregate_outputs,
        )
    )
    return steps


def _kotlindoc_steps(release_set: ReleaseSet) -> list[PublishStep]:
    steps: list[PublishStep] = []
    for unit in release_set:
        # Docs are always generated; only published libraries contribute output.
        outputs = (f"{KOTLINDOC_DIR}/{unit.artifact_id}",) if unit.publish_docs else ()
        steps.append(
            PublishStep(
                name=project_task(unit, KOTLINDOC),
                artifact_id=unit.artifact_id,
                outputs=outputs,
            )
        )
    steps.append(
        PublishStep(
            name=GENERATE_KOTLINDOC_FOR_RELEASE_TASK,
            depends_on=tuple(s.name for s in steps),
            outputs=tuple(o for s in steps for o in s.outputs),
        )
    )
    return steps


def _publish_steps(release_set: ReleaseSet) -> list[PublishStep]:
    steps: list[PublishStep] = [
        PublishStep(name=VALIDATE_PROJECTS_TO_PUBLISH_TASK),
        PublishStep(name=CHECK_HEAD_DEPS_TASK),
    ]
    steps += _per_library(
        release_set,
        PUBLISH_TO_BUILD_DIR,
        PUBLISH_RELEASING_LIBS_TO_BUILD_TASK,
        aggregate_outputs=(BUILD_DIR_REPOSITORY_DIR,),
    )
    steps += _kotlindoc_steps(release_set)
    steps += [
        PublishStep(
            name=BUILD_MAVEN_ZIP_TASK,
            depends_on=(PUBLISH_RELEASING_LIBS_TO_BUILD_TASK,),
            outputs=("m2repository.zip",),
        ),
        PublishStep(
            name=BUILD_KOTLINDOC_ZIP_TASK,
            depends_on=(GENERATE_KOTLINDOC_FOR_RELEASE_TASK,),
            outputs=("kotlindoc.zip",),
        ),
        PublishStep(
            name=FIREBASE_PUBLISH_TASK,
            depends_on=(
                VALIDATE_PROJECTS_TO_PUBLISH_TASK,
                CHECK_HEAD_DEPS_TASK,
                BUILD_MAVEN_ZIP_TASK,
                BUILD_KOTLINDOC_ZIP_TASK,
            ),
        ),
    ]
    return steps


def _bom_steps() -> list[PublishStep]:
    # The BOM is built from published versions, not from the releasing set.
    return [
        PublishStep(name=GENERATE_BOM_TASK, outputs=(BOM_DIR,)),
        PublishStep(
            name=BUILD_BOM_ZIP_TASK,
            depends_on=(GENERATE_BOM_TASK,),
            outputs=("bom.zip",),
        ),
    ]


def build_plan(
    kind: PlanKind,
    release_set: ReleaseSet,
    *,
    catalog: Sequence[LibraryUnit] = (),
) -> PublishPlan:
    """Build the step graph for one workflow.

    ``publish_all`` ignores ``release_set`` and covers the whole catalog;
    ``bom`` does not use it at all.
    """
    match kind:
        case "publish":
            steps = _publish_steps(release_set)
        case "semver":
            steps = _per_library(release_set, SEMVER_CHECK, SEMVER_CHECK_TASK)
        case "validate_pom":
            steps = _per_library(release_set, POM_VALIDATION, VALIDATE_POM_TASK)
        case "publish_local":
            steps = _per_library(
                release_set, PUBLISH_TO_MAVEN_LOCAL, PUBLISH_RELEASING_LIBS_TO_LOCAL_TASK
            )
        case "publish_all":
            release_set = expand_co_releases(catalog, catalog)
            steps = _per_library(release_set, PUBLISH_TO_BUILD_DIR, PUBLISH_ALL_TO_BUILD_TASK)
        case "bom":
            steps = _bom_steps()
        case "release_config":
            steps = [
                PublishStep(
                    name=RELEASE_GENERATOR_TASK,
                    outputs=(RELEASE_CONFIG_FILE, RELEASE_REPORT_FILE),
                )
            ]
        case _:
            raise AssertionError(f"unexpected plan kind: {kind}")

    return PublishPlan(kind=kind, steps=tuple(steps), release_set=release_set)


def execution_order(plan: PublishPlan) -> tuple[PublishStep, ...]:
    """Steps ordered so every step comes after the steps it depends on."""
    by_name = {s.name: s for s in plan.steps}
    sorter: TopologicalSorter[str] = TopologicalSorter()
    for step in plan.steps:
        sorter.add(step.name, *step.depends_on)
    return tuple(by_name[name] for name in sorter.static_order())
