from __future__ import annotations

from typing import Any, NoReturn, get_args

import typer

from sdkrel.cli.commands._helpers import unwrap_or_exit
from sdkrel.cli.context import CLIContext, build_context
from sdkrel.core.errors import ErrorCode
from sdkrel.output.console import Style
from sdkrel.release.bundle import bundle_layout, zip_directory
from sdkrel.release.catalog import Catalog, load_catalog
from sdkrel.release.checks import (
    check_head_dependencies,
    check_unknown_artifacts,
    validate_projects_to_publish,
)
from sdkrel.release.generator import generate_release, write_generated_release
from sdkrel.release.model import BundleKind, PlanKind
from sdkrel.release.release_config import release_config_to_json
from sdkrel.release.service import ReleasingLibraries, compute_releasing_libraries
from sdkrel.release.workflow import SELECTION_FREE_PLANS, build_plan, execution_order


release_app = typer.Typer(add_completion=False, no_args_is_help=True)

PROJECTS_ENV_VAR = "PROJECTS_TO_PUBLISH"


def _exit(err: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=int(code))


def _projects_option() -> Any:
    return typer.Option(
        None,
        "--projects",
        envvar=PROJECTS_ENV_VAR,
        help="Comma separated artifact ids to release (co-releasing libraries are added)",
    )


def _strict_option() -> Any:
    return typer.Option(False, "--strict", help="Fail on artifact ids missing from the catalog")


def _load_releasing(
    ctx: CLIContext,
    *,
    projects: str | None,
    strict: bool,
) -> tuple[Catalog, ReleasingLibraries]:
    catalog = unwrap_or_exit(load_catalog(ctx.workspace.catalog_path), ctx)
    releasing = unwrap_or_exit(
        compute_releasing_libraries(
            catalog=catalog,
            projects=projects,
            release_config_path=ctx.workspace.release_config_path,
        ),
        ctx,
    )

    if releasing.unknown:
        if strict:
            unwrap_or_exit(check_unknown_artifacts(catalog, releasing.unknown), ctx)
        ctx.console.warning(f"ignoring unknown artifact ids: {', '.join(releasing.unknown)}")

    return catalog, releasing


@release_app.command("list")
def list_cmd(
    projects: str | None = _projects_option(),
    strict: bool = _strict_option(),
) -> None:
    """Show the libraries that release together."""
    ctx = build_context()
    _, releasing = _load_releasing(ctx, projects=projects, strict=strict)

    if releasing.release_set.is_empty:
        ctx.console.info("no libraries selected")
        return

    ctx.console.header(f"Releasing libraries (from {releasing.source})")
    for unit in releasing.release_set:
        docs = "" if unit.publish_docs else ", no docs"
        ctx.console.bullet(f"{unit.path} ({unit.artifact_id}{docs})")


@release_app.command("check")
def check_cmd(
    projects: str | None = _projects_option(),
    strict: bool = _strict_option(),
) -> None:
    """Validate that the release is non-empty and self-contained."""
    ctx = build_context()
    catalog, releasing = _load_releasing(ctx, projects=projects, strict=strict)

    unwrap_or_exit(validate_projects_to_publish(releasing.release_set), ctx)
    unwrap_or_exit(check_head_dependencies(releasing.release_set, catalog), ctx)
    ctx.console.success(f"{len(releasing.release_set)} libraries ready to release")


@release_app.command("plan")
def plan_cmd(
    kind: str = typer.Option(
        "publish",
        "--kind",
        help="publish|semver|validate_pom|publish_local|publish_all|bom|release_config",
    ),
    projects: str | None = _projects_option(),
    strict: bool = _strict_option(),
) -> None:
    """Print the release steps in execution order."""
    if kind not in get_args(PlanKind):
        _exit(f"invalid --kind: {kind}", code=ErrorCode.USER_ERROR)

    ctx = build_context()
    catalog, releasing = _load_releasing(ctx, projects=projects, strict=strict)
    if kind not in SELECTION_FREE_PLANS:
        unwrap_or_exit(validate_projects_to_publish(releasing.release_set), ctx)

    plan = build_plan(kind, releasing.release_set, catalog=catalog)  # type: ignore[arg-type]

    ctx.console.header(f"Plan: {plan.kind}")
    for step in execution_order(plan):
        ctx.console.bullet(step.name)
        if step.outputs:
            ctx.console.print(f"    -> {', '.join(step.outputs)}", Style.DIM)

    if plan.kind == "publish":
        ctx.console.newline()
        ctx.console.print(
            "Publishing the following libraries:\n" + "\n".join(plan.release_set.paths)
        )


@release_app.command("generate")
def generate_cmd(
    current_release: str = typer.Option(
        ..., "--current-release", help="Name of the release being prepared (e.g. m140)"
    ),
    past_release: str | None = typer.Option(
        None, "--past-release", help="Name of the previous release"
    ),
    print_output: bool = typer.Option(
        False, "--print", help="Also print the generated config and report"
    ),
    projects: str | None = _projects_option(),
    strict: bool = _strict_option(),
) -> None:
    """Write release.json and the release report for the resolved libraries."""
    name = current_release.strip()
    if not name:
        _exit("--current-release must not be empty", code=ErrorCode.USER_ERROR)

    ctx = build_context()
    _, releasing = _load_releasing(ctx, projects=projects, strict=strict)
    unwrap_or_exit(validate_projects_to_publish(releasing.release_set), ctx)

    generated = generate_release(
        name=name,
        past_name=(past_release.strip() or None) if past_release else None,
        release_set=releasing.release_set,
    )
    written = unwrap_or_exit(
        write_generated_release(
            generated=generated,
            config_path=ctx.workspace.release_config_path,
            report_path=ctx.workspace.release_report_path,
        ),
        ctx,
    )

    ctx.console.success(str(written.config_path))
    ctx.console.success(str(written.report_path))
    if print_output:
        ctx.console.newline()
        ctx.console.print(release_config_to_json(generated.config).rstrip())
        ctx.console.newline()
        ctx.console.print(generated.report.rstrip())


@release_app.command("zip")
def zip_cmd(
    bundle: str = typer.Option(..., "--bundle", help="m2repository|kotlindoc|bom"),
) -> None:
    """Zip a produced release directory (maven repository, docs, BOM)."""
    if bundle not in get_args(BundleKind):
        _exit(f"invalid --bundle: {bundle}", code=ErrorCode.USER_ERROR)

    ctx = build_context()
    layout = bundle_layout(
        bundle,  # type: ignore[arg-type]
        root=ctx.workspace.root,
        build_dir=ctx.workspace.build_dir,
    )
    created = unwrap_or_exit(
        zip_directory(source_dir=layout.source_dir, zip_path=layout.zip_path), ctx
    )
    ctx.console.success(str(created))
