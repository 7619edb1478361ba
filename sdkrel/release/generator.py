from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sdkrel.core.result import Err, Ok, Result
from sdkrel.platform.files import atomic_write_text
from sdkrel.release.errors import ReleaseError
from sdkrel.release.model import ReleaseConfig, ReleaseSet
from sdkrel.release.release_config import write_release_config


@dataclass(frozen=True, slots=True)
class GeneratedRelease:
    config: ReleaseConfig
    report: str


@dataclass(frozen=True, slots=True)
class WrittenRelease:
    config_path: Path
    report_path: Path


def render_report(*, name: str, past_name: str | None, release_set: ReleaseSet) -> str:
    lines: list[str] = []
    lines.append(f"# Release Report: {name}")
    lines.append("")
    if past_name is not None:
        lines.append(f"Previous release: {past_name}")
        lines.append("")

    lines.append(f"## Libraries ({len(release_set)})")
    for unit in release_set:
        docs = "" if unit.publish_docs else " (no docs)"
        lines.append(f"- `{unit.path}` ({unit.artifact_id}){docs}")

    grouped = [u for u in release_set if u.co_release]
    if grouped:
        lines.append("")
        lines.append("## Co-releasing")
        for unit in grouped:
            lines.append(f"- {unit.artifact_id}: {', '.join(unit.co_release)}")

    return "\n".join(lines).rstrip() + "\n"


def generate_release(
    *,
    name: str,
    past_name: str | None,
    release_set: ReleaseSet,
) -> GeneratedRelease:
    config = ReleaseConfig(name=name, libraries=release_set.paths, past_name=past_name)
    report = render_report(name=name, past_name=past_name, release_set=release_set)
    return GeneratedRelease(config=config, report=report)


def write_generated_release(
    *,
    generated: GeneratedRelease,
    config_path: Path,
    report_path: Path,
) -> Result[WrittenRelease, ReleaseError]:
    written = write_release_config(path=config_path, config=generated.config)
    if isinstance(written, Err):
        return written

    try:
        atomic_write_text(report_path, generated.report, encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to write release report: {e}",
                hint=str(report_path),
            )
        )

    return Ok(WrittenRelease(config_path=config_path, report_path=report_path))
