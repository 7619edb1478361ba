from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from sdkrel.core.result import Err, Ok, Result
from sdkrel.platform.files import collect_files
from sdkrel.release.errors import ReleaseError
from sdkrel.release.model import BundleKind

BUILD_DIR_REPOSITORY_DIR = "m2repository"
KOTLINDOC_DIR = "kotlindoc"
BOM_DIR = "bom"


@dataclass(frozen=True, slots=True)
class BundleLayout:
    source_dir: Path
    zip_path: Path


def bundle_layout(kind: BundleKind, *, root: Path, build_dir: Path) -> BundleLayout:
    """Where a bundle's contents come from and where its zip goes."""
    match kind:
        case "m2repository":
            return BundleLayout(
                source_dir=build_dir / BUILD_DIR_REPOSITORY_DIR,
                zip_path=build_dir / "m2repository.zip",
            )
        case "kotlindoc":
            return BundleLayout(
                source_dir=build_dir / KOTLINDOC_DIR,
                zip_path=build_dir / "kotlindoc.zip",
            )
        case "bom":
            # The BOM zip is attached to the release from the workspace root.
            return BundleLayout(source_dir=build_dir / BOM_DIR, zip_path=root / "bom.zip")
        case _:
            raise AssertionError(f"unexpected bundle kind: {kind}")


def zip_directory(*, source_dir: Path, zip_path: Path) -> Result[Path, ReleaseError]:
    """Zip every file under source_dir, with paths relative to it."""
    if not source_dir.is_dir():
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"bundle source directory not found: {source_dir}",
                hint="Run the step that produces it first.",
            )
        )

    files = collect_files(source_dir)
    try:
        zip_path.parent.mkdir(parents=True, exist_ok=True)
        # Build outputs can carry mtime=0, which ZIP cannot represent.
        with ZipFile(zip_path, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
            for src, arc in files:
                zf.write(src, arcname=arc)
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to write bundle: {e}",
                hint=str(zip_path),
            )
        )

    return Ok(zip_path)
