from __future__ import annotations

import json
from pathlib import Path
from zipfile import ZipFile

import pytest
import typer

from sdkrel.cli.context import CLIContext
from sdkrel.core.errors import ErrorCode
from sdkrel.core.workspace import Workspace
from sdkrel.output.console import MockConsole

CATALOG_TOML = """
[[library]]
artifact_id = "firebase-common"
path = ":firebase-common"

[[library]]
artifact_id = "firebase-firestore"
path = ":firebase-firestore"
depends_on = ["firebase-common"]

[[library]]
artifact_id = "firebase-firestore-ktx"
path = ":firebase-firestore:ktx"
publish_docs = false
releases_with = ["firebase-firestore"]
"""


@pytest.fixture
def console(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> MockConsole:
    import sdkrel.cli.commands.release_cmd as release_cmd

    (tmp_path / "libraries.toml").write_text(CATALOG_TOML, encoding="utf-8")
    mock = MockConsole()
    ctx = CLIContext(workspace=Workspace(root=tmp_path), console=mock)
    monkeypatch.setattr(release_cmd, "build_context", lambda: ctx)
    return mock


def test_list_expands_companions(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import list_cmd

    list_cmd(projects="firebase-firestore-ktx", strict=False)

    assert console.find("from projectsToPublish")
    assert "- :firebase-firestore (firebase-firestore)" in console.messages
    assert "- :firebase-firestore:ktx (firebase-firestore-ktx, no docs)" in console.messages


def test_list_reads_release_config(console: MockConsole, tmp_path: Path) -> None:
    from sdkrel.cli.commands.release_cmd import list_cmd

    (tmp_path / "release.json").write_text(
        '{"name": "m140", "libraries": [":firebase-common"]}', encoding="utf-8"
    )

    list_cmd(projects=None, strict=False)

    assert console.find("from release config")
    assert "- :firebase-common (firebase-common)" in console.messages


def test_list_with_nothing_selected(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import list_cmd

    list_cmd(projects=None, strict=False)

    assert console.messages == ["info: no libraries selected"]


def test_list_warns_on_unknown_ids(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import list_cmd

    list_cmd(projects="firebase-common,firebase-typo", strict=False)

    assert console.has_warning()
    assert console.find("firebase-typo")


def test_list_strict_fails_on_unknown_ids(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import list_cmd

    with pytest.raises(typer.Exit) as exc:
        list_cmd(projects="firebase-common,firebase-typo", strict=True)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert console.has_error()
    assert console.messages == [
        "error: Unknown artifact ids:",
        "- firebase-typo",
        "hint: Check the artifact_id entries in the catalog.",
    ]


def test_check_fails_without_projects(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import check_cmd

    with pytest.raises(typer.Exit) as exc:
        check_cmd(projects=None, strict=False)

    assert exc.value.exit_code == int(ErrorCode.RELEASE_ERROR)
    assert console.find("No projects to release")


def test_check_reports_missing_head_dependencies(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import check_cmd

    with pytest.raises(typer.Exit) as exc:
        check_cmd(projects="firebase-firestore", strict=False)

    assert exc.value.exit_code == int(ErrorCode.RELEASE_ERROR)
    assert "- firebase-common" in console.messages
    assert len(console.find("firebase-common")) == 1


def test_check_passes(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import check_cmd

    check_cmd(projects="firebase-firestore,firebase-common", strict=False)

    assert console.messages == ["OK 3 libraries ready to release"]


def test_check_invalid_catalog(console: MockConsole, tmp_path: Path) -> None:
    from sdkrel.cli.commands.release_cmd import check_cmd

    (tmp_path / "libraries.toml").write_text("[[library]\n", encoding="utf-8")

    with pytest.raises(typer.Exit) as exc:
        check_cmd(projects="firebase-common", strict=False)

    assert exc.value.exit_code == int(ErrorCode.CONFIG_ERROR)


def test_plan_publish(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import plan_cmd

    plan_cmd(kind="publish", projects="firebase-common", strict=False)

    assert console.find("Plan: publish")
    assert "- :firebase-common:publishMavenAarPublicationToBuildDirRepository" in console.messages
    assert console.messages[-1] == "Publishing the following libraries:\n:firebase-common"


def test_plan_rejects_unknown_kind(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import plan_cmd

    with pytest.raises(typer.Exit) as exc:
        plan_cmd(kind="deploy", projects="firebase-common", strict=False)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_plan_publish_all_needs_no_selection(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import plan_cmd

    plan_cmd(kind="publish_all", projects=None, strict=False)

    assert "- publishAllToBuildDir" in console.messages


def test_plan_bom_needs_no_selection(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import plan_cmd

    plan_cmd(kind="bom", projects=None, strict=False)

    assert console.messages[-4:] == [
        "- generateBom",
        "    -> bom",
        "- buildBomZip",
        "    -> bom.zip",
    ]


def test_plan_release_config_requires_selection(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import plan_cmd

    with pytest.raises(typer.Exit) as exc:
        plan_cmd(kind="release_config", projects=None, strict=False)

    assert exc.value.exit_code == int(ErrorCode.RELEASE_ERROR)


def test_generate_writes_release_files(console: MockConsole, tmp_path: Path) -> None:
    from sdkrel.cli.commands.release_cmd import generate_cmd

    generate_cmd(
        current_release="m140",
        past_release="m139",
        print_output=False,
        projects="firebase-firestore",
        strict=False,
    )

    data = json.loads((tmp_path / "release.json").read_text(encoding="utf-8"))
    assert data == {
        "name": "m140",
        "past_name": "m139",
        "libraries": [":firebase-firestore", ":firebase-firestore:ktx"],
    }
    assert (tmp_path / "release_report.md").exists()
    assert console.find("release.json")


def test_generated_config_is_used_by_later_commands(
    console: MockConsole, tmp_path: Path
) -> None:
    from sdkrel.cli.commands.release_cmd import generate_cmd, list_cmd

    generate_cmd(
        current_release="m140",
        past_release=None,
        print_output=True,
        projects="firebase-common",
        strict=False,
    )
    console.outputs.clear()

    list_cmd(projects=None, strict=False)

    assert console.find("from release config")
    assert "- :firebase-common (firebase-common)" in console.messages


def test_generate_refuses_empty_release(console: MockConsole, tmp_path: Path) -> None:
    from sdkrel.cli.commands.release_cmd import generate_cmd

    with pytest.raises(typer.Exit) as exc:
        generate_cmd(
            current_release="m140",
            past_release=None,
            print_output=False,
            projects="firebase-typo",
            strict=False,
        )

    assert exc.value.exit_code == int(ErrorCode.RELEASE_ERROR)
    assert not (tmp_path / "release.json").exists()


def test_zip_maven_repository(console: MockConsole, tmp_path: Path) -> None:
    from sdkrel.cli.commands.release_cmd import zip_cmd

    repo = tmp_path / "build" / "m2repository"
    repo.mkdir(parents=True)
    (repo / "maven-metadata.xml").write_text("<metadata/>", encoding="utf-8")

    zip_cmd(bundle="m2repository")

    with ZipFile(tmp_path / "build" / "m2repository.zip") as zf:
        assert zf.namelist() == ["maven-metadata.xml"]
    assert console.find("m2repository.zip")


def test_zip_missing_source(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import zip_cmd

    with pytest.raises(typer.Exit) as exc:
        zip_cmd(bundle="kotlindoc")

    assert exc.value.exit_code == int(ErrorCode.IO_ERROR)


def test_zip_rejects_unknown_bundle(console: MockConsole) -> None:
    from sdkrel.cli.commands.release_cmd import zip_cmd

    with pytest.raises(typer.Exit) as exc:
        zip_cmd(bundle="apk")

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
