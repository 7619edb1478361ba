from __future__ import annotations

from pathlib import Path

from sdkrel.core.result import Err, Ok
from sdkrel.release.catalog import load_catalog, symmetrize_co_releases
from sdkrel.release.model import LibraryUnit, ReleaseSelection
from sdkrel.release.resolver import resolve


CATALOG_TOML = """
[[library]]
artifact_id = "firebase-common"
path = ":firebase-common"

[[library]]
artifact_id = "firebase-firestore"
path = ":firebase-firestore"
depends_on = ["firebase-common", "grpc-okhttp"]

[[library]]
artifact_id = "firebase-firestore-ktx"
path = ":firebase-firestore:ktx"
publish_docs = false
releases_with = ["firebase-firestore"]
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "libraries.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_catalog(tmp_path: Path) -> None:
    result = load_catalog(_write(tmp_path, CATALOG_TOML))
    assert isinstance(result, Ok)

    common, firestore, ktx = result.value
    assert common == LibraryUnit(artifact_id="firebase-common", path=":firebase-common")
    assert firestore.depends_on == ("firebase-common", "grpc-okhttp")
    assert firestore.publish_docs is True
    assert ktx.path == ":firebase-firestore:ktx"
    assert ktx.publish_docs is False


def test_load_catalog_symmetrizes_releases_with(tmp_path: Path) -> None:
    result = load_catalog(_write(tmp_path, CATALOG_TOML))
    assert isinstance(result, Ok)

    by_id = {u.artifact_id: u for u in result.value}
    assert by_id["firebase-firestore-ktx"].co_release == ("firebase-firestore",)
    assert by_id["firebase-firestore"].co_release == ("firebase-firestore-ktx",)
    assert by_id["firebase-common"].co_release == ()

    # Either side of the pair brings the other one along.
    released = resolve(result.value, ReleaseSelection(artifact_ids=("firebase-firestore-ktx",)))
    assert released.artifact_ids == ("firebase-firestore", "firebase-firestore-ktx")


def test_empty_catalog_is_valid(tmp_path: Path) -> None:
    result = load_catalog(_write(tmp_path, "# no libraries yet\n"))
    assert isinstance(result, Ok)
    assert result.value == ()


def test_missing_catalog(tmp_path: Path) -> None:
    result = load_catalog(tmp_path / "libraries.toml")
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_catalog"


def test_invalid_toml(tmp_path: Path) -> None:
    result = load_catalog(_write(tmp_path, "[[library]\n"))
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_catalog"
    assert "invalid TOML" in result.error.message


def test_missing_path(tmp_path: Path) -> None:
    result = load_catalog(_write(tmp_path, '[[library]]\nartifact_id = "a"\n'))
    assert isinstance(result, Err)
    assert "missing path" in result.error.message


def test_missing_artifact_id(tmp_path: Path) -> None:
    result = load_catalog(_write(tmp_path, '[[library]]\npath = ":a"\n'))
    assert isinstance(result, Err)
    assert "missing artifact_id" in result.error.message


def test_releases_with_must_be_string_list(tmp_path: Path) -> None:
    text = '[[library]]\nartifact_id = "a"\npath = ":a"\nreleases_with = "b"\n'
    result = load_catalog(_write(tmp_path, text))
    assert isinstance(result, Err)
    assert "releases_with" in result.error.message


def test_publish_docs_must_be_bool(tmp_path: Path) -> None:
    text = '[[library]]\nartifact_id = "a"\npath = ":a"\npublish_docs = "yes"\n'
    result = load_catalog(_write(tmp_path, text))
    assert isinstance(result, Err)
    assert "publish_docs" in result.error.message


def test_duplicate_artifact_id_is_rejected(tmp_path: Path) -> None:
    text = """
[[library]]
artifact_id = "a"
path = ":a"

[[library]]
artifact_id = "a"
path = ":a-dup"
releases_with = ["c"]

[[library]]
artifact_id = "c"
path = ":c"
"""
    result = load_catalog(_write(tmp_path, text))
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_catalog"
    assert "duplicate artifact_id: a" in result.error.message


def test_duplicate_path_is_rejected(tmp_path: Path) -> None:
    text = """
[[library]]
artifact_id = "x"
path = ":same"

[[library]]
artifact_id = "y"
path = ":same"
"""
    result = load_catalog(_write(tmp_path, text))
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_catalog"
    assert "duplicate path :same" in result.error.message


def test_library_must_be_array_of_tables(tmp_path: Path) -> None:
    result = load_catalog(_write(tmp_path, 'library = "a"\n'))
    assert isinstance(result, Err)


class TestSymmetrize:
    def test_drops_self_links(self) -> None:
        units = (LibraryUnit(artifact_id="a", path=":a", co_release=("a", "b")),)
        (a,) = symmetrize_co_releases(units)
        assert a.co_release == ("b",)

    def test_back_links_follow_catalog_order(self) -> None:
        units = (
            LibraryUnit(artifact_id="x", path=":x", co_release=("hub",)),
            LibraryUnit(artifact_id="hub", path=":hub", co_release=("z",)),
            LibraryUnit(artifact_id="y", path=":y", co_release=("hub",)),
            LibraryUnit(artifact_id="z", path=":z"),
        )
        by_id = {u.artifact_id: u for u in symmetrize_co_releases(units)}
        assert by_id["hub"].co_release == ("z", "x", "y")
        assert by_id["z"].co_release == ("hub",)

    def test_keeps_other_attributes(self) -> None:
        units = (
            LibraryUnit(
                artifact_id="a",
                path=":a",
                co_release=("b",),
                publish_docs=False,
                depends_on=("c",),
            ),
        )
        (a,) = symmetrize_co_releases(units)
        assert a.publish_docs is False
        assert a.depends_on == ("c",)
