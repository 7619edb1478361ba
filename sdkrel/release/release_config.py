"""Persisted release config (release.json).

Example::

    {
      "name": "m140",
      "past_name": "m139",
      "libraries": [
        ":firebase-common",
        ":firebase-firestore"
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path

from sdkrel.core.result import Err, Ok, Result
from sdkrel.core.structured import as_str_dict, get_list, get_str
from sdkrel.platform.files import atomic_write_text
from sdkrel.release.errors import ReleaseError
from sdkrel.release.model import ReleaseConfig


def _invalid(message: str, path: Path) -> Err[ReleaseError]:
    return Err(ReleaseError(kind="invalid_release_config", message=message, hint=str(path)))


def release_config_to_json(config: ReleaseConfig) -> str:
    payload: dict[str, object] = {"name": config.name}
    if config.past_name is not None:
        payload["past_name"] = config.past_name
    payload["libraries"] = list(config.libraries)
    return json.dumps(payload, indent=2) + "\n"


def write_release_config(*, path: Path, config: ReleaseConfig) -> Result[None, ReleaseError]:
    try:
        atomic_write_text(path, release_config_to_json(config), encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to write release config: {e}",
                hint=str(path),
            )
        )
    return Ok(None)


def read_release_config(*, path: Path) -> Result[ReleaseConfig, ReleaseError]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return _invalid(f"failed to read release config: {e}", path)

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return _invalid(f"invalid JSON in release config: {e}", path)

    data = as_str_dict(obj)
    if data is None:
        return _invalid("release config root must be a JSON object", path)

    name = get_str(data, "name")
    if name is None:
        return _invalid("missing name in release config", path)

    items = get_list(data, "libraries")
    if items is None:
        return _invalid("missing libraries[] in release config", path)

    libraries: list[str] = []
    for item in items:
        if not isinstance(item, str) or not item.strip():
            return _invalid(f"invalid library path in release config: {item!r}", path)
        lib = item.strip()
        if lib in libraries:
            continue
        libraries.append(lib)

    return Ok(
        ReleaseConfig(
            name=name,
            libraries=tuple(libraries),
            past_name=get_str(data, "past_name"),
        )
    )


def load_release_config_if_present(*, path: Path) -> Result[ReleaseConfig | None, ReleaseError]:
    """Read release.json if it exists; a missing file is Ok(None)."""
    if not path.exists():
        return Ok(None)
    return read_release_config(path=path)
