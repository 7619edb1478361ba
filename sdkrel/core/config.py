"""Workspace file locations and TOML reading.

The workspace may carry an ``sdkrel.toml`` that relocates the files the
release commands read and write. Every key is optional:

    [paths]
    catalog = "libraries.toml"
    release_config = "release.json"
    release_report = "release_report.md"
    build_dir = "build"
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "BUILD_DIR",
    "CATALOG_FILE",
    "CONFIG_FILE",
    "RELEASE_CONFIG_FILE",
    "RELEASE_REPORT_FILE",
    "Config",
    "ConfigError",
    "PathsConfig",
    "load_config",
    "load_config_or_default",
    "read_toml",
]

CONFIG_FILE = "sdkrel.toml"
CATALOG_FILE = "libraries.toml"
RELEASE_CONFIG_FILE = "release.json"
RELEASE_REPORT_FILE = "release_report.md"
BUILD_DIR = "build"


@dataclass(frozen=True, slots=True)
class ConfigError:
    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """File locations, relative to the workspace root."""

    catalog: str = CATALOG_FILE
    release_config: str = RELEASE_CONFIG_FILE
    release_report: str = RELEASE_REPORT_FILE
    build_dir: str = BUILD_DIR


@dataclass(frozen=True, slots=True)
class Config:
    paths: PathsConfig = field(default_factory=PathsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Build from parsed TOML; missing or mistyped keys keep their default."""
        table: StrDict = get_table(data, "paths") or {}
        defaults = PathsConfig()

        def pick(key: str, default: str) -> str:
            return get_str(table, key) or default

        return cls(
            paths=PathsConfig(
                catalog=pick("catalog", defaults.catalog),
                release_config=pick("release_config", defaults.release_config),
                release_report=pick("release_report", defaults.release_report),
                build_dir=pick("build_dir", defaults.build_dir),
            )
        )


def read_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Read a TOML document whose top level is a table."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ConfigError(f"{path.name} not found: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"cannot read {path}: {e}", path=path))

    try:
        parsed: object = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"invalid TOML in {path.name}: {e}", path=path))

    data = as_str_dict(parsed)
    if data is None:
        return Err(ConfigError(f"{path.name}: top level must be a table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    match read_toml(path):
        case Ok(data):
            return Ok(Config.from_dict(data))
        case Err() as err:
            return err


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Defaults when ``sdkrel.toml`` is absent; a broken file is still an error."""
    if not path.exists():
        return Ok(Config())
    return load_config(path)
