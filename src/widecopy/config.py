from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from widecopy.exceptions import ConfigurationError

DEFAULT_CONFIG_NAME = "widecopy.toml"
CONFIG_SECTION = "widecopy"

DEFAULT_MAX_WIDTH = 16
DEFAULT_WORD_SIZE = 8
DEFAULT_MAX_ALIGN = 8

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


@dataclass(frozen=True)
class SizeConfig:
    """Word size, alignment cap and wide threshold for one analysis run.

    A struct is wide when its footprint is strictly greater than
    ``max_width``.
    """

    max_width: int = DEFAULT_MAX_WIDTH
    word_size: int = DEFAULT_WORD_SIZE
    max_align: int = DEFAULT_MAX_ALIGN

    def __post_init__(self) -> None:
        for name in ("max_width", "word_size", "max_align"):
            value = getattr(self, name)
            # bool is an int subclass; reject it explicitly.
            if type(value) is not int or value <= 0:
                raise ConfigurationError(
                    f"{name} must be a positive integer, got {value!r}"
                )


def _load_toml(path: Path, *, required: bool = False) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        if required:
            raise ConfigurationError(f"config file {path} does not exist") from exc
        return {}
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"unable to read {path}: {exc}") from exc
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"unable to parse {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    """Read ``widecopy.toml`` from ``root``, or the file named by ``config_path``.

    A missing default file means no overrides; a missing explicit file is an error.
    """
    if config_path is not None:
        return _load_toml(config_path, required=True)
    base = root if root is not None else Path.cwd()
    return _load_toml(base / DEFAULT_CONFIG_NAME)


def size_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"[{CONFIG_SECTION}] must be a table")
    return section


def _normalize_name_list(value: TomlValue) -> list[str]:
    items: list[str] = []
    if value is None:
        return items
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, (list, tuple, set)):
        for item in value:
            if isinstance(item, str):
                items.extend([part.strip() for part in item.split(",") if part.strip()])
    return [item for item in items if item]


def exclude_list(section: TomlTable | None) -> list[str]:
    if section is None:
        return []
    return _normalize_name_list(section.get("exclude"))


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def size_config_from_payload(payload: TomlTable) -> SizeConfig:
    """Build a SizeConfig from merged ``max``/``word_size``/``max_align`` keys."""
    return SizeConfig(
        max_width=payload.get("max", DEFAULT_MAX_WIDTH),  # type: ignore[arg-type]
        word_size=payload.get("word_size", DEFAULT_WORD_SIZE),  # type: ignore[arg-type]
        max_align=payload.get("max_align", DEFAULT_MAX_ALIGN),  # type: ignore[arg-type]
    )
