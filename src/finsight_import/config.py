# FinSight Import - Spreadsheet import pipeline for the SMB financial dashboard
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for FinSight Import.

This module is responsible for:
- loading the application configuration from a TOML file,
- applying defaults when the file or a section is missing,
- exposing typed dataclasses used by the CLI.

Expected sections (all optional)
--------------------------------
[company]
    industry = "commerce"        # sector tag passed to the importer

[store]
    engine = "sqlite"
    path = "data/db/finsight_import.sqlite"

[templates]
    output_dir = "data/templates"

[display]
    mode = "table"               # "table" | "json"

Relative paths are resolved against the directory of the TOML file.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import]

from .importer import DEFAULT_INDUSTRY
from .store import StoreConfig

DEFAULT_CONFIG_FILE = "finsight_import_config.toml"
DISPLAY_MODES: tuple[str, ...] = ("table", "json")


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for FinSight Import.

    Attributes:
        industry: Default sector tag for imports and templates.
        store: Where imported records are saved.
        templates_dir: Output directory for generated templates.
        display_mode: 'table' or 'json' rendering of imported records.
    """

    industry: str
    store: StoreConfig
    templates_dir: Path
    display_mode: str


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the TOML content cannot be parsed or is not a table.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Failed to parse TOML config file: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Invalid TOML root type in {path}, expected a table.")

    return data


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    """Return a top-level table, or an empty mapping if missing/invalid."""
    section = raw.get(name) or {}
    if not isinstance(section, Mapping):
        return {}
    return section


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the FinSight Import configuration.

    Parameters
    ----------
    config_path:
        Path to the TOML file. If None, ``finsight_import_config.toml`` in
        the current directory is used when it exists; otherwise defaults
        apply.

    Returns
    -------
    AppConfig

    Raises
    ------
    FileNotFoundError
        If an explicit ``config_path`` does not exist.
    ValueError
        If the file cannot be parsed or holds invalid values.
    """
    if config_path is None:
        config_file = Path(DEFAULT_CONFIG_FILE).resolve()
        raw = _load_toml(config_file) if config_file.is_file() else {}
    else:
        config_file = Path(config_path).resolve()
        raw = _load_toml(config_file)

    base_dir = config_file.parent

    # 1) Company
    company_section = _section(raw, "company")
    industry = str(company_section.get("industry") or DEFAULT_INDUSTRY).strip().lower()

    # 2) Store
    store_section = _section(raw, "store")
    store_engine = str(store_section.get("engine") or "sqlite")
    store_path_raw = store_section.get("path") or "data/db/finsight_import.sqlite"
    store = StoreConfig(
        engine=store_engine,
        path=(base_dir / str(store_path_raw)).resolve(),
    )

    # 3) Templates
    templates_section = _section(raw, "templates")
    templates_dir_raw = templates_section.get("output_dir") or "data/templates"
    templates_dir = (base_dir / str(templates_dir_raw)).resolve()

    # 4) Display
    display_section = _section(raw, "display")
    display_mode = str(display_section.get("mode", "table"))
    if display_mode not in DISPLAY_MODES:
        raise ValueError(
            f"Invalid value for 'display.mode': {display_mode!r}. "
            f"Expected one of: {', '.join(DISPLAY_MODES)}."
        )

    return AppConfig(
        industry=industry,
        store=store,
        templates_dir=templates_dir,
        display_mode=display_mode,
    )
