# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for FinanTech.

This module is responsible for:
- loading the application configuration from a TOML file,
- exposing typed dataclasses used by the rest of the application.

Expected sections (all optional):

    [company]
    default = "Minha Empresa Ltda"

    [database]
    engine = "sqlite"
    path = "data/db/finantech.sqlite"   # relative to the TOML file

    [ai]
    api_base = "https://generativelanguage.googleapis.com/v1beta"
    model = "gemini-2.5-flash"
    api_key_env = "GEMINI_API_KEY"
    timeout = 30

    [display]
    grouping = "status"
    decimals = 2

    [logging]
    level = "INFO"
    file = "logs/finantech.log"        # relative to the TOML file
"""

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .db import DatabaseConfig
from .grouping import GROUPING_TYPES

DEFAULT_CONFIG_FILE = "finantech_config.toml"


@dataclass(frozen=True)
class AIConfig:
    """
    Settings for the hosted generative-language API.

    The API key itself is never written in the TOML file: `api_key_env`
    names the environment variable holding it.
    """

    api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-2.5-flash"
    api_key_env: str = "GEMINI_API_KEY"
    timeout: float = 30.0

    @property
    def api_key(self) -> Optional[str]:
        return os.environ.get(self.api_key_env) or None


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for FinanTech.

    This aggregates:
    - the default company (tenant) used when none is given on the CLI,
    - the database configuration,
    - the AI service settings,
    - display options for grouped tables,
    - logging options.
    """

    default_company: Optional[str]
    database: DatabaseConfig
    ai: AIConfig
    grouping: str
    decimals: int
    log_level: str
    log_file: Optional[Path]


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the TOML content cannot be parsed.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Failed to parse TOML config file: {path}") from exc


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, Mapping):
        raise ValueError(f"Config section [{name}] must be a table.")
    return section


def _parse_ai(section: Mapping[str, Any]) -> AIConfig:
    defaults = AIConfig()
    try:
        timeout = float(section.get("timeout", defaults.timeout))
    except (TypeError, ValueError) as exc:
        raise ValueError("Invalid value for 'ai.timeout', expected a number.") from exc

    return AIConfig(
        api_base=str(section.get("api_base") or defaults.api_base).rstrip("/"),
        model=str(section.get("model") or defaults.model),
        api_key_env=str(section.get("api_key_env") or defaults.api_key_env),
        timeout=timeout,
    )


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the FinanTech configuration from a TOML file.

    Parameters
    ----------
    config_path:
        Path to the TOML file. Defaults to 'finantech_config.toml' in the
        current working directory.

    Returns
    -------
    AppConfig
        Parsed and validated configuration. Relative paths are resolved
        against the directory of the TOML file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file or one of its values is invalid.
    """
    config_file = Path(config_path or DEFAULT_CONFIG_FILE).resolve()
    raw = _load_toml(config_file)
    base_dir = config_file.parent

    # 1) Company
    company_section = _section(raw, "company")
    default_company = company_section.get("default") or None

    # 2) Database
    database_section = _section(raw, "database")
    db_engine = str(database_section.get("engine") or "sqlite")
    db_path_raw = database_section.get("path") or "data/db/finantech.sqlite"
    database = DatabaseConfig(
        engine=db_engine,
        path=(base_dir / str(db_path_raw)).resolve(),
    )

    # 3) AI service
    ai = _parse_ai(_section(raw, "ai"))

    # 4) Display
    display_section = _section(raw, "display")
    grouping = str(display_section.get("grouping", "none"))
    if grouping not in GROUPING_TYPES:
        raise ValueError(
            f"Invalid value for 'display.grouping': {grouping!r}. "
            f"Expected one of: {', '.join(GROUPING_TYPES)}."
        )
    try:
        decimals = int(display_section.get("decimals", 2))
    except (TypeError, ValueError):
        decimals = 2

    # 5) Logging
    logging_section = _section(raw, "logging")
    log_level = str(logging_section.get("level", "INFO")).upper()
    log_file_raw = logging_section.get("file")
    log_file = (base_dir / str(log_file_raw)).resolve() if log_file_raw else None

    return AppConfig(
        default_company=str(default_company) if default_company else None,
        database=database,
        ai=ai,
        grouping=grouping,
        decimals=decimals,
        log_level=log_level,
        log_file=log_file,
    )
