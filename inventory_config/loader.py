"""
Configuration Loader (``inventory_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the typed
``inventory_config.schema`` dataclasses.  The single public entry point
for runtime config is ``inventory_config.get_active_config()``.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Invalid values raise ``ValueError`` with a descriptive message; the
  ``database.url`` key is required.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``database.url``  -> ``KeyError`` propagates.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from inventory_config.schema import (
    DatabaseSettings,
    IdentifierSettings,
    KernelConfig,
    LoggingSettings,
)

_LOG_LEVELS = frozenset(logging.getLevelNamesMapping())


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 over the canonical JSON form of the raw configuration."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_identifier_settings(data: dict[str, Any]) -> IdentifierSettings:
    """
    Parse the ``identifiers`` section.

    Raises:
        ValueError: on an empty default pattern, negative max_attempts, or
            non-positive suffix_length.
    """
    defaults = IdentifierSettings()
    settings = IdentifierSettings(
        default_pattern=str(data.get("default_pattern", defaults.default_pattern)),
        max_attempts=int(data.get("max_attempts", defaults.max_attempts)),
        suffix_length=int(data.get("suffix_length", defaults.suffix_length)),
        suffix_delimiter=str(data.get("suffix_delimiter", defaults.suffix_delimiter)),
    )
    if not settings.default_pattern:
        raise ValueError("identifiers.default_pattern must not be empty")
    if settings.max_attempts < 0:
        raise ValueError(
            f"identifiers.max_attempts must be >= 0, got {settings.max_attempts}"
        )
    if settings.suffix_length < 1:
        raise ValueError(
            f"identifiers.suffix_length must be >= 1, got {settings.suffix_length}"
        )
    return settings


def parse_database_settings(data: dict[str, Any]) -> DatabaseSettings:
    """Parse the ``database`` section. ``url`` is required."""
    settings = DatabaseSettings(
        url=data["url"],
        echo=bool(data.get("echo", False)),
        pool_size=int(data.get("pool_size", 20)),
        max_overflow=int(data.get("max_overflow", 10)),
        pool_timeout=int(data.get("pool_timeout", 30)),
        pool_recycle=int(data.get("pool_recycle", 1800)),
        busy_timeout=float(data.get("busy_timeout", 30.0)),
    )
    if settings.pool_size < 1:
        raise ValueError(f"database.pool_size must be >= 1, got {settings.pool_size}")
    return settings


def parse_logging_settings(data: dict[str, Any]) -> LoggingSettings:
    level = str(data.get("level", "INFO")).upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"logging.level is not a known level: {level!r}")
    return LoggingSettings(level=level)


def parse_config(data: dict[str, Any]) -> KernelConfig:
    """Parse a full configuration dict into a KernelConfig."""
    return KernelConfig(
        identifiers=parse_identifier_settings(data.get("identifiers") or {}),
        database=parse_database_settings(data["database"]),
        logging=parse_logging_settings(data.get("logging") or {}),
        checksum=compute_checksum(data),
    )
