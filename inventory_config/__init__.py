"""
inventory_config -- single public entrypoint for runtime configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  Kernel code never reads configuration files
    or environment variables; bridges in this package translate a
    ``KernelConfig`` into kernel constructor arguments.

Architecture position:
    Configuration -- sits above ``inventory_kernel``.  The kernel MUST NEVER
    import from ``inventory_config``.

Failure modes:
    - ``FileNotFoundError`` -- the requested configuration file is missing.
    - ``ValueError`` / ``KeyError`` -- invalid or incomplete configuration.

Audit relevance:
    Every successful ``get_active_config()`` call emits an
    ``INVENTORY_CONFIG_TRACE`` log entry with the source path and checksum.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path

from inventory_config.loader import load_yaml_file, parse_config
from inventory_config.schema import (
    DatabaseSettings,
    IdentifierSettings,
    KernelConfig,
    LoggingSettings,
)

_logger = logging.getLogger("inventory_kernel.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Environment variable overriding database.url
DATABASE_URL_ENV = "INVENTORY_DATABASE_URL"


def get_active_config(config_path: Path | None = None) -> KernelConfig:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: YAML file to load. Defaults to the packaged
            ``defaults.yaml``.

    Returns:
        Frozen KernelConfig. When ``INVENTORY_DATABASE_URL`` is set it
        replaces ``database.url``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a value is out of range.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    config = parse_config(load_yaml_file(path))

    url_override = os.environ.get(DATABASE_URL_ENV)
    if url_override:
        config = dataclasses.replace(
            config,
            database=dataclasses.replace(config.database, url=url_override),
        )

    _logger.info(
        "INVENTORY_CONFIG_TRACE",
        extra={
            "trace_type": "INVENTORY_CONFIG_TRACE",
            "config_path": str(path),
            "checksum": config.checksum,
            "default_pattern": config.identifiers.default_pattern,
            "database_url_overridden": bool(url_override),
        },
    )
    return config


__all__ = [
    "DATABASE_URL_ENV",
    "DEFAULT_CONFIG_PATH",
    "DatabaseSettings",
    "IdentifierSettings",
    "KernelConfig",
    "LoggingSettings",
    "get_active_config",
]
