"""
Runtime configuration schema.

YAML files are parsed into these frozen dataclasses by the loader; the
kernel never sees YAML, only the values bridged out of a KernelConfig.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IdentifierSettings:
    """Custom id generation knobs."""

    default_pattern: str = "INV-{YYYY}-{SEQ}"
    max_attempts: int = 5  # disambiguated candidates after the first
    suffix_length: int = 6
    suffix_delimiter: str = "-"


@dataclass(frozen=True)
class DatabaseSettings:
    """Engine parameters passed to init_engine_from_url()."""

    url: str
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 1800
    busy_timeout: float = 30.0  # SQLite only


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"


@dataclass(frozen=True)
class KernelConfig:
    """Complete runtime configuration."""

    identifiers: IdentifierSettings
    database: DatabaseSettings
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    checksum: str = ""
