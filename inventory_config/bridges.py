"""
Config -> Kernel Bridges.

Functions that turn a KernelConfig into initialized kernel objects.  They
live in inventory_config (the producer) because the kernel must NEVER
import inventory_config.

Usage:
    from inventory_config import get_active_config
    from inventory_config.bridges import build_identifier_service, init_engine_from_config

    config = get_active_config()
    init_engine_from_config(config)
    service = build_identifier_service(config, SqlAlchemyIdentifierStore(get_session_factory()))
"""

from __future__ import annotations

import random

from sqlalchemy.engine import Engine

from inventory_config.schema import KernelConfig
from inventory_kernel.db.engine import init_engine_from_url
from inventory_kernel.domain.clock import Clock
from inventory_kernel.logging_config import configure_logging
from inventory_kernel.services.identifier_service import IdentifierService
from inventory_kernel.services.store import IdentifierStore
from inventory_kernel.services.uniqueness_resolver import UniquenessResolver


def init_engine_from_config(config: KernelConfig) -> Engine:
    """Configure logging at the configured level, then initialize the engine."""
    configure_logging(level=config.logging.level)
    db = config.database
    return init_engine_from_url(
        db.url,
        echo=db.echo,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.pool_timeout,
        pool_recycle=db.pool_recycle,
        busy_timeout=db.busy_timeout,
    )


def build_uniqueness_resolver(
    config: KernelConfig,
    store: IdentifierStore,
    rng: random.Random | None = None,
) -> UniquenessResolver:
    ids = config.identifiers
    return UniquenessResolver(
        store,
        rng=rng,
        max_attempts=ids.max_attempts,
        suffix_length=ids.suffix_length,
        delimiter=ids.suffix_delimiter,
    )


def build_identifier_service(
    config: KernelConfig,
    store: IdentifierStore,
    clock: Clock | None = None,
    rng: random.Random | None = None,
) -> IdentifierService:
    """Build an IdentifierService honouring the configured identifier settings."""
    rng = rng or random.SystemRandom()
    return IdentifierService(
        store,
        clock=clock,
        rng=rng,
        default_pattern=config.identifiers.default_pattern,
        resolver=build_uniqueness_resolver(config, store, rng),
    )
