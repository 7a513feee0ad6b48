"""
Data transfer objects returned by services and selectors.

Pure, immutable, no ORM dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class InventoryInfo:
    """Immutable DTO for inventory data."""

    id: UUID
    name: str
    description: str | None
    next_sequence: int
    custom_id_pattern: str | None


@dataclass(frozen=True)
class ItemInfo:
    """Immutable DTO for item data."""

    id: UUID
    inventory_id: UUID
    custom_id: str
    name: str
