"""
IdentifierStore -- persistence interface required by identifier generation.

Responsibility:
    Names the four storage primitives the identifier core depends on, so the
    allocator, resolver and service can be exercised against any backing
    store that honours the same contract.

Architecture position:
    Kernel > Services -- interface only.  The production implementation is
    ``SqlAlchemyIdentifierStore``.

Invariants required from implementations:
    - ``atomic_increment_sequence`` is linearizable per inventory: concurrent
      callers for the same inventory each receive a distinct value, values
      are handed out in strictly increasing order with no value issued
      twice.  It must be a single atomic read-modify-write, never a read
      followed by a separate write.
    - ``peek_sequence`` never mutates state.
    - ``get_inventory``, ``atomic_increment_sequence`` and ``peek_sequence``
      raise ``InventoryNotFoundError`` for unknown inventories.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from uuid import UUID


@dataclass(frozen=True)
class InventorySnapshot:
    """
    Immutable view of an inventory's identifier state.

    Attributes:
        inventory_id: Inventory primary key.
        next_sequence: Value the next reservation will hand out.
        pattern: Stored custom id template, or None when unset.
    """

    inventory_id: UUID
    next_sequence: int
    pattern: str | None


@runtime_checkable
class IdentifierStore(Protocol):
    """Storage primitives for sequence allocation and uniqueness checks.

    Implementations: SqlAlchemyIdentifierStore.
    """

    def get_inventory(self, inventory_id: UUID) -> InventorySnapshot:
        """Load identifier state.

        Raises:
            InventoryNotFoundError: When the inventory does not exist.
        """
        ...

    def atomic_increment_sequence(self, inventory_id: UUID) -> int:
        """Advance next_sequence by one and return the value it held before.

        Raises:
            InventoryNotFoundError: When the inventory does not exist.
        """
        ...

    def peek_sequence(self, inventory_id: UUID) -> int:
        """Return next_sequence without changing it.

        Raises:
            InventoryNotFoundError: When the inventory does not exist.
        """
        ...

    def exists_custom_id(self, inventory_id: UUID, candidate: str) -> bool:
        """True when an item of the inventory already uses ``candidate``."""
        ...
