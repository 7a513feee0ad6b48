"""
SequenceAllocator -- per-inventory monotonic sequence reservation.

Responsibility:
    Hands out the sequence number that feeds the ``{SEQ}`` token.  Mutating
    reservations go through the store's atomic increment; previews read the
    counter without touching it.

Architecture position:
    Kernel > Services -- called by IdentifierService.

Invariants enforced:
    - Monotonicity: ``reserve_next`` values for one inventory are distinct
      and strictly increasing, each exactly one more than the previous
      reservation, because the store increments the persisted counter in a
      single atomic statement.  There is no in-process counter or cache.
    - Reservations are never returned: an abandoned reservation leaves a
      gap in the issued values, never a duplicate.
    - ``peek_next`` is advisory.  It has no ordering guarantee against
      concurrent reservations; a preview may show a number a concurrent
      commit consumes.

Failure modes:
    - InventoryNotFoundError for unknown inventories (from the store).
    - Store failures propagate unchanged.
"""

from __future__ import annotations

from uuid import UUID

from inventory_kernel.logging_config import get_logger
from inventory_kernel.services.store import IdentifierStore

logger = get_logger("services.sequence")


class SequenceAllocator:
    """
    Reserve or peek the next sequence number of an inventory.

    Usage:
        allocator = SequenceAllocator(store)
        seq = allocator.reserve_next(inventory_id)   # consumes seq
        nxt = allocator.peek_next(inventory_id)      # == seq + 1, absent races
    """

    def __init__(self, store: IdentifierStore):
        self._store = store

    def reserve_next(self, inventory_id: UUID) -> int:
        """
        Reserve the next sequence number.

        Postconditions:
            - The returned value is >= 1 and was never returned before for
              this inventory.
            - The inventory's next_sequence is one greater than the
              returned value (absent concurrent reservations).

        Raises:
            InventoryNotFoundError: If the inventory does not exist.
        """
        sequence = self._store.atomic_increment_sequence(inventory_id)
        logger.debug(
            "sequence_reserved",
            extra={"inventory_id": str(inventory_id), "sequence": sequence},
        )
        return sequence

    def peek_next(self, inventory_id: UUID) -> int:
        """
        Return the value ``reserve_next`` would currently hand out.

        Raises:
            InventoryNotFoundError: If the inventory does not exist.
        """
        sequence = self._store.peek_sequence(inventory_id)
        logger.debug(
            "sequence_peeked",
            extra={"inventory_id": str(inventory_id), "sequence": sequence},
        )
        return sequence
