"""
SqlAlchemyIdentifierStore -- IdentifierStore backed by the inventories table.

Responsibility:
    Implements the identifier persistence primitives against the
    ``inventories`` and ``items`` tables.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.  Used by
    SequenceAllocator, UniquenessResolver and IdentifierService.

Invariants enforced:
    - Sequence linearizability: ``atomic_increment_sequence`` is ONE
      statement, ``UPDATE inventories SET next_sequence = next_sequence + 1
      WHERE id = :id RETURNING next_sequence``.  The database serializes
      concurrent updates of the row, so no two callers ever observe the same
      value.  Dialects without UPDATE..RETURNING fall back to a
      ``SELECT ... FOR UPDATE`` locked row and increment inside the same
      transaction.
    - Reservations are durable on return: each increment runs in its own
      short transaction, committed before the value is handed out.  A
      failed item insert afterwards leaves a gap, never a duplicate.
    - Read primitives never write.

Failure modes:
    - InventoryNotFoundError when the UPDATE/SELECT matches no row.
    - OperationalError / DBAPIError (connectivity, lock timeout) propagate
      unchanged; nothing here retries store failures.

Audit relevance:
    Every reservation is logged at DEBUG level with inventory_id and value.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import exists, select, update
from sqlalchemy.orm import Session, sessionmaker

from inventory_kernel.exceptions import InventoryNotFoundError
from inventory_kernel.logging_config import get_logger
from inventory_kernel.models.inventory import Inventory
from inventory_kernel.models.item import Item
from inventory_kernel.services.store import InventorySnapshot

logger = get_logger("services.sql_store")


class SqlAlchemyIdentifierStore:
    """
    IdentifierStore over a SQLAlchemy session factory.

    Contract:
        Every primitive opens its own session from the factory and closes
        it before returning; the store holds no connection or ORM state
        across calls and is safe to share between threads.

    Non-goals:
        - Does NOT participate in the caller's transaction.  Item inserts
          happen in the caller's session (see ItemService).
        - Does NOT retry on lock timeouts or connection errors.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        """
        Args:
            session_factory: Factory producing sessions bound to the
                inventory database (see db.engine.get_session_factory).
        """
        self._session_factory = session_factory

    def get_inventory(self, inventory_id: UUID) -> InventorySnapshot:
        with self._session_factory() as session:
            row = session.execute(
                select(Inventory.id, Inventory.next_sequence, Inventory.custom_id_pattern)
                .where(Inventory.id == inventory_id)
            ).one_or_none()

        if row is None:
            raise InventoryNotFoundError(str(inventory_id))

        return InventorySnapshot(
            inventory_id=row.id,
            next_sequence=row.next_sequence,
            pattern=row.custom_id_pattern,
        )

    def atomic_increment_sequence(self, inventory_id: UUID) -> int:
        with self._session_factory.begin() as session:
            if session.get_bind().dialect.update_returning:
                advanced = session.execute(
                    update(Inventory)
                    .where(Inventory.id == inventory_id)
                    .values(next_sequence=Inventory.next_sequence + 1)
                    .returning(Inventory.next_sequence)
                    .execution_options(synchronize_session=False)
                ).scalar_one_or_none()
            else:
                advanced = self._increment_locked_row(session, inventory_id)

            if advanced is None:
                raise InventoryNotFoundError(str(inventory_id))

        reserved = advanced - 1
        logger.debug(
            "sequence_incremented",
            extra={"inventory_id": str(inventory_id), "value": reserved},
        )
        return reserved

    def _increment_locked_row(self, session: Session, inventory_id: UUID) -> int | None:
        """Increment under a row lock held until the enclosing commit."""
        inventory = session.execute(
            select(Inventory)
            .where(Inventory.id == inventory_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

        if inventory is None:
            return None

        inventory.next_sequence += 1
        session.flush()
        return inventory.next_sequence

    def peek_sequence(self, inventory_id: UUID) -> int:
        with self._session_factory() as session:
            value = session.execute(
                select(Inventory.next_sequence).where(Inventory.id == inventory_id)
            ).scalar_one_or_none()

        if value is None:
            raise InventoryNotFoundError(str(inventory_id))
        return value

    def exists_custom_id(self, inventory_id: UUID, candidate: str) -> bool:
        with self._session_factory() as session:
            return bool(
                session.execute(
                    select(
                        exists().where(
                            Item.inventory_id == inventory_id,
                            Item.custom_id == candidate,
                        )
                    )
                ).scalar()
            )
