"""
Service layer for adding items with generated custom ids.

The custom id is minted by IdentifierService (its sequence reservation
commits on its own); the item row is flushed in the caller's session and
committed by the caller.  The items table's unique constraint is the last
line of defence against a concurrent writer that inserted the same id
between the uniqueness check and this insert.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory_kernel.domain.dtos import ItemInfo
from inventory_kernel.exceptions import CustomIdConflictError
from inventory_kernel.logging_config import get_logger
from inventory_kernel.models.item import Item
from inventory_kernel.services.base import BaseService
from inventory_kernel.services.identifier_service import IdentifierService
from inventory_kernel.services.store import IdentifierStore

logger = get_logger("services.item")


class ItemService(BaseService[Item]):
    """
    Create items whose custom id comes from the inventory's template.

    Non-goals:
        - Does NOT retry on CustomIdConflictError; the caller rolls back
          and may call ``add_item`` again, which reserves a new sequence.
    """

    def __init__(
        self,
        session: Session,
        identifier_service: IdentifierService,
        store: IdentifierStore,
    ):
        super().__init__(session)
        self._identifiers = identifier_service
        self._store = store

    def add_item(
        self,
        inventory_id: UUID,
        name: str,
        actor_id: UUID,
        pattern_override: str | None = None,
    ) -> ItemInfo:
        """
        Generate a custom id and persist a new item with it.

        Raises:
            InventoryNotFoundError: If the inventory does not exist.
            IdExhaustedError: If no unused custom id could be generated.
            CustomIdConflictError: If the id was taken concurrently.  The
                session must be rolled back by the caller.
        """
        custom_id = self._identifiers.generate(inventory_id, pattern_override)

        item = Item(
            inventory_id=inventory_id,
            custom_id=custom_id,
            name=name,
            created_by_id=actor_id,
        )
        self.session.add(item)
        try:
            self.session.flush()
        except IntegrityError as exc:
            if self._store.exists_custom_id(inventory_id, custom_id):
                logger.warning(
                    "custom_id_conflict",
                    extra={"inventory_id": str(inventory_id), "custom_id": custom_id},
                )
                raise CustomIdConflictError(str(inventory_id), custom_id) from exc
            raise

        logger.info(
            "item_created",
            extra={
                "inventory_id": str(inventory_id),
                "item_id": str(item.id),
                "custom_id": custom_id,
            },
        )
        return ItemInfo(
            id=item.id,
            inventory_id=item.inventory_id,
            custom_id=item.custom_id,
            name=item.name,
        )
