"""
Service layer for inventory identifier settings.

Creates inventories and manages the custom id template each one uses.
Returns InventoryInfo DTOs instead of ORM entities.
"""

from __future__ import annotations

from uuid import UUID

from inventory_kernel.domain.dtos import InventoryInfo
from inventory_kernel.exceptions import InventoryNotFoundError
from inventory_kernel.logging_config import get_logger
from inventory_kernel.models.inventory import DEFAULT_NEXT_SEQUENCE, Inventory
from inventory_kernel.services.base import BaseService

logger = get_logger("services.inventory")


class InventoryService(BaseService[Inventory]):
    """
    Service for inventories and their custom id patterns.

    The sequence counter is only ever advanced by the identifier store;
    this service sets its starting value at creation and never touches it
    afterwards.
    """

    def _to_dto(self, inventory: Inventory) -> InventoryInfo:
        return InventoryInfo(
            id=inventory.id,
            name=inventory.name,
            description=inventory.description,
            next_sequence=inventory.next_sequence,
            custom_id_pattern=inventory.custom_id_pattern,
        )

    def _get_by_id(self, inventory_id: UUID) -> Inventory:
        inventory = self.session.get(Inventory, inventory_id)
        if inventory is None:
            raise InventoryNotFoundError(str(inventory_id))
        return inventory

    def get_by_id(self, inventory_id: UUID) -> InventoryInfo:
        """
        Get inventory by ID.

        Raises:
            InventoryNotFoundError: If inventory doesn't exist.
        """
        return self._to_dto(self._get_by_id(inventory_id))

    def create_inventory(
        self,
        name: str,
        actor_id: UUID,
        custom_id_pattern: str | None = None,
        description: str | None = None,
        next_sequence: int = DEFAULT_NEXT_SEQUENCE,
    ) -> InventoryInfo:
        """
        Create a new inventory.

        Args:
            name: Display name.
            actor_id: UUID of user/actor creating the inventory.
            custom_id_pattern: Template such as "INV-{YYYY}-{SEQ}"; None
                uses the configured default.
            description: Free text.
            next_sequence: First sequence number to hand out (>= 1).

        Raises:
            ValueError: If next_sequence < 1.
        """
        if next_sequence < 1:
            raise ValueError(f"next_sequence must be >= 1, got {next_sequence}")

        inventory = Inventory(
            name=name,
            description=description,
            custom_id_pattern=custom_id_pattern or None,
            next_sequence=next_sequence,
            created_by_id=actor_id,
        )
        self.session.add(inventory)
        self.session.flush()

        logger.info(
            "inventory_created",
            extra={
                "inventory_id": str(inventory.id),
                "custom_id_pattern": inventory.custom_id_pattern,
            },
        )
        return self._to_dto(inventory)

    def set_custom_id_pattern(
        self,
        inventory_id: UUID,
        custom_id_pattern: str | None,
        actor_id: UUID,
    ) -> InventoryInfo:
        """
        Replace (or clear, with None or "") the inventory's template.

        Existing items keep their ids; only future generations change.

        Raises:
            InventoryNotFoundError: If inventory doesn't exist.
        """
        inventory = self._get_by_id(inventory_id)
        inventory.custom_id_pattern = custom_id_pattern or None
        inventory.updated_by_id = actor_id
        self.session.flush()

        logger.info(
            "custom_id_pattern_updated",
            extra={
                "inventory_id": str(inventory_id),
                "custom_id_pattern": inventory.custom_id_pattern,
            },
        )
        return self._to_dto(inventory)
