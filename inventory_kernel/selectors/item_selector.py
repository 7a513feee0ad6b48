"""
Module: inventory_kernel.selectors.item_selector
Responsibility: Read-only queries over items and their custom ids.
Architecture position: Kernel > Selectors.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select

from inventory_kernel.domain.dtos import ItemInfo
from inventory_kernel.models.item import Item
from inventory_kernel.selectors.base import BaseSelector


class ItemSelector(BaseSelector[Item]):
    """Query items of an inventory."""

    def _to_dto(self, item: Item) -> ItemInfo:
        return ItemInfo(
            id=item.id,
            inventory_id=item.inventory_id,
            custom_id=item.custom_id,
            name=item.name,
        )

    def list_for_inventory(self, inventory_id: UUID) -> list[ItemInfo]:
        """Items of the inventory, oldest first."""
        stmt = (
            select(Item)
            .where(Item.inventory_id == inventory_id)
            .order_by(Item.created_at, Item.custom_id)
        )
        return [self._to_dto(i) for i in self.session.execute(stmt).scalars().all()]

    def find_by_custom_id(self, inventory_id: UUID, custom_id: str) -> ItemInfo | None:
        """Item with the given custom id, or None."""
        stmt = select(Item).where(
            Item.inventory_id == inventory_id,
            Item.custom_id == custom_id,
        )
        item = self.session.execute(stmt).scalar_one_or_none()
        return self._to_dto(item) if item else None

    def count_for_inventory(self, inventory_id: UUID) -> int:
        stmt = select(func.count()).select_from(Item).where(Item.inventory_id == inventory_id)
        return self.session.execute(stmt).scalar_one()
