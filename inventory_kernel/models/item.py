"""
Module: inventory_kernel.models.item
Responsibility: ORM persistence for items and their generated custom ids.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - custom_id is unique per inventory (uq_item_inventory_custom_id).  The
      same custom id may exist in different inventories.

Failure modes:
    - IntegrityError on a duplicate (inventory_id, custom_id) pair; the item
      service translates it to CustomIdConflictError.
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inventory_kernel.db.base import TrackedBase, UUIDString


class Item(TrackedBase):
    """
    An inventory item identified by a human-readable custom id.

    Contract:
        The row is created only after the custom id has cleared the
        uniqueness check; the database constraint is the final arbiter.
    """

    __tablename__ = "items"

    __table_args__ = (
        UniqueConstraint(
            "inventory_id", "custom_id", name="uq_item_inventory_custom_id"
        ),
        Index("idx_item_inventory", "inventory_id"),
    )

    inventory_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("inventories.id", ondelete="CASCADE"),
        nullable=False,
    )

    custom_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    inventory = relationship("Inventory", back_populates="items")

    def __repr__(self) -> str:
        return f"<Item {self.custom_id}>"
