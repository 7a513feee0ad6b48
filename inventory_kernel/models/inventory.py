"""
Module: inventory_kernel.models.inventory
Responsibility: ORM persistence for inventories and their per-inventory
    identifier state: the custom id template and the next sequence number.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - next_sequence >= 1 (ck_inventory_next_sequence_positive).
    - next_sequence never decreases.  It is advanced only by the identifier
      store's atomic increment, by exactly 1 per reservation.  It is never
      cached in process: every reservation reads and writes this column in
      one statement.

Failure modes:
    - IntegrityError if next_sequence is set below 1.
"""

from sqlalchemy import CheckConstraint, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inventory_kernel.db.base import TrackedBase

DEFAULT_NEXT_SEQUENCE = 1


class Inventory(TrackedBase):
    """
    A named collection of items sharing one identifier template.

    Contract:
        custom_id_pattern is a template such as ``INV-{YYYY}-{SEQ}``; NULL
        means the configured default template applies.  next_sequence is the
        value the next reservation will hand out.

    Non-goals:
        - Does NOT validate the template; unknown tokens render literally.
        - Does NOT model ownership or access control.
    """

    __tablename__ = "inventories"

    __table_args__ = (
        CheckConstraint(
            "next_sequence >= 1",
            name="ck_inventory_next_sequence_positive",
        ),
        Index("idx_inventory_name", "name"),
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Value handed out by the next reservation
    next_sequence: Mapped[int] = mapped_column(
        nullable=False,
        default=DEFAULT_NEXT_SEQUENCE,
    )

    # e.g. "INV-{YYYY}-{SEQ}" or "ASSET-{RANDOM:5}"
    custom_id_pattern: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    items = relationship(
        "Item",
        back_populates="inventory",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Inventory {self.name} next={self.next_sequence}>"
