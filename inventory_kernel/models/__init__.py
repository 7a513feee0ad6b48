"""ORM models for the inventory kernel."""

from inventory_kernel.models.inventory import DEFAULT_NEXT_SEQUENCE, Inventory
from inventory_kernel.models.item import Item

__all__ = [
    "DEFAULT_NEXT_SEQUENCE",
    "Inventory",
    "Item",
]
