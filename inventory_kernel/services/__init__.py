"""Services for the inventory kernel (write side)."""

from inventory_kernel.domain.dtos import InventoryInfo, ItemInfo
from inventory_kernel.services.identifier_service import (
    IdentifierResult,
    IdentifierService,
)
from inventory_kernel.services.inventory_service import InventoryService
from inventory_kernel.services.item_service import ItemService
from inventory_kernel.services.sequence_allocator import SequenceAllocator
from inventory_kernel.services.sql_store import SqlAlchemyIdentifierStore
from inventory_kernel.services.store import IdentifierStore, InventorySnapshot
from inventory_kernel.services.uniqueness_resolver import UniquenessResolver

__all__ = [
    "IdentifierResult",
    "IdentifierService",
    "IdentifierStore",
    "InventoryInfo",
    "InventoryService",
    "InventorySnapshot",
    "ItemInfo",
    "ItemService",
    "SequenceAllocator",
    "SqlAlchemyIdentifierStore",
    "UniquenessResolver",
]
