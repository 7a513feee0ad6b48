"""Selectors for the inventory kernel (read side)."""

from inventory_kernel.selectors.item_selector import ItemSelector

__all__ = ["ItemSelector"]
