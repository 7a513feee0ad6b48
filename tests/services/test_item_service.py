"""
ItemService and ItemSelector tests.

Each add_item runs in its own committed session: the identifier store
commits reservations on separate connections, and SQLite admits a single
writer at a time.
"""

from uuid import uuid4

import pytest

from inventory_kernel.exceptions import CustomIdConflictError, InventoryNotFoundError
from inventory_kernel.selectors.item_selector import ItemSelector
from inventory_kernel.services.item_service import ItemService


class FixedIdentifierService:
    """Identifier service double always handing out the same id."""

    def __init__(self, custom_id):
        self.custom_id = custom_id

    def generate(self, inventory_id, pattern_override=None):
        return self.custom_id


@pytest.fixture
def add_item(session_factory, identifier_service, store, test_actor_id):
    """Add one item in its own committed transaction."""

    def _add(inventory_id, name="Widget", pattern_override=None, identifiers=None):
        with session_factory.begin() as sess:
            return ItemService(sess, identifiers or identifier_service, store).add_item(
                inventory_id, name, test_actor_id, pattern_override
            )

    return _add


class TestAddItem:

    def test_item_gets_generated_custom_id(self, add_item, create_inventory):
        inv = create_inventory(pattern="INV-{YYYY}-{SEQ}")

        item = add_item(inv.id, name="Drill")

        assert item.custom_id == "INV-2025-1"
        assert item.name == "Drill"
        assert item.inventory_id == inv.id

    def test_items_get_distinct_ids(self, add_item, create_inventory, count_items):
        inv = create_inventory(pattern="I-{SEQ}")

        ids = [add_item(inv.id).custom_id for _ in range(5)]

        assert ids == ["I-1", "I-2", "I-3", "I-4", "I-5"]
        assert count_items(inv.id) == 5

    def test_pattern_override(self, add_item, create_inventory):
        inv = create_inventory(pattern="I-{SEQ}")
        assert add_item(inv.id, pattern_override="O-{SEQ}").custom_id == "O-1"

    def test_random_only_pattern_stays_unique(self, add_item, create_inventory):
        """One-digit random ids exhaust quickly; collisions get suffixes."""
        inv = create_inventory(pattern="R{RANDOM:1}")

        ids = [add_item(inv.id).custom_id for _ in range(15)]

        assert len(set(ids)) == 15

    def test_unknown_inventory(self, add_item):
        with pytest.raises(InventoryNotFoundError):
            add_item(uuid4())

    def test_concurrent_duplicate_raises_conflict(
        self, session_factory, store, create_inventory, insert_item, test_actor_id, captured_logs
    ):
        """An id inserted between the uniqueness check and the insert hits the constraint."""
        inv = create_inventory()
        insert_item(inv.id, "RACED-1")

        with session_factory() as sess:
            service = ItemService(sess, FixedIdentifierService("RACED-1"), store)
            with pytest.raises(CustomIdConflictError) as exc_info:
                service.add_item(inv.id, "Loser", test_actor_id)
            sess.rollback()

        assert exc_info.value.custom_id == "RACED-1"
        assert exc_info.value.code == "CUSTOM_ID_CONFLICT"
        assert any(r["message"] == "custom_id_conflict" for r in captured_logs())

    def test_same_custom_id_allowed_across_inventories(self, add_item, create_inventory):
        first = create_inventory(name="A", pattern="SHARED-{SEQ}")
        second = create_inventory(name="B", pattern="SHARED-{SEQ}")

        assert add_item(first.id).custom_id == add_item(second.id).custom_id == "SHARED-1"


class TestItemSelector:

    def test_list_and_find(self, session, add_item, create_inventory):
        inv = create_inventory(pattern="L-{SEQ}")
        other = create_inventory(name="Other", pattern="L-{SEQ}")
        add_item(inv.id, name="one")
        add_item(inv.id, name="two")
        add_item(other.id, name="elsewhere")

        selector = ItemSelector(session)
        listed = selector.list_for_inventory(inv.id)

        assert {i.custom_id for i in listed} == {"L-1", "L-2"}
        assert selector.find_by_custom_id(inv.id, "L-2").name == "two"
        assert selector.find_by_custom_id(inv.id, "L-9") is None
        assert selector.count_for_inventory(inv.id) == 2
        assert selector.count_for_inventory(other.id) == 1
