"""
IdentifierService tests.

Covers generation (one reservation per call, uniqueness repair), preview
(no mutation), pattern resolution order and the result-returning variants.
"""

import random
import re
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from inventory_kernel.exceptions import IdExhaustedError, InventoryNotFoundError
from inventory_kernel.services.identifier_service import IdentifierResult, IdentifierService
from inventory_kernel.services.uniqueness_resolver import UniquenessResolver


class TestGenerate:

    def test_default_pattern_example(self, identifier_service, create_inventory, read_next_sequence):
        """INV-{YYYY}-{SEQ} with next_sequence=1 in 2025 yields INV-2025-1."""
        inv = create_inventory(pattern="INV-{YYYY}-{SEQ}", next_sequence=1)

        assert identifier_service.generate(inv.id) == "INV-2025-1"
        assert read_next_sequence(inv.id) == 2

    def test_unset_pattern_uses_default(self, identifier_service, create_inventory):
        inv = create_inventory(pattern=None)
        assert identifier_service.generate(inv.id) == "INV-2025-1"

    def test_successive_ids_carry_increasing_sequence(self, identifier_service, create_inventory):
        inv = create_inventory(pattern="S{SEQ}")

        generated = [identifier_service.generate(inv.id) for _ in range(5)]

        assert generated == ["S1", "S2", "S3", "S4", "S5"]

    def test_calendar_and_random_tokens(self, identifier_service, create_inventory):
        inv = create_inventory(pattern="{YYYY}{MM}{DD}-{RANDOM:4}")

        custom_id = identifier_service.generate(inv.id)

        assert re.fullmatch(r"20250307-[1-9][0-9]{3}", custom_id)

    def test_each_call_consumes_one_sequence_even_without_seq_token(
        self, identifier_service, create_inventory, read_next_sequence
    ):
        inv = create_inventory(pattern="FIXED-{RANDOM:6}")

        identifier_service.generate(inv.id)
        identifier_service.generate(inv.id)

        assert read_next_sequence(inv.id) == 3

    def test_collision_is_disambiguated(
        self, identifier_service, create_inventory, insert_item
    ):
        inv = create_inventory(pattern="STATIC")
        insert_item(inv.id, "STATIC")

        custom_id = identifier_service.generate(inv.id)

        assert re.fullmatch(r"STATIC-[a-z0-9]{6}", custom_id)

    def test_exhaustion_consumes_the_reservation(
        self, store, clock, create_inventory, insert_item, read_next_sequence
    ):
        inv = create_inventory(pattern="STATIC")
        insert_item(inv.id, "STATIC")
        service = IdentifierService(
            store,
            clock=clock,
            rng=random.Random(1),
            resolver=UniquenessResolver(store, max_attempts=0),
        )

        with pytest.raises(IdExhaustedError):
            service.generate(inv.id)
        with pytest.raises(IdExhaustedError):
            service.generate(inv.id)

        assert read_next_sequence(inv.id) == 3

    def test_two_collisions_return_third_candidate(self, recording_store, clock):
        calls = {"n": 0}

        def taken_if(candidate):
            calls["n"] += 1
            return calls["n"] <= 2

        store = recording_store(taken_if=taken_if, pattern="INV-{YYYY}-{SEQ}")
        service = IdentifierService(store, clock=clock, rng=random.Random(6))

        custom_id = service.generate(uuid4())

        assert len(store.checked) == 3
        assert store.checked[0] == "INV-2025-1"
        assert custom_id == store.checked[2]
        assert re.fullmatch(r"INV-2025-1-[a-z0-9]{6}", custom_id)
        assert store.next_sequence == 2

    def test_unknown_inventory(self, identifier_service):
        with pytest.raises(InventoryNotFoundError):
            identifier_service.generate(uuid4())

    def test_clock_change_moves_calendar_tokens(self, identifier_service, clock, create_inventory):
        inv = create_inventory(pattern="{YYYY}-{SEQ}")

        first = identifier_service.generate(inv.id)
        clock.set_time(datetime(2026, 1, 1, tzinfo=timezone.utc))
        second = identifier_service.generate(inv.id)

        assert (first, second) == ("2025-1", "2026-2")

    def test_generation_is_logged_with_inventory_context(
        self, identifier_service, create_inventory, captured_logs
    ):
        inv = create_inventory(pattern="L-{SEQ}")

        identifier_service.generate(inv.id)

        generated = [r for r in captured_logs() if r["message"] == "custom_id_generated"]
        assert len(generated) == 1
        record = generated[0]
        assert record["inventory_id"] == str(inv.id)
        assert record["custom_id"] == "L-1"
        assert record["sequence"] == 1
        assert record["tokens"] == ["SEQ"]


class TestPreview:

    def test_preview_does_not_mutate(
        self, identifier_service, create_inventory, read_next_sequence, count_items
    ):
        inv = create_inventory(pattern="P-{SEQ}", next_sequence=4)

        first = identifier_service.preview(inv.id)
        second = identifier_service.preview(inv.id)

        assert first == second == "P-4"
        assert read_next_sequence(inv.id) == 4
        assert count_items(inv.id) == 0

    def test_preview_matches_next_generation(self, identifier_service, create_inventory):
        inv = create_inventory(pattern="P-{YYYY}-{SEQ}")

        preview = identifier_service.preview(inv.id)

        assert identifier_service.generate(inv.id) == preview

    def test_preview_ignores_existing_items(self, identifier_service, create_inventory, insert_item):
        inv = create_inventory(pattern="P-{SEQ}")
        insert_item(inv.id, "P-1")

        assert identifier_service.preview(inv.id) == "P-1"

    def test_preview_with_override(self, identifier_service, create_inventory):
        inv = create_inventory(pattern="STORED-{SEQ}")
        assert identifier_service.preview(inv.id, "DRAFT-{SEQ}") == "DRAFT-1"

    def test_preview_unknown_inventory(self, identifier_service):
        with pytest.raises(InventoryNotFoundError):
            identifier_service.preview(uuid4())


class TestPatternResolution:

    @pytest.mark.parametrize(
        "stored,override,expected",
        [
            ("STORED", "OVERRIDE", "OVERRIDE"),
            ("STORED", None, "STORED"),
            ("STORED", "", "STORED"),
            (None, None, "INV-{YYYY}-{SEQ}"),
            ("", "", "INV-{YYYY}-{SEQ}"),
            (None, "OVERRIDE", "OVERRIDE"),
        ],
    )
    def test_override_then_stored_then_default(self, identifier_service, stored, override, expected):
        assert identifier_service.resolve_pattern(stored, override) == expected

    def test_configured_default(self, store, clock, rng, create_inventory):
        service = IdentifierService(store, clock=clock, rng=rng, default_pattern="ITEM-{SEQ}")
        inv = create_inventory(pattern=None)

        assert service.generate(inv.id) == "ITEM-1"

    def test_override_on_generate(self, identifier_service, create_inventory):
        inv = create_inventory(pattern="STORED-{SEQ}")

        assert identifier_service.generate(inv.id, "OVR-{SEQ}") == "OVR-1"
        assert identifier_service.generate(inv.id) == "STORED-2"


class TestResultVariants:

    def test_generate_id_success(self, identifier_service, create_inventory):
        inv = create_inventory(pattern="R-{SEQ}")

        result = identifier_service.generate_id(inv.id)

        assert result == IdentifierResult.success("R-1")
        assert result.ok

    def test_generate_id_unknown_inventory(self, identifier_service):
        result = identifier_service.generate_id(uuid4())

        assert not result.ok
        assert result.value is None
        assert result.error_code == "INVENTORY_NOT_FOUND"
        assert "Inventory not found" in result.error_message

    def test_preview_id_unknown_inventory(self, identifier_service):
        result = identifier_service.preview_id(uuid4())
        assert result.error_code == "INVENTORY_NOT_FOUND"

    def test_generate_id_exhausted(self, store, clock, create_inventory, insert_item):
        inv = create_inventory(pattern="SAME")
        insert_item(inv.id, "SAME")
        service = IdentifierService(
            store, clock=clock, resolver=UniquenessResolver(store, max_attempts=0)
        )

        result = service.generate_id(inv.id)

        assert result.error_code == "ID_EXHAUSTED"

    def test_wide_random_token_renders(self, recording_store, clock):
        service = IdentifierService(recording_store(), clock=clock, rng=random.Random(9))

        generated = service.generate_id(uuid4(), "W-{RANDOM:5000}")
        previewed = service.preview_id(uuid4(), "W-{RANDOM:5000}")

        for result in (generated, previewed):
            assert result.ok
            assert len(result.value) == len("W-") + 5000
