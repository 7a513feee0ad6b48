"""
IdentifierService -- generate and preview custom item identifiers.

Responsibility:
    Orchestrates pattern resolution, sequence reservation, rendering and
    uniqueness repair for one inventory.

Architecture position:
    Kernel > Services -- the library boundary for callers (request
    handlers, ItemService).  Composes SequenceAllocator, the domain pattern
    compiler / token resolvers, and UniquenessResolver over one
    IdentifierStore.

Invariants enforced:
    - ``generate`` consumes exactly one sequence reservation per call.  The
      reservation is committed by the store before rendering and is never
      rolled back, so failed downstream item creation leaves gaps, never
      duplicates.
    - ``preview`` never mutates inventory or item state and never checks
      uniqueness; its output is advisory.
    - Pattern resolution order: explicit override, then the inventory's
      stored pattern, then the configured default.  Empty strings count as
      "not set".

Failure modes:
    - InventoryNotFoundError for unknown inventories (both operations).
    - IdExhaustedError when collision repair runs out of attempts
      (``generate`` only).
    - Store failures propagate unchanged.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from functools import partial
from uuid import UUID

from inventory_kernel.domain.clock import Clock, SystemClock
from inventory_kernel.domain.pattern import (
    DEFAULT_PATTERN,
    compile_pattern,
    pattern_tokens,
    render_pattern,
)
from inventory_kernel.domain.tokens import RenderContext
from inventory_kernel.exceptions import InventoryKernelError
from inventory_kernel.logging_config import LogContext, get_logger
from inventory_kernel.services.sequence_allocator import SequenceAllocator
from inventory_kernel.services.store import IdentifierStore
from inventory_kernel.services.uniqueness_resolver import UniquenessResolver

logger = get_logger("services.identifier")


@dataclass(frozen=True)
class IdentifierResult:
    """
    Outcome of ``generate_id`` / ``preview_id``.

    Exactly one of ``value`` and ``error_code`` is set.
    """

    value: str | None
    error_code: str | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_code is None

    @classmethod
    def success(cls, value: str) -> IdentifierResult:
        return cls(value=value)

    @classmethod
    def failure(cls, error: InventoryKernelError) -> IdentifierResult:
        return cls(value=None, error_code=error.code, error_message=str(error))


class IdentifierService:
    """
    Mint and preview custom ids for inventory items.

    Contract:
        Stateless apart from its collaborators; one instance may serve
        concurrent requests as long as the store is thread-safe.

    Usage:
        service = IdentifierService(store, clock=SystemClock())
        custom_id = service.generate(inventory_id)
        sample = service.preview(inventory_id, "ASSET-{RANDOM:4}")
    """

    def __init__(
        self,
        store: IdentifierStore,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        default_pattern: str = DEFAULT_PATTERN,
        resolver: UniquenessResolver | None = None,
    ):
        """
        Args:
            store: Persistence primitives.
            clock: Source of the generation instant. Defaults to SystemClock.
            rng: Random source for ``{RANDOM:N}`` and suffixes. Defaults to
                ``random.SystemRandom()``; pass a seeded ``random.Random``
                for reproducible output.
            default_pattern: Template used when neither an override nor a
                stored pattern is available.
            resolver: Collision resolver. Defaults to one sharing ``store``
                and ``rng``.
        """
        self._store = store
        self._clock = clock or SystemClock()
        self._rng = rng or random.SystemRandom()
        self._default_pattern = default_pattern
        self._allocator = SequenceAllocator(store)
        self._resolver = resolver or UniquenessResolver(store, rng=self._rng)

    def resolve_pattern(self, stored: str | None, override: str | None = None) -> str:
        """Pick the template: override, then stored pattern, then default."""
        if override:
            return override
        if stored:
            return stored
        return self._default_pattern

    def generate(self, inventory_id: UUID, pattern_override: str | None = None) -> str:
        """
        Mint a new custom id, consuming one sequence number.

        Args:
            inventory_id: Target inventory.
            pattern_override: Template to use instead of the stored one.

        Returns:
            A custom id unused in the inventory at the time of the check.

        Raises:
            InventoryNotFoundError: If the inventory does not exist.
            IdExhaustedError: If no unused id was found within the budget.
        """
        with LogContext.bind(inventory_id=str(inventory_id)):
            inventory = self._store.get_inventory(inventory_id)
            template = self.resolve_pattern(inventory.pattern, pattern_override)

            sequence = self._allocator.reserve_next(inventory_id)
            segments = compile_pattern(template)
            context = RenderContext(
                instant=self._clock.now_utc(),
                sequence=sequence,
                rng=self._rng,
            )
            render = partial(render_pattern, segments, context)

            custom_id = self._resolver.ensure_unique(inventory_id, render(), render)

            logger.info(
                "custom_id_generated",
                extra={
                    "pattern": template,
                    "sequence": sequence,
                    "custom_id": custom_id,
                    "tokens": [t.kind.value for t in pattern_tokens(segments)],
                },
            )
            return custom_id

    def preview(self, inventory_id: UUID, pattern_override: str | None = None) -> str:
        """
        Render a sample id without reserving a sequence or checking uniqueness.

        Raises:
            InventoryNotFoundError: If the inventory does not exist.
        """
        with LogContext.bind(inventory_id=str(inventory_id)):
            inventory = self._store.get_inventory(inventory_id)
            template = self.resolve_pattern(inventory.pattern, pattern_override)

            sequence = self._allocator.peek_next(inventory_id)
            context = RenderContext(
                instant=self._clock.now_utc(),
                sequence=sequence,
                rng=self._rng,
            )
            sample = render_pattern(compile_pattern(template), context)

            logger.debug(
                "custom_id_previewed",
                extra={"pattern": template, "sequence": sequence, "sample": sample},
            )
            return sample

    def generate_id(
        self, inventory_id: UUID, pattern_override: str | None = None
    ) -> IdentifierResult:
        """``generate`` reporting kernel errors as a result instead of raising."""
        try:
            return IdentifierResult.success(self.generate(inventory_id, pattern_override))
        except InventoryKernelError as exc:
            return IdentifierResult.failure(exc)

    def preview_id(
        self, inventory_id: UUID, pattern_override: str | None = None
    ) -> IdentifierResult:
        """``preview`` reporting kernel errors as a result instead of raising."""
        try:
            return IdentifierResult.success(self.preview(inventory_id, pattern_override))
        except InventoryKernelError as exc:
            return IdentifierResult.failure(exc)
