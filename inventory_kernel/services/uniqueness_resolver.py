"""
UniquenessResolver -- keep generated custom ids unique within an inventory.

Responsibility:
    Checks a rendered candidate against the inventory's existing items and,
    on collision, disambiguates it with a short random suffix.

Architecture position:
    Kernel > Services -- called by IdentifierService.generate only.  The
    preview path never checks uniqueness.

Invariants enforced:
    - Bounded retries: the first candidate plus at most ``max_attempts``
      disambiguated candidates are checked.  Exhaustion raises
      IdExhaustedError instead of looping.
    - Only logical collisions are retried.  Store failures propagate.

Non-goals:
    - The existence check and the later item insert are not atomic as a
      pair.  Under a linearizable allocator ``{SEQ}`` patterns cannot
      collide with themselves; random-only patterns can, which is what the
      retry loop covers.  The items table's unique constraint is the final
      arbiter (see ItemService).
"""

from __future__ import annotations

import random
from typing import Callable
from uuid import UUID

from inventory_kernel.domain.tokens import disambiguation_suffix
from inventory_kernel.exceptions import IdExhaustedError
from inventory_kernel.logging_config import get_logger
from inventory_kernel.services.store import IdentifierStore

logger = get_logger("services.uniqueness")

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_SUFFIX_LENGTH = 6
DEFAULT_SUFFIX_DELIMITER = "-"


class UniquenessResolver:
    """
    Validate or repair a candidate custom id.

    Contract:
        ``ensure_unique`` returns a string that did not exist for the
        inventory at the time of its check.  On collision the next
        candidate is ``<base><delimiter><suffix>``, where ``base`` is a
        fresh rendering from ``render_fn`` when one is given (new random
        digits for ``{RANDOM:N}`` tokens) and the original candidate
        otherwise.  Suffixes never accumulate.
    """

    def __init__(
        self,
        store: IdentifierStore,
        rng: random.Random | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        suffix_length: int = DEFAULT_SUFFIX_LENGTH,
        delimiter: str = DEFAULT_SUFFIX_DELIMITER,
    ):
        if max_attempts < 0:
            raise ValueError(f"max_attempts must be >= 0, got {max_attempts}")
        self._store = store
        self._rng = rng or random.SystemRandom()
        self._max_attempts = max_attempts
        self._suffix_length = suffix_length
        self._delimiter = delimiter

    def ensure_unique(
        self,
        inventory_id: UUID,
        candidate: str,
        render_fn: Callable[[], str] | None = None,
    ) -> str:
        """
        Return ``candidate`` or a disambiguated variant unused in the inventory.

        Args:
            inventory_id: Inventory whose items must not share the id.
            candidate: Rendered identifier.
            render_fn: Optional zero-argument callable re-rendering the
                pattern for a fresh base on collision.

        Raises:
            IdExhaustedError: If every candidate within the budget collides.
        """
        current = candidate
        checks = 0

        while True:
            checks += 1
            if not self._store.exists_custom_id(inventory_id, current):
                return current

            logger.info(
                "custom_id_collision",
                extra={
                    "inventory_id": str(inventory_id),
                    "candidate": current,
                    "attempt": checks,
                },
            )

            if checks > self._max_attempts:
                logger.warning(
                    "custom_id_exhausted",
                    extra={
                        "inventory_id": str(inventory_id),
                        "candidate": current,
                        "attempts": checks,
                    },
                )
                raise IdExhaustedError(str(inventory_id), current, checks)

            base = render_fn() if render_fn is not None else candidate
            current = (
                f"{base}{self._delimiter}"
                f"{disambiguation_suffix(self._rng, self._suffix_length)}"
            )
