"""
Typed Exception Hierarchy for the Inventory Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the identifier service (request handlers, item screens, import
jobs) need to tell "this inventory does not exist" apart from "we could not
find a free identifier" without parsing message strings:

    try:
        custom_id = identifier_service.generate(inventory_id)
    except InventoryNotFoundError as e:
        return not_found(e.inventory_id)
    except IdExhaustedError as e:
        log.warning(f"No free id after {e.attempts} attempts")
        api_response(code=e.code, inventory=e.inventory_id)

Every exception:
  1. Has a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    InventoryKernelError (base)
    |
    +-- InventoryError
    |   +-- InventoryNotFoundError
    |
    +-- IdentifierError
    |   +-- IdExhaustedError
    |
    +-- ItemError
        +-- CustomIdConflictError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category    | Code                  | When Raised
------------|-----------------------|---------------------------------------------
Inventory   | INVENTORY_NOT_FOUND   | Inventory ID doesn't resolve to a stored row
------------|-----------------------|---------------------------------------------
Identifier  | ID_EXHAUSTED          | Collision retry budget exceeded
------------|-----------------------|---------------------------------------------
Item        | CUSTOM_ID_CONFLICT    | Item insert hit the (inventory, custom_id)
            |                       | unique constraint

Unrecognized pattern tokens are NOT errors; they render as literal text.

Database failures (connectivity, aborted transactions) are raised by
SQLAlchemy and propagate unchanged -- they are not wrapped here.

===============================================================================
HANDLING PATTERNS
===============================================================================

1. InventoryNotFoundError is terminal for the request; never retried.

2. IdExhaustedError may be retried by the caller as a whole new generate()
   call, which reserves a fresh sequence number.

3. CustomIdConflictError means a concurrent writer inserted the same
   identifier between the uniqueness check and the insert.  The caller's
   transaction must be rolled back before retrying.
"""


class InventoryKernelError(Exception):
    """
    Base exception for all inventory kernel errors.

    All subclasses must have a `code` class attribute
    for machine-readable error identification.
    """

    code: str = "INVENTORY_KERNEL_ERROR"


# Inventory-related exceptions


class InventoryError(InventoryKernelError):
    """Base exception for inventory-related errors."""

    code: str = "INVENTORY_ERROR"


class InventoryNotFoundError(InventoryError):
    """Inventory with given ID was not found."""

    code: str = "INVENTORY_NOT_FOUND"

    def __init__(self, inventory_id: str):
        self.inventory_id = inventory_id
        super().__init__(f"Inventory not found: {inventory_id}")


# Identifier-related exceptions


class IdentifierError(InventoryKernelError):
    """Base exception for identifier generation errors."""

    code: str = "IDENTIFIER_ERROR"


class IdExhaustedError(IdentifierError):
    """
    No unused identifier was found within the retry budget.

    The reserved sequence number stays consumed; retrying the whole
    generation reserves a new one.
    """

    code: str = "ID_EXHAUSTED"

    def __init__(self, inventory_id: str, candidate: str, attempts: int):
        self.inventory_id = inventory_id
        self.candidate = candidate
        self.attempts = attempts
        super().__init__(
            f"Unable to generate unique id for inventory {inventory_id} "
            f"after {attempts} attempts (last candidate: {candidate})"
        )


# Item-related exceptions


class ItemError(InventoryKernelError):
    """Base exception for item-related errors."""

    code: str = "ITEM_ERROR"


class CustomIdConflictError(ItemError):
    """Custom ID is already used by another item of the same inventory."""

    code: str = "CUSTOM_ID_CONFLICT"

    def __init__(self, inventory_id: str, custom_id: str):
        self.inventory_id = inventory_id
        self.custom_id = custom_id
        super().__init__(
            f"Custom id '{custom_id}' already exists in inventory {inventory_id}"
        )
