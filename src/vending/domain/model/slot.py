"""Slot entity — one product line inside a soda machine.

A slot has a stable identity, a capacity and at most one soda type bound
at a time.  It knows nothing about money balances or its owning machine.
"""

from __future__ import annotations

from dataclasses import dataclass

from vending.domain.exceptions import (
    InvalidCapacityError,
    InvalidQuantityError,
    InvalidSlotIdError,
    MoneyError,
    SlotDisabledError,
    SlotEmptyError,
    SlotFullError,
    SodaTypeMismatchError,
)
from vending.domain.model.soda import Soda
from vending.domain.model.value_objects import Money

MAX_ID = 2**32 - 1


@dataclass(frozen=True, order=True)
class SlotId:
    """Positive 32-bit slot identifier, unique within a machine."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidSlotIdError(
                f"Slot ID must be an integer, got {type(self.value).__name__}"
            )
        if not 0 < self.value <= MAX_ID:
            raise InvalidSlotIdError(f"Slot ID must be between 1 and {MAX_ID}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class Slot:
    """Capacity-bounded container for a single soda type.

    Invariants:
    - ``0 <= quantity <= max_capacity``
    - ``max_capacity > 0``
    - the soda type can only change while the slot is empty

    Use ``Slot.create()`` for new slots.  The ``__init__`` is intentionally
    simple so repositories can reconstitute persisted slots.
    """

    id: SlotId
    max_capacity: int
    soda_type: Soda | None = None
    quantity: int = 0
    is_enabled: bool = True

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(slot_id: SlotId, max_capacity: int) -> Slot:
        """Create a new, empty, enabled slot."""
        if max_capacity <= 0:
            raise InvalidCapacityError("Capacity must be greater than 0")
        return Slot(id=slot_id, max_capacity=max_capacity)

    @staticmethod
    def create_with_soda(
        slot_id: SlotId,
        soda_type: Soda,
        quantity: int,
        max_capacity: int,
    ) -> Slot:
        """Create a slot already bound to *soda_type* and stocked."""
        if max_capacity <= 0:
            raise InvalidCapacityError("Capacity must be greater than 0")
        if quantity < 0 or quantity > max_capacity:
            raise InvalidQuantityError("Quantity cannot exceed capacity")
        return Slot(
            id=slot_id,
            max_capacity=max_capacity,
            soda_type=soda_type,
            quantity=quantity,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return self.quantity == 0

    @property
    def is_full(self) -> bool:
        return self.quantity >= self.max_capacity

    @property
    def remaining_capacity(self) -> int:
        return max(self.max_capacity - self.quantity, 0)

    @property
    def fill_percentage(self) -> float:
        """Fill level between 0.0 and 1.0."""
        return self.quantity / self.max_capacity

    # --- Configuration --------------------------------------------------------

    def configure_soda_type(self, soda_type: Soda) -> None:
        """Bind *soda_type* to this slot.

        Only allowed while the slot is empty: a slot physically holds one
        product line at a time.
        """
        if not self.is_empty:
            raise SodaTypeMismatchError()
        self.soda_type = soda_type

    def set_capacity(self, new_capacity: int) -> None:
        if new_capacity <= 0:
            raise InvalidCapacityError("Capacity must be greater than 0")
        if self.quantity > new_capacity:
            raise InvalidCapacityError("Cannot reduce capacity below current quantity")
        self.max_capacity = new_capacity

    def enable(self) -> None:
        self.is_enabled = True

    def disable(self) -> None:
        self.is_enabled = False

    # --- Stock movements ------------------------------------------------------

    def add_sodas(self, count: int) -> int:
        """Add up to *count* sodas and return how many were added.

        When *count* exceeds the remaining capacity the slot is filled to
        capacity and ``SlotFullError`` is raised anyway; the error's
        ``added`` attribute tells the caller how many actually went in.
        """
        if not self.is_enabled:
            raise SlotDisabledError()
        if count < 0:
            raise InvalidQuantityError("Quantity to add cannot be negative")
        if count == 0:
            return 0

        added = min(count, self.remaining_capacity)
        self.quantity += added

        if added < count:
            raise SlotFullError(added)
        return added

    def remove_sodas(self, count: int) -> int:
        """Remove up to *count* sodas and return how many were removed."""
        if not self.is_enabled:
            raise SlotDisabledError()
        if count < 0:
            raise InvalidQuantityError("Quantity to remove cannot be negative")
        if count == 0:
            return 0
        if self.is_empty:
            raise SlotEmptyError()

        removed = min(count, self.quantity)
        self.quantity -= removed
        return removed

    def dispense_soda(self) -> Soda:
        """Remove exactly one soda and return its type."""
        if not self.is_enabled:
            raise SlotDisabledError()
        if self.is_empty or self.soda_type is None:
            raise SlotEmptyError()
        self.quantity -= 1
        return self.soda_type

    # --- Queries --------------------------------------------------------------

    def can_dispense(self, soda: Soda) -> bool:
        return (
            self.is_enabled
            and not self.is_empty
            and self.soda_type is not None
            and self.soda_type.is_same_type(soda)
        )

    def total_value(self) -> Money | None:
        """Price times quantity, or None when no soda type is bound.

        An arithmetic overflow also yields None rather than an error.
        """
        if self.soda_type is None:
            return None
        if self.is_empty:
            return Money.zero()
        try:
            return self.soda_type.price * self.quantity
        except MoneyError:
            return None

    def __str__(self) -> str:
        state = "Enabled" if self.is_enabled else "Disabled"
        label = self.soda_type.name if self.soda_type is not None else "Empty"
        return f"Slot {self.id}: {label} ({self.quantity} of {self.max_capacity}) - {state}"
