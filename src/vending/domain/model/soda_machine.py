"""SodaMachine aggregate — the core of the domain.

The SodaMachine is an aggregate root that owns its slots and the customer's
running balance.  All cross-entity invariants (sufficient funds, slot
existence, capacity ceilings) are enforced here, and every mutation returns
an event describing what happened.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from vending.domain.exceptions import (
    InsufficientFundsError,
    MachineInvalidAmountError,
    MachineNotOperationalError,
    MoneyError,
    MoneyOperationError,
    SlotAlreadyExistsError,
    SlotEmptyError,
    SlotError,
    SlotNotFoundError,
    SlotOperationError,
    TooManySlotsError,
    ValidationError,
)
from vending.domain.model.events import (
    ChangeReturned,
    MachineDisabled,
    MachineEnabled,
    MoneyInserted,
    MoneyReturned,
    SlotAdded,
    SlotConfigured,
    SlotRefilled,
    SodaDispensed,
)
from vending.domain.model.slot import MAX_ID, Slot, SlotId
from vending.domain.model.soda import Soda
from vending.domain.model.value_objects import Money


@dataclass(frozen=True, order=True)
class SodaMachineId:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Machine ID must be an integer, got {type(self.value).__name__}"
            )
        if not 0 < self.value <= MAX_ID:
            raise ValidationError(f"Machine ID must be between 1 and {MAX_ID}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class SodaMachine:
    """Aggregate root for a vending machine.

    Invariants:
    - ``len(slots) <= max_slots``
    - ``inserted_money`` is never negative
    - ``total_collected`` never decreases
    - every mutation except ``enable``/``disable`` is rejected while the
      machine is out of service

    Use the ``SodaMachine.create()`` factory for new machines.  The
    ``__init__`` is intentionally simple so the repository can reconstitute
    persisted machines without re-validating.  Slots are only mutated
    through the machine's own methods; ``get_slot`` hands out copies.
    """

    id: SodaMachineId
    max_slots: int
    slots: dict[SlotId, Slot] = field(default_factory=dict, repr=False)
    inserted_money: Money = field(default_factory=Money.zero)
    total_collected: Money = field(default_factory=Money.zero)
    is_operational: bool = True

    # --- Factory (used for NEW machines only) ---------------------------------

    @staticmethod
    def create(machine_id: SodaMachineId, max_slots: int) -> SodaMachine:
        """Create an operational machine with no slots and zero balances."""
        if max_slots <= 0:
            raise MachineInvalidAmountError("Maximum slot count must be greater than 0")
        return SodaMachine(id=machine_id, max_slots=max_slots)

    # --- Operational state ----------------------------------------------------

    def enable(self) -> MachineEnabled:
        self.is_operational = True
        return MachineEnabled()

    def disable(self) -> MachineDisabled:
        self.is_operational = False
        return MachineDisabled()

    # --- Slot management ------------------------------------------------------

    def add_slot(self, slot_id: SlotId, capacity: int) -> SlotAdded:
        self._ensure_operational()
        if len(self.slots) >= self.max_slots:
            raise TooManySlotsError(self.max_slots)
        if slot_id in self.slots:
            raise SlotAlreadyExistsError(slot_id)

        try:
            slot = Slot.create(slot_id, capacity)
        except SlotError as exc:
            raise SlotOperationError(exc) from exc

        self.slots[slot_id] = slot
        return SlotAdded(slot_id=slot_id, capacity=capacity)

    def configure_slot(self, slot_id: SlotId, soda_type: Soda) -> SlotConfigured:
        """Bind *soda_type* to an existing, empty slot."""
        self._ensure_operational()
        slot = self._find_slot(slot_id)

        try:
            slot.configure_soda_type(soda_type)
        except SlotError as exc:
            raise SlotOperationError(exc) from exc

        return SlotConfigured(slot_id=slot_id, soda_type=soda_type)

    def refill_slot(self, slot_id: SlotId, quantity: int) -> SlotRefilled:
        """Add *quantity* sodas to a slot.

        If the slot overflows it is still filled to capacity and the
        ``SlotFullError`` surfaces wrapped in ``SlotOperationError``.
        """
        self._ensure_operational()
        slot = self._find_slot(slot_id)

        try:
            added = slot.add_sodas(quantity)
        except SlotError as exc:
            raise SlotOperationError(exc) from exc

        return SlotRefilled(slot_id=slot_id, quantity_added=added)

    # --- Customer transactions ------------------------------------------------

    def insert_money(self, amount: Money) -> MoneyInserted:
        self._ensure_operational()
        if not amount.is_positive:
            raise MachineInvalidAmountError(f"Inserted amount must be positive, got {amount}")

        try:
            new_balance = self.inserted_money + amount
        except MoneyError as exc:
            raise MoneyOperationError(exc) from exc

        self.inserted_money = new_balance
        return MoneyInserted(amount=amount, total_inserted=new_balance)

    def dispense_soda(self, slot_id: SlotId) -> SodaDispensed:
        """Sell one soda from *slot_id* using the inserted balance.

        Steps:
        1. The slot must exist, be bound, enabled and non-empty.
        2. The balance must cover the price (checked before any mutation).
        3. Change and new revenue are both computed up front.
        4. The slot dispenses, then both balances are committed together.
        """
        self._ensure_operational()
        slot = self._find_slot(slot_id)

        soda = slot.soda_type
        if soda is None or not slot.can_dispense(soda):
            raise SlotOperationError(SlotEmptyError())

        if self.inserted_money < soda.price:
            raise InsufficientFundsError(required=soda.price, available=self.inserted_money)

        try:
            change = self.inserted_money - soda.price
            collected = self.total_collected + soda.price
        except MoneyError as exc:
            raise MoneyOperationError(exc) from exc

        try:
            dispensed = slot.dispense_soda()
        except SlotError as exc:
            raise SlotOperationError(exc) from exc

        self.total_collected = collected
        self.inserted_money = change
        return SodaDispensed(slot_id=slot_id, soda=dispensed)

    def return_money(self) -> MoneyReturned:
        """Refund the whole inserted balance."""
        self._ensure_operational()
        if self.inserted_money.is_zero:
            raise MachineInvalidAmountError("No money to return")

        returned = self.inserted_money
        self.inserted_money = Money.zero()
        return MoneyReturned(amount=returned)

    def return_change(self, amount: Money) -> ChangeReturned:
        """Refund *amount* out of the inserted balance."""
        self._ensure_operational()
        if not amount.is_positive:
            raise MachineInvalidAmountError(f"Change amount must be positive, got {amount}")
        if amount > self.inserted_money:
            raise InsufficientFundsError(required=amount, available=self.inserted_money)

        try:
            self.inserted_money = self.inserted_money - amount
        except MoneyError as exc:
            raise MoneyOperationError(exc) from exc

        return ChangeReturned(amount=amount)

    # --- Read-only views ------------------------------------------------------

    @property
    def slot_count(self) -> int:
        return len(self.slots)

    def has_slot(self, slot_id: SlotId) -> bool:
        return slot_id in self.slots

    def get_slot(self, slot_id: SlotId) -> Slot | None:
        """Return a copy of the slot, or None if it does not exist."""
        slot = self.slots.get(slot_id)
        return copy.copy(slot) if slot is not None else None

    def get_available_sodas(self) -> list[tuple[SlotId, Soda]]:
        """Slots that can dispense right now, ordered by slot ID."""
        return [
            (slot_id, slot.soda_type)
            for slot_id, slot in sorted(self.slots.items(), key=lambda item: item[0])
            if slot.soda_type is not None and slot.can_dispense(slot.soda_type)
        ]

    def find_available_soda(self, soda: Soda) -> SlotId | None:
        """Lowest slot ID able to dispense a soda of the same type, if any."""
        for slot_id, slot in sorted(self.slots.items(), key=lambda item: item[0]):
            if slot.can_dispense(soda):
                return slot_id
        return None

    def total_inventory_value(self) -> Money:
        """Sum of every bound slot's stock value.

        A slot whose value cannot be computed, or whose addition would
        overflow, is skipped and the running total is kept.
        """
        total = Money.zero()
        for slot in self.slots.values():
            value = slot.total_value()
            if value is None:
                continue
            try:
                total = total + value
            except MoneyError:
                continue
        return total

    def total_soda_count(self) -> int:
        return sum(slot.quantity for slot in self.slots.values())

    def status_summary(self) -> str:
        state = "Operational" if self.is_operational else "Out of Service"
        return (
            f"Machine {self.id}: {self.slot_count} slots, "
            f"{len(self.get_available_sodas())} available sodas "
            f"({self.total_soda_count()} total), "
            f"{self.total_inventory_value()} inventory value, "
            f"{self.inserted_money} inserted, "
            f"{self.total_collected} collected - {state}"
        )

    def __str__(self) -> str:
        return self.status_summary()

    # --- Internal helpers -----------------------------------------------------

    def _ensure_operational(self) -> None:
        if not self.is_operational:
            raise MachineNotOperationalError()

    def _find_slot(self, slot_id: SlotId) -> Slot:
        slot = self.slots.get(slot_id)
        if slot is None:
            raise SlotNotFoundError(slot_id)
        return slot
