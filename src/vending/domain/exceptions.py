"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Errors are grouped by the layer that raises them: Money, Soda, Slot and the
SodaMachine aggregate.  The aggregate never discards a lower-layer error; it
wraps it in ``SlotOperationError`` or ``MoneyOperationError`` and chains the
original via ``raise ... from``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vending.domain.model.slot import SlotId
    from vending.domain.model.value_objects import Money


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


# ── Money ────────────────────────────────────────────────────────────────────


class MoneyError(DomainException):
    """Base class for money arithmetic and construction errors."""


class InvalidAmountError(MoneyError):
    pass


class AmountOverflowError(MoneyError):
    def __init__(self, message: str = "Arithmetic overflow") -> None:
        super().__init__(message)


class AmountUnderflowError(MoneyError):
    def __init__(self, message: str = "Arithmetic underflow") -> None:
        super().__init__(message)


class DivisionByZeroError(MoneyError):
    def __init__(self, message: str = "Division by zero") -> None:
        super().__init__(message)


class CurrencyMismatchError(MoneyError):
    """Reserved: the machine only ever handles a single currency."""


# ── Soda ─────────────────────────────────────────────────────────────────────


class SodaError(DomainException):
    """Base class for soda construction errors."""


class InvalidNameError(SodaError):
    pass


class InvalidPriceError(SodaError):
    def __init__(self, message: str = "Invalid price") -> None:
        super().__init__(message)


class InvalidSizeError(SodaError):
    def __init__(self, message: str = "Invalid size") -> None:
        super().__init__(message)


# ── Slot ─────────────────────────────────────────────────────────────────────


class SlotError(DomainException):
    """Base class for errors raised by a single slot."""


class InvalidQuantityError(SlotError):
    pass


class InvalidCapacityError(SlotError):
    pass


class SlotEmptyError(SlotError):
    def __init__(self, message: str = "Slot is empty") -> None:
        super().__init__(message)


class SlotFullError(SlotError):
    """Raised when a refill is capped by the slot capacity.

    The slot has already been filled when this is raised; ``added`` holds
    how many units actually went in.
    """

    def __init__(self, added: int = 0) -> None:
        super().__init__(f"Slot is full ({added} added)")
        self.added = added


class SlotDisabledError(SlotError):
    def __init__(self, message: str = "Slot is disabled") -> None:
        super().__init__(message)


class SodaTypeMismatchError(SlotError):
    def __init__(
        self, message: str = "Soda type mismatch: slot must be empty to change its soda type"
    ) -> None:
        super().__init__(message)


class InsufficientQuantityError(SlotError):
    """Reserved for a strict (non-capped) removal policy."""


class InvalidSlotIdError(SlotError):
    pass


# ── SodaMachine ──────────────────────────────────────────────────────────────


class SodaMachineError(DomainException):
    """Base class for errors raised by the SodaMachine aggregate."""


class SlotNotFoundError(SodaMachineError):
    def __init__(self, slot_id: SlotId) -> None:
        super().__init__(f"Slot {slot_id} not found")
        self.slot_id = slot_id


class SlotOperationError(SodaMachineError):
    """A slot rejected the operation; ``error`` is the original SlotError."""

    def __init__(self, error: SlotError) -> None:
        super().__init__(f"Slot error: {error}")
        self.error = error


class MoneyOperationError(SodaMachineError):
    """Balance arithmetic failed; ``error`` is the original MoneyError."""

    def __init__(self, error: MoneyError) -> None:
        super().__init__(f"Money error: {error}")
        self.error = error


class InsufficientFundsError(SodaMachineError):
    def __init__(self, required: Money, available: Money) -> None:
        super().__init__(f"Insufficient funds: need {required}, have {available}")
        self.required = required
        self.available = available


class MachineNotOperationalError(SodaMachineError):
    def __init__(self, message: str = "Machine is not operational") -> None:
        super().__init__(message)


class MachineInvalidSlotIdError(SodaMachineError):
    """Reserved."""


class SlotAlreadyExistsError(SodaMachineError):
    def __init__(self, slot_id: SlotId) -> None:
        super().__init__(f"Slot {slot_id} already exists")
        self.slot_id = slot_id


class TooManySlotsError(SodaMachineError):
    def __init__(self, max_slots: int) -> None:
        super().__init__(f"Too many slots (maximum {max_slots})")
        self.max_slots = max_slots


class MachineInvalidAmountError(SodaMachineError):
    pass
