"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from vending.domain.exceptions import (
    AmountOverflowError,
    AmountUnderflowError,
    DivisionByZeroError,
    InvalidAmountError,
)

# Money is stored as a signed 64-bit count of cents.
MIN_CENTS = -(2**63)
MAX_CENTS = 2**63 - 1

_CENT = Decimal("0.01")


def _checked(cents: int) -> int:
    if cents > MAX_CENTS:
        raise AmountOverflowError()
    if cents < MIN_CENTS:
        raise AmountUnderflowError()
    return cents


@dataclass(frozen=True, order=True)
class Money:
    """Monetary amount in cents.

    Uses an integer count of minor units to avoid floating-point rounding
    errors that would be unacceptable in financial calculations.  Every
    arithmetic operation is checked against the signed 64-bit range and
    returns a new instance.
    """

    cents: int

    def __post_init__(self) -> None:
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise InvalidAmountError(
                f"Money cents must be an int, got {type(self.cents).__name__}"
            )
        _checked(self.cents)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(0)

    @staticmethod
    def from_cents(cents: int) -> Money:
        return Money(cents)

    @staticmethod
    def from_dollars_cents(dollars: int, cents: int) -> Money:
        """Build from a dollar part and a 0-99 cents part.

        A negative dollar part mirrors the cents: ``(-2, 50)`` is ``-$2.50``.
        """
        if not 0 <= cents <= 99:
            raise InvalidAmountError("Cents must be between 0 and 99")
        dollars_cents = _checked(dollars * 100)
        if dollars >= 0:
            return Money(_checked(dollars_cents + cents))
        return Money(_checked(dollars_cents - cents))

    @staticmethod
    def from_decimal(amount: float) -> Money:
        """Round a floating amount (e.g. ``5.25``) to the nearest cent."""
        if math.isnan(amount) or math.isinf(amount):
            raise InvalidAmountError("Amount cannot be NaN or infinite")
        scaled = amount * 100.0
        if scaled >= MAX_CENTS + 1:
            raise AmountOverflowError()
        if scaled < MIN_CENTS - 1:
            raise AmountUnderflowError()
        rounded = Decimal(scaled).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return Money(_checked(int(rounded)))

    @staticmethod
    def of(amount: str | int | Decimal) -> Money:
        """Parse an exact decimal amount such as ``"2.50"``.

        This is the boundary factory: it never goes through a float, and
        rejects anything finer than a cent instead of rounding it away.
        """
        if isinstance(amount, float):
            raise InvalidAmountError("Use Money.from_decimal for float amounts")
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise InvalidAmountError(f"Invalid money amount: {amount!r}") from exc
        if not value.is_finite():
            raise InvalidAmountError(f"Invalid money amount: {amount!r}")
        try:
            quantized = value.quantize(_CENT)
        except InvalidOperation as exc:
            raise (AmountOverflowError() if value > 0 else AmountUnderflowError()) from exc
        if value != quantized:
            raise InvalidAmountError(
                f"Money amount cannot have more than two decimal places: {amount!r}"
            )
        return Money(_checked(int(quantized.scaleb(2))))

    # --- Accessors ------------------------------------------------------------

    @property
    def dollars(self) -> int:
        """Whole dollar part, truncated toward zero."""
        return -(-self.cents // 100) if self.cents < 0 else self.cents // 100

    @property
    def cents_portion(self) -> int:
        return abs(self.cents) % 100

    def as_decimal(self) -> Decimal:
        return Decimal(self.cents).scaleb(-2)

    @property
    def is_zero(self) -> bool:
        return self.cents == 0

    @property
    def is_positive(self) -> bool:
        return self.cents > 0

    @property
    def is_negative(self) -> bool:
        return self.cents < 0

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(_checked(self.cents + other.cents))

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(_checked(self.cents - other.cents))

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        result = self.cents * factor
        if not MIN_CENTS <= result <= MAX_CENTS:
            raise AmountOverflowError()
        return Money(result)

    def __truediv__(self, divisor: int) -> Money:
        """Integer division truncating toward zero."""
        if isinstance(divisor, bool) or not isinstance(divisor, int):
            raise TypeError(f"Can only divide Money by int, got {type(divisor).__name__}")
        if divisor == 0:
            raise DivisionByZeroError()
        quotient = abs(self.cents) // abs(divisor)
        if (self.cents < 0) != (divisor < 0):
            quotient = -quotient
        return Money(_checked(quotient))

    def __neg__(self) -> Money:
        return Money(_checked(-self.cents))

    def __abs__(self) -> Money:
        return Money(_checked(abs(self.cents)))

    # --- Display --------------------------------------------------------------

    def to_decimal_string(self) -> str:
        """Two-fraction-digit amount without a currency sign, e.g. ``"1.50"``."""
        sign = "-" if self.is_negative else ""
        return f"{sign}{abs(self.dollars)}.{self.cents_portion:02d}"

    def __str__(self) -> str:
        sign = "-" if self.is_negative else ""
        return f"{sign}${abs(self.dollars)}.{self.cents_portion:02d}"
