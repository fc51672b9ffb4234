"""Soda value object — a product variant the machine can sell.

Sodas are created once by an operator and never mutated; a price or size
change produces a new instance.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum, IntEnum

from vending.domain.exceptions import (
    InvalidNameError,
    InvalidPriceError,
    InvalidSizeError,
    MoneyError,
)
from vending.domain.model.value_objects import Money


class SodaFlavor(Enum):
    COLA = "Cola"
    ORANGE = "Orange"
    LEMON_LIME = "Lemon-Lime"
    ROOT_BEER = "Root Beer"
    GRAPE = "Grape"
    CHERRY = "Cherry"
    VANILLA = "Vanilla"
    STRAWBERRY = "Strawberry"
    PEACH = "Peach"
    WATERMELON = "Watermelon"

    @staticmethod
    def parse(text: str) -> SodaFlavor | None:
        """Case-insensitive lookup; accepts ``lemon-lime``, ``lemonlime``, ``root beer``..."""
        key = text.strip().lower().replace("-", "").replace("_", "").replace(" ", "")
        for flavor in SodaFlavor:
            if flavor.name.replace("_", "").lower() == key:
                return flavor
        return None

    def __str__(self) -> str:
        return self.value


class SodaSize(IntEnum):
    """Ordered sizes; the value is the volume in ounces."""

    SMALL = 8
    MEDIUM = 12
    LARGE = 16
    XLARGE = 20

    @property
    def ounces(self) -> int:
        return int(self.value)

    @property
    def label(self) -> str:
        name = "X-Large" if self is SodaSize.XLARGE else self.name.capitalize()
        return f"{name} ({self.ounces} oz)"

    @staticmethod
    def parse(text: str) -> SodaSize:
        key = text.strip().lower()
        try:
            return _SIZE_ALIASES[key]
        except KeyError:
            raise InvalidSizeError(f"Unknown soda size: {text!r}") from None


_SIZE_ALIASES = {
    "small": SodaSize.SMALL,
    "s": SodaSize.SMALL,
    "medium": SodaSize.MEDIUM,
    "m": SodaSize.MEDIUM,
    "large": SodaSize.LARGE,
    "l": SodaSize.LARGE,
    "x-large": SodaSize.XLARGE,
    "xlarge": SodaSize.XLARGE,
    "xl": SodaSize.XLARGE,
}


@dataclass(frozen=True)
class Soda:
    """A soda type: brand name, flavor, size, price and dietary flags.

    Two sodas are the *same type* for dispensing purposes when name and
    flavor match; size, price and flags may differ.
    """

    name: str
    flavor: SodaFlavor
    size: SodaSize
    price: Money
    is_diet: bool = False
    is_caffeinated: bool = False

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidNameError("Soda name cannot be empty")
        if self.price.is_negative:
            raise InvalidPriceError(f"Soda price cannot be negative, got {self.price}")
        object.__setattr__(self, "name", self.name.strip())

    @property
    def volume_ounces(self) -> int:
        return self.size.ounces

    def with_size(self, new_size: SodaSize, size_multiplier: float) -> Soda:
        """Return a copy in *new_size* with the price scaled by *size_multiplier*."""
        if (
            math.isnan(size_multiplier)
            or math.isinf(size_multiplier)
            or size_multiplier <= 0.0
        ):
            raise InvalidPriceError(f"Invalid size multiplier: {size_multiplier!r}")
        try:
            new_price = Money.from_decimal(float(self.price.as_decimal()) * size_multiplier)
        except MoneyError as exc:
            raise InvalidPriceError(str(exc)) from exc
        return replace(self, size=new_size, price=new_price)

    def with_price(self, new_price: Money) -> Soda:
        if new_price.is_negative:
            raise InvalidPriceError(f"Soda price cannot be negative, got {new_price}")
        return replace(self, price=new_price)

    def is_same_type(self, other: Soda) -> bool:
        return self.name == other.name and self.flavor == other.flavor

    def description(self) -> str:
        diet = "Diet " if self.is_diet else ""
        caffeine = " (Caffeinated)" if self.is_caffeinated else " (Caffeine-free)"
        return f"{diet}{self.name} {self.flavor} - {self.volume_ounces} oz{caffeine}"

    def __str__(self) -> str:
        return self.description()
