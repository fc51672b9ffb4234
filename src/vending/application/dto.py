"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AvailableSodaDTO:
    """Output: a soda a customer can buy right now."""

    slot_id: int
    soda_name: str
    price: str  # two fraction digits, e.g. "1.50"
