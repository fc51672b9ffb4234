"""Events returned by SodaMachine mutations.

Events are immutable records of something that already happened.  They are
plain return values for the immediate caller; nothing subscribes to them.
"""

from __future__ import annotations

from dataclasses import dataclass

from vending.domain.model.slot import SlotId
from vending.domain.model.soda import Soda
from vending.domain.model.value_objects import Money


class SodaMachineEvent:
    """Base class for every soda machine event."""


@dataclass(frozen=True)
class MoneyInserted(SodaMachineEvent):
    amount: Money
    total_inserted: Money


@dataclass(frozen=True)
class MoneyReturned(SodaMachineEvent):
    amount: Money


@dataclass(frozen=True)
class ChangeReturned(SodaMachineEvent):
    amount: Money


@dataclass(frozen=True)
class SodaDispensed(SodaMachineEvent):
    slot_id: SlotId
    soda: Soda


@dataclass(frozen=True)
class SlotAdded(SodaMachineEvent):
    slot_id: SlotId
    capacity: int


@dataclass(frozen=True)
class SlotConfigured(SodaMachineEvent):
    slot_id: SlotId
    soda_type: Soda


@dataclass(frozen=True)
class SlotRefilled(SodaMachineEvent):
    slot_id: SlotId
    quantity_added: int


@dataclass(frozen=True)
class MachineEnabled(SodaMachineEvent):
    pass


@dataclass(frozen=True)
class MachineDisabled(SodaMachineEvent):
    pass
