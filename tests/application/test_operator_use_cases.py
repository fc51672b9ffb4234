"""Integration tests for the operator use cases against an in-memory store."""

import pytest

from vending.application.buy_soda import BuySodaHandler
from vending.application.configure_slot import ConfigureSlotHandler
from vending.application.create_machine import CreateMachineHandler
from vending.application.errors import (
    DuplicateMachineError,
    MachineNotFoundError,
    RepositoryUnavailableError,
)
from vending.application.insert_money import InsertMoneyHandler
from vending.application.refill_slot import RefillSlotHandler
from vending.application.show_machine_status import ShowMachineStatusHandler
from vending.domain.exceptions import (
    MachineInvalidAmountError,
    SlotFullError,
    SlotNotFoundError,
    SlotOperationError,
    SodaTypeMismatchError,
    TooManySlotsError,
)
from vending.domain.model.slot import SlotId
from vending.domain.model.soda_machine import SodaMachineId
from vending.domain.model.value_objects import Money
from tests.fakes import (
    FakeSodaMachineRepository,
    UnavailableSodaMachineRepository,
    make_cola,
    make_orange,
    stocked_machine,
)


def _stored(repo, machine_id: int = 1):
    return repo.find_by_id(SodaMachineId(machine_id))


class TestCreateMachine:

    def test_creates_empty_machine(self):
        repo = FakeSodaMachineRepository()
        CreateMachineHandler(repo).handle(1, 4)

        machine = _stored(repo)
        assert machine.max_slots == 4
        assert machine.slot_count == 0
        assert machine.is_operational

    def test_duplicate_rejected(self):
        repo = FakeSodaMachineRepository()
        handler = CreateMachineHandler(repo)
        handler.handle(1, 4)
        with pytest.raises(DuplicateMachineError, match="already exists"):
            handler.handle(1, 4)

    def test_invalid_max_slots(self):
        with pytest.raises(MachineInvalidAmountError):
            CreateMachineHandler(FakeSodaMachineRepository()).handle(1, 0)

    def test_store_offline(self):
        with pytest.raises(RepositoryUnavailableError):
            CreateMachineHandler(UnavailableSodaMachineRepository()).handle(1, 4)


class TestConfigureSlot:

    def test_adds_missing_slot_then_binds(self):
        repo = FakeSodaMachineRepository()
        CreateMachineHandler(repo).handle(1, 4)

        event = ConfigureSlotHandler(repo).handle(1, 3, 12, make_cola())

        assert event.slot_id == SlotId(3)
        slot = _stored(repo).get_slot(SlotId(3))
        assert slot.max_capacity == 12
        assert slot.soda_type == make_cola()

    def test_rebinds_existing_empty_slot(self):
        repo = FakeSodaMachineRepository()
        CreateMachineHandler(repo).handle(1, 4)
        handler = ConfigureSlotHandler(repo)
        handler.handle(1, 1, 10, make_cola())
        handler.handle(1, 1, 99, make_orange())

        slot = _stored(repo).get_slot(SlotId(1))
        assert slot.soda_type == make_orange()
        assert slot.max_capacity == 10

    def test_rebinds_slot_after_it_sells_out(self):
        repo = FakeSodaMachineRepository([stocked_machine()])
        InsertMoneyHandler(repo).handle(1, Money.of("5.00"))
        buy = BuySodaHandler(repo)
        for _ in range(3):
            buy.handle(1, 2)

        ConfigureSlotHandler(repo).handle(1, 2, 10, make_cola())

        slot = _stored(repo).get_slot(SlotId(2))
        assert slot.is_empty
        assert slot.soda_type == make_cola()

    def test_stocked_slot_cannot_be_rebound(self):
        repo = FakeSodaMachineRepository([stocked_machine()])
        with pytest.raises(SlotOperationError) as excinfo:
            ConfigureSlotHandler(repo).handle(1, 1, 10, make_orange())
        assert isinstance(excinfo.value.error, SodaTypeMismatchError)
        assert _stored(repo).get_slot(SlotId(1)).soda_type == make_cola()

    def test_slot_ceiling(self):
        repo = FakeSodaMachineRepository([stocked_machine(max_slots=2)])
        with pytest.raises(TooManySlotsError):
            ConfigureSlotHandler(repo).handle(1, 3, 10, make_cola())
        assert _stored(repo).slot_count == 2

    def test_unknown_machine(self):
        with pytest.raises(MachineNotFoundError):
            ConfigureSlotHandler(FakeSodaMachineRepository()).handle(1, 1, 10, make_cola())


class TestRefillSlot:

    def test_refill(self):
        repo = FakeSodaMachineRepository([stocked_machine()])
        event = RefillSlotHandler(repo).handle(1, 2, 4)
        assert event.quantity_added == 4
        assert _stored(repo).get_slot(SlotId(2)).quantity == 7

    def test_overfill_persists_partial_fill(self):
        repo = FakeSodaMachineRepository([stocked_machine()])

        with pytest.raises(SlotOperationError) as excinfo:
            RefillSlotHandler(repo).handle(1, 1, 50)

        assert isinstance(excinfo.value.error, SlotFullError)
        assert excinfo.value.error.added == 5
        assert _stored(repo).get_slot(SlotId(1)).quantity == 10

    def test_unknown_slot_saves_nothing(self):
        repo = FakeSodaMachineRepository([stocked_machine()])
        with pytest.raises(SlotNotFoundError):
            RefillSlotHandler(repo).handle(1, 9, 1)
        assert repo.save_count == 0


class TestShowMachineStatus:

    def test_summary(self):
        repo = FakeSodaMachineRepository([stocked_machine()])
        summary = ShowMachineStatusHandler(repo).handle(1)
        assert summary.startswith("Machine 1: 2 slots, 2 available sodas (8 total)")
        assert summary.endswith("Operational")

    def test_unknown_machine(self):
        with pytest.raises(MachineNotFoundError):
            ShowMachineStatusHandler(FakeSodaMachineRepository()).handle(1)
