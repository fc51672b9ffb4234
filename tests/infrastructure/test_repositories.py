"""Tests for the in-memory and JSON-file soda machine repositories."""

import json

import pytest

from vending.domain.model.slot import SlotId
from vending.domain.model.soda import SodaFlavor, SodaSize
from vending.domain.model.soda_machine import SodaMachine, SodaMachineId
from vending.domain.model.value_objects import Money
from vending.domain.repository.soda_machine_repository import (
    MachineAlreadyExistsError,
    RepositoryConnectionError,
    RepositoryError,
)
from vending.infrastructure.persistence.in_memory_soda_machine_repository import (
    InMemorySodaMachineRepository,
)
from vending.infrastructure.persistence.json_soda_machine_repository import (
    JsonSodaMachineRepository,
)
from tests.fakes import make_cola, stocked_machine

_SLOT = {"id": 1, "max_capacity": 5, "quantity": 2, "soda": None}


@pytest.fixture(params=["memory", "json"])
def repo(request, tmp_path):
    if request.param == "memory":
        return InMemorySodaMachineRepository()
    return JsonSodaMachineRepository(tmp_path / "machines.json")


class TestRepositoryContract:

    def test_missing_machine_is_none(self, repo):
        assert repo.find_by_id(SodaMachineId(1)) is None

    def test_round_trip(self, repo):
        machine = stocked_machine()
        machine.insert_money(Money(200))
        machine.dispense_soda(SlotId(1))
        machine.slots[SlotId(2)].disable()
        repo.save(machine)

        loaded = repo.find_by_id(SodaMachineId(1))

        assert loaded == machine
        assert loaded.get_slot(SlotId(1)).soda_type == make_cola()
        assert not loaded.get_slot(SlotId(2)).is_enabled

    def test_save_overwrites(self, repo):
        machine = stocked_machine()
        repo.save(machine)
        machine.insert_money(Money(100))
        repo.save(machine)
        assert repo.find_by_id(SodaMachineId(1)).inserted_money == Money(100)

    def test_unsaved_mutations_are_invisible(self, repo):
        repo.save(stocked_machine())
        first = repo.find_by_id(SodaMachineId(1))
        first.insert_money(Money(500))
        assert repo.find_by_id(SodaMachineId(1)).inserted_money.is_zero

    def test_create_rejects_duplicates(self, repo):
        repo.create(SodaMachine.create(SodaMachineId(1), 3))
        with pytest.raises(MachineAlreadyExistsError, match="Machine 1 already exists"):
            repo.create(SodaMachine.create(SodaMachineId(1), 3))

    def test_machines_are_independent(self, repo):
        repo.create(SodaMachine.create(SodaMachineId(1), 3))
        repo.create(SodaMachine.create(SodaMachineId(2), 7))
        assert repo.find_by_id(SodaMachineId(2)).max_slots == 7


class TestJsonRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "machines.json"
        JsonSodaMachineRepository(path)
        assert json.loads(path.read_text()) == []

    def test_money_is_stored_as_cents(self, tmp_path):
        path = tmp_path / "machines.json"
        machine = stocked_machine()
        machine.insert_money(Money.of("2.00"))
        JsonSodaMachineRepository(path).save(machine)

        raw = json.loads(path.read_text())[0]
        assert raw["inserted_cents"] == 200
        assert raw["slots"][0]["soda"] == {
            "name": "Coke",
            "flavor": "COLA",
            "size": "MEDIUM",
            "price_cents": 150,
            "is_diet": False,
            "is_caffeinated": True,
        }

    def test_reads_hand_written_record(self, tmp_path):
        path = tmp_path / "machines.json"
        path.write_text(json.dumps([{
            "id": 4,
            "max_slots": 2,
            "slots": [{
                "id": 1,
                "max_capacity": 6,
                "quantity": 2,
                "soda": {"name": "A&W", "flavor": "ROOT_BEER", "size": "LARGE", "price_cents": 175},
            }],
        }]))

        machine = JsonSodaMachineRepository(path).find_by_id(SodaMachineId(4))

        slot = machine.get_slot(SlotId(1))
        assert slot.soda_type.flavor is SodaFlavor.ROOT_BEER
        assert slot.soda_type.size is SodaSize.LARGE
        assert slot.is_enabled
        assert machine.is_operational
        assert machine.inserted_money.is_zero

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "machines.json"
        path.write_text("{not json")
        with pytest.raises(RepositoryConnectionError):
            JsonSodaMachineRepository(path).find_by_id(SodaMachineId(1))

    def test_corrupt_record(self, tmp_path):
        path = tmp_path / "machines.json"
        path.write_text(json.dumps([{"id": 1, "max_slots": 2, "slots": [{"id": 0}]}]))
        with pytest.raises(RepositoryError, match="Corrupt machine record"):
            JsonSodaMachineRepository(path).find_by_id(SodaMachineId(1))

    @pytest.mark.parametrize(
        "content",
        [
            [{"max_slots": 2, "slots": []}],
            {"id": 1},
            [1, 2],
        ],
    )
    def test_malformed_store_is_repository_error(self, tmp_path, content):
        path = tmp_path / "machines.json"
        path.write_text(json.dumps(content))
        repo = JsonSodaMachineRepository(path)

        with pytest.raises(RepositoryError):
            repo.find_by_id(SodaMachineId(1))
        with pytest.raises(RepositoryError):
            repo.save(stocked_machine())
        with pytest.raises(RepositoryError):
            repo.create(stocked_machine())

    @pytest.mark.parametrize(
        "record, reason",
        [
            ({"max_slots": 1, "slots": [_SLOT | {"id": 1}, _SLOT | {"id": 2}]}, "exceed max_slots"),
            ({"max_slots": 2, "slots": [_SLOT | {"quantity": 7}]}, "quantity 7 outside"),
            ({"max_slots": 2, "slots": [_SLOT | {"quantity": -1}]}, "quantity -1 outside"),
            ({"max_slots": 2, "slots": [_SLOT | {"max_capacity": 0, "quantity": 0}]}, "capacity"),
            ({"max_slots": 0, "slots": []}, "max_slots must be"),
            ({"max_slots": 2, "slots": [], "inserted_cents": -5}, "negative"),
            ({"max_slots": 2, "slots": [], "collected_cents": -5}, "negative"),
        ],
    )
    def test_record_breaking_machine_invariants_rejected(self, tmp_path, record, reason):
        path = tmp_path / "machines.json"
        path.write_text(json.dumps([{"id": 1} | record]))
        with pytest.raises(RepositoryError, match=reason):
            JsonSodaMachineRepository(path).find_by_id(SodaMachineId(1))

    def test_unusable_directory_is_connection_error(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        with pytest.raises(RepositoryConnectionError, match="Cannot create"):
            JsonSodaMachineRepository(blocker / "machines.json")
