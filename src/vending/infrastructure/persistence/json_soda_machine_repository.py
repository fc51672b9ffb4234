"""JSON-file-backed implementation of SodaMachineRepository.

Money is stored as integer cents so that no float ever touches a balance.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from vending.domain.exceptions import DomainException
from vending.domain.model.slot import Slot, SlotId
from vending.domain.model.soda import Soda, SodaFlavor, SodaSize
from vending.domain.model.soda_machine import SodaMachine, SodaMachineId
from vending.domain.model.value_objects import Money
from vending.domain.repository.soda_machine_repository import (
    MachineAlreadyExistsError,
    RepositoryConnectionError,
    RepositoryError,
    SodaMachineRepository,
)

logger = logging.getLogger(__name__)


class JsonSodaMachineRepository(SodaMachineRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._ensure_file()

    # --- SodaMachineRepository interface --------------------------------------

    def find_by_id(self, machine_id: SodaMachineId) -> SodaMachine | None:
        with self._lock:
            for raw in self._load_raw():
                if raw.get("id") == machine_id.value:
                    return self._to_domain(raw)
        logger.debug("Machine %s not found in %s", machine_id, self._file_path)
        return None

    def save(self, machine: SodaMachine) -> None:
        with self._lock:
            records = self._load_raw()
            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(records):
                if raw.get("id") == machine.id.value:
                    records[i] = self._to_raw(machine)
                    break
            else:
                records.append(self._to_raw(machine))
            self._persist_raw(records)
        logger.debug("Saved machine %s to %s", machine.id, self._file_path)

    def create(self, machine: SodaMachine) -> None:
        with self._lock:
            records = self._load_raw()
            if any(raw.get("id") == machine.id.value for raw in records):
                raise MachineAlreadyExistsError(machine.id)
            records.append(self._to_raw(machine))
            self._persist_raw(records)
        logger.debug("Created machine %s in %s", machine.id, self._file_path)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(machine: SodaMachine) -> dict:
        return {
            "id": machine.id.value,
            "max_slots": machine.max_slots,
            "inserted_cents": machine.inserted_money.cents,
            "collected_cents": machine.total_collected.cents,
            "is_operational": machine.is_operational,
            "slots": [
                {
                    "id": slot.id.value,
                    "max_capacity": slot.max_capacity,
                    "quantity": slot.quantity,
                    "is_enabled": slot.is_enabled,
                    "soda": JsonSodaMachineRepository._soda_to_raw(slot.soda_type),
                }
                for slot in sorted(machine.slots.values(), key=lambda s: s.id)
            ],
        }

    @staticmethod
    def _soda_to_raw(soda: Soda | None) -> dict | None:
        if soda is None:
            return None
        return {
            "name": soda.name,
            "flavor": soda.flavor.name,
            "size": soda.size.name,
            "price_cents": soda.price.cents,
            "is_diet": soda.is_diet,
            "is_caffeinated": soda.is_caffeinated,
        }

    @staticmethod
    def _to_domain(raw: dict) -> SodaMachine:
        try:
            slots = {}
            for s in raw["slots"]:
                soda = None
                if s.get("soda") is not None:
                    soda = Soda(
                        name=s["soda"]["name"],
                        flavor=SodaFlavor[s["soda"]["flavor"]],
                        size=SodaSize[s["soda"]["size"]],
                        price=Money(s["soda"]["price_cents"]),
                        is_diet=s["soda"].get("is_diet", False),
                        is_caffeinated=s["soda"].get("is_caffeinated", False),
                    )
                slot_id = SlotId(s["id"])
                slots[slot_id] = Slot(
                    id=slot_id,
                    max_capacity=s["max_capacity"],
                    soda_type=soda,
                    quantity=s.get("quantity", 0),
                    is_enabled=s.get("is_enabled", True),
                )
            machine = SodaMachine(
                id=SodaMachineId(raw["id"]),
                max_slots=raw["max_slots"],
                slots=slots,
                inserted_money=Money(raw.get("inserted_cents", 0)),
                total_collected=Money(raw.get("collected_cents", 0)),
                is_operational=raw.get("is_operational", True),
            )
            problem = JsonSodaMachineRepository._invariant_violation(machine)
        except (KeyError, TypeError, AttributeError, DomainException) as exc:
            raise RepositoryError(f"Corrupt machine record {raw.get('id')!r}: {exc}") from exc

        if problem is not None:
            raise RepositoryError(f"Corrupt machine record {raw.get('id')!r}: {problem}")
        return machine

    @staticmethod
    def _invariant_violation(machine: SodaMachine) -> str | None:
        """Describe the first aggregate invariant the record breaks, if any."""
        if machine.max_slots <= 0:
            return "max_slots must be greater than 0"
        if machine.slot_count > machine.max_slots:
            return f"{machine.slot_count} slots exceed max_slots {machine.max_slots}"
        if machine.inserted_money.is_negative or machine.total_collected.is_negative:
            return "balances cannot be negative"
        for slot in machine.slots.values():
            if slot.max_capacity <= 0:
                return f"slot {slot.id} capacity must be greater than 0"
            if not 0 <= slot.quantity <= slot.max_capacity:
                return f"slot {slot.id} quantity {slot.quantity} outside 0..{slot.max_capacity}"
        return None

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise RepositoryConnectionError(
                f"Cannot read {self._file_path}: {exc}"
            ) from exc
        if not isinstance(records, list) or not all(
            isinstance(r, dict) and "id" in r for r in records
        ):
            raise RepositoryError(f"{self._file_path} holds malformed machine records")
        return records

    def _persist_raw(self, records: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise RepositoryConnectionError(
                f"Cannot write {self._file_path}: {exc}"
            ) from exc

    def _ensure_file(self) -> None:
        try:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise RepositoryConnectionError(
                f"Cannot create {self._file_path}: {exc}"
            ) from exc
