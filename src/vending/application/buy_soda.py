"""Application service: Buy Soda use case.

Loads the machine, lets the aggregate run the whole purchase (funds check,
dispense, change, revenue) and persists the result.  Nothing is saved when
the aggregate rejects the purchase.
"""

from __future__ import annotations

import logging

from vending.application.errors import MachineNotFoundError, repository_errors
from vending.domain.exceptions import DomainException
from vending.domain.model.events import SodaDispensed
from vending.domain.model.slot import SlotId
from vending.domain.model.soda_machine import SodaMachineId
from vending.domain.repository.soda_machine_repository import SodaMachineRepository

logger = logging.getLogger(__name__)


class BuySodaHandler:

    def __init__(self, machine_repo: SodaMachineRepository) -> None:
        self._machine_repo = machine_repo

    def handle(self, machine_id: int, slot_id: int) -> SodaDispensed:
        with repository_errors():
            machine = self._machine_repo.find_by_id(SodaMachineId(machine_id))
        if machine is None:
            raise MachineNotFoundError(machine_id)

        try:
            event = machine.dispense_soda(SlotId(slot_id))
        except DomainException as exc:
            logger.warning(
                "Machine %s: purchase from slot %s rejected: %s", machine_id, slot_id, exc
            )
            raise

        with repository_errors():
            self._machine_repo.save(machine)

        logger.info(
            "Machine %s: dispensed %s from slot %s (balance %s)",
            machine_id, event.soda.name, slot_id, machine.inserted_money,
        )
        return event
