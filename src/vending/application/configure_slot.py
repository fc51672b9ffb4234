"""Application service: Configure Slot use case.

Adds the slot first when the machine does not have it yet, then binds the
soda type.  The slot must be empty for the binding to succeed.
"""

from __future__ import annotations

import logging

from vending.application.errors import MachineNotFoundError, repository_errors
from vending.domain.exceptions import DomainException
from vending.domain.model.events import SlotConfigured
from vending.domain.model.slot import SlotId
from vending.domain.model.soda import Soda
from vending.domain.model.soda_machine import SodaMachineId
from vending.domain.repository.soda_machine_repository import SodaMachineRepository

logger = logging.getLogger(__name__)


class ConfigureSlotHandler:

    def __init__(self, machine_repo: SodaMachineRepository) -> None:
        self._machine_repo = machine_repo

    def handle(
        self,
        machine_id: int,
        slot_id: int,
        capacity: int,
        soda: Soda,
    ) -> SlotConfigured:
        with repository_errors():
            machine = self._machine_repo.find_by_id(SodaMachineId(machine_id))
        if machine is None:
            raise MachineNotFoundError(machine_id)

        sid = SlotId(slot_id)
        try:
            if not machine.has_slot(sid):
                machine.add_slot(sid, capacity)
            event = machine.configure_slot(sid, soda)
        except DomainException as exc:
            logger.warning(
                "Machine %s: configuring slot %s rejected: %s", machine_id, slot_id, exc
            )
            raise

        with repository_errors():
            self._machine_repo.save(machine)

        logger.info("Machine %s: slot %s now holds %s", machine_id, slot_id, soda.name)
        return event
