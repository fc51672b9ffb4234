"""Application service: Create Machine use case."""

from __future__ import annotations

import logging

from vending.application.errors import repository_errors
from vending.domain.model.soda_machine import SodaMachine, SodaMachineId
from vending.domain.repository.soda_machine_repository import SodaMachineRepository

logger = logging.getLogger(__name__)


class CreateMachineHandler:

    def __init__(self, machine_repo: SodaMachineRepository) -> None:
        self._machine_repo = machine_repo

    def handle(self, machine_id: int, max_slots: int) -> SodaMachine:
        """Register a new, empty, operational machine."""
        machine = SodaMachine.create(SodaMachineId(machine_id), max_slots)

        with repository_errors():
            self._machine_repo.create(machine)

        logger.info("Created machine %s with %d slot(s) max", machine_id, max_slots)
        return machine
