"""Application service: Show Machine Status use case (query)."""

from __future__ import annotations

from vending.application.errors import MachineNotFoundError, repository_errors
from vending.domain.model.soda_machine import SodaMachineId
from vending.domain.repository.soda_machine_repository import SodaMachineRepository


class ShowMachineStatusHandler:

    def __init__(self, machine_repo: SodaMachineRepository) -> None:
        self._machine_repo = machine_repo

    def handle(self, machine_id: int) -> str:
        with repository_errors():
            machine = self._machine_repo.find_by_id(SodaMachineId(machine_id))
        if machine is None:
            raise MachineNotFoundError(machine_id)
        return machine.status_summary()
