"""Application service: List Available Sodas use case (query)."""

from __future__ import annotations

from vending.application.dto import AvailableSodaDTO
from vending.application.errors import MachineNotFoundError, repository_errors
from vending.domain.model.soda_machine import SodaMachineId
from vending.domain.repository.soda_machine_repository import SodaMachineRepository


class ListAvailableSodasHandler:

    def __init__(self, machine_repo: SodaMachineRepository) -> None:
        self._machine_repo = machine_repo

    def handle(self, machine_id: int) -> list[AvailableSodaDTO]:
        with repository_errors():
            machine = self._machine_repo.find_by_id(SodaMachineId(machine_id))
        if machine is None:
            raise MachineNotFoundError(machine_id)

        return [
            AvailableSodaDTO(
                slot_id=slot_id.value,
                soda_name=soda.name,
                price=soda.price.to_decimal_string(),
            )
            for slot_id, soda in machine.get_available_sodas()
        ]
