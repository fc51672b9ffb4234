"""Application service: Insert Money use case."""

from __future__ import annotations

import logging

from vending.application.errors import MachineNotFoundError, repository_errors
from vending.domain.exceptions import DomainException
from vending.domain.model.events import MoneyInserted
from vending.domain.model.soda_machine import SodaMachineId
from vending.domain.model.value_objects import Money
from vending.domain.repository.soda_machine_repository import SodaMachineRepository

logger = logging.getLogger(__name__)


class InsertMoneyHandler:

    def __init__(self, machine_repo: SodaMachineRepository) -> None:
        self._machine_repo = machine_repo

    def handle(self, machine_id: int, amount: Money) -> MoneyInserted:
        """Add *amount* to the customer's running balance."""
        with repository_errors():
            machine = self._machine_repo.find_by_id(SodaMachineId(machine_id))
        if machine is None:
            raise MachineNotFoundError(machine_id)

        try:
            event = machine.insert_money(amount)
        except DomainException as exc:
            logger.warning("Machine %s rejected %s: %s", machine_id, amount, exc)
            raise

        with repository_errors():
            self._machine_repo.save(machine)

        logger.info(
            "Machine %s: inserted %s (balance %s)",
            machine_id, event.amount, event.total_inserted,
        )
        return event
