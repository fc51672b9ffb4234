"""Application service: Refill Slot use case.

A refill larger than the slot's free space still fills the slot to
capacity, but the aggregate reports ``SlotFullError``.  That partial fill
is persisted before the error is re-raised so the stored stock matches
what was physically loaded.
"""

from __future__ import annotations

import logging

from vending.application.errors import MachineNotFoundError, repository_errors
from vending.domain.exceptions import DomainException, SlotFullError, SlotOperationError
from vending.domain.model.events import SlotRefilled
from vending.domain.model.slot import SlotId
from vending.domain.model.soda_machine import SodaMachineId
from vending.domain.repository.soda_machine_repository import SodaMachineRepository

logger = logging.getLogger(__name__)


class RefillSlotHandler:

    def __init__(self, machine_repo: SodaMachineRepository) -> None:
        self._machine_repo = machine_repo

    def handle(self, machine_id: int, slot_id: int, quantity: int) -> SlotRefilled:
        with repository_errors():
            machine = self._machine_repo.find_by_id(SodaMachineId(machine_id))
        if machine is None:
            raise MachineNotFoundError(machine_id)

        try:
            event = machine.refill_slot(SlotId(slot_id), quantity)
        except SlotOperationError as exc:
            if isinstance(exc.error, SlotFullError):
                with repository_errors():
                    self._machine_repo.save(machine)
                logger.warning(
                    "Machine %s: slot %s filled to capacity, only %d of %d added",
                    machine_id, slot_id, exc.error.added, quantity,
                )
            else:
                logger.warning(
                    "Machine %s: refill of slot %s rejected: %s", machine_id, slot_id, exc
                )
            raise
        except DomainException as exc:
            logger.warning(
                "Machine %s: refill of slot %s rejected: %s", machine_id, slot_id, exc
            )
            raise

        with repository_errors():
            self._machine_repo.save(machine)

        logger.info(
            "Machine %s: slot %s refilled with %d", machine_id, slot_id, event.quantity_added
        )
        return event
