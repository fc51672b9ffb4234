"""Dict-backed implementation of SodaMachineRepository.

Backs the test suite and callers that embed the machine core without a
file store; the CLI always uses the JSON repository wired in bootstrap.
Stores deep copies so a caller's unsaved mutations are never visible to
other readers.
"""

from __future__ import annotations

import copy
import logging
import threading

from vending.domain.model.soda_machine import SodaMachine, SodaMachineId
from vending.domain.repository.soda_machine_repository import (
    MachineAlreadyExistsError,
    SodaMachineRepository,
)

logger = logging.getLogger(__name__)


class InMemorySodaMachineRepository(SodaMachineRepository):

    def __init__(self) -> None:
        self._machines: dict[SodaMachineId, SodaMachine] = {}
        self._lock = threading.Lock()

    # --- SodaMachineRepository interface --------------------------------------

    def find_by_id(self, machine_id: SodaMachineId) -> SodaMachine | None:
        with self._lock:
            machine = self._machines.get(machine_id)
            logger.debug("find_by_id(%s) -> %s", machine_id, "hit" if machine else "miss")
            return copy.deepcopy(machine) if machine is not None else None

    def save(self, machine: SodaMachine) -> None:
        with self._lock:
            self._machines[machine.id] = copy.deepcopy(machine)
            logger.debug("Saved machine %s", machine.id)

    def create(self, machine: SodaMachine) -> None:
        with self._lock:
            if machine.id in self._machines:
                raise MachineAlreadyExistsError(machine.id)
            self._machines[machine.id] = copy.deepcopy(machine)
            logger.debug("Created machine %s", machine.id)
