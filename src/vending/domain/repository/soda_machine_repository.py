"""Abstract repository for the SodaMachine aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (in-memory, JSON) live in the
infrastructure layer.

Implementations serialize access with one lock per store, held for a
single call only; a find -> mutate -> save sequence is not atomic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vending.domain.model.soda_machine import SodaMachine, SodaMachineId


class RepositoryError(Exception):
    """Base class for storage failures."""


class RepositoryConnectionError(RepositoryError):
    """The backing store could not be reached or read."""


class MachineAlreadyExistsError(RepositoryError):
    def __init__(self, machine_id: SodaMachineId) -> None:
        super().__init__(f"Machine {machine_id} already exists")
        self.machine_id = machine_id


class SodaMachineRepository(ABC):

    @abstractmethod
    def find_by_id(self, machine_id: SodaMachineId) -> SodaMachine | None:
        """Return a snapshot of the machine, or None if not found."""

    @abstractmethod
    def save(self, machine: SodaMachine) -> None:
        """Persist the machine, overwriting any stored snapshot."""

    @abstractmethod
    def create(self, machine: SodaMachine) -> None:
        """Persist a new machine; raise MachineAlreadyExistsError if present."""
