"""Application-level errors and repository error translation.

Use cases surface storage problems as DomainException subclasses so the
CLI layer can keep catching a single base class.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from vending.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
)
from vending.domain.repository.soda_machine_repository import (
    MachineAlreadyExistsError,
    RepositoryConnectionError,
    RepositoryError,
)

logger = logging.getLogger(__name__)


class MachineNotFoundError(EntityNotFoundError):
    def __init__(self, machine_id: int) -> None:
        super().__init__(f"Soda machine #{machine_id} not found")
        self.machine_id = machine_id


class DuplicateMachineError(ValidationError):
    pass


class RepositoryUnavailableError(DomainException):
    """The machine store could not be reached."""


class RepositoryFailureError(DomainException):
    """The machine store failed for a reason other than connectivity."""


@contextmanager
def repository_errors() -> Iterator[None]:
    """Translate RepositoryError raised inside the block."""
    try:
        yield
    except MachineAlreadyExistsError as exc:
        raise DuplicateMachineError(str(exc)) from exc
    except RepositoryConnectionError as exc:
        logger.error("Repository unavailable: %s", exc)
        raise RepositoryUnavailableError(str(exc)) from exc
    except RepositoryError as exc:
        logger.error("Repository failure: %s", exc)
        raise RepositoryFailureError(str(exc)) from exc
