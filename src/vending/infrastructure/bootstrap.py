"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from vending.application.errors import repository_errors
from vending.infrastructure.persistence.json_soda_machine_repository import (
    JsonSodaMachineRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

DATA_DIR_ENV = "SODA_DATA_DIR"


def data_dir() -> Path:
    """Directory holding the JSON store; ``$SODA_DATA_DIR`` overrides the default."""
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else _DEFAULT_DATA_DIR


def soda_machine_repository() -> JsonSodaMachineRepository:
    """Open the JSON store; an unusable data directory raises RepositoryUnavailableError."""
    with repository_errors():
        return JsonSodaMachineRepository(data_dir() / "machines.json")
