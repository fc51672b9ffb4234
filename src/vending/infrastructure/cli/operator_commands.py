"""CLI commands for the operator role."""

from __future__ import annotations

import click

from vending.application.configure_slot import ConfigureSlotHandler
from vending.application.create_machine import CreateMachineHandler
from vending.application.refill_slot import RefillSlotHandler
from vending.application.show_machine_status import ShowMachineStatusHandler
from vending.domain.exceptions import (
    DomainException,
    MoneyError,
    SlotFullError,
    SlotOperationError,
    SodaError,
)
from vending.domain.model.soda import Soda, SodaFlavor, SodaSize
from vending.domain.model.value_objects import Money
from vending.infrastructure.bootstrap import soda_machine_repository

_FLAVOR_NAMES = [flavor.value for flavor in SodaFlavor]


def _build_soda(
    name: str, flavor: str, size: str, price: str, diet: bool, caffeinated: bool
) -> Soda:
    """Turn raw CLI options into a Soda, reporting bad input per option."""
    parsed_flavor = SodaFlavor.parse(flavor)
    if parsed_flavor is None:
        raise click.BadParameter(
            f"Unknown flavor '{flavor}'. Expected one of: {', '.join(_FLAVOR_NAMES)}.",
            param_hint="'--flavor'",
        )
    try:
        parsed_size = SodaSize.parse(size)
    except SodaError as exc:
        raise click.BadParameter(str(exc), param_hint="'--size'")
    try:
        parsed_price = Money.of(price)
    except MoneyError as exc:
        raise click.BadParameter(str(exc), param_hint="'--price'")

    try:
        return Soda(
            name=name,
            flavor=parsed_flavor,
            size=parsed_size,
            price=parsed_price,
            is_diet=diet,
            is_caffeinated=caffeinated,
        )
    except SodaError as exc:
        raise click.BadParameter(str(exc))


@click.command("create")
@click.option("--machine", "machine_id", required=True, type=int, help="New soda machine ID.")
@click.option("--max-slots", default=10, show_default=True, type=int, help="Slot ceiling.")
def operator_create(machine_id: int, max_slots: int) -> None:
    """Create a new soda machine."""
    try:
        handler = CreateMachineHandler(machine_repo=soda_machine_repository())
        handler.handle(machine_id, max_slots)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Soda machine #{machine_id} created ({max_slots} slots max).")


@click.command("configure")
@click.option("--machine", "machine_id", required=True, type=int, help="Soda machine ID.")
@click.option("--slot", "slot_id", required=True, type=int, help="Slot ID (added if missing).")
@click.option("--capacity", required=True, type=int, help="Capacity for a new slot.")
@click.option("--name", required=True, help="Soda brand name.")
@click.option("--flavor", required=True, help="Flavor (e.g. Cola, Lemon-Lime).")
@click.option("--size", default="medium", show_default=True, help="Small, Medium, Large or XL.")
@click.option("--price", required=True, help="Price (e.g. 1.50).")
@click.option("--diet/--regular", default=False, help="Diet / sugar-free.")
@click.option("--caffeinated/--caffeine-free", default=False, help="Contains caffeine.")
def operator_configure(
    machine_id: int,
    slot_id: int,
    capacity: int,
    name: str,
    flavor: str,
    size: str,
    price: str,
    diet: bool,
    caffeinated: bool,
) -> None:
    """Bind a soda type to a slot, creating the slot if needed."""
    soda = _build_soda(name, flavor, size, price, diet, caffeinated)

    try:
        handler = ConfigureSlotHandler(machine_repo=soda_machine_repository())
        handler.handle(machine_id, slot_id, capacity, soda)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Slot {slot_id} configured with {soda.description()} at {soda.price}.")


@click.command("refill")
@click.option("--machine", "machine_id", required=True, type=int, help="Soda machine ID.")
@click.option("--slot", "slot_id", required=True, type=int, help="Slot ID to refill.")
@click.option("--quantity", required=True, type=int, help="Number of sodas to add.")
def operator_refill(machine_id: int, slot_id: int, quantity: int) -> None:
    """Add sodas to a slot."""
    try:
        handler = RefillSlotHandler(machine_repo=soda_machine_repository())
        event = handler.handle(machine_id, slot_id, quantity)
    except SlotOperationError as exc:
        if isinstance(exc.error, SlotFullError):
            raise click.ClickException(
                f"Slot {slot_id} is full: only {exc.error.added} of {quantity} added."
            )
        raise click.ClickException(str(exc))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Slot {slot_id} refilled with {event.quantity_added}.")


@click.command("status")
@click.option("--machine", "machine_id", required=True, type=int, help="Soda machine ID.")
def operator_status(machine_id: int) -> None:
    """Show a machine's status summary."""
    try:
        handler = ShowMachineStatusHandler(machine_repo=soda_machine_repository())
        summary = handler.handle(machine_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(summary)
