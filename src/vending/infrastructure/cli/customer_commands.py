"""CLI commands for the customer role."""

from __future__ import annotations

import click

from vending.application.buy_soda import BuySodaHandler
from vending.application.insert_money import InsertMoneyHandler
from vending.application.list_available_sodas import ListAvailableSodasHandler
from vending.application.request_money_back import RequestMoneyBackHandler
from vending.domain.exceptions import DomainException, MoneyError
from vending.domain.model.value_objects import Money
from vending.infrastructure.bootstrap import soda_machine_repository


def _parse_amount(raw: str) -> Money:
    """Parse '2.50' into Money without going through a float."""
    try:
        return Money.of(raw)
    except MoneyError as exc:
        raise click.BadParameter(str(exc), param_hint="'--amount'")


@click.command("list")
@click.option("--machine", "machine_id", required=True, type=int, help="Soda machine ID.")
def customer_list(machine_id: int) -> None:
    """List the sodas that can be bought right now."""
    try:
        handler = ListAvailableSodasHandler(machine_repo=soda_machine_repository())
        sodas = handler.handle(machine_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not sodas:
        click.echo("No sodas available in this machine.")
        return

    click.echo(f"{'Slot':<6} {'Soda':<20} {'Price':>10}")
    click.echo("-" * 38)
    for soda in sodas:
        click.echo(f"{soda.slot_id:<6} {soda.soda_name:<20} {'$' + soda.price:>10}")


@click.command("insert")
@click.option("--machine", "machine_id", required=True, type=int, help="Soda machine ID.")
@click.option("--amount", required=True, help="Amount to insert (e.g. 2.50).")
def customer_insert(machine_id: int, amount: str) -> None:
    """Insert money into a machine."""
    money = _parse_amount(amount)

    try:
        handler = InsertMoneyHandler(machine_repo=soda_machine_repository())
        event = handler.handle(machine_id, money)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Inserted {event.amount}, balance is now {event.total_inserted}")


@click.command("buy")
@click.option("--machine", "machine_id", required=True, type=int, help="Soda machine ID.")
@click.option("--slot", "slot_id", required=True, type=int, help="Slot to buy from.")
def customer_buy(machine_id: int, slot_id: int) -> None:
    """Buy one soda using the inserted balance."""
    try:
        handler = BuySodaHandler(machine_repo=soda_machine_repository())
        event = handler.handle(machine_id, slot_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Enjoy your {event.soda.name}!")


@click.command("refund")
@click.option("--machine", "machine_id", required=True, type=int, help="Soda machine ID.")
def customer_refund(machine_id: int) -> None:
    """Get the whole inserted balance back."""
    try:
        handler = RequestMoneyBackHandler(machine_repo=soda_machine_repository())
        amount = handler.handle(machine_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Returned: {amount}")
