import logging

import click

from vending.infrastructure.cli.customer_commands import (
    customer_buy,
    customer_insert,
    customer_list,
    customer_refund,
)
from vending.infrastructure.cli.operator_commands import (
    operator_configure,
    operator_create,
    operator_refill,
    operator_status,
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Soda Machine — vending machine management"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


@cli.group()
def customer() -> None:
    """Buy sodas."""


@cli.group()
def operator() -> None:
    """Set up and stock machines."""


# Register subcommands
customer.add_command(customer_list)
customer.add_command(customer_insert)
customer.add_command(customer_buy)
customer.add_command(customer_refund)
operator.add_command(operator_create)
operator.add_command(operator_configure)
operator.add_command(operator_refill)
operator.add_command(operator_status)
