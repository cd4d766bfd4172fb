"""Balances report CLI commands."""

from __future__ import annotations

from pathlib import Path

import click

from ledgerbalances.cli.common import echo_table, load_report
from ledgerbalances.containers import BalancesContainer
from ledgerbalances.exceptions import NotFoundError
from ledgerbalances.schema import BalanceType

BALANCE_TYPES = [balance_type.value.lower() for balance_type in BalanceType]


@click.command("table")
@click.argument("snapshot", type=click.Path(path_type=Path))
@click.option(
    "--type",
    "balance_type",
    type=click.Choice(BALANCE_TYPES, case_sensitive=False),
    default="total",
    show_default=True,
    help="Table layout.",
)
@click.option(
    "--expanded",
    type=int,
    default=0,
    show_default=True,
    help="Group levels to expand, -1 for all groups, -2 for all accounts.",
)
@click.option("--transposed", is_flag=True, help="Swap rows and columns.")
@click.option("--trial", is_flag=True, help="Split totals into Debit and Credit columns.")
@click.option("--period", is_flag=True, help="Use period instead of cumulative totals.")
@click.option("--raw", is_flag=True, help="Keep the raw ledger sign.")
@click.option("--properties", is_flag=True, help="Add custom property columns.")
@click.option("--hide-dates", is_flag=True, help="Hide the date axis.")
@click.option("--hide-names", is_flag=True, help="Hide the name axis.")
@click.option("--csv", "as_csv", is_flag=True, help="Print CSV instead of aligned columns.")
@click.pass_context
def table(
    ctx: click.Context,
    snapshot: Path,
    balance_type: str,
    expanded: int,
    transposed: bool,
    trial: bool,
    period: bool,
    raw: bool,
    properties: bool,
    hide_dates: bool,
    hide_names: bool,
    as_csv: bool,
) -> None:
    """Print a balances table built from a SNAPSHOT file.

    Examples:
        ledgerbalances table balances.json
        ledgerbalances table balances.json --type period --expanded -2 --csv
    """
    report = load_report(ctx, snapshot)
    rows = (
        report.create_data_table()
        .type(balance_type)
        .expanded(expanded)
        .transposed(transposed)
        .trial(trial)
        .period(period)
        .raw(raw)
        .properties(properties)
        .hide_dates(hide_dates)
        .hide_names(hide_names)
        .format_values(True)
        .format_dates(True)
        .build()
    )
    echo_table(rows, as_csv=as_csv)


@click.command("tree")
@click.argument("snapshot", type=click.Path(path_type=Path))
@click.pass_context
def tree(ctx: click.Context, snapshot: Path) -> None:
    """Print the account and group hierarchy of a SNAPSHOT file."""
    report = load_report(ctx, snapshot)
    containers = report.get_balances_containers()
    if not containers:
        click.echo("No balances found.")
        return
    for container in containers:
        _echo_branch(container)


def _echo_branch(container: BalancesContainer) -> None:
    indent = "  " * container.get_depth()
    click.echo(f"{indent}{container.get_name()}  {container.get_cumulative_balance_text()}")
    for child in container.get_balances_containers():
        _echo_branch(child)


@click.command("lookup")
@click.argument("snapshot", type=click.Path(path_type=Path))
@click.argument("name")
@click.pass_context
def lookup(ctx: click.Context, snapshot: Path, name: str) -> None:
    """Show the balances of account or group NAME in a SNAPSHOT file."""
    report = load_report(ctx, snapshot)
    try:
        container = report.get_balances_container(name)
    except NotFoundError as e:
        raise click.ClickException(str(e))

    parent = container.get_parent()
    click.echo(f"\nName: {container.get_name()}")
    click.echo(f"Kind: {'Group' if container.is_from_group() else 'Account'}")
    click.echo(f"Parent: {parent.get_name() if parent is not None else '-'}")
    click.echo(f"Depth: {container.get_depth()}")
    click.echo(f"Credit: {container.is_credit()}")
    click.echo(f"Permanent: {container.is_permanent()}")
    click.echo(f"Cumulative Balance: {container.get_cumulative_balance_text()}")
    click.echo(f"Period Balance: {container.get_period_balance_text()}")
    for key, value in sorted(container.get_properties().items()):
        click.echo(f"{key}: {value}")
