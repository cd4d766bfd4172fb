"""Shared CLI helpers."""

from __future__ import annotations

import csv
import datetime as dt
import io
from pathlib import Path
from typing import Any

import click

from ledgerbalances.client import BalancesClient
from ledgerbalances.exceptions import SnapshotError
from ledgerbalances.report import BalancesReport


def get_client(ctx: click.Context) -> BalancesClient:
    """Build a balances client from Click context."""
    payload = ctx.obj or {}
    return BalancesClient(config_path=payload.get("config_path"))


def load_report(ctx: click.Context, snapshot: Path) -> BalancesReport:
    """Load a snapshot, turning snapshot errors into CLI errors."""
    try:
        return get_client(ctx).load_report(snapshot)
    except SnapshotError as exc:
        raise click.ClickException(str(exc)) from exc


def cell_text(value: Any) -> str:
    """Render a table cell as text."""
    if value is None:
        return ""
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    return str(value)


def echo_table(table: list[list[Any]], as_csv: bool = False) -> None:
    """Print a table as aligned columns or CSV."""
    rows = [[cell_text(value) for value in row] for row in table]
    if as_csv:
        buffer = io.StringIO()
        csv.writer(buffer, lineterminator="\n").writerows(rows)
        click.echo(buffer.getvalue(), nl=False)
        return
    if not rows or not any(rows):
        click.echo("No balances found.")
        return
    width = max(len(row) for row in rows)
    widths = [
        max((len(row[index]) for row in rows if index < len(row)), default=0)
        for index in range(width)
    ]
    for row in rows:
        cells = [
            text.ljust(widths[index]) if index == 0 else text.rjust(widths[index])
            for index, text in enumerate(row)
        ]
        click.echo("  ".join(cells).rstrip())
