"""Two-dimensional table builder for balances containers."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
import logging
from typing import TYPE_CHECKING, Any, Sequence

from ledgerbalances.schema import (
    EXPAND_ALL_ACCOUNTS,
    EXPAND_ALL_GROUPS,
    EXPAND_NONE,
    HEADER_BALANCE,
    HEADER_BLANK,
    HEADER_CREDIT,
    HEADER_DEBIT,
    BalanceType,
    Periodicity,
)

if TYPE_CHECKING:
    from ledgerbalances.book import Book
    from ledgerbalances.containers import BalancesContainer
    from ledgerbalances.models import Balance

logger = logging.getLogger(__name__)


def transpose(table: list[list[Any]]) -> list[list[Any]]:
    """Swap rows and columns, padding short rows with None."""
    if not table:
        return []
    width = max(len(row) for row in table)
    return [
        [row[index] if index < len(row) else None for row in table]
        for index in range(width)
    ]


class BalancesDataTableBuilder:
    """Setup and build two-dimensional arrays out of balances containers.

    Setters return the builder for chaining and only take effect on
    ``build()``. Combinations that make no sense for a layout (trial or
    period outside TOTAL, hidden axes inside TOTAL) are ignored rather
    than rejected.

    Example:
        table = report.create_data_table().type(BalanceType.PERIOD).expanded(-2).build()
    """

    def __init__(
        self,
        book: Book,
        balances_containers: Sequence[BalancesContainer],
        periodicity: Periodicity,
    ) -> None:
        self.book = book
        self.balances_containers = list(balances_containers)
        self.periodicity = periodicity
        self.balance_type = BalanceType.TOTAL
        self.should_transpose = False
        self.should_format_dates = False
        self.should_format_values = False
        self.should_hide_dates = False
        self.should_hide_names = False
        self.should_add_properties = False
        self.should_trial = False
        self.should_period = False
        self.should_raw = False
        self.expand_depth = EXPAND_NONE

    def get_periodicity(self) -> Periodicity:
        return self.periodicity

    def type(self, balance_type: BalanceType | str) -> "BalancesDataTableBuilder":
        """Set the layout family: TOTAL, PERIOD or CUMULATIVE."""
        self.balance_type = BalanceType(balance_type.upper())
        return self

    def transposed(self, transpose: bool) -> "BalancesDataTableBuilder":
        """Swap rows and columns of the resulting table."""
        self.should_transpose = transpose
        return self

    def format_dates(self, format: bool) -> "BalancesDataTableBuilder":
        """Render dates with the book date pattern instead of datetime values."""
        self.should_format_dates = format
        return self

    def format_values(self, format: bool) -> "BalancesDataTableBuilder":
        """Render amounts with the book decimal format instead of Decimal values."""
        self.should_format_values = format
        return self

    def hide_dates(self, hide: bool) -> "BalancesDataTableBuilder":
        """Drop the date axis of PERIOD and CUMULATIVE tables.

        Property key labels share the date header and are dropped with it.
        """
        self.should_hide_dates = hide
        return self

    def hide_names(self, hide: bool) -> "BalancesDataTableBuilder":
        """Drop the name axis of PERIOD and CUMULATIVE tables."""
        self.should_hide_names = hide
        return self

    def properties(self, include: bool) -> "BalancesDataTableBuilder":
        """Add one column per custom property key of the included containers."""
        self.should_add_properties = include
        return self

    def trial(self, trial: bool) -> "BalancesDataTableBuilder":
        """Split TOTAL values into Debit and Credit columns."""
        self.should_trial = trial
        return self

    def period(self, period: bool) -> "BalancesDataTableBuilder":
        """Use period balances instead of cumulative ones on TOTAL tables."""
        self.should_period = period
        return self

    def raw(self, raw: bool) -> "BalancesDataTableBuilder":
        """Keep the raw ledger sign, ignoring the credit nature."""
        self.should_raw = raw
        return self

    def expanded(self, expanded: bool | int) -> "BalancesDataTableBuilder":
        """Replace groups by their children.

        Args:
            expanded: True (or n > 0) expands one (or n) levels of groups,
                -1 expands groups down to groups without subgroups and
                -2 expands down to individual accounts.
        """
        if isinstance(expanded, bool):
            self.expand_depth = 1 if expanded else EXPAND_NONE
        else:
            self.expand_depth = int(expanded)
        return self

    def build(self) -> list[list[Any]]:
        """Build the two-dimensional table."""
        containers = self._get_containers()
        logger.debug(
            f"Building {self.balance_type.value} table: {len(containers)} containers, "
            f"expanded={self.expand_depth}, transposed={self.should_transpose}"
        )
        if self.balance_type == BalanceType.TOTAL:
            table = self._build_total_table(containers)
            return transpose(table) if self.should_transpose else table

        table = self._build_series_table(containers)
        if self.should_hide_dates:
            table = table[1:]
        if self.should_hide_names:
            table = [row[1:] for row in table]
        # Series tables are built one container per row
        if not self.should_transpose:
            table = transpose(table)
        return table or [[]]

    def _get_containers(self) -> list[BalancesContainer]:
        levels = self.expand_depth if self.expand_depth > 0 else 0
        return self._expand(self.balances_containers, levels)

    def _expand(
        self,
        containers: Sequence[BalancesContainer],
        levels: int,
    ) -> list[BalancesContainer]:
        flattened: list[BalancesContainer] = []
        for container in containers:
            if self._should_expand(container, levels):
                flattened.extend(self._expand(container.get_balances_containers(), levels - 1))
            else:
                flattened.append(container)
        return flattened

    def _should_expand(self, container: BalancesContainer, levels: int) -> bool:
        if not container.is_from_group() or not container.get_balances_containers():
            return False
        if self.expand_depth == EXPAND_ALL_ACCOUNTS:
            return True
        if self.expand_depth == EXPAND_ALL_GROUPS:
            return container.has_group_balances()
        return levels > 0

    def _build_total_table(self, containers: list[BalancesContainer]) -> list[list[Any]]:
        if self.should_trial:
            header: list[Any] = [HEADER_BLANK, HEADER_DEBIT, HEADER_CREDIT]
        else:
            header = [HEADER_BLANK, HEADER_BALANCE]
        table = []
        for container in containers:
            line: list[Any] = [container.get_name()]
            if self.should_trial:
                line.extend(self._value_cell(amount) for amount in self._trial_amounts(container))
            else:
                line.append(self._value_cell(self._total_amount(container)))
            table.append(line)

        if self.should_add_properties:
            self._add_properties(header, table, containers, self._get_property_keys(containers))
        if self.should_trial or self.should_add_properties or not containers:
            table.insert(0, header)
        return table

    def _build_series_table(self, containers: list[BalancesContainer]) -> list[list[Any]]:
        dates: dict[int, dt.datetime | None] = {}
        container_values: list[dict[int, Decimal]] = []
        for container in containers:
            values: dict[int, Decimal] = {}
            for balance in container.get_balances():
                fuzzy_date = balance.get_fuzzy_date()
                if fuzzy_date not in dates:
                    dates[fuzzy_date] = balance.get_date()
                values[fuzzy_date] = self._series_amount(balance)
            container_values.append(values)

        fuzzy_dates = sorted(dates)
        header: list[Any] = [HEADER_BLANK]
        header.extend(self._date_cell(dates[fuzzy_date]) for fuzzy_date in fuzzy_dates)
        table = []
        for container, values in zip(containers, container_values):
            line: list[Any] = [container.get_name()]
            # Buckets without a balance stay blank, zero is a real value
            line.extend(self._value_cell(values.get(fuzzy_date)) for fuzzy_date in fuzzy_dates)
            table.append(line)

        if self.should_add_properties:
            self._add_properties(header, table, containers, self._get_property_keys(containers))
        table.insert(0, header)
        return table

    def _total_amount(self, container: BalancesContainer) -> Decimal:
        if self.should_period:
            if self.should_raw:
                return container.get_period_balance_raw()
            return container.get_period_balance()
        if self.should_raw:
            return container.get_cumulative_balance_raw()
        return container.get_cumulative_balance()

    def _trial_amounts(self, container: BalancesContainer) -> tuple[Decimal, Decimal]:
        if self.should_period:
            return container.get_period_debit(), container.get_period_credit()
        return container.get_cumulative_debit(), container.get_cumulative_credit()

    def _series_amount(self, balance: Balance) -> Decimal:
        if self.balance_type == BalanceType.CUMULATIVE:
            if self.should_raw:
                return balance.get_cumulative_balance_raw()
            return balance.get_cumulative_balance()
        if self.should_raw:
            return balance.get_period_balance_raw()
        return balance.get_period_balance()

    def _value_cell(self, amount: Decimal | None) -> Decimal | str | None:
        if amount is None:
            return None
        if self.should_format_values:
            return self.book.format_value(amount)
        return amount

    def _date_cell(self, date: dt.datetime | None) -> dt.datetime | str | None:
        if date is None:
            return None
        if self.should_format_dates:
            return self.book.format_date(date)
        return date

    @staticmethod
    def _get_property_keys(containers: list[BalancesContainer]) -> list[str]:
        keys: set[str] = set()
        for container in containers:
            keys.update(container.get_property_keys())
        return sorted(keys)

    @staticmethod
    def _add_properties(
        header: list[Any],
        table: list[list[Any]],
        containers: list[BalancesContainer],
        property_keys: list[str],
    ) -> None:
        header.extend(property_keys)
        for line, container in zip(table, containers):
            properties = container.get_properties()
            line.extend(properties.get(key) for key in property_keys)
