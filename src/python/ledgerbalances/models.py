"""Domain models and value helpers."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
import datetime as dt
from decimal import Decimal, InvalidOperation
import re
from typing import TYPE_CHECKING, Any
import unicodedata

if TYPE_CHECKING:
    from ledgerbalances.containers import BalancesContainer

_WHITESPACE = re.compile(r"\s+")


def to_decimal(value: Any) -> Decimal:
    """Normalize a raw payload number to Decimal.

    Args:
        value: Number, numeric string, Decimal or None.

    Returns:
        Decimal: Parsed value, zero when missing or unparseable.
    """
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")


def to_int(value: Any) -> int:
    """Normalize a raw payload integer, zero when missing."""
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def normalize_name(name: str | None) -> str:
    """Return the lookup key for an account or group name.

    Lowercases, trims, strips diacritics and joins words with underscores,
    so "Contas a Pagar" and "contas_a_pagar" share one key.
    """
    if name is None:
        return ""
    text = unicodedata.normalize("NFKD", name.strip().lower())
    text = "".join(char for char in text if not unicodedata.combining(char))
    return _WHITESPACE.sub("_", text)


def get_representative_value(value: Decimal, credit: bool | None) -> Decimal:
    """Apply the credit nature sign convention to a raw balance.

    Raw balances are credit-positive, so debit nature containers
    (credit is False) are negated. Mixed nature (None) keeps the raw sign.
    """
    if credit is not None and not credit:
        return -value
    return value


@dataclass(frozen=True)
class Balance:
    """Balance of a container on a single day, month or year bucket.

    Attributes:
        container: Owning balances container (non-owning reference)
        day: Day of month, 0 for monthly or yearly periodicity
        month: Month of year, 0 for yearly periodicity
        year: Calendar year
        fuzzy_date: YYYYMMDD encoded date, with zeroed month/day as needed
        cumulative_balance_raw: Raw balance up to and including the bucket
        cumulative_credit: Credits up to and including the bucket
        cumulative_debit: Debits up to and including the bucket
        period_balance_raw: Raw balance within the bucket only
        period_credit: Credits within the bucket only
        period_debit: Debits within the bucket only
    """
    container: BalancesContainer | None = field(compare=False, repr=False)
    day: int
    month: int
    year: int
    fuzzy_date: int
    cumulative_balance_raw: Decimal
    cumulative_credit: Decimal
    cumulative_debit: Decimal
    period_balance_raw: Decimal
    period_credit: Decimal
    period_debit: Decimal

    @classmethod
    def from_payload(
        cls,
        container: BalancesContainer | None,
        payload: dict[str, Any],
    ) -> "Balance":
        """Build a balance from a snapshot balance entry."""
        return cls(
            container=container,
            day=to_int(payload.get("day")),
            month=to_int(payload.get("month")),
            year=to_int(payload.get("year")),
            fuzzy_date=to_int(payload.get("fuzzyDate")),
            cumulative_balance_raw=to_decimal(payload.get("cumulativeBalance")),
            cumulative_credit=to_decimal(payload.get("cumulativeCredit")),
            cumulative_debit=to_decimal(payload.get("cumulativeDebit")),
            period_balance_raw=to_decimal(payload.get("periodBalance")),
            period_credit=to_decimal(payload.get("periodCredit")),
            period_debit=to_decimal(payload.get("periodDebit")),
        )

    def get_day(self) -> int:
        return self.day

    def get_month(self) -> int:
        return self.month

    def get_year(self) -> int:
        return self.year

    def get_fuzzy_date(self) -> int:
        """Return the YYYYMMDD key, useful for ordering and indexing."""
        return self.fuzzy_date

    def get_date(self) -> dt.datetime | None:
        """Return the bucket date at midnight in the book time zone.

        A zero month or day stands for the whole year or month, and the
        date falls on the last day of that period (December 31st for
        yearly buckets, the last day of the month for monthly buckets).
        Entries without a year are read from the fuzzy date. Returns None
        when no valid date can be formed.
        """
        year, month, day = self.year, self.month, self.day
        if not year and self.fuzzy_date:
            year = self.fuzzy_date // 10000
            month = self.fuzzy_date // 100 % 100
            day = self.fuzzy_date % 100
        try:
            month = month or 12
            day = day or calendar.monthrange(year, month)[1]
            return dt.datetime(year, month, day, tzinfo=self._time_zone())
        except ValueError:
            return None

    def _time_zone(self) -> dt.timezone:
        offset = 0
        if self.container is not None:
            offset = self.container.get_balances_report().get_book().get_time_zone_offset()
        return dt.timezone(dt.timedelta(minutes=offset))

    def _is_credit(self) -> bool | None:
        return self.container.is_credit() if self.container is not None else None

    def get_cumulative_balance(self) -> Decimal:
        """Cumulative balance signed by the container credit nature."""
        return get_representative_value(self.cumulative_balance_raw, self._is_credit())

    def get_cumulative_balance_raw(self) -> Decimal:
        return self.cumulative_balance_raw

    def get_cumulative_credit(self) -> Decimal:
        return self.cumulative_credit

    def get_cumulative_debit(self) -> Decimal:
        return self.cumulative_debit

    def get_period_balance(self) -> Decimal:
        """Period balance signed by the container credit nature."""
        return get_representative_value(self.period_balance_raw, self._is_credit())

    def get_period_balance_raw(self) -> Decimal:
        return self.period_balance_raw

    def get_period_credit(self) -> Decimal:
        return self.period_credit

    def get_period_debit(self) -> Decimal:
        return self.period_debit


@dataclass(frozen=True)
class AccountRecord:
    """Account metadata resolved through the book.

    Attributes:
        id: Account identifier
        name: Display name of the account
        normalizedName: Lookup key of the account
        type: Account type (ASSET, LIABILITY, INCOMING, OUTGOING)
        credit: Credit nature of the account
        permanent: Whether the account keeps its balance over time
        archived: Whether the account is archived
        properties: Custom account properties
    """
    id: str | None
    name: str | None
    normalizedName: str | None
    type: str | None
    credit: bool | None
    permanent: bool | None
    archived: bool
    properties: dict[str, str]

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "AccountRecord":
        return cls(
            id=payload.get("id"),
            name=payload.get("name"),
            normalizedName=payload.get("normalizedName"),
            type=payload.get("type"),
            credit=payload.get("credit"),
            permanent=payload.get("permanent"),
            archived=bool(payload.get("archived", False)),
            properties=dict(payload.get("properties") or {}),
        )


@dataclass(frozen=True)
class GroupRecord:
    """Group metadata resolved through the book.

    Attributes:
        id: Group identifier
        name: Display name of the group
        normalizedName: Lookup key of the group
        type: Group type, when all accounts share one
        hidden: Whether the group is hidden
        parentId: Identifier of the parent group, if any
        properties: Custom group properties
    """
    id: str | None
    name: str | None
    normalizedName: str | None
    type: str | None
    hidden: bool
    parentId: str | None
    properties: dict[str, str]

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "GroupRecord":
        parent = payload.get("parent") or {}
        return cls(
            id=payload.get("id"),
            name=payload.get("name"),
            normalizedName=payload.get("normalizedName"),
            type=payload.get("type"),
            hidden=bool(payload.get("hidden", False)),
            parentId=parent.get("id") if isinstance(parent, dict) else None,
            properties=dict(payload.get("properties") or {}),
        )
