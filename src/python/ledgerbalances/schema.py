"""Snapshot schema constants and enumerations."""

from __future__ import annotations

from enum import Enum


class Periodicity(str, Enum):
    """Time bucket granularity of a balances report."""

    DAILY = "DAILY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class BalanceType(str, Enum):
    """Layout family of a balances data table."""

    TOTAL = "TOTAL"
    PERIOD = "PERIOD"
    CUMULATIVE = "CUMULATIVE"


class DecimalSeparator(str, Enum):
    """Decimal separator used when formatting book values."""

    COMMA = "COMMA"
    DOT = "DOT"


EXPAND_NONE = 0
EXPAND_ALL_GROUPS = -1
EXPAND_ALL_ACCOUNTS = -2

DEFAULT_FRACTION_DIGITS = 2
DEFAULT_DATE_PATTERN = "yyyy-MM-dd"
DEFAULT_TIME_ZONE_OFFSET = 0

HEADER_BLANK = ""
HEADER_BALANCE = "Balance"
HEADER_DEBIT = "Debit"
HEADER_CREDIT = "Credit"
