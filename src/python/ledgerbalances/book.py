"""Book settings used to format and resolve balances report data."""

from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
import logging
import re
from typing import Any

from ledgerbalances.backend import MetadataBackend
from ledgerbalances.models import AccountRecord, GroupRecord, normalize_name, to_decimal, to_int
from ledgerbalances.schema import (
    DEFAULT_DATE_PATTERN,
    DEFAULT_FRACTION_DIGITS,
    DEFAULT_TIME_ZONE_OFFSET,
    DecimalSeparator,
)

logger = logging.getLogger(__name__)

DATE_PATTERN_TOKENS = {
    "yyyy": "%Y",
    "yy": "%y",
    "MM": "%m",
    "dd": "%d",
}
_DATE_TOKEN = re.compile("|".join(DATE_PATTERN_TOKENS))


class Book:
    """Formatting and metadata collaborator for a balances report.

    The book payload follows the snapshot casing: ``name``, ``id``,
    ``decimalSeparator``, ``fractionDigits``, ``timeZoneOffset`` (minutes
    east of UTC) and ``datePattern``.
    """

    def __init__(
        self,
        payload: dict[str, Any] | None = None,
        backend: MetadataBackend | None = None,
    ) -> None:
        self.payload = dict(payload or {})
        self.backend = backend
        self._accounts: dict[str, AccountRecord | None] = {}
        self._groups: dict[str, GroupRecord | None] = {}

    def get_id(self) -> str | None:
        return self.payload.get("id")

    def get_name(self) -> str | None:
        return self.payload.get("name")

    def get_decimal_separator(self) -> DecimalSeparator:
        raw = self.payload.get("decimalSeparator")
        try:
            return DecimalSeparator(str(raw).upper())
        except ValueError:
            return DecimalSeparator.DOT

    def get_fraction_digits(self) -> int:
        digits = self.payload.get("fractionDigits")
        if digits is None:
            return DEFAULT_FRACTION_DIGITS
        return to_int(digits)

    def get_time_zone_offset(self) -> int:
        """Return the book time zone offset in minutes."""
        return to_int(self.payload.get("timeZoneOffset", DEFAULT_TIME_ZONE_OFFSET))

    def get_date_pattern(self) -> str:
        return self.payload.get("datePattern") or DEFAULT_DATE_PATTERN

    def round(self, value: Decimal | int | float | str) -> Decimal:
        """Round a value to the book fraction digits."""
        exponent = Decimal(1).scaleb(-self.get_fraction_digits())
        return to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)

    def format_value(self, value: Decimal | int | float | str | None) -> str:
        """Format a value with the book decimal separator and fraction digits."""
        if value is None:
            return ""
        formatted = f"{self.round(value):f}"
        if self.get_decimal_separator() == DecimalSeparator.COMMA:
            formatted = formatted.replace(".", ",")
        return formatted

    def format_date(self, date: dt.date | dt.datetime) -> str:
        """Format a date with the book date pattern (yyyy-MM-dd by default)."""
        strftime_pattern = _DATE_TOKEN.sub(
            lambda match: DATE_PATTERN_TOKENS[match.group()], self.get_date_pattern()
        )
        return date.strftime(strftime_pattern)

    def get_account(self, name: str | None) -> AccountRecord | None:
        """Resolve account metadata by name through the metadata backend."""
        key = normalize_name(name)
        if self.backend is None or not key:
            return None
        if key not in self._accounts:
            logger.debug(f"Resolving account metadata: {key}")
            self._accounts[key] = self.backend.get_account(key)
        return self._accounts[key]

    def get_group(self, name: str | None) -> GroupRecord | None:
        """Resolve group metadata by name through the metadata backend."""
        key = normalize_name(name)
        if self.backend is None or not key:
            return None
        if key not in self._groups:
            logger.debug(f"Resolving group metadata: {key}")
            self._groups[key] = self.backend.get_group(key)
        return self._groups[key]
