"""Public ledgerbalances package exports."""

from __future__ import annotations

from ledgerbalances.__version__ import __version__
from ledgerbalances.backend import HttpMetadataBackend, MetadataBackend
from ledgerbalances.book import Book
from ledgerbalances.builder import BalancesDataTableBuilder
from ledgerbalances.client import BalancesClient
from ledgerbalances.containers import (
    AccountBalancesContainer,
    BalancesContainer,
    GroupBalancesContainer,
)
from ledgerbalances.exceptions import NotFoundError, SnapshotError
from ledgerbalances.models import (
    AccountRecord,
    Balance,
    GroupRecord,
    get_representative_value,
    normalize_name,
)
from ledgerbalances.report import BalancesReport
from ledgerbalances.schema import BalanceType, DecimalSeparator, Periodicity

__all__ = [
    "__version__",
    "AccountBalancesContainer",
    "AccountRecord",
    "Balance",
    "BalanceType",
    "BalancesClient",
    "BalancesContainer",
    "BalancesDataTableBuilder",
    "BalancesReport",
    "Book",
    "DecimalSeparator",
    "GroupBalancesContainer",
    "GroupRecord",
    "HttpMetadataBackend",
    "MetadataBackend",
    "NotFoundError",
    "Periodicity",
    "SnapshotError",
    "get_representative_value",
    "normalize_name",
]
