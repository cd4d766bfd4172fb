"""Balances containers for accounts and groups of a balances report."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
import logging
import threading
from typing import TYPE_CHECKING, Any, Iterable

from ledgerbalances.builder import BalancesDataTableBuilder
from ledgerbalances.exceptions import NotFoundError
from ledgerbalances.models import (
    AccountRecord,
    Balance,
    GroupRecord,
    get_representative_value,
    normalize_name,
    to_decimal,
)

if TYPE_CHECKING:
    from ledgerbalances.report import BalancesReport

logger = logging.getLogger(__name__)


def fill_balances_containers_map(
    containers: Iterable[BalancesContainer],
    containers_map: dict[str, BalancesContainer] | None = None,
) -> dict[str, BalancesContainer]:
    """Index a container forest by normalized name, depth first.

    The first container registered under a name wins; later duplicates
    stay reachable only through tree traversal.
    """
    if containers_map is None:
        containers_map = {}
    for container in containers:
        normalized_name = container.get_normalized_name()
        if normalized_name:
            if normalized_name in containers_map:
                logger.warning(f"Duplicate container name shadowed: {normalized_name}")
            else:
                containers_map[normalized_name] = container
        children = container.get_balances_containers()
        if children:
            fill_balances_containers_map(children, containers_map)
    return containers_map


class BalancesContainer(ABC):
    """Balances of an account or group over a window of time.

    Holds the list of bucket balances along with the period and cumulative
    totals of the window.
    """

    def __init__(
        self,
        parent: BalancesContainer | None,
        balances_report: BalancesReport,
        payload: dict[str, Any] | None,
    ) -> None:
        self.payload = payload if isinstance(payload, dict) else {}
        self._parent = parent
        self._balances_report = balances_report
        self._depth: int | None = None
        self._balances: list[Balance] | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.get_name()!r}, depth={self.get_depth()})"

    def get_balances_report(self) -> BalancesReport:
        return self._balances_report

    def get_name(self) -> str | None:
        return self.payload.get("name")

    def get_normalized_name(self) -> str | None:
        """Return the name without spaces or special characters."""
        return self.payload.get("normalizedName")

    def get_parent(self) -> BalancesContainer | None:
        return self._parent

    def get_depth(self) -> int:
        """Return the number of ancestors up to the report root."""
        if self._depth is None:
            parent = self.get_parent()
            self._depth = parent.get_depth() + 1 if parent is not None else 0
        return self._depth

    def is_credit(self) -> bool | None:
        """Return the credit nature, None for groups of mixed nature."""
        return self.payload.get("credit")

    @abstractmethod
    def is_permanent(self) -> bool | None:
        """Return whether the balance carries over across periods."""

    @abstractmethod
    def is_from_account(self) -> bool:
        """Return True for account containers."""

    @abstractmethod
    def is_from_group(self) -> bool:
        """Return True for group containers."""

    @abstractmethod
    def has_group_balances(self) -> bool:
        """Return True when any direct child is a group."""

    @abstractmethod
    def get_balances_containers(self) -> list[BalancesContainer]:
        """Return the direct child containers."""

    @abstractmethod
    def get_balances_container(self, name: str) -> BalancesContainer:
        """Return the container matching name, or raise NotFoundError."""

    @abstractmethod
    def get_account(self) -> AccountRecord | None:
        """Resolve the account behind this container through the book."""

    @abstractmethod
    def get_group(self) -> GroupRecord | None:
        """Resolve the group behind this container through the book."""

    def create_data_table(self) -> BalancesDataTableBuilder:
        """Create a table builder scoped to this container."""
        return BalancesDataTableBuilder(
            self._balances_report.get_book(),
            [self],
            self._balances_report.get_periodicity(),
        )

    def _amount(self, key: str) -> Decimal:
        return to_decimal(self.payload.get(key))

    def get_cumulative_balance(self) -> Decimal:
        return get_representative_value(self.get_cumulative_balance_raw(), self.is_credit())

    def get_cumulative_balance_raw(self) -> Decimal:
        return self._amount("cumulativeBalance")

    def get_cumulative_credit(self) -> Decimal:
        return self._amount("cumulativeCredit")

    def get_cumulative_debit(self) -> Decimal:
        return self._amount("cumulativeDebit")

    def get_period_balance(self) -> Decimal:
        return get_representative_value(self.get_period_balance_raw(), self.is_credit())

    def get_period_balance_raw(self) -> Decimal:
        return self._amount("periodBalance")

    def get_period_credit(self) -> Decimal:
        return self._amount("periodCredit")

    def get_period_debit(self) -> Decimal:
        return self._amount("periodDebit")

    def _format(self, value: Decimal) -> str:
        return self._balances_report.get_book().format_value(value)

    def get_cumulative_balance_text(self) -> str:
        return self._format(self.get_cumulative_balance())

    def get_cumulative_balance_raw_text(self) -> str:
        return self._format(self.get_cumulative_balance_raw())

    def get_cumulative_credit_text(self) -> str:
        return self._format(self.get_cumulative_credit())

    def get_cumulative_debit_text(self) -> str:
        return self._format(self.get_cumulative_debit())

    def get_period_balance_text(self) -> str:
        return self._format(self.get_period_balance())

    def get_period_balance_raw_text(self) -> str:
        return self._format(self.get_period_balance_raw())

    def get_period_credit_text(self) -> str:
        return self._format(self.get_period_credit())

    def get_period_debit_text(self) -> str:
        return self._format(self.get_period_debit())

    def get_balances(self) -> list[Balance]:
        """Return the bucket balances of the container window."""
        if self._balances is None:
            with self._lock:
                if self._balances is None:
                    self._balances = [
                        Balance.from_payload(self, entry)
                        for entry in self.payload.get("balances") or []
                        if isinstance(entry, dict)
                    ]
        return list(self._balances)

    def get_properties(self) -> dict[str, str]:
        return dict(self.payload.get("properties") or {})

    def get_property(self, *keys: str) -> str | None:
        """Return the first non-blank property value among keys."""
        properties = self.payload.get("properties") or {}
        for key in keys:
            value = properties.get(key)
            if value is not None and str(value).strip():
                return value
        return None

    def get_property_keys(self) -> list[str]:
        return sorted(self.get_properties())


class AccountBalancesContainer(BalancesContainer):
    """Leaf container holding the balances of a single account."""

    def is_permanent(self) -> bool:
        return bool(self.payload.get("permanent", False))

    def is_from_account(self) -> bool:
        return True

    def is_from_group(self) -> bool:
        return False

    def has_group_balances(self) -> bool:
        return False

    def get_balances_containers(self) -> list[BalancesContainer]:
        return []

    def get_balances_container(self, name: str) -> BalancesContainer:
        """Return self when name matches, accounts have no children."""
        normalized_name = self.get_normalized_name()
        if normalized_name and normalized_name == normalize_name(name):
            return self
        raise NotFoundError(f"{name} does not match {self.get_name()}", name)

    def get_account(self) -> AccountRecord | None:
        return self._balances_report.get_book().get_account(self.get_normalized_name())

    def get_group(self) -> GroupRecord | None:
        return None


class GroupBalancesContainer(BalancesContainer):
    """Interior container aggregating the balances of a group."""

    def __init__(
        self,
        parent: BalancesContainer | None,
        balances_report: BalancesReport,
        payload: dict[str, Any] | None,
    ) -> None:
        super().__init__(parent, balances_report, payload)
        self._group_containers: list[GroupBalancesContainer] | None = None
        self._account_containers: list[AccountBalancesContainer] | None = None
        self._containers_map: dict[str, BalancesContainer] | None = None

    def is_permanent(self) -> bool | None:
        return self.payload.get("permanent")

    def is_from_account(self) -> bool:
        return False

    def is_from_group(self) -> bool:
        return True

    def has_group_balances(self) -> bool:
        return len(self._get_group_containers()) > 0

    def get_balances_containers(self) -> list[BalancesContainer]:
        """Return child groups followed by child accounts."""
        return [*self._get_group_containers(), *self._get_account_containers()]

    def _get_group_containers(self) -> list[GroupBalancesContainer]:
        if self._group_containers is None:
            with self._lock:
                if self._group_containers is None:
                    self._group_containers = [
                        GroupBalancesContainer(self, self._balances_report, entry)
                        for entry in self.payload.get("groupBalances") or []
                    ]
        return self._group_containers

    def _get_account_containers(self) -> list[AccountBalancesContainer]:
        if self._account_containers is None:
            with self._lock:
                if self._account_containers is None:
                    self._account_containers = [
                        AccountBalancesContainer(self, self._balances_report, entry)
                        for entry in self.payload.get("accountBalances") or []
                    ]
        return self._account_containers

    def get_balances_container(self, name: str) -> BalancesContainer:
        """Find a container anywhere below this group by name.

        The whole subtree is indexed on the first call and the index is
        reused afterwards.
        """
        children = self.get_balances_containers()
        if not children:
            raise NotFoundError(f"{name} not found on group {self.get_name()}", name)
        if self._containers_map is None:
            with self._lock:
                if self._containers_map is None:
                    logger.debug(f"Indexing containers of group {self.get_name()}")
                    self._containers_map = fill_balances_containers_map(children)
        container = self._containers_map.get(normalize_name(name))
        if container is None:
            raise NotFoundError(f"{name} not found on group {self.get_name()}", name)
        return container

    def get_account(self) -> AccountRecord | None:
        return None

    def get_group(self) -> GroupRecord | None:
        return self._balances_report.get_book().get_group(self.get_normalized_name())
