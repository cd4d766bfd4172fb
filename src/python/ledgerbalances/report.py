"""Balances report root built from a balances snapshot."""

from __future__ import annotations

import logging
import threading
from typing import Any

from ledgerbalances.book import Book
from ledgerbalances.builder import BalancesDataTableBuilder
from ledgerbalances.containers import (
    AccountBalancesContainer,
    BalancesContainer,
    GroupBalancesContainer,
    fill_balances_containers_map,
)
from ledgerbalances.exceptions import NotFoundError
from ledgerbalances.models import normalize_name
from ledgerbalances.schema import Periodicity

logger = logging.getLogger(__name__)


class BalancesReport:
    """Snapshot of account and group balances of a book.

    Top level containers are materialized on first access; their children
    are materialized as the tree is traversed.
    """

    def __init__(self, book: Book, payload: dict[str, Any] | None) -> None:
        self.book = book
        self.payload = payload if isinstance(payload, dict) else {}
        self._account_containers: list[AccountBalancesContainer] | None = None
        self._group_containers: list[GroupBalancesContainer] | None = None
        self._containers_map: dict[str, BalancesContainer] | None = None
        self._lock = threading.Lock()

    def get_book(self) -> Book:
        return self.book

    def get_periodicity(self) -> Periodicity:
        """Return the periodicity of the query behind the report.

        Unknown or missing values fall back to monthly buckets.
        """
        try:
            return Periodicity(str(self.payload.get("periodicity")).upper())
        except ValueError:
            return Periodicity.MONTHLY

    def create_data_table(self) -> BalancesDataTableBuilder:
        """Create a table builder over all top level containers."""
        return BalancesDataTableBuilder(
            self.book, self.get_balances_containers(), self.get_periodicity()
        )

    def get_balances_containers(self) -> list[BalancesContainer]:
        """Return top level account containers followed by group containers."""
        return [*self._get_account_containers(), *self._get_group_containers()]

    def get_balances_container(self, name: str) -> BalancesContainer:
        """Find a container anywhere in the report by account or group name.

        Raises:
            NotFoundError: If no container in the report has that name.
        """
        containers = self.get_balances_containers()
        if not containers:
            raise NotFoundError(f"{name} not found", name)
        if self._containers_map is None:
            with self._lock:
                if self._containers_map is None:
                    self._containers_map = fill_balances_containers_map(containers)
                    logger.debug(f"Indexed {len(self._containers_map)} containers")
        container = self._containers_map.get(normalize_name(name))
        if container is None:
            raise NotFoundError(f"{name} not found", name)
        return container

    def _get_account_containers(self) -> list[AccountBalancesContainer]:
        if self._account_containers is None:
            with self._lock:
                if self._account_containers is None:
                    self._account_containers = [
                        AccountBalancesContainer(None, self, entry)
                        for entry in self.payload.get("accountBalances") or []
                    ]
        return self._account_containers

    def _get_group_containers(self) -> list[GroupBalancesContainer]:
        if self._group_containers is None:
            with self._lock:
                if self._group_containers is None:
                    self._group_containers = [
                        GroupBalancesContainer(None, self, entry)
                        for entry in self.payload.get("groupBalances") or []
                    ]
        return self._group_containers
