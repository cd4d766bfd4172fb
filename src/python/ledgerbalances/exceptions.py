"""Custom exception types for ledgerbalances."""

from __future__ import annotations


class NotFoundError(Exception):
    """Raised when a balances container cannot be found by name."""

    def __init__(self, message: str, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class SnapshotError(Exception):
    """Raised when a balances snapshot cannot be read."""
