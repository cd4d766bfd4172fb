"""Metadata backends resolving accounts and groups of a book."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests

from ledgerbalances.models import AccountRecord, GroupRecord

DEFAULT_TIMEOUT_SECONDS = 5


class MetadataBackend(ABC):
    """Abstract interface for account and group metadata lookups."""

    @abstractmethod
    def get_account(self, name: str) -> AccountRecord | None:
        """Return account metadata, or None when the account does not exist."""

    @abstractmethod
    def get_group(self, name: str) -> GroupRecord | None:
        """Return group metadata, or None when the group does not exist."""


@dataclass(frozen=True)
class ApiConfig:
    """Configuration for the HTTP metadata backend."""

    base_url: str
    book_id: str
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    token: str | None = None


class HttpMetadataBackend(MetadataBackend):
    """Fetch account and group metadata from a REST API."""

    def __init__(self, config: dict[str, Any]) -> None:
        self.config = ApiConfig(
            base_url=str(config["base_url"]).rstrip("/"),
            book_id=str(config.get("book_id", "")),
            timeout_seconds=int(config.get("timeout", DEFAULT_TIMEOUT_SECONDS)),
            token=config.get("token"),
        )

    def get_account(self, name: str) -> AccountRecord | None:
        payload = self._fetch("accounts", name)
        if payload is None:
            return None
        return AccountRecord.from_payload(payload)

    def get_group(self, name: str) -> GroupRecord | None:
        payload = self._fetch("groups", name)
        if payload is None:
            return None
        return GroupRecord.from_payload(payload)

    def _fetch(self, resource: str, name: str) -> dict[str, Any] | None:
        url = (
            f"{self.config.base_url}/books/{quote(self.config.book_id, safe='')}"
            f"/{resource}/{quote(name, safe='')}"
        )
        headers = {}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        response = requests.get(url, headers=headers, timeout=self.config.timeout_seconds)
        if response.status_code == 404:
            return None
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict) or not payload:
            return None
        return payload
