from __future__ import annotations

from typing import Any

import pytest
import requests

from ledgerbalances import backend as backend_module
from ledgerbalances.backend import HttpMetadataBackend


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture()
def calls(monkeypatch) -> list[dict[str, Any]]:
    recorded: list[dict[str, Any]] = []
    responses = {
        "accounts/cash": FakeResponse(
            200,
            {"id": "a1", "name": "Cash", "normalizedName": "cash", "type": "ASSET", "credit": False},
        ),
        "groups/banks": FakeResponse(200, {"id": "g1", "name": "Banks", "normalizedName": "banks"}),
        "accounts/boom": FakeResponse(500),
        "accounts/blank": FakeResponse(200, {}),
    }

    def fake_get(url: str, headers: dict[str, str], timeout: int) -> FakeResponse:
        recorded.append({"url": url, "headers": headers, "timeout": timeout})
        for suffix, response in responses.items():
            if url.endswith(suffix):
                return response
        return FakeResponse(404)

    monkeypatch.setattr(backend_module.requests, "get", fake_get)
    return recorded


def test_get_account(calls) -> None:
    backend = HttpMetadataBackend({"base_url": "https://api.example.com/v5/", "book_id": "book 1"})

    record = backend.get_account("cash")

    assert record.name == "Cash"
    assert record.type == "ASSET"
    assert calls[0]["url"] == "https://api.example.com/v5/books/book%201/accounts/cash"
    assert calls[0]["timeout"] == 5
    assert calls[0]["headers"] == {}


def test_get_group_with_token(calls) -> None:
    backend = HttpMetadataBackend(
        {"base_url": "https://api.example.com", "book_id": "b1", "token": "secret", "timeout": 2}
    )

    record = backend.get_group("banks")

    assert record.normalizedName == "banks"
    assert calls[0]["headers"] == {"Authorization": "Bearer secret"}
    assert calls[0]["timeout"] == 2


def test_missing_entities_resolve_to_none(calls) -> None:
    backend = HttpMetadataBackend({"base_url": "https://api.example.com", "book_id": "b1"})

    assert backend.get_account("nope") is None
    assert backend.get_group("nope") is None
    assert backend.get_account("blank") is None


def test_server_errors_propagate(calls) -> None:
    backend = HttpMetadataBackend({"base_url": "https://api.example.com", "book_id": "b1"})

    with pytest.raises(requests.HTTPError):
        backend.get_account("boom")
