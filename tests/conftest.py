"""Pytest configuration and shared balances snapshot fixtures."""
from __future__ import annotations

import json
from pathlib import Path
import sys
from typing import Any, Callable

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src" / "python"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from ledgerbalances.book import Book  # noqa: E402
from ledgerbalances.models import normalize_name  # noqa: E402
from ledgerbalances.report import BalancesReport  # noqa: E402


def _container(name: str, cumulative: str = "0", **fields: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": name,
        "normalizedName": normalize_name(name),
        "cumulativeBalance": cumulative,
    }
    payload.update(fields)
    return payload


@pytest.fixture()
def account_payload() -> Callable[..., dict[str, Any]]:
    """Factory for account balances payloads."""
    return _container


@pytest.fixture()
def group_payload() -> Callable[..., dict[str, Any]]:
    """Factory for group balances payloads."""
    def build(
        name: str,
        cumulative: str = "0",
        groups: list[dict[str, Any]] | None = None,
        accounts: list[dict[str, Any]] | None = None,
        **fields: Any,
    ) -> dict[str, Any]:
        payload = _container(name, cumulative, **fields)
        payload["groupBalances"] = groups or []
        payload["accountBalances"] = accounts or []
        return payload

    return build


@pytest.fixture()
def book() -> Book:
    return Book({"name": "Household", "decimalSeparator": "DOT", "fractionDigits": 2})


@pytest.fixture()
def snapshot_payload() -> dict[str, Any]:
    """Monthly snapshot with nested groups, loose accounts and buckets.

    Raw balances are credit-positive: debit nature assets are negative.
    """
    return {
        "periodicity": "MONTHLY",
        "accountBalances": [
            _container(
                "Loose Change",
                "-50",
                credit=False,
                permanent=True,
                periodBalance="-50",
            ),
        ],
        "groupBalances": [
            _container(
                "Assets",
                "-1000",
                credit=False,
                permanent=True,
                periodBalance="-200",
                cumulativeCredit="500",
                cumulativeDebit="1500",
                periodCredit="100",
                periodDebit="300",
                properties={"code": "1", "owner": "joint"},
                groupBalances=[
                    _container(
                        "Banks",
                        "-700",
                        credit=False,
                        permanent=True,
                        periodBalance="-150",
                        groupBalances=[],
                        accountBalances=[
                            _container(
                                "Bank A",
                                "-400",
                                credit=False,
                                permanent=True,
                                periodBalance="-100",
                                properties={"code": "1.1.1"},
                                balances=[
                                    {"year": 2024, "month": 2, "day": 0, "fuzzyDate": 20240200,
                                     "cumulativeBalance": "-400", "periodBalance": "-100"},
                                ],
                            ),
                            _container(
                                "Bank B",
                                "-300",
                                credit=False,
                                permanent=True,
                                periodBalance="-50",
                            ),
                        ],
                    ),
                ],
                accountBalances=[
                    _container(
                        "Cash",
                        "-300",
                        credit=False,
                        permanent=True,
                        periodBalance="-50",
                        properties={"code": "1.2", "drawer": "top"},
                        balances=[
                            {"year": 2024, "month": 2, "day": 0, "fuzzyDate": 20240200,
                             "cumulativeBalance": "-300", "periodBalance": "-50"},
                            {"year": 2024, "month": 1, "day": 0, "fuzzyDate": 20240100,
                             "cumulativeBalance": "-250", "periodBalance": "-250"},
                        ],
                    ),
                ],
            ),
            _container(
                "Revenue",
                "500",
                credit=True,
                permanent=False,
                periodBalance="500",
                groupBalances=[],
                accountBalances=[
                    _container("Salary", "500", credit=True, permanent=False, periodBalance="500"),
                ],
            ),
        ],
    }


@pytest.fixture()
def report(book: Book, snapshot_payload: dict[str, Any]) -> BalancesReport:
    return BalancesReport(book, snapshot_payload)


@pytest.fixture()
def snapshot_file(tmp_path: Path, snapshot_payload: dict[str, Any]) -> Path:
    """Snapshot payload written to a temporary JSON file."""
    path = tmp_path / "balances.json"
    path.write_text(json.dumps(snapshot_payload), encoding="utf-8")
    return path
