from __future__ import annotations

import pytest

from ledgerbalances.book import Book
from ledgerbalances.exceptions import NotFoundError
from ledgerbalances.report import BalancesReport
from ledgerbalances.schema import Periodicity


def _walk(containers):
    for container in containers:
        yield container
        yield from _walk(container.get_balances_containers())


def test_top_level_lists_accounts_before_groups(report: BalancesReport) -> None:
    names = [container.get_name() for container in report.get_balances_containers()]

    assert names == ["Loose Change", "Assets", "Revenue"]
    assert all(container.get_parent() is None for container in report.get_balances_containers())


def test_periodicity(report: BalancesReport, book: Book) -> None:
    assert report.get_periodicity() is Periodicity.MONTHLY
    assert BalancesReport(book, {"periodicity": "yearly"}).get_periodicity() is Periodicity.YEARLY
    assert BalancesReport(book, {}).get_periodicity() is Periodicity.MONTHLY


def test_lookup_returns_same_instance_for_every_container(report: BalancesReport) -> None:
    containers = list(_walk(report.get_balances_containers()))

    assert len(containers) == 8
    for container in containers:
        assert report.get_balances_container(container.get_normalized_name()) is container
        assert container.get_balances_report() is report


def test_lookup_normalizes_query(report: BalancesReport) -> None:
    assert report.get_balances_container("  Loose   CHANGE ").get_name() == "Loose Change"


def test_lookup_missing_name(report: BalancesReport) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        report.get_balances_container("Nonexistent")

    assert excinfo.value.name == "Nonexistent"
    assert "Nonexistent not found" in str(excinfo.value)


def test_lookup_on_empty_report(book: Book) -> None:
    report = BalancesReport(book, None)

    assert report.get_balances_containers() == []
    with pytest.raises(NotFoundError):
        report.get_balances_container("Cash")


def test_duplicate_names_first_writer_wins(book: Book, group_payload, account_payload) -> None:
    report = BalancesReport(
        book,
        {
            "groupBalances": [
                group_payload("Travel", accounts=[account_payload("Fuel", "-10")]),
                group_payload("Car", accounts=[account_payload("Fuel", "-20")]),
            ]
        },
    )

    fuel = report.get_balances_container("Fuel")

    assert fuel.get_parent().get_name() == "Travel"
    car = report.get_balances_container("Car")
    assert car.get_balances_container("Fuel").get_parent() is car


def test_report_data_table_covers_all_top_level(report: BalancesReport) -> None:
    names = [row[0] for row in report.create_data_table().build()]

    assert names == ["Loose Change", "Assets", "Revenue"]
    assert report.create_data_table().get_periodicity() is Periodicity.MONTHLY
