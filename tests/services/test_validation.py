from __future__ import annotations

from datetime import date, timedelta

import pytest

from finsynth.core.config import GeneratorSettings
from finsynth.schemas import RemovedTransaction
from finsynth.services.financial_data import generate_financial_data
from finsynth.services.validation import (
    calculate_data_statistics,
    running_balances,
    validate_financial_data,
)


@pytest.fixture(scope="module")
def generated():
    company = {
        "company_name": "Acme Analytics",
        "industry": "Technology",
        "business_model": "SaaS",
        "company_size": "Large (201-1000)",
    }
    options = {"num_transactions": 200, "include_investments": True, "include_loans": True, "seed": 31}
    return generate_financial_data(company, options, settings=GeneratorSettings())


def test_generated_data_is_valid(generated) -> None:
    report = validate_financial_data(generated)
    assert report.valid
    assert report.errors == ()


def test_empty_accounts_are_an_error(generated) -> None:
    report = validate_financial_data(generated.model_copy(update={"accounts": ()}))
    assert not report.valid
    assert report.errors == ("Missing or empty accounts array",)


def test_unknown_account_reference_is_an_error(generated) -> None:
    stray = generated.added[0].model_copy(update={"account_id": "Z" * 22})
    report = validate_financial_data(generated.model_copy(update={"added": generated.added + (stray,)}))

    assert not report.valid
    assert any("references non-existent account" in error for error in report.errors)


def test_unresolved_removed_entries_are_errors(generated) -> None:
    removed = generated.removed + (RemovedTransaction(transaction_id="X" * 22, account_id="Y" * 22),)
    report = validate_financial_data(generated.model_copy(update={"removed": removed}))

    assert any("does not match an added transaction" in error for error in report.errors)
    assert any("Removed transaction" in error and "non-existent account" in error for error in report.errors)


def test_duplicate_account_ids_are_errors(generated) -> None:
    accounts = generated.accounts + (generated.accounts[0],)
    report = validate_financial_data(generated.model_copy(update={"accounts": accounts}))
    assert any("appears 2 times" in error for error in report.errors)


def test_broken_credit_balance_is_an_error(generated) -> None:
    accounts = list(generated.accounts)
    index = next(i for i, account in enumerate(accounts) if account.type == "credit")
    card = accounts[index]
    accounts[index] = card.model_copy(update={"balances": card.balances.model_copy(update={"current": 250.0})})

    report = validate_financial_data(generated.model_copy(update={"accounts": tuple(accounts)}))
    assert any("credit balance must not be positive" in error for error in report.errors)


def test_wide_and_future_dates_are_warnings(make_account, make_transaction, make_result) -> None:
    account = make_account()
    added = [
        make_transaction("F" * 22, txn_date=date.today() + timedelta(days=5)),
        make_transaction("O" * 22, txn_date=date.today() - timedelta(days=800)),
    ]
    report = validate_financial_data(make_result([account], added))

    assert report.valid
    assert any("unusually large" in warning for warning in report.warnings)
    assert "Some transactions have future dates" in report.warnings


def test_missing_account_name_is_a_warning(make_account, make_result) -> None:
    report = validate_financial_data(make_result([make_account(name="")], []))
    assert report.valid
    assert report.warnings == (f"Account {'A' * 22} missing name",)


def test_statistics(make_account, make_transaction, make_result) -> None:
    added = [
        make_transaction("1" * 22, amount=100.0, txn_date=date(2024, 2, 10)),
        make_transaction("2" * 22, amount=-50.5, txn_date=date(2024, 1, 3)),
        make_transaction("3" * 22, amount=-10.0, txn_date=date(2024, 1, 2)),
    ]
    stats = calculate_data_statistics(make_result([make_account()], added))

    assert stats.total_accounts == 1
    assert stats.total_transactions == 3
    assert stats.account_types == {"depository": 1}
    assert stats.transaction_volume == 160.5
    assert stats.average_transaction_amount == 53.5
    assert list(stats.transactions_by_month.items()) == [("2024-01", 2), ("2024-02", 1)]


def test_statistics_without_transactions(make_account, make_result) -> None:
    stats = calculate_data_statistics(make_result([make_account()], []))
    assert stats.average_transaction_amount == 0.0
    assert stats.transactions_by_month == {}


def test_running_balance_replays_to_current(make_account, make_transaction, make_result) -> None:
    account = make_account(current=1000.0)
    added = [
        make_transaction("N" * 22, amount=200.0, txn_date=date(2024, 5, 2)),
        make_transaction("M" * 22, amount=-50.0, txn_date=date(2024, 5, 1)),
    ]
    series = running_balances(make_result([account], added))[account.account_id]

    assert [entry.transaction_id for entry in series] == ["M" * 22, "N" * 22]
    assert [entry.balance for entry in series] == [800.0, 1000.0]


def test_running_balances_end_at_current(generated) -> None:
    series = running_balances(generated)

    assert set(series) == {account.account_id for account in generated.accounts}
    for account in generated.accounts:
        entries = series[account.account_id]
        if account.type in ("investment", "loan"):
            assert entries == []
        elif entries:
            assert entries[-1].balance == pytest.approx(account.balances.current, abs=0.005)
            assert [entry.date for entry in entries] == sorted(entry.date for entry in entries)
