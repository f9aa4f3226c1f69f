"""Integrity checks, aggregate statistics and running balances for datasets."""
from __future__ import annotations

import math
from collections import Counter, defaultdict
from datetime import date
from decimal import Decimal

from finsynth.core.log import get_logger
from finsynth.schemas import (
    Account,
    DataStatistics,
    GenerationResult,
    RunningBalance,
    ValidationReport,
)

LOGGER = get_logger(__name__)

MAX_EXPECTED_SPAN_DAYS = 365 * 2
_CENT = Decimal("0.01")


def _balance_errors(account: Account) -> list[str]:
    balances = account.balances
    label = f"Account {account.account_id}"
    errors: list[str] = []

    if account.type == "depository":
        if balances.available != balances.current:
            errors.append(f"{label} available balance differs from current balance")
        if balances.limit is not None:
            errors.append(f"{label} is a depository account with a limit")
    elif account.type == "credit":
        if balances.current > 0:
            errors.append(f"{label} credit balance must not be positive")
        if balances.limit is None or balances.limit <= 0:
            errors.append(f"{label} credit account requires a positive limit")
        elif balances.available is None or not math.isclose(
            balances.available, balances.limit + balances.current, abs_tol=0.005
        ):
            errors.append(f"{label} available credit does not equal limit plus current balance")
    elif account.type == "loan":
        if balances.current >= 0:
            errors.append(f"{label} loan principal must be negative")
        if account.subtype == "line of credit":
            if balances.limit is None or not math.isclose(balances.limit, abs(balances.current)):
                errors.append(f"{label} line of credit limit must equal the amount drawn")
            if balances.available != 0:
                errors.append(f"{label} line of credit must have nothing available")
        elif balances.limit is not None or balances.available is not None:
            errors.append(f"{label} loan must not carry a limit or available balance")
    elif account.type == "investment":
        if balances.available is not None or balances.limit is not None:
            errors.append(f"{label} investment account must not carry a limit or available balance")
    return errors


def validate_financial_data(data: GenerationResult) -> ValidationReport:
    """Check a dataset for structural corruption and statistical oddities.

    Errors make the dataset invalid; warnings are informational.
    """

    errors: list[str] = []
    warnings: list[str] = []

    if not data.accounts:
        errors.append("Missing or empty accounts array")
    if not data.request_id:
        errors.append("Missing request_id")
    if errors:
        return ValidationReport(valid=False, errors=tuple(errors), warnings=())

    id_counts = Counter(account.account_id for account in data.accounts)
    for account_id, count in id_counts.items():
        if count > 1:
            errors.append(f"Account id {account_id} appears {count} times")

    for index, account in enumerate(data.accounts):
        if not account.account_id:
            errors.append(f"Account at index {index} missing account_id")
        if not account.name:
            warnings.append(f"Account {account.account_id} missing name")
        errors.extend(_balance_errors(account))

    account_ids = set(id_counts)
    added_ids = set()
    for index, txn in enumerate(data.added):
        label = txn.transaction_id or str(index)
        if not txn.transaction_id:
            errors.append(f"Transaction at index {index} missing transaction_id")
        added_ids.add(txn.transaction_id)
        if not txn.account_id:
            errors.append(f"Transaction {label} missing account_id")
        elif txn.account_id not in account_ids:
            errors.append(f"Transaction {label} references non-existent account {txn.account_id}")
        if txn.date is None:
            errors.append(f"Transaction {label} missing date")
        if txn.amount is None or not math.isfinite(txn.amount):
            errors.append(f"Transaction {label} missing amount")

    for txn in data.modified:
        if txn.account_id not in account_ids:
            errors.append(f"Modified transaction {txn.transaction_id} references non-existent account {txn.account_id}")
        if txn.transaction_id not in added_ids:
            errors.append(f"Modified transaction {txn.transaction_id} does not match an added transaction")

    for removed in data.removed:
        if removed.account_id not in account_ids:
            errors.append(
                f"Removed transaction {removed.transaction_id} references non-existent account {removed.account_id}"
            )
        if removed.transaction_id not in added_ids:
            errors.append(f"Removed transaction {removed.transaction_id} does not match an added transaction")

    dates = sorted(txn.date for txn in data.added if txn.date is not None)
    if dates:
        span = (dates[-1] - dates[0]).days
        if span > MAX_EXPECTED_SPAN_DAYS:
            warnings.append(f"Transaction date range unusually large: {span} days")
        if dates[-1] > date.today():
            warnings.append("Some transactions have future dates")

    if errors:
        LOGGER.debug("Validation found %d errors", len(errors))
    return ValidationReport(valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def calculate_data_statistics(data: GenerationResult) -> DataStatistics:
    account_types = Counter(account.type for account in data.accounts)
    by_month = Counter(f"{txn.date:%Y-%m}" for txn in data.added)
    volume = sum(abs(txn.amount) for txn in data.added)
    total = len(data.added)

    return DataStatistics(
        total_accounts=len(data.accounts),
        total_transactions=total,
        account_types=dict(account_types),
        transaction_volume=round(volume, 2),
        average_transaction_amount=round(volume / total, 2) if total else 0.0,
        transactions_by_month=dict(sorted(by_month.items())),
    )


def running_balances(data: GenerationResult) -> dict[str, list[RunningBalance]]:
    """Replay each account's added transactions oldest first.

    The opening balance is the current balance minus everything that posted
    in the window, so each series ends at the account's current balance.
    Accounts without transactions map to an empty list.
    """

    by_account: dict[str, list] = defaultdict(list)
    for txn in reversed(data.added):
        by_account[txn.account_id].append(txn)

    series: dict[str, list[RunningBalance]] = {}
    for account in data.accounts:
        transactions = by_account.get(account.account_id, [])
        amounts = [Decimal(str(txn.amount)) for txn in transactions]
        balance = Decimal(str(account.balances.current)) - sum(amounts, Decimal(0))
        entries: list[RunningBalance] = []
        for txn, amount in zip(transactions, amounts):
            balance += amount
            entries.append(
                RunningBalance(
                    transaction_id=txn.transaction_id,
                    date=txn.date,
                    amount=txn.amount,
                    balance=float(balance.quantize(_CENT)),
                )
            )
        series[account.account_id] = entries
    return series
