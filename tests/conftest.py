from __future__ import annotations

import random
from datetime import date, timedelta

import pytest

from finsynth.core.config import GeneratorSettings
from finsynth.schemas import (
    Account,
    AccountBalance,
    CompanyProfile,
    GenerationResult,
    Transaction,
)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def settings() -> GeneratorSettings:
    return GeneratorSettings()


@pytest.fixture
def medium_profile() -> CompanyProfile:
    return CompanyProfile(
        company_name="Acme Analytics",
        industry="Technology",
        business_model="SaaS",
        company_size="Medium (51-200)",
        founding_date=date(2015, 3, 14),
        location="Austin, TX",
        annual_revenue=15_000_000,
    )


def build_account(
    account_id: str = "A" * 22,
    *,
    name: str = "Primary Checking",
    current: float = 1000.0,
) -> Account:
    return Account(
        account_id=account_id,
        balances=AccountBalance(available=current, current=current),
        mask="1234",
        name=name,
        official_name="Business Complete Checking",
        subtype="checking",
        type="depository",
    )


def build_transaction(
    transaction_id: str = "T" * 22,
    *,
    account_id: str = "A" * 22,
    amount: float = -25.0,
    txn_date: date | None = None,
    name: str = "STAPLES NY",
    category: tuple[str, ...] = ("Shops", "Office Supplies"),
    pending: bool = False,
) -> Transaction:
    txn_date = txn_date or date.today() - timedelta(days=3)
    return Transaction(
        transaction_id=transaction_id,
        account_id=account_id,
        amount=amount,
        category=category,
        category_id="19043000",
        pending=pending,
        original_description="Staples",
        merchant_name="Staples",
        name=name,
        date=txn_date,
        authorized_date=txn_date,
    )


def build_result(accounts: list[Account], added: list[Transaction], **kwargs) -> GenerationResult:
    return GenerationResult(
        accounts=tuple(accounts),
        added=tuple(added),
        request_id=kwargs.pop("request_id", "req_0123456789abc"),
        **kwargs,
    )


@pytest.fixture
def make_account():
    return build_account


@pytest.fixture
def make_transaction():
    return build_transaction


@pytest.fixture
def make_result():
    return build_result
