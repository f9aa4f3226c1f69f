from __future__ import annotations

import math
import random
import re
from collections import Counter

import pytest
from pydantic import ValidationError

from finsynth.domain.reference import BANK_PRODUCTS
from finsynth.schemas import Account, AccountBalance
from finsynth.services.account_generator import (
    generate_account_id,
    generate_account_mask,
    generate_account_set,
    generate_bank_account,
    generate_credit_card,
    generate_loan_account,
)


def _subtype_counts(accounts: list[Account]) -> Counter:
    return Counter((account.type, account.subtype) for account in accounts)


def test_medium_company_gets_seven_accounts(medium_profile, rng) -> None:
    accounts = generate_account_set(medium_profile, rng=rng)

    assert len(accounts) == 7
    assert _subtype_counts(accounts) == Counter(
        {
            ("depository", "checking"): 2,
            ("depository", "savings"): 1,
            ("credit", "credit card"): 2,
            ("investment", "brokerage"): 1,
            ("loan", "line of credit"): 1,
        }
    )
    assert Counter(account.type for account in accounts)["credit"] == 2


def test_account_ids_and_masks(medium_profile, rng) -> None:
    accounts = generate_account_set(medium_profile.model_copy(update={"company_size": "Enterprise (1000+)"}), rng=rng)

    ids = [account.account_id for account in accounts]
    assert len(ids) == len(set(ids)) == 15
    assert all(re.fullmatch(r"[A-Za-z0-9]{22}", account_id) for account_id in ids)
    assert all(re.fullmatch(r"\d{4}", account.mask) for account in accounts)


def test_balance_rules_per_type(medium_profile) -> None:
    for seed in range(10):
        profile = medium_profile.model_copy(update={"company_size": "Enterprise (1000+)"})
        for account in generate_account_set(profile, rng=random.Random(seed)):
            balances = account.balances
            if account.type == "depository":
                assert balances.limit is None
                assert balances.available == balances.current
            elif account.type == "credit":
                assert balances.current <= 0
                assert balances.limit > 0
                assert balances.available == balances.limit + balances.current
            elif account.type == "loan":
                assert balances.current < 0
                if account.subtype == "line of credit":
                    assert balances.limit == abs(balances.current)
                    assert balances.available == 0
                else:
                    assert balances.limit is None
                    assert balances.available is None
            else:
                assert account.type == "investment"
                assert balances.available is None
                assert balances.limit is None


def test_enterprise_subtypes_cycle(medium_profile, rng) -> None:
    profile = medium_profile.model_copy(update={"company_size": "Enterprise (1000+)"})
    accounts = generate_account_set(profile, rng=rng)

    assert [a.subtype for a in accounts if a.type == "investment"] == ["brokerage", "401k", "ira"]
    assert [a.subtype for a in accounts if a.type == "loan"] == ["line of credit", "commercial", "construction"]


def test_balances_scale_with_revenue(medium_profile, rng) -> None:
    revenue = medium_profile.annual_revenue
    accounts = generate_account_set(medium_profile, rng=rng)

    primary_checking = accounts[0]
    assert revenue * 0.08 * 0.7 - 1 <= primary_checking.balances.current <= revenue * 0.08 * 1.3
    primary_card = next(a for a in accounts if a.type == "credit")
    assert primary_card.balances.limit == math.floor(revenue * 0.05)
    investment = next(a for a in accounts if a.type == "investment")
    assert revenue * 0.5 - 1 <= investment.balances.current <= revenue * 1.5


def test_unknown_size_uses_small_mix(medium_profile, rng) -> None:
    accounts = generate_account_set(medium_profile.model_copy(update={"company_size": "Gigantic"}), rng=rng)
    assert len(accounts) == 5


def test_primary_bank_products_are_used(medium_profile, rng) -> None:
    accounts = generate_account_set(medium_profile, rng=rng)
    checking_names = {name for bank in BANK_PRODUCTS.values() for name in bank.checking}
    assert accounts[0].official_name in checking_names


def test_unknown_bank_falls_back_to_a_known_one(rng) -> None:
    account = generate_bank_account("Bank of Nowhere", "savings", 5000.0, rng=rng)
    savings_names = {name for bank in BANK_PRODUCTS.values() for name in bank.savings}
    assert account.official_name in savings_names
    assert account.balances.available == account.balances.current == 5000.0


def test_credit_card_defaults(rng) -> None:
    card = generate_credit_card("Chase", rng=rng)
    assert 10_000 <= card.balances.limit <= 100_000
    assert card.balances.current <= 0
    assert card.official_name.startswith("Chase ")


def test_loan_account_is_always_a_loan(rng) -> None:
    loan = generate_loan_account("Chase", "line of credit", -50_000.0, rng=rng)
    assert loan.type == "loan"
    assert loan.balances.limit == 50_000.0
    assert loan.balances.available == 0


def test_helpers_are_seedable() -> None:
    assert generate_account_id(random.Random(1)) == generate_account_id(random.Random(1))
    mask = generate_account_mask(random.Random(2))
    assert 1000 <= int(mask) <= 9999


def test_account_rejects_subtype_of_another_type() -> None:
    with pytest.raises(ValidationError):
        Account(
            account_id="B" * 22,
            balances=AccountBalance(available=10.0, current=10.0),
            mask="0001",
            name="Odd",
            subtype="credit card",
            type="depository",
        )
