"""Account set synthesis: depository, credit, investment and loan accounts.

Balances scale with the company's annual revenue. One primary bank holds the
checking, savings, investment and loan accounts plus the first credit card;
additional cards may come from any bank.
"""
from __future__ import annotations

import math
import random
import string
from typing import Iterable

from finsynth.core.log import get_logger
from finsynth.domain.reference import (
    BANK_NAMES,
    DEFAULT_LOAN_REVENUE_SHARE,
    INVESTMENT_SUBTYPE_CYCLE,
    LOAN_REVENUE_SHARE,
    LOAN_SUBTYPE_CYCLE,
    BankProducts,
    account_distribution_for,
    bank_products_for,
)
from finsynth.schemas import Account, AccountBalance, CompanyProfile

LOGGER = get_logger(__name__)

ID_ALPHABET = string.ascii_letters + string.digits
ID_LENGTH = 22

PRIMARY_CHECKING_SHARE = 0.08
SECONDARY_CHECKING_SHARE = 0.03
SAVINGS_SHARE = 0.15
PRIMARY_CARD_LIMIT_SHARE = 0.05
SECONDARY_CARD_LIMIT_SHARE = 0.02
BALANCE_JITTER = (0.7, 1.3)
CARD_UTILIZATION = (0.3, 0.7)
INVESTMENT_SHARE = (0.5, 1.5)
MIN_CREDIT_LIMIT = 500.0

_DEPOSITORY_NAMES = {
    "checking": ("Primary Checking", "Business Checking"),
    "savings": ("Business Savings", "Business Savings"),
    "cd": ("Business CD", "Business Certificate of Deposit"),
    "money market": ("Money Market", "Business Money Market Savings"),
}


def generate_account_id(rng: random.Random | None = None) -> str:
    """Return a 22-character alphanumeric identifier."""

    rng = rng or random
    return "".join(rng.choices(ID_ALPHABET, k=ID_LENGTH))


def generate_account_mask(rng: random.Random | None = None) -> str:
    rng = rng or random
    return str(rng.randint(1000, 9999))


def _bank(bank_name: str, rng) -> BankProducts:
    bank = bank_products_for(bank_name)
    if bank is None:
        bank = bank_products_for(rng.choice(BANK_NAMES))
    return bank


def _balance(current: float, currency: str, *, available: float | None, limit: float | None = None) -> AccountBalance:
    return AccountBalance(
        available=available,
        current=current,
        iso_currency_code=currency,
        limit=limit,
    )


def generate_bank_account(
    bank_name: str,
    subtype: str = "checking",
    balance: float | None = None,
    *,
    name: str | None = None,
    currency: str = "USD",
    rng: random.Random | None = None,
) -> Account:
    """Build a depository account; ``available`` mirrors ``current``."""

    rng = rng or random
    bank = _bank(bank_name, rng)
    default_name, official_name = _DEPOSITORY_NAMES.get(subtype, _DEPOSITORY_NAMES["money market"])
    if subtype == "checking":
        official_name = rng.choice(bank.checking)
    elif subtype == "savings":
        official_name = rng.choice(bank.savings)

    if balance is None:
        balance = float(math.floor(rng.uniform(10_000, 100_000)))

    return Account(
        account_id=generate_account_id(rng),
        balances=_balance(balance, currency, available=balance),
        mask=generate_account_mask(rng),
        name=name or default_name,
        official_name=official_name,
        subtype=subtype,
        type="depository",
    )


def generate_credit_card(
    bank_name: str,
    credit_limit: float | None = None,
    current_balance: float | None = None,
    *,
    currency: str = "USD",
    rng: random.Random | None = None,
) -> Account:
    """Build a business credit card; ``current`` is the (non-positive) amount owed."""

    rng = rng or random
    bank = _bank(bank_name, rng)
    product = rng.choice(bank.credit_cards)

    limit = float(credit_limit) if credit_limit else float(math.floor(rng.uniform(10_000, 100_000)))
    limit = max(limit, MIN_CREDIT_LIMIT)
    if current_balance is None:
        current_balance = -float(math.floor(limit * rng.uniform(*CARD_UTILIZATION)))
    current = min(float(current_balance), 0.0)

    return Account(
        account_id=generate_account_id(rng),
        balances=_balance(current, currency, available=limit + current, limit=limit),
        mask=generate_account_mask(rng),
        name=f"Business {product}",
        official_name=f"{bank.name} {product} Credit Card",
        subtype="credit card",
        type="credit",
    )


def generate_investment_account(
    bank_name: str,
    subtype: str = "brokerage",
    balance: float | None = None,
    *,
    currency: str = "USD",
    rng: random.Random | None = None,
) -> Account:
    rng = rng or random
    bank = _bank(bank_name, rng)
    if balance is None:
        balance = float(math.floor(rng.uniform(50_000, 500_000)))
    label = subtype.upper()

    return Account(
        account_id=generate_account_id(rng),
        balances=_balance(balance, currency, available=None),
        mask=generate_account_mask(rng),
        name=label,
        official_name=f"{bank.name} Business {label} Investment Account",
        subtype=subtype,
        type="investment",
    )


def generate_loan_account(
    bank_name: str,
    subtype: str = "line of credit",
    balance: float | None = None,
    *,
    currency: str = "USD",
    rng: random.Random | None = None,
) -> Account:
    """Build a loan account with a negative principal balance.

    A line of credit is fully drawn: its limit equals the amount owed and
    nothing is available.
    """

    rng = rng or random
    bank = _bank(bank_name, rng)
    if balance is None:
        balance = -float(math.floor(rng.uniform(100_000, 500_000)))
    current = -max(abs(float(balance)), 1.0)

    if subtype == "line of credit":
        limit: float | None = abs(current)
        available: float | None = 0.0
    else:
        limit = None
        available = None

    title = subtype[:1].upper() + subtype[1:]
    return Account(
        account_id=generate_account_id(rng),
        balances=_balance(current, currency, available=available, limit=limit),
        mask=generate_account_mask(rng),
        name=title,
        official_name=f"{bank.name} Business {title}",
        subtype=subtype,
        type="loan",
    )


def _revenue_share(revenue: float, share: float, rng, jitter: tuple[float, float] = BALANCE_JITTER) -> float:
    return float(math.floor(revenue * share * rng.uniform(*jitter)))


def _ensure_unique_ids(accounts: Iterable[Account], rng) -> list[Account]:
    seen: set[str] = set()
    unique: list[Account] = []
    for account in accounts:
        account_id = account.account_id
        while account_id in seen:
            account_id = generate_account_id(rng)
        seen.add(account_id)
        if account_id != account.account_id:
            account = account.model_copy(update={"account_id": account_id})
        unique.append(account)
    return unique


def generate_account_set(
    profile: CompanyProfile,
    *,
    rng: random.Random | None = None,
    currency: str = "USD",
) -> list[Account]:
    """Generate the full account mix for a company.

    The mix comes from the company's size tier (unknown sizes use the Small
    mix). Account ids are unique within the returned list.
    """

    rng = rng or random
    distribution = account_distribution_for(profile.company_size)
    revenue = float(profile.annual_revenue)
    primary_bank = rng.choice(BANK_NAMES)

    accounts: list[Account] = []

    for index in range(distribution.checking):
        share = PRIMARY_CHECKING_SHARE if index == 0 else SECONDARY_CHECKING_SHARE
        name = "Primary Checking" if index == 0 else "Operating Checking"
        accounts.append(
            generate_bank_account(
                primary_bank,
                "checking",
                _revenue_share(revenue, share, rng),
                name=name,
                currency=currency,
                rng=rng,
            )
        )

    for _ in range(distribution.savings):
        accounts.append(
            generate_bank_account(
                primary_bank,
                "savings",
                _revenue_share(revenue, SAVINGS_SHARE, rng),
                currency=currency,
                rng=rng,
            )
        )

    for index in range(distribution.credit):
        share = PRIMARY_CARD_LIMIT_SHARE if index == 0 else SECONDARY_CARD_LIMIT_SHARE
        limit = max(float(math.floor(revenue * share)), MIN_CREDIT_LIMIT)
        owed = -float(math.floor(limit * rng.uniform(*CARD_UTILIZATION)))
        card_bank = primary_bank if index == 0 else rng.choice(BANK_NAMES)
        accounts.append(generate_credit_card(card_bank, limit, owed, currency=currency, rng=rng))

    for index in range(distribution.investment):
        subtype = INVESTMENT_SUBTYPE_CYCLE[index % len(INVESTMENT_SUBTYPE_CYCLE)]
        balance = _revenue_share(revenue, 1.0, rng, INVESTMENT_SHARE)
        accounts.append(
            generate_investment_account(primary_bank, subtype, balance, currency=currency, rng=rng)
        )

    for index in range(distribution.loan):
        subtype = LOAN_SUBTYPE_CYCLE[index % len(LOAN_SUBTYPE_CYCLE)]
        share_range = LOAN_REVENUE_SHARE.get(subtype, DEFAULT_LOAN_REVENUE_SHARE)
        owed = -_revenue_share(revenue, 1.0, rng, share_range)
        accounts.append(generate_loan_account(primary_bank, subtype, owed, currency=currency, rng=rng))

    accounts = _ensure_unique_ids(accounts, rng)
    LOGGER.debug(
        "Generated %d accounts at %s for %s", len(accounts), primary_bank, profile.company_name
    )
    return accounts
