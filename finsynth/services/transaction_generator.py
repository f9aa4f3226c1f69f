"""Transaction synthesis for a company's account set.

Produces a sync-style triple: ``added`` (sorted newest first), ``modified``
(perturbed copies of added entries) and ``removed`` (id pairs only).
"""
from __future__ import annotations

import math
import random
import string
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Sequence

from faker import Faker

from finsynth.core.config import GeneratorSettings, get_settings
from finsynth.core.log import get_logger
from finsynth.domain.reference import (
    CLIENT_NAMES,
    COMMON_VENDOR_WEIGHT,
    COMMON_VENDORS,
    DEPOSIT_SOURCES,
    INDUSTRY_VENDOR_WEIGHT,
    MERCHANT_CITIES,
    STATE_CODES,
    TRANSACTION_BASE_COUNTS,
    deposit_range_for,
    deposit_shape_for,
    payment_range_for,
    size_tier_for,
    vendors_for,
)
from finsynth.domain.rules import (
    IN_STORE_MERCHANT_KEYWORDS,
    ONLINE_MERCHANT_KEYWORDS,
    categorize,
    description_rule_for,
    merchant_bucket,
)
from finsynth.schemas import (
    Account,
    CompanyProfile,
    PaymentMeta,
    RemovedTransaction,
    Transaction,
    TransactionLocation,
)

from .account_generator import ID_ALPHABET, ID_LENGTH
from .naming import build_faker, random_street_address

LOGGER = get_logger(__name__)

DEPOSIT_SHARE = (0.20, 0.30)
RECENCY_EXPONENT = 1.5
AUTHORIZATION_LAG_DAYS = 2
MODIFIED_AMOUNT_FACTOR = (0.95, 1.05)

ACH_PROBABILITY = 0.7
LOCATION_SUFFIX_PROBABILITY = 0.8
REFERENCE_SUFFIX_PROBABILITY = 0.4
DATE_SUFFIX_PROBABILITY = 0.3
STORE_NUMBER_PROBABILITY = 0.3

_CARD_NETWORKS = ("Visa", "Mastercard", "Amex", "Discover")
_ACH_PROCESSORS = ("ACH Network", "Stripe ACH", "Plaid Transfer")
_ACH_REASONS = ("Payment", "Transfer", "Deposit", "Withdrawal")
_ACH_CLASSES = ("CCD", "PPD", "WEB", "IAT")
_WIRE_NETWORKS = ("Fedwire", "SWIFT", "CHIPS", "SEPA")
_WIRE_REASONS = ("Payment", "Transfer", "Deposit", "Settlement")

_FORMATTER = string.Formatter()


@dataclass(frozen=True)
class TransactionOptions:
    """Size and window of a transaction set.

    ``added_count`` of ``None`` uses the base count for the company's tier.
    Missing window bounds default to the configured history ending today.
    """

    added_count: int | None = None
    start_date: date | None = None
    end_date: date | None = None


@dataclass(frozen=True)
class TransactionSet:
    added: tuple[Transaction, ...] = ()
    modified: tuple[Transaction, ...] = ()
    removed: tuple[RemovedTransaction, ...] = ()


@dataclass(frozen=True)
class DateWindow:
    start: date
    end: date

    @property
    def span_days(self) -> int:
        return max((self.end - self.start).days, 0)


@dataclass
class _Context:
    """Per-call state shared by the individual transaction builders."""

    profile: CompanyProfile
    window: DateWindow
    settings: GeneratorSettings
    rng: random.Random
    faker: Faker
    merchants: tuple[str, ...]
    merchant_weights: tuple[int, ...]
    seen_ids: set[str] = field(default_factory=set)


def generate_transaction_id(rng: random.Random | None = None) -> str:
    rng = rng or random
    return "".join(rng.choices(ID_ALPHABET, k=ID_LENGTH))


def resolve_window(options: TransactionOptions, history_days: int, today: date | None = None) -> DateWindow:
    """Turn optional bounds into a concrete, non-empty date window."""

    today = today or date.today()
    end = options.end_date or today
    start = options.start_date or end - timedelta(days=history_days)
    if start > end:
        raise ValueError("Start date must be before end date")
    return DateWindow(start=start, end=end)


def generate_transaction_date(window: DateWindow, rng: random.Random | None = None) -> date:
    """Draw a date in the window, biased towards its end."""

    rng = rng or random
    span = window.span_days
    days_ago = min(math.floor(rng.random() ** RECENCY_EXPONENT * (span + 1)), span)
    return window.end - timedelta(days=days_ago)


def generate_location(merchant_name: str, faker: Faker, rng: random.Random | None = None) -> TransactionLocation:
    """Online merchants only carry a country; others get a street address."""

    rng = rng or random
    if ONLINE_MERCHANT_KEYWORDS.matches(merchant_name):
        return TransactionLocation(country="US")

    city, region, postal_code = rng.choice(MERCHANT_CITIES)
    store_number = None
    if rng.random() < STORE_NUMBER_PROBABILITY:
        store_number = str(rng.randint(10, 999))
    return TransactionLocation(
        address=random_street_address(faker),
        city=city,
        region=region,
        postal_code=postal_code,
        country="US",
        lat=round(rng.uniform(30, 45), 6),
        lon=round(rng.uniform(-120, -80), 6),
        store_number=store_number,
    )


def payment_method_for(account: Account, rng: random.Random | None = None) -> str:
    rng = rng or random
    if account.type == "credit":
        return "Credit Card"
    if rng.random() < ACH_PROBABILITY:
        return "ACH"
    return rng.choice(("Wire", "Check"))


def generate_payment_meta(
    method: str,
    *,
    payee: str | None = None,
    payer: str | None = None,
    rng: random.Random | None = None,
) -> PaymentMeta:
    rng = rng or random
    if method == "ACH":
        return PaymentMeta(
            reference_number=f"REF{rng.randint(10_000_000, 99_999_999)}",
            payment_method="ACH",
            payment_processor=rng.choice(_ACH_PROCESSORS),
            reason=rng.choice(_ACH_REASONS),
            payee=payee,
            payer=payer,
            ach_class=rng.choice(_ACH_CLASSES),
        )
    if method == "Wire":
        return PaymentMeta(
            reference_number=f"WIRE{rng.randint(100_000, 999_999)}",
            payment_method="Wire",
            payment_processor=rng.choice(_WIRE_NETWORKS),
            reason=rng.choice(_WIRE_REASONS),
            payee=payee,
            payer=payer,
        )
    if method == "Check":
        return PaymentMeta(
            payment_method="Check",
            payee=payee,
            payer=payer,
            check_number=str(rng.randint(1000, 9999)),
        )
    if method == "Credit Card":
        return PaymentMeta(
            reference_number=f"REF{rng.randint(10_000_000, 99_999_999)}",
            payment_method="Credit Card",
            payment_processor=rng.choice(_CARD_NETWORKS),
            payee=payee,
        )
    return PaymentMeta()


def payment_channel_for(merchant_name: str, method: str) -> str:
    if ONLINE_MERCHANT_KEYWORDS.matches(merchant_name):
        return "online"
    if method == "Credit Card" and IN_STORE_MERCHANT_KEYWORDS.matches(merchant_name):
        return "in store"
    return "other"


def merchant_pool(industry: str | None) -> tuple[tuple[str, ...], tuple[int, ...]]:
    """Merchants and draw weights for an industry (common vendors always included)."""

    industry_vendors = vendors_for(industry)
    merchants = industry_vendors + COMMON_VENDORS
    weights = (INDUSTRY_VENDOR_WEIGHT,) * len(industry_vendors) + (COMMON_VENDOR_WEIGHT,) * len(COMMON_VENDORS)
    return merchants, weights


def _abbreviate(merchant_name: str, txn_date: date, rng: random.Random) -> str:
    words = merchant_name.split(" ")
    if len(words) == 1:
        code = merchant_name[:5].upper()
    else:
        code = "".join(word[: rng.choice((1, 2))].upper() for word in words)

    if rng.random() < LOCATION_SUFFIX_PROBABILITY:
        code += f" {rng.choice(STATE_CODES)}"
    if rng.random() < REFERENCE_SUFFIX_PROBABILITY:
        code += f" REF#{rng.randint(10_000, 99_999)}"
    if rng.random() < DATE_SUFFIX_PROBABILITY:
        code += f" {txn_date:%m/%d}"
    return code


def format_description(merchant_name: str, txn_date: date, rng: random.Random | None = None) -> str:
    """Statement descriptor for a merchant, as a bank would print it."""

    rng = rng or random
    rule = description_rule_for(merchant_name)
    if rule is None:
        return _abbreviate(merchant_name, txn_date, rng)

    template = rng.choice(rule.templates)
    placeholders = {name for _, name, _, _ in _FORMATTER.parse(template) if name}
    values: dict[str, str] = {}
    for name in sorted(placeholders):
        if name == "date":
            values[name] = f"{txn_date:%m/%d}"
        elif name == "random":
            values[name] = str(rng.randint(10_000, 99_999))
        elif name == "location":
            values[name] = rng.choice(STATE_CODES)
        elif name == "client":
            values[name] = rng.choice(CLIENT_NAMES).upper()
        elif name == "service":
            values[name] = rng.choice(rule.services) if rule.services else "SERVICES"
        elif name == "brand":
            values[name] = merchant_name.split(" ")[0].upper()
    return template.format(**values)


def generate_deposit_amount(profile: CompanyProfile, rng: random.Random | None = None) -> float:
    """Whole-dollar deposit from the tier band, skewed by business model."""

    rng = rng or random
    low, high = deposit_range_for(size_tier_for(profile.company_size).index)
    shape = deposit_shape_for(profile.business_model, profile.industry)
    amount = low + (high - low) * rng.random() ** shape.exponent
    if shape.burst_probability and rng.random() < shape.burst_probability:
        amount *= shape.burst_multiplier
    return float(max(round(amount), 1))


def generate_payment_amount(merchant_name: str, tier_index: int, rng: random.Random | None = None) -> float:
    """Negative amount in cents precision from the merchant's price band."""

    rng = rng or random
    low, high = payment_range_for(merchant_bucket(merchant_name), tier_index)
    return -max(round(rng.uniform(low, high), 2), 0.01)


def _unique_transaction_id(ctx: _Context) -> str:
    transaction_id = generate_transaction_id(ctx.rng)
    while transaction_id in ctx.seen_ids:
        transaction_id = generate_transaction_id(ctx.rng)
    ctx.seen_ids.add(transaction_id)
    return transaction_id


def _authorized_date(txn_date: date, pending: bool, ctx: _Context) -> date:
    if pending:
        return txn_date
    lagged = txn_date - timedelta(days=ctx.rng.randint(0, AUTHORIZATION_LAG_DAYS))
    return max(lagged, ctx.window.start)


def _build_transaction(
    ctx: _Context,
    account: Account,
    merchant_name: str,
    amount: float,
    payment_meta: PaymentMeta,
    method: str,
) -> Transaction:
    rng = ctx.rng
    txn_date = generate_transaction_date(ctx.window, rng)
    category = categorize(merchant_name)
    pending = rng.random() < ctx.settings.pending_rate
    return Transaction(
        transaction_id=_unique_transaction_id(ctx),
        account_id=account.account_id,
        amount=amount,
        iso_currency_code=account.balances.iso_currency_code,
        category=category.labels,
        category_id=category.category_id,
        pending=pending,
        original_description=merchant_name,
        merchant_name=merchant_name,
        name=format_description(merchant_name, txn_date, rng),
        date=txn_date,
        authorized_date=_authorized_date(txn_date, pending, ctx),
        location=generate_location(merchant_name, ctx.faker, rng),
        payment_meta=payment_meta,
        payment_channel=payment_channel_for(merchant_name, method),
    )


def generate_deposit_transaction(ctx: _Context, account: Account) -> Transaction:
    if account.type != "depository":
        raise ValueError("Deposits are only generated for depository accounts")

    rng = ctx.rng
    source = rng.choice(DEPOSIT_SOURCES)
    method = payment_method_for(account, rng)
    meta = generate_payment_meta(
        method,
        payee=ctx.profile.company_name,
        payer=rng.choice(CLIENT_NAMES),
        rng=rng,
    )
    amount = generate_deposit_amount(ctx.profile, rng)
    return _build_transaction(ctx, account, source, amount, meta, method)


def generate_payment_transaction(ctx: _Context, account: Account) -> Transaction:
    rng = ctx.rng
    merchant_name = rng.choices(ctx.merchants, weights=ctx.merchant_weights, k=1)[0]
    method = payment_method_for(account, rng)
    meta = generate_payment_meta(method, payee=merchant_name, payer=ctx.profile.company_name, rng=rng)
    amount = generate_payment_amount(merchant_name, size_tier_for(ctx.profile.company_size).index, rng)
    return _build_transaction(ctx, account, merchant_name, amount, meta, method)


def modify_transaction(transaction: Transaction, rng: random.Random | None = None) -> Transaction:
    """Return a copy of ``transaction`` with exactly one kind of change applied.

    The change is one of: amount scaled by 0.95-1.05, pending flipped, or the
    category recomputed from the merchant name.
    """

    rng = rng or random
    mutation = rng.randrange(3)
    if mutation == 0:
        update = {"amount": round(transaction.amount * rng.uniform(*MODIFIED_AMOUNT_FACTOR), 2)}
    elif mutation == 1:
        update = {"pending": not transaction.pending}
    else:
        category = categorize(transaction.merchant_name or "")
        update = {"category": category.labels, "category_id": category.category_id}
    return transaction.model_copy(update=update, deep=True)


def generate_transaction_set(
    accounts: Sequence[Account],
    profile: CompanyProfile,
    options: TransactionOptions | None = None,
    *,
    rng: random.Random | None = None,
    settings: GeneratorSettings | None = None,
    faker: Faker | None = None,
) -> TransactionSet:
    """Generate added, modified and removed transactions for ``accounts``.

    Deposits land on depository accounts; payments on depository or credit
    accounts. Without both kinds available the set is empty.
    """

    options = options or TransactionOptions()
    settings = settings or get_settings().generator
    rng = rng or random.Random()

    depository = [account for account in accounts if account.type == "depository"]
    payment_accounts = [account for account in accounts if account.type in ("depository", "credit")]
    if not depository or not payment_accounts:
        LOGGER.info("No depository or payment accounts; returning an empty transaction set")
        return TransactionSet()

    tier_index = size_tier_for(profile.company_size).index
    total = options.added_count or TRANSACTION_BASE_COUNTS[tier_index]
    merchants, weights = merchant_pool(profile.industry)
    ctx = _Context(
        profile=profile,
        window=resolve_window(options, settings.history_days),
        settings=settings,
        rng=rng,
        faker=faker or build_faker(rng),
        merchants=merchants,
        merchant_weights=weights,
    )

    deposit_count = math.floor(total * rng.uniform(*DEPOSIT_SHARE))
    payment_count = total - deposit_count

    added: list[Transaction] = []
    for _ in range(deposit_count):
        added.append(generate_deposit_transaction(ctx, rng.choice(depository)))
    for _ in range(payment_count):
        added.append(generate_payment_transaction(ctx, rng.choice(payment_accounts)))
    added.sort(key=lambda txn: txn.date, reverse=True)

    modified_count = min(math.floor(total * settings.modified_rate), len(added))
    modified = [modify_transaction(rng.choice(added), rng) for _ in range(modified_count)]

    removed_count = min(math.floor(total * settings.removed_rate), len(added))
    removed = []
    for _ in range(removed_count):
        target = rng.choice(added)
        removed.append(RemovedTransaction(transaction_id=target.transaction_id, account_id=target.account_id))

    LOGGER.debug(
        "Generated %d deposits and %d payments between %s and %s",
        deposit_count,
        payment_count,
        ctx.window.start,
        ctx.window.end,
    )
    return TransactionSet(added=tuple(added), modified=tuple(modified), removed=tuple(removed))
