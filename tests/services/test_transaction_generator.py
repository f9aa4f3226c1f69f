from __future__ import annotations

import random
import re
from datetime import date, timedelta

import pytest

from finsynth.core.config import GeneratorSettings
from finsynth.domain.reference import TRANSACTION_BASE_COUNTS
from finsynth.services.account_generator import generate_account_set
from finsynth.services.naming import build_faker
from finsynth.services.transaction_generator import (
    DateWindow,
    TransactionOptions,
    TransactionSet,
    format_description,
    generate_deposit_amount,
    generate_location,
    generate_payment_amount,
    generate_transaction_date,
    generate_transaction_set,
    modify_transaction,
    resolve_window,
)


@pytest.fixture
def accounts(medium_profile):
    return generate_account_set(medium_profile, rng=random.Random(21))


@pytest.fixture
def transaction_set(accounts, medium_profile, settings) -> TransactionSet:
    return generate_transaction_set(
        accounts,
        medium_profile,
        TransactionOptions(added_count=100),
        rng=random.Random(42),
        settings=settings,
    )


def test_added_count_matches_request(transaction_set) -> None:
    assert len(transaction_set.added) == 100


def test_added_is_sorted_newest_first(transaction_set) -> None:
    dates = [txn.date for txn in transaction_set.added]
    assert dates == sorted(dates, reverse=True)


def test_transactions_reference_eligible_accounts(transaction_set, accounts) -> None:
    by_id = {account.account_id: account for account in accounts}
    for txn in transaction_set.added:
        assert by_id[txn.account_id].type in ("depository", "credit")
        if txn.amount > 0:
            assert by_id[txn.account_id].type == "depository"


def test_amounts_are_signed_and_rounded(transaction_set) -> None:
    deposits = [txn for txn in transaction_set.added if txn.amount > 0]
    payments = [txn for txn in transaction_set.added if txn.amount < 0]

    assert len(deposits) + len(payments) == 100
    assert 20 <= len(deposits) <= 30
    assert all(txn.amount == round(txn.amount) and txn.amount >= 1 for txn in deposits)
    assert all(txn.amount == round(txn.amount, 2) for txn in payments)


def test_dates_fall_inside_default_window(transaction_set, settings) -> None:
    earliest = date.today() - timedelta(days=settings.history_days)
    for txn in transaction_set.added:
        assert earliest <= txn.date <= date.today()


def test_explicit_window_is_respected(accounts, medium_profile, settings) -> None:
    start = date.today() - timedelta(days=30)
    end = date.today() - timedelta(days=10)
    result = generate_transaction_set(
        accounts,
        medium_profile,
        TransactionOptions(added_count=50, start_date=start, end_date=end),
        rng=random.Random(7),
        settings=settings,
    )
    assert all(start <= txn.date <= end for txn in result.added)
    assert all(start <= txn.authorized_date <= txn.date for txn in result.added)


def test_authorized_date_policy(transaction_set) -> None:
    for txn in transaction_set.added:
        if txn.pending:
            assert txn.authorized_date == txn.date
        else:
            assert txn.date - timedelta(days=2) <= txn.authorized_date <= txn.date


def test_pending_rate_is_configurable(accounts, medium_profile) -> None:
    always = generate_transaction_set(
        accounts,
        medium_profile,
        TransactionOptions(added_count=40),
        rng=random.Random(1),
        settings=GeneratorSettings(pending_rate=1.0),
    )
    never = generate_transaction_set(
        accounts,
        medium_profile,
        TransactionOptions(added_count=40),
        rng=random.Random(1),
        settings=GeneratorSettings(pending_rate=0.0),
    )
    assert all(txn.pending for txn in always.added)
    assert not any(txn.pending for txn in never.added)


def test_modified_entries_are_perturbed_copies(transaction_set) -> None:
    added_by_id = {txn.transaction_id: txn for txn in transaction_set.added}
    allowed = ({"amount"}, {"pending"}, {"category", "category_id"}, set())

    assert len(transaction_set.modified) == 5
    for modified in transaction_set.modified:
        source = added_by_id[modified.transaction_id]
        assert modified is not source
        changed = {
            name for name in type(modified).model_fields if getattr(modified, name) != getattr(source, name)
        }
        assert changed in allowed


def test_removed_entries_reference_added(transaction_set) -> None:
    pairs = {(txn.transaction_id, txn.account_id) for txn in transaction_set.added}
    assert len(transaction_set.removed) == 2
    for removed in transaction_set.removed:
        assert (removed.transaction_id, removed.account_id) in pairs


def test_transaction_ids_are_unique(transaction_set) -> None:
    ids = [txn.transaction_id for txn in transaction_set.added]
    assert len(ids) == len(set(ids))
    assert all(re.fullmatch(r"[A-Za-z0-9]{22}", txn_id) for txn_id in ids)


def test_payment_meta_follows_account_type(transaction_set, accounts) -> None:
    by_id = {account.account_id: account for account in accounts}
    for txn in transaction_set.added:
        method = txn.payment_meta.payment_method
        if by_id[txn.account_id].type == "credit":
            assert method == "Credit Card"
        else:
            assert method in ("ACH", "Wire", "Check")


def test_base_count_used_without_override(accounts, medium_profile, settings) -> None:
    result = generate_transaction_set(accounts, medium_profile, rng=random.Random(3), settings=settings)
    assert len(result.added) == TRANSACTION_BASE_COUNTS[2]


def test_no_depository_accounts_gives_empty_set(accounts, medium_profile, settings) -> None:
    credit_only = [account for account in accounts if account.type == "credit"]
    result = generate_transaction_set(credit_only, medium_profile, rng=random.Random(3), settings=settings)
    assert result == TransactionSet()


def test_seeded_generation_replays(accounts, medium_profile, settings) -> None:
    options = TransactionOptions(added_count=60)
    first = generate_transaction_set(accounts, medium_profile, options, rng=random.Random(9), settings=settings)
    second = generate_transaction_set(accounts, medium_profile, options, rng=random.Random(9), settings=settings)
    assert first == second


def test_recency_bias_favours_recent_dates() -> None:
    window = DateWindow(start=date(2024, 1, 1), end=date(2024, 12, 31))
    rng = random.Random(17)
    midpoint = date(2024, 7, 1)
    draws = [generate_transaction_date(window, rng) for _ in range(2000)]
    recent = sum(1 for value in draws if value >= midpoint)
    assert all(window.start <= value <= window.end for value in draws)
    assert recent > len(draws) * 0.55


def test_resolve_window_defaults_and_rejects_inverted_bounds() -> None:
    today = date(2024, 6, 30)
    window = resolve_window(TransactionOptions(), 730, today=today)
    assert window.end == today
    assert window.span_days == 730
    with pytest.raises(ValueError):
        resolve_window(TransactionOptions(start_date=date(2024, 6, 1), end_date=date(2024, 5, 1)), 730)


def test_brand_templates_and_fallback_codes() -> None:
    rng = random.Random(2)
    txn_date = date(2024, 3, 5)

    assert format_description("Slack", txn_date, rng) == "SLACK.COM"
    assert format_description("Legal Services", txn_date, rng) == "LEGAL COUNSEL LLC"
    assert format_description("Uber", txn_date, rng) == "UBER *TRIP 03/05"
    assert re.fullmatch(r"SQUARE INC DEP \d{5}", format_description("Square Transfer", txn_date, rng))
    for _ in range(50):
        code = format_description("Zebra Widgets", txn_date, rng)
        assert re.fullmatch(r"ZE?WI?( [A-Z]{2})?( REF#\d{5})?( 03/05)?", code)
    assert format_description("Zebra", txn_date, rng).startswith("ZEBRA")


def test_online_merchants_have_country_only_location() -> None:
    rng = random.Random(4)
    faker = build_faker(rng)

    online = generate_location("AWS", faker, rng)
    assert online.country == "US"
    assert online.city is None and online.address is None

    in_person = generate_location("Staples", faker, rng)
    assert in_person.city and in_person.address
    assert 30 <= in_person.lat <= 45


def test_consulting_deposits_stay_in_tier_band(medium_profile) -> None:
    profile = medium_profile.model_copy(update={"industry": "Consulting"})
    rng = random.Random(6)
    for _ in range(200):
        amount = generate_deposit_amount(profile, rng)
        assert 5_000 <= amount <= 50_000


def test_payment_amount_uses_bucket_band() -> None:
    rng = random.Random(8)
    for _ in range(200):
        amount = generate_payment_amount("AWS", 2, rng)
        assert -20_000 <= amount <= -750


def test_modify_transaction_leaves_source_untouched(transaction_set) -> None:
    source = transaction_set.added[0]
    snapshot = source.model_dump()
    for seed in range(10):
        modify_transaction(source, random.Random(seed))
    assert source.model_dump() == snapshot
