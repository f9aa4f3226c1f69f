from __future__ import annotations

import re
from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from finsynth.core.config import GeneratorSettings
from finsynth.schemas import CompanyProfileInput, DataGenerationOptions, GenerationRequest
from finsynth.services.financial_data import (
    FinancialDataService,
    GenerationError,
    MissingCompanyDataError,
    NoAccountsAvailableError,
    filter_accounts,
    generate_financial_data,
    generate_request_id,
    generate_sample_data,
)

COMPANY = {
    "company_name": "Acme Analytics",
    "industry": "Technology",
    "business_model": "SaaS",
    "company_size": "Medium (51-200)",
}


@pytest.fixture
def settings() -> GeneratorSettings:
    return GeneratorSettings()


def test_requested_count_without_investments_or_loans(settings) -> None:
    options = {"num_transactions": 100, "include_investments": False, "include_loans": False}
    result = generate_financial_data(COMPANY, options, settings=settings)

    assert len(result.added) == 100
    assert not {"investment", "loan"} & {account.type for account in result.accounts}
    account_ids = {account.account_id for account in result.accounts}
    assert all(txn.account_id in account_ids for txn in result.added)


def test_all_toggles_off_is_rejected(settings) -> None:
    options = DataGenerationOptions(
        include_deposits=False,
        include_payments=False,
        include_investments=False,
        include_loans=False,
    )
    with pytest.raises(NoAccountsAvailableError, match="No accounts available"):
        generate_financial_data(COMPANY, options, settings=settings)


def test_missing_company_fields_are_named(settings) -> None:
    with pytest.raises(MissingCompanyDataError) as excinfo:
        generate_financial_data({"company_name": "Acme Analytics"}, settings=settings)

    assert excinfo.value.missing == ["industry", "business_model", "company_size"]
    assert isinstance(excinfo.value, GenerationError)
    assert isinstance(excinfo.value, ValueError)


def test_unseeded_calls_differ_but_share_shape(settings) -> None:
    options = {"num_transactions": 50}
    first = generate_financial_data(COMPANY, options, settings=settings)
    second = generate_financial_data(COMPANY, options, settings=settings)

    assert first.request_id != second.request_id
    assert len(first.accounts) == len(second.accounts)
    assert len(first.added) == len(second.added)
    assert len(first.modified) == len(second.modified)
    assert len(first.removed) == len(second.removed)
    assert [txn.amount for txn in first.added] != [txn.amount for txn in second.added]


def test_seeded_calls_replay_everything_but_request_id(settings) -> None:
    options = {"num_transactions": 50, "seed": 2024, "include_loans": True}
    first = generate_financial_data(COMPANY, options, settings=settings)
    second = generate_financial_data(COMPANY, options, settings=settings)

    assert first.request_id != second.request_id
    assert first.model_dump(exclude={"request_id"}) == second.model_dump(exclude={"request_id"})


def test_seed_from_settings_is_used_when_options_have_none() -> None:
    settings = GeneratorSettings(seed=77)
    first = generate_financial_data(COMPANY, {"num_transactions": 20}, settings=settings)
    second = generate_financial_data(COMPANY, {"num_transactions": 20}, settings=settings)
    assert first.added == second.added


def test_sync_sentinels(settings) -> None:
    result = generate_financial_data(CompanyProfileInput(**COMPANY), {"num_transactions": 10}, settings=settings)

    assert result.next_cursor == "end"
    assert result.has_more is False
    assert result.transactions_update_status == "full_completion"
    assert re.fullmatch(r"req_[0-9a-z]{13}", result.request_id)


def test_without_depository_accounts_no_transactions_are_added(settings) -> None:
    options = {"include_deposits": False, "include_payments": True}
    result = generate_financial_data(COMPANY, options, settings=settings)

    assert {account.type for account in result.accounts} == {"credit"}
    assert result.added == ()


def test_filter_accounts_maps_toggles_to_types(settings) -> None:
    result = generate_financial_data(
        COMPANY, {"include_investments": True, "include_loans": True, "num_transactions": 10}, settings=settings
    )
    options = DataGenerationOptions(include_payments=False, include_investments=True, include_loans=False)
    remaining = {account.type for account in filter_accounts(list(result.accounts), options)}
    assert remaining == {"depository", "investment"}


@pytest.mark.parametrize(
    "options",
    [
        {"num_transactions": 5},
        {"num_transactions": 5001},
        {"start_date": date.today() + timedelta(days=2)},
        {"start_date": date.today() - timedelta(days=5), "end_date": date.today() - timedelta(days=10)},
    ],
)
def test_invalid_options_are_rejected(options, settings) -> None:
    with pytest.raises(ValidationError):
        generate_financial_data(COMPANY, options, settings=settings)


def test_invalid_company_values_are_rejected(settings) -> None:
    with pytest.raises(ValidationError):
        generate_financial_data({**COMPANY, "industry": "Alchemy"}, settings=settings)


def test_request_ids_are_opaque() -> None:
    ids = {generate_request_id() for _ in range(100)}
    assert len(ids) == 100


def test_sample_data_includes_every_account_type() -> None:
    result = generate_sample_data("Acme Analytics", "Retail")

    assert len(result.added) == 100
    assert {"depository", "credit", "investment", "loan"} <= {account.type for account in result.accounts}
    earliest = date.today() - timedelta(days=90)
    assert all(txn.date >= earliest for txn in result.added)


def test_service_bundles_validation_and_statistics(settings) -> None:
    service = FinancialDataService(settings=settings)
    response = service.generate(
        GenerationRequest(company=CompanyProfileInput(**COMPANY), options=DataGenerationOptions(num_transactions=30))
    )

    assert response.validation.valid
    assert response.statistics.total_transactions == 30
    assert response.statistics.total_accounts == len(response.data.accounts)


def test_service_renders_transactions_csv(settings) -> None:
    service = FinancialDataService(settings=settings)
    content = service.transactions_csv(
        GenerationRequest(company=CompanyProfileInput(**COMPANY), options=DataGenerationOptions(num_transactions=12))
    )

    lines = content.split("\n")
    assert lines[0] == "Date,Account,Merchant,Category,Amount,Status"
    assert len(lines) == 13
