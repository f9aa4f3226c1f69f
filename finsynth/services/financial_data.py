"""Entry point that turns a company description into a complete dataset."""
from __future__ import annotations

import random
import secrets
import string
from datetime import date, timedelta
from typing import Any, Mapping

from finsynth.core.config import GeneratorSettings, get_settings
from finsynth.core.formatting import format_money
from finsynth.core.log import get_logger, log_context, timeit
from finsynth.schemas import (
    Account,
    CompanyProfileInput,
    DataGenerationOptions,
    GenerationRequest,
    GenerationResponse,
    GenerationResult,
)

from .account_generator import generate_account_set
from .company_generator import generate_company_profile
from .naming import build_faker
from .transaction_generator import TransactionOptions, generate_transaction_set
from .export import format_transactions_as_csv
from .validation import calculate_data_statistics, validate_financial_data

LOGGER = get_logger(__name__)

REQUEST_ID_PREFIX = "req_"
REQUEST_ID_LENGTH = 13
_BASE36 = string.digits + string.ascii_lowercase

# Account type dropped when the matching include_* option is off.
ACCOUNT_TYPE_TOGGLES = (
    ("include_deposits", "depository"),
    ("include_payments", "credit"),
    ("include_investments", "investment"),
    ("include_loans", "loan"),
)


class GenerationError(ValueError):
    """Raised when a generation request cannot be satisfied."""


class MissingCompanyDataError(GenerationError):
    """Raised when required company profile fields are absent."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required company profile data: {', '.join(missing)}")


class NoAccountsAvailableError(GenerationError):
    """Raised when the account filters leave nothing to generate against."""

    def __init__(self) -> None:
        super().__init__("No accounts available. Please enable at least one account type in options.")


def generate_request_id() -> str:
    """Opaque request id drawn from OS entropy, never from a seeded generator."""

    suffix = "".join(secrets.choice(_BASE36) for _ in range(REQUEST_ID_LENGTH))
    return f"{REQUEST_ID_PREFIX}{suffix}"


def _coerce_company(company_data: CompanyProfileInput | Mapping[str, Any]) -> CompanyProfileInput:
    if isinstance(company_data, CompanyProfileInput):
        return company_data
    return CompanyProfileInput.model_validate(dict(company_data))


def _coerce_options(options: DataGenerationOptions | Mapping[str, Any] | None) -> DataGenerationOptions:
    if options is None:
        return DataGenerationOptions()
    if isinstance(options, DataGenerationOptions):
        return options
    return DataGenerationOptions.model_validate(dict(options))


def filter_accounts(accounts: list[Account], options: DataGenerationOptions) -> list[Account]:
    """Drop the account types whose include_* option is switched off."""

    excluded = {account_type for flag, account_type in ACCOUNT_TYPE_TOGGLES if not getattr(options, flag)}
    return [account for account in accounts if account.type not in excluded]


def generate_financial_data(
    company_data: CompanyProfileInput | Mapping[str, Any],
    options: DataGenerationOptions | Mapping[str, Any] | None = None,
    *,
    settings: GeneratorSettings | None = None,
) -> GenerationResult:
    """Generate accounts and a sync-style transaction feed for a company.

    Raises:
        MissingCompanyDataError: company name, industry, business model or
            size is missing.
        NoAccountsAvailableError: the include_* options exclude every
            generated account.
        pydantic.ValidationError: the inputs fail field validation.
    """

    company = _coerce_company(company_data)
    opts = _coerce_options(options)
    settings = settings or get_settings().generator

    missing = company.missing_required()
    if missing:
        raise MissingCompanyDataError(missing)

    seed = opts.seed if opts.seed is not None else settings.seed
    rng = random.Random(seed)
    faker = build_faker(rng)
    request_id = generate_request_id()

    with log_context.scope(request_id=request_id):
        with timeit("Financial data generation", logger=LOGGER, unit="transactions") as timer:
            profile = generate_company_profile(company, rng=rng, faker=faker)
            accounts = generate_account_set(profile, rng=rng, currency=settings.currency)

            available = filter_accounts(accounts, opts)
            if not available:
                raise NoAccountsAvailableError()

            transactions = generate_transaction_set(
                available,
                profile,
                TransactionOptions(
                    added_count=opts.num_transactions,
                    start_date=opts.start_date,
                    end_date=opts.end_date,
                ),
                rng=rng,
                settings=settings,
                faker=faker,
            )
            timer.add(len(transactions.added))

        result = GenerationResult(
            accounts=tuple(available),
            added=transactions.added,
            modified=transactions.modified,
            removed=transactions.removed,
            next_cursor="end",
            has_more=False,
            request_id=request_id,
            transactions_update_status="full_completion",
        )
        LOGGER.info(
            "Generated %d accounts and %d transactions for %s (revenue %s)",
            len(result.accounts),
            len(result.added),
            profile.company_name,
            format_money(profile.annual_revenue, settings.currency),
        )
        return result


def generate_sample_data(company_name: str, industry: str) -> GenerationResult:
    """Quick preview dataset with reasonable defaults for everything else."""

    today = date.today()
    company = {
        "company_name": company_name,
        "industry": industry,
        "business_model": "B2B",
        "company_size": "Medium (51-200)",
        "founding_date": date(2010, 1, 1),
    }
    options = DataGenerationOptions(
        num_transactions=100,
        start_date=today - timedelta(days=90),
        end_date=today,
        include_deposits=True,
        include_payments=True,
        include_investments=True,
        include_loans=True,
    )
    return generate_financial_data(company, options)


class FinancialDataService:
    """Service that generates a dataset and reports on it."""

    def __init__(self, settings: GeneratorSettings | None = None) -> None:
        self.settings = settings

    def generate(self, request: GenerationRequest) -> GenerationResponse:
        result = generate_financial_data(request.company, request.options, settings=self.settings)
        report = validate_financial_data(result)
        if not report.valid:
            LOGGER.warning("Generated dataset failed validation: %s", "; ".join(report.errors))
        for warning in report.warnings:
            LOGGER.info("Validation warning: %s", warning)
        return GenerationResponse(
            data=result,
            validation=report,
            statistics=calculate_data_statistics(result),
        )

    def transactions_csv(self, request: GenerationRequest) -> str:
        """Generate a dataset and render its added transactions as CSV."""

        result = generate_financial_data(request.company, request.options, settings=self.settings)
        return format_transactions_as_csv(result)
