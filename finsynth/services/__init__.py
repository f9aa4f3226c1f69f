"""Generation services: company, accounts, transactions and reporting."""

from .account_generator import generate_account_set
from .company_generator import calculate_financial_metrics, generate_company_profile
from .export import format_data_for_download, format_transactions_as_csv, write_dataset
from .financial_data import (
    FinancialDataService,
    GenerationError,
    MissingCompanyDataError,
    NoAccountsAvailableError,
    generate_financial_data,
    generate_request_id,
    generate_sample_data,
)
from .transaction_generator import TransactionOptions, TransactionSet, generate_transaction_set
from .validation import calculate_data_statistics, running_balances, validate_financial_data

__all__ = [
    "generate_account_set",
    "calculate_financial_metrics",
    "generate_company_profile",
    "format_data_for_download",
    "format_transactions_as_csv",
    "write_dataset",
    "FinancialDataService",
    "GenerationError",
    "MissingCompanyDataError",
    "NoAccountsAvailableError",
    "generate_financial_data",
    "generate_request_id",
    "generate_sample_data",
    "TransactionOptions",
    "TransactionSet",
    "generate_transaction_set",
    "calculate_data_statistics",
    "running_balances",
    "validate_financial_data",
]
