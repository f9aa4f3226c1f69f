"""Pydantic schemas for generated datasets and request payloads."""

from .accounts import Account, AccountBalance, AccountType
from .company import REQUIRED_COMPANY_FIELDS, CompanyProfile, CompanyProfileInput
from .generation import (
    DataGenerationOptions,
    DataStatistics,
    GenerationRequest,
    GenerationResponse,
    GenerationResult,
    RunningBalance,
    ValidationReport,
)
from .transactions import (
    PaymentChannel,
    PaymentMeta,
    RemovedTransaction,
    Transaction,
    TransactionLocation,
)

__all__ = [
    "Account",
    "AccountBalance",
    "AccountType",
    "REQUIRED_COMPANY_FIELDS",
    "CompanyProfile",
    "CompanyProfileInput",
    "DataGenerationOptions",
    "DataStatistics",
    "GenerationRequest",
    "GenerationResponse",
    "GenerationResult",
    "RunningBalance",
    "ValidationReport",
    "PaymentChannel",
    "PaymentMeta",
    "RemovedTransaction",
    "Transaction",
    "TransactionLocation",
]
