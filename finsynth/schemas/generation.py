"""Schemas for generation requests, results and reports."""
from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .accounts import Account
from .company import CompanyProfileInput
from .transactions import RemovedTransaction, Transaction


class DataGenerationOptions(BaseModel):
    """Knobs for a generation run.

    ``num_transactions`` of ``None`` uses the base count for the company size.
    Setting ``seed`` makes the run reproducible.
    """

    num_transactions: int | None = Field(default=None, ge=10, le=5000)
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    include_deposits: bool = True
    include_payments: bool = True
    include_investments: bool = False
    include_loans: bool = False
    seed: int | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _not_in_future(cls, value: dt.date | None) -> dt.date | None:
        if value is not None and value > dt.date.today():
            raise ValueError("Date cannot be in the future")
        return value

    @model_validator(mode="after")
    def _start_before_end(self) -> "DataGenerationOptions":
        if self.start_date and self.end_date and self.start_date >= self.end_date:
            raise ValueError("Start date must be before end date")
        return self


class GenerationResult(BaseModel):
    """Sync-style response: accounts plus added, modified and removed transactions."""

    model_config = ConfigDict(frozen=True)

    accounts: tuple[Account, ...]
    added: tuple[Transaction, ...]
    modified: tuple[Transaction, ...] = ()
    removed: tuple[RemovedTransaction, ...] = ()
    next_cursor: str = "end"
    has_more: bool = False
    request_id: str
    transactions_update_status: Literal["full_completion"] = "full_completion"

    def account_by_id(self) -> dict[str, Account]:
        return {account.account_id: account for account in self.accounts}


class ValidationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


class DataStatistics(BaseModel):
    """Aggregate figures over the added transactions."""

    model_config = ConfigDict(frozen=True)

    total_accounts: int
    total_transactions: int
    account_types: dict[str, int]
    transaction_volume: float
    average_transaction_amount: float
    transactions_by_month: dict[str, int]


class RunningBalance(BaseModel):
    """Balance of an account right after one of its transactions posts."""

    model_config = ConfigDict(frozen=True)

    transaction_id: str
    date: dt.date
    amount: float
    balance: float


class GenerationRequest(BaseModel):
    company: CompanyProfileInput
    options: DataGenerationOptions = Field(default_factory=DataGenerationOptions)


class GenerationResponse(BaseModel):
    """Payload returned by the generation endpoint."""

    data: GenerationResult
    validation: ValidationReport
    statistics: DataStatistics
