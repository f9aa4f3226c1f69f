"""Schemas for transactions in a sync-style feed."""
from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PaymentChannel = Literal["online", "in store", "other"]


class TransactionLocation(BaseModel):
    """Merchant location; online merchants only carry a country."""

    model_config = ConfigDict(frozen=True)

    address: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    country: str | None = None
    lat: float | None = None
    lon: float | None = None
    store_number: str | None = None


class PaymentMeta(BaseModel):
    """Payment rail details for ACH, wire, check and card payments."""

    model_config = ConfigDict(frozen=True)

    reference_number: str | None = None
    payment_method: str | None = None
    payment_processor: str | None = None
    reason: str | None = None
    payee: str | None = None
    payer: str | None = None
    check_number: str | None = None
    ach_class: str | None = None


class Transaction(BaseModel):
    """A single posted or pending transaction.

    ``amount`` is positive for inflows and negative for outflows.
    """

    model_config = ConfigDict(frozen=True)

    transaction_id: str = Field(min_length=22, max_length=22, pattern=r"^[A-Za-z0-9]+$")
    account_id: str
    amount: float
    iso_currency_code: str = "USD"
    unofficial_currency_code: str | None = None
    category: tuple[str, ...]
    category_id: str
    pending: bool = False
    pending_transaction_id: str | None = None
    original_description: str | None = None
    merchant_name: str | None = None
    name: str
    date: dt.date
    authorized_date: dt.date | None = None
    location: TransactionLocation = Field(default_factory=TransactionLocation)
    payment_meta: PaymentMeta = Field(default_factory=PaymentMeta)
    account_owner: str | None = None
    transaction_code: str | None = None
    payment_channel: PaymentChannel = "other"


class RemovedTransaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    transaction_id: str
    account_id: str
