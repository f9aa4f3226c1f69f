"""Schemas for aggregated bank, card, investment and loan accounts."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from finsynth.domain.reference import subtypes_for

AccountType = Literal["depository", "credit", "loan", "investment", "other"]


class AccountBalance(BaseModel):
    """Balances as reported by the institution.

    ``current`` is negative for credit and loan accounts (amount owed).
    """

    model_config = ConfigDict(frozen=True)

    available: float | None = None
    current: float
    iso_currency_code: str = "USD"
    limit: float | None = None
    unofficial_currency_code: str | None = None


class Account(BaseModel):
    """One account in the generated set."""

    model_config = ConfigDict(frozen=True)

    account_id: str = Field(min_length=22, max_length=22, pattern=r"^[A-Za-z0-9]+$")
    balances: AccountBalance
    mask: str = Field(pattern=r"^\d{4}$")
    name: str
    official_name: str | None = None
    subtype: str
    type: AccountType

    @model_validator(mode="after")
    def _subtype_matches_type(self) -> "Account":
        if self.subtype not in subtypes_for(self.type):
            raise ValueError(f"Subtype {self.subtype!r} is not valid for {self.type} accounts")
        return self

    @property
    def display_name(self) -> str:
        return self.name or self.account_id
