"""Schema definitions for company profiles."""
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finsynth.domain.reference import BUSINESS_MODELS, COMPANY_SIZES, INDUSTRIES

REQUIRED_COMPANY_FIELDS = ("company_name", "industry", "business_model", "company_size")


class CompanyProfile(BaseModel):
    """Complete company profile that drives account and transaction generation."""

    model_config = ConfigDict(frozen=True)

    company_name: str
    industry: str
    business_model: str
    company_size: str
    founding_date: date
    location: str
    annual_revenue: int = Field(gt=0)

    @field_validator("founding_date")
    @classmethod
    def _founding_date_not_in_future(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("Founding date cannot be in the future")
        return value


class CompanyProfileInput(BaseModel):
    """Partially filled company profile as submitted by an API caller."""

    company_name: str | None = Field(default=None, min_length=2, max_length=100)
    industry: str | None = None
    business_model: str | None = None
    company_size: str | None = None
    founding_date: date | None = None
    location: str | None = Field(default=None, min_length=2, max_length=100)
    annual_revenue: int | None = Field(default=None, gt=0)

    @field_validator("founding_date")
    @classmethod
    def _founding_date_not_in_future(cls, value: date | None) -> date | None:
        if value is not None and value > date.today():
            raise ValueError("Founding date cannot be in the future")
        return value

    @field_validator("industry")
    @classmethod
    def _known_industry(cls, value: str | None) -> str | None:
        if value is not None and value not in INDUSTRIES:
            raise ValueError("Please select a valid industry")
        return value

    @field_validator("business_model")
    @classmethod
    def _known_business_model(cls, value: str | None) -> str | None:
        if value is not None and value not in BUSINESS_MODELS:
            raise ValueError("Please select a valid business model")
        return value

    @field_validator("company_size")
    @classmethod
    def _known_company_size(cls, value: str | None) -> str | None:
        if value is not None and value not in COMPANY_SIZES:
            raise ValueError("Please select a valid company size")
        return value

    def missing_required(self) -> list[str]:
        return [name for name in REQUIRED_COMPANY_FIELDS if not getattr(self, name)]
