"""Company profile synthesis."""
from __future__ import annotations

import random
from datetime import date
from typing import Any, Mapping

from faker import Faker

from finsynth.core.log import get_logger
from finsynth.domain.reference import (
    BASE_REVENUES,
    BUSINESS_MODELS,
    COMPANY_SIZES,
    FOUNDING_YEAR_RANGE,
    INDUSTRIES,
    revenue_multiplier_for,
    size_tier_for,
)
from finsynth.schemas import CompanyProfile, CompanyProfileInput

from .naming import build_faker, random_company_name, random_location

LOGGER = get_logger(__name__)

REVENUE_JITTER = (0.8, 1.2)

PartialProfile = CompanyProfileInput | Mapping[str, Any]


def generate_company_name(rng: random.Random | None = None) -> str:
    return random_company_name(rng)


def generate_random_date(
    start_year: int = FOUNDING_YEAR_RANGE[0],
    end_year: int = FOUNDING_YEAR_RANGE[1],
    rng: random.Random | None = None,
) -> date:
    """Pick a date between the two years (inclusive), day of month 1-28."""

    rng = rng or random
    year = rng.randint(start_year, end_year)
    month = rng.randint(1, 12)
    day = rng.randint(1, 28)
    return date(year, month, day)


def calculate_financial_metrics(
    company_size: str | None,
    industry: str | None,
    *,
    rng: random.Random | None = None,
) -> int:
    """Annual revenue for a company of the given size and industry.

    Base revenue for the size tier is scaled by the industry multiplier and a
    random factor in [0.8, 1.2]. Unknown sizes use the smallest tier.
    """

    rng = rng or random
    tier = size_tier_for(company_size)
    base_revenue = BASE_REVENUES[tier.index]
    multiplier = revenue_multiplier_for(industry)
    revenue = round(base_revenue * multiplier * rng.uniform(*REVENUE_JITTER))
    return max(revenue, 1)


def _partial_values(partial: PartialProfile | None) -> dict[str, Any]:
    if partial is None:
        return {}
    if isinstance(partial, CompanyProfileInput):
        return partial.model_dump(exclude_none=True)
    return {key: value for key, value in partial.items() if value not in (None, "")}


def generate_company_profile(
    partial: PartialProfile | None = None,
    *,
    rng: random.Random | None = None,
    faker: Faker | None = None,
) -> CompanyProfile:
    """Complete a partial profile, drawing every unset field at random."""

    rng = rng or random.Random()
    values = _partial_values(partial)

    industry = values.get("industry") or rng.choice(INDUSTRIES)
    business_model = values.get("business_model") or rng.choice(BUSINESS_MODELS)
    company_size = values.get("company_size") or rng.choice(tuple(COMPANY_SIZES))
    company_name = values.get("company_name") or generate_company_name(rng)
    founding_date = values.get("founding_date") or generate_random_date(rng=rng)
    location = values.get("location")
    if not location:
        location = random_location(faker or build_faker(rng))

    annual_revenue = values.get("annual_revenue") or calculate_financial_metrics(
        company_size, industry, rng=rng
    )

    profile = CompanyProfile(
        company_name=company_name,
        industry=industry,
        business_model=business_model,
        company_size=company_size,
        founding_date=founding_date,
        location=location,
        annual_revenue=annual_revenue,
    )
    LOGGER.debug(
        "Company profile ready: %s (%s, %s)", profile.company_name, profile.industry, profile.company_size
    )
    return profile
