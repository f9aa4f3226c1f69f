"""Faker-backed helpers for company names, places and street addresses."""
from __future__ import annotations

import random

from faker import Faker

from finsynth.domain.reference import COMPANY_NAME_PREFIXES, COMPANY_NAME_SUFFIXES

FAKER_LOCALE = "en_US"


def build_faker(rng: random.Random | None = None) -> Faker:
    """Return a fresh Faker bound to ``rng`` so callers never share state."""

    faker = Faker(FAKER_LOCALE)
    if rng is not None:
        faker.random = rng
    return faker


def random_company_name(rng: random.Random | None = None) -> str:
    """Return a prefix+suffix name such as ``"NexaTech"``."""

    rng = rng or random
    return f"{rng.choice(COMPANY_NAME_PREFIXES)}{rng.choice(COMPANY_NAME_SUFFIXES)}"


def random_location(faker: Faker) -> str:
    """Return a ``"City, ST"`` headquarters location."""

    return f"{faker.city()}, {faker.state_abbr(include_territories=False)}"


def random_street_address(faker: Faker) -> str:
    return faker.street_address()
