#!/usr/bin/env python3
"""Write synthetic financial datasets to disk as JSON and CSV fixtures."""
from __future__ import annotations

import argparse
import random
import re
import sys
from datetime import date, timedelta
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

FIXTURE_DIR = Path("data/fixtures")

from finsynth.core.config import get_settings
from finsynth.core.formatting import format_money
from finsynth.core.log import get_logger, init_logging, log_context, progress_manager, timeit
from finsynth.domain.reference import BUSINESS_MODELS, COMPANY_SIZES, INDUSTRIES
from finsynth.schemas import DataGenerationOptions
from finsynth.services import (
    calculate_data_statistics,
    generate_financial_data,
    validate_financial_data,
    write_dataset,
)
from finsynth.services.company_generator import generate_company_name

logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--datasets", type=int, default=1, help="Number of datasets to write")
    parser.add_argument("--company-name", type=str, default=None, help="Company name (random when omitted)")
    parser.add_argument("--industry", choices=INDUSTRIES, default=None)
    parser.add_argument("--business-model", choices=BUSINESS_MODELS, default=None)
    parser.add_argument("--company-size", choices=tuple(COMPANY_SIZES), default=None)
    parser.add_argument(
        "--transactions",
        type=int,
        default=None,
        help="Transactions per dataset (10-5000, defaults to the company size base count)",
    )
    parser.add_argument("--days", type=int, default=None, help="History window in days ending today")
    parser.add_argument("--no-deposits", action="store_true", help="Exclude depository accounts")
    parser.add_argument("--no-payments", action="store_true", help="Exclude credit accounts")
    parser.add_argument("--investments", action="store_true", help="Include investment accounts")
    parser.add_argument("--loans", action="store_true", help="Include loan accounts")
    parser.add_argument("--seed", type=int, default=None, help="Base seed; dataset i uses seed + i")
    parser.add_argument("--output-dir", type=Path, default=FIXTURE_DIR, help="Directory for the fixture files")
    return parser.parse_args()


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-") or "dataset"


def _build_options(args: argparse.Namespace, seed: int | None) -> DataGenerationOptions:
    start_date = None
    if args.days:
        start_date = date.today() - timedelta(days=args.days)
    return DataGenerationOptions(
        num_transactions=args.transactions,
        start_date=start_date,
        include_deposits=not args.no_deposits,
        include_payments=not args.no_payments,
        include_investments=args.investments,
        include_loans=args.loans,
        seed=seed,
    )


def _build_company(args: argparse.Namespace, rng: random.Random) -> dict[str, str]:
    return {
        "company_name": args.company_name or generate_company_name(rng),
        "industry": args.industry or rng.choice(INDUSTRIES),
        "business_model": args.business_model or rng.choice(BUSINESS_MODELS),
        "company_size": args.company_size or rng.choice(tuple(COMPANY_SIZES)),
    }


def main() -> None:
    args = parse_args()
    settings = get_settings().generator
    base_seed = args.seed if args.seed is not None else settings.seed

    written = 0
    total_transactions = 0
    with timeit("fixture generation", logger=logger, unit="datasets") as timer, progress_manager.task(
        "Generating datasets", total=args.datasets
    ) as task:
        for index in range(args.datasets):
            seed = None if base_seed is None else base_seed + index
            rng = random.Random(seed)
            company = _build_company(args, rng)
            options = _build_options(args, seed)

            with log_context.scope(dataset=index + 1, company=company["company_name"]):
                result = generate_financial_data(company, options, settings=settings)
                report = validate_financial_data(result)
                stats = calculate_data_statistics(result)
                for error in report.errors:
                    logger.error("Validation error: %s", error)
                for warning in report.warnings:
                    logger.warning("Validation warning: %s", warning)

                stem = f"{index + 1:03d}-{_slug(company['company_name'])}"
                write_dataset(result, args.output_dir, stem)
                logger.info(
                    "%s: %s accounts, %s transactions, volume %s",
                    company["company_name"],
                    stats.total_accounts,
                    f"{stats.total_transactions:,}",
                    format_money(stats.transaction_volume, settings.currency),
                )

            written += 1
            total_transactions += stats.total_transactions
            timer.add()
            task.advance()

    logger.info("Wrote %s datasets (%s transactions) to %s", written, f"{total_transactions:,}", args.output_dir)


if __name__ == "__main__":
    logging_settings = get_settings().logging
    init_logging(app_name="fixture-data", level=logging_settings.level, log_dir=logging_settings.log_dir)
    log_context.bind(job="generate_fixtures")
    main()
