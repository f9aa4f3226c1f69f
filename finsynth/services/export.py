"""JSON and CSV projections of a generated dataset."""
from __future__ import annotations

import csv
import io
from pathlib import Path

from finsynth.core.log import get_logger
from finsynth.schemas import GenerationResult

LOGGER = get_logger(__name__)

CSV_HEADER = ("Date", "Account", "Merchant", "Category", "Amount", "Status")


def format_data_for_download(data: GenerationResult, indent: int = 2) -> str:
    """Pretty-printed JSON with the exact field names of the result model."""

    return data.model_dump_json(indent=indent)


def format_transactions_as_csv(data: GenerationResult) -> str:
    """One row per added transaction, rows separated by a bare newline."""

    accounts = data.account_by_id()
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for txn in data.added:
        writer.writerow(
            (
                txn.date.isoformat(),
                accounts[txn.account_id].display_name if txn.account_id in accounts else txn.account_id,
                txn.name,
                ", ".join(txn.category),
                f"{txn.amount:.2f}",
                "Pending" if txn.pending else "Posted",
            )
        )
    return buffer.getvalue().removesuffix("\n")


def write_dataset(data: GenerationResult, directory: Path, stem: str) -> tuple[Path, Path]:
    """Write ``<stem>.json`` and ``<stem>.csv`` into ``directory``."""

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    json_path = directory / f"{stem}.json"
    csv_path = directory / f"{stem}.csv"
    json_path.write_text(format_data_for_download(data), encoding="utf-8")
    csv_path.write_text(format_transactions_as_csv(data), encoding="utf-8")
    LOGGER.info("Wrote %s and %s", json_path, csv_path)
    return json_path, csv_path
