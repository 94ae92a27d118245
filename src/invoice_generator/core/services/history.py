"""
Local list of exported invoices (JSON file), appended after every successful export.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import List

from invoice_generator.core.calculations.totals_engine import InvoiceTotals
from invoice_generator.core.models.invoice import InvoiceData
from invoice_generator.core.services.settings import DATA_DIR
from invoice_generator.utils.files import write_atomic

logger = logging.getLogger(__name__)

HISTORY_PATH = DATA_DIR / "invoices.json"


def load_history(path: Path | None = None) -> List[dict]:
    target = path or HISTORY_PATH
    if not target.exists():
        return []
    try:
        data = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable invoice history %s: %s", target, exc)
        return []
    if not isinstance(data, list):
        return []
    return [entry for entry in data if isinstance(entry, dict)]


def build_history_record(invoice: InvoiceData, totals: InvoiceTotals) -> dict:
    record = {"id": str(uuid.uuid4())}
    for key, value in asdict(invoice).items():
        if key == "currency":
            continue
        record[key] = value.isoformat() if isinstance(value, date) else value
    record["total"] = totals.total
    record["currency_code"] = invoice.currency.code
    return record


def append_invoice_record(invoice: InvoiceData, totals: InvoiceTotals, path: Path | None = None) -> dict:
    target = path or HISTORY_PATH
    record = build_history_record(invoice, totals)
    entries = load_history(target)
    entries.append(record)
    write_atomic(target, json.dumps(entries, ensure_ascii=False, indent=2).encode("utf-8"))
    logger.info("Stored invoice %s in history (%d entries)", invoice.invoice_number, len(entries))
    return record
