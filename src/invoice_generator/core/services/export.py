from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from invoice_generator.core.calculations.totals_engine import InvoiceTotals, compute_totals
from invoice_generator.core.models.invoice import InvoiceData
from invoice_generator.core.services.history import append_invoice_record
from invoice_generator.core.services.invoice import validate_invoice
from invoice_generator.utils.files import write_atomic
from invoice_generator.utils.image import LogoImage
from invoice_generator.utils.pdf.renderers.pdf_renderer import render_invoice_pdf

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME = re.compile(r"[\\/:*?\"<>|\s]+")


class ExportError(RuntimeError):
    """Document generation failed; nothing was written."""


@dataclass(frozen=True)
class ExportResult:
    path: Path
    totals: InvoiceTotals
    record: dict | None


def invoice_filename(invoice_number: str, ext: str = "pdf") -> str:
    safe = _UNSAFE_FILENAME.sub("_", str(invoice_number or "").strip()) or "draft"
    return f"invoice_{safe}.{ext}"


def export_invoice(
    invoice: InvoiceData,
    labels: Mapping[str, str],
    output_dir: Path,
    logo: LogoImage | None = None,
    history_path: Path | None = None,
    record_history: bool = True,
) -> ExportResult:
    """
    Validate, render and save one invoice, then append it to the local history.
    Validation problems raise InvoiceValidationError before anything is rendered;
    rendering or write failures raise ExportError and leave no file behind.
    """
    validate_invoice(invoice)
    target = Path(output_dir) / invoice_filename(invoice.invoice_number)
    try:
        totals = compute_totals(invoice)
        pdf_bytes = render_invoice_pdf(invoice, labels, logo, totals)
        write_atomic(target, pdf_bytes)
    except Exception as exc:
        logger.exception("Failed to generate invoice %s", invoice.invoice_number)
        raise ExportError(f"Failed to generate invoice {invoice.invoice_number}: {exc}") from exc
    logger.info("Invoice %s exported to %s", invoice.invoice_number, target)

    record = None
    if record_history:
        try:
            record = append_invoice_record(invoice, totals, history_path)
        except OSError as exc:
            # PDF is already written at this point.
            logger.warning("Could not store invoice %s in history: %s", invoice.invoice_number, exc)
    return ExportResult(path=target, totals=totals, record=record)

