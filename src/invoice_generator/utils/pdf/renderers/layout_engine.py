from __future__ import annotations

import logging
from typing import Mapping

from invoice_generator.core.calculations.totals_engine import InvoiceTotals
from invoice_generator.core.models.invoice import InvoiceData
from invoice_generator.utils.image import LogoImage
from invoice_generator.utils.pdf.core.layout_common import (
    PAGE_H,
    SECTIONS_GAP,
    TOTALS_GAP_AFTER_TABLE,
    TOTALS_GAP_NO_TABLE,
)
from invoice_generator.utils.pdf.core.operations import DrawOp, ImageOp, TableOp, TextOp
from invoice_generator.utils.pdf.sections.bill_to import layout_bill_to
from invoice_generator.utils.pdf.sections.free_text import layout_free_text
from invoice_generator.utils.pdf.sections.header import layout_company, layout_details, layout_logo, layout_title
from invoice_generator.utils.pdf.sections.items_table import layout_items_table
from invoice_generator.utils.pdf.sections.summary import layout_summary

logger = logging.getLogger(__name__)


def layout_invoice(
    invoice: InvoiceData,
    totals: InvoiceTotals,
    labels: Mapping[str, str],
    logo: LogoImage | None = None,
) -> list[DrawOp]:
    """
    Ordered draw operations for one invoice page.
    Pure: the vertical cursor lives only inside this call.
    """
    ops: list[DrawOp] = []
    ops.extend(layout_logo(logo))
    ops.extend(layout_title(invoice, labels))

    company_ops, company_bottom = layout_company(invoice)
    ops.extend(company_ops)
    detail_ops, details_bottom = layout_details(invoice, totals, labels)
    ops.extend(detail_ops)
    bill_to_ops, bill_to_bottom = layout_bill_to(invoice, labels)
    ops.extend(bill_to_ops)

    table = layout_items_table(invoice.items, invoice.currency, labels)
    if table is not None:
        ops.append(table)
        cursor = table.bottom + TOTALS_GAP_AFTER_TABLE
    else:
        header_bottom = max(company_bottom, details_bottom, bill_to_bottom or 0.0)
        cursor = header_bottom + TOTALS_GAP_NO_TABLE

    summary_ops, cursor = layout_summary(invoice, totals, labels, cursor)
    ops.extend(summary_ops)

    free_text_ops, cursor = layout_free_text(invoice, labels, cursor + SECTIONS_GAP)
    ops.extend(free_text_ops)

    lowest = _lowest_point(ops)
    if lowest > PAGE_H:
        logger.warning("Invoice %s runs %.1f mm past the page bottom", invoice.invoice_number, lowest - PAGE_H)
    return ops


def _lowest_point(ops: list[DrawOp]) -> float:
    lowest = 0.0
    for op in ops:
        if isinstance(op, TableOp):
            lowest = max(lowest, op.bottom)
        elif isinstance(op, ImageOp):
            lowest = max(lowest, op.y + op.height)
        elif isinstance(op, TextOp):
            lowest = max(lowest, op.y)
    return lowest
