from __future__ import annotations

from typing import Mapping

from invoice_generator.core.calculations.totals_engine import InvoiceTotals, format_currency
from invoice_generator.core.models.invoice import InvoiceData
from invoice_generator.utils.pdf.core.layout_common import (
    BODY_SIZE,
    TOTAL_STEP,
    TOTALS_LABEL_X,
    TOTALS_STEP,
    TOTALS_VALUE_X,
)
from invoice_generator.utils.pdf.core.operations import DrawOp, TextOp


def build_summary_lines(invoice: InvoiceData, totals: InvoiceTotals, labels: Mapping[str, str]) -> list[tuple[str, float, bool]]:
    """(label, amount, bold) rows in print order; optional rows only when they carry a value."""
    lines = [(labels["subtotal_label"], totals.subtotal, False)]
    if totals.discount_amount > 0:
        lines.append((labels["discount_label"], totals.discount_amount, False))
    if invoice.tax.enabled and totals.tax_amount > 0:
        lines.append((labels["tax_label"], totals.tax_amount, False))
    if invoice.shipping.enabled and invoice.shipping.amount > 0:
        lines.append((labels["shipping_label"], totals.shipping_amount, False))
    lines.append((labels["total_label"], totals.total, True))
    return lines


def layout_summary(
    invoice: InvoiceData,
    totals: InvoiceTotals,
    labels: Mapping[str, str],
    start_y: float,
) -> tuple[list[DrawOp], float]:
    """Totals block under the table; returns (ops, y of the total line)."""
    ops: list[DrawOp] = []
    y = start_y
    for idx, (label, amount, bold) in enumerate(build_summary_lines(invoice, totals, labels)):
        if bold:
            y += TOTAL_STEP
        elif idx:
            y += TOTALS_STEP
        value = format_currency(amount, invoice.currency)
        ops.append(TextOp(label, TOTALS_LABEL_X, y, size=BODY_SIZE, bold=bold, align="right"))
        ops.append(TextOp(value, TOTALS_VALUE_X, y, size=BODY_SIZE, bold=bold, align="right"))
    return ops, y
