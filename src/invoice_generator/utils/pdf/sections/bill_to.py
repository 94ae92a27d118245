from __future__ import annotations

from typing import Mapping

from invoice_generator.core.models.invoice import InvoiceData
from invoice_generator.utils.pdf.core.layout_common import (
    BILL_TO_LINES_Y,
    BILL_TO_SIZE,
    BILL_TO_Y,
    BODY_SIZE,
    LEFT_MARGIN,
    LINE_SPACING,
    split_lines,
    with_colon,
)
from invoice_generator.utils.pdf.core.operations import DrawOp, TextOp


def layout_bill_to(invoice: InvoiceData, labels: Mapping[str, str]) -> tuple[list[DrawOp], float | None]:
    """Returns (ops, y of the last line); nothing is drawn for an empty bill-to."""
    if not invoice.bill_to:
        return [], None
    ops: list[DrawOp] = [TextOp(with_colon(labels["bill_to_label"]), LEFT_MARGIN, BILL_TO_Y, size=BILL_TO_SIZE, bold=True)]
    y = BILL_TO_Y
    for idx, line in enumerate(split_lines(invoice.bill_to)):
        y = BILL_TO_LINES_Y + idx * LINE_SPACING
        ops.append(TextOp(line, LEFT_MARGIN, y, size=BODY_SIZE))
    return ops, y
