from __future__ import annotations

from typing import Mapping

from invoice_generator.core.models.invoice import InvoiceData
from invoice_generator.utils.pdf.core.layout_common import (
    BODY_SIZE,
    LEFT_MARGIN,
    LINE_SPACING,
    SECTION_BODY_OFFSET,
    SECTION_HEIGHT,
    split_lines,
)
from invoice_generator.utils.pdf.core.operations import DrawOp, TextOp


def build_free_text_sections(invoice: InvoiceData, labels: Mapping[str, str]) -> list[tuple[str, str]]:
    """(heading, text) pairs in fixed order: notes, terms, payment details."""
    candidates = [
        (labels["notes_label"], invoice.notes),
        (labels["terms_label"], invoice.terms_and_conditions),
        (labels["payment_details_label"], invoice.payment_details),
    ]
    return [(heading, text) for heading, text in candidates if (text or "").strip()]


def layout_free_text(invoice: InvoiceData, labels: Mapping[str, str], start_y: float) -> tuple[list[DrawOp], float]:
    ops: list[DrawOp] = []
    y = start_y
    for heading, text in build_free_text_sections(invoice, labels):
        ops.append(TextOp(heading, LEFT_MARGIN, y, size=BODY_SIZE, bold=True))
        for idx, line in enumerate(split_lines(text)):
            ops.append(TextOp(line, LEFT_MARGIN, y + SECTION_BODY_OFFSET + idx * LINE_SPACING, size=BODY_SIZE))
        y += SECTION_HEIGHT
    return ops, y
