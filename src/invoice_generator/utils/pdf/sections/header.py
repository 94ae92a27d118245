from __future__ import annotations

from typing import Mapping

from invoice_generator.core.calculations.totals_engine import InvoiceTotals, format_currency
from invoice_generator.core.models.invoice import InvoiceData
from invoice_generator.utils.image import LogoImage, fit_logo
from invoice_generator.utils.pdf.core.layout_common import (
    ADDRESS_Y,
    BODY_SIZE,
    COMPANY_SIZE,
    COMPANY_Y,
    DATE_FORMAT,
    DETAIL_LABEL_X,
    DETAIL_SPACING,
    DETAIL_VALUE_X,
    DETAIL_Y,
    LEFT_MARGIN,
    LINE_SPACING,
    LOGO_X,
    LOGO_Y,
    NUMBER_SIZE,
    NUMBER_Y,
    RIGHT_EDGE,
    TITLE_SIZE,
    TITLE_Y,
    split_lines,
    with_colon,
)
from invoice_generator.utils.pdf.core.operations import DrawOp, ImageOp, TextOp


def layout_logo(logo: LogoImage | None) -> list[DrawOp]:
    if logo is None:
        return []
    width, height = fit_logo(logo.width, logo.height)
    return [ImageOp(image=logo, x=LOGO_X, y=LOGO_Y, width=width, height=height)]


def layout_title(invoice: InvoiceData, labels: Mapping[str, str]) -> list[DrawOp]:
    return [
        TextOp(labels["invoice_title"], RIGHT_EDGE, TITLE_Y, size=TITLE_SIZE, bold=True, align="right"),
        TextOp(f"#{invoice.invoice_number}", RIGHT_EDGE, NUMBER_Y, size=NUMBER_SIZE, bold=True, align="right"),
    ]


def layout_company(invoice: InvoiceData) -> tuple[list[DrawOp], float]:
    """Company name and address lines; returns (ops, y of the last line)."""
    ops: list[DrawOp] = [TextOp(invoice.company_name, LEFT_MARGIN, COMPANY_Y, size=COMPANY_SIZE, bold=True)]
    y = COMPANY_Y
    for idx, line in enumerate(split_lines(invoice.company_address)):
        y = ADDRESS_Y + idx * LINE_SPACING
        ops.append(TextOp(line, LEFT_MARGIN, y, size=BODY_SIZE))
    return ops, y


def layout_details(
    invoice: InvoiceData,
    totals: InvoiceTotals,
    labels: Mapping[str, str],
) -> tuple[list[DrawOp], float]:
    """Right-hand group: date, payment terms, due date and the balance due."""
    rows = [
        (labels["invoice_date_label"], _format_date(invoice.invoice_date)),
        (labels["payment_terms_label"], invoice.payment_terms),
        (labels["due_date_label"], _format_date(invoice.due_date)),
    ]
    ops: list[DrawOp] = []
    y = DETAIL_Y
    for label, value in rows:
        ops.append(TextOp(with_colon(label), DETAIL_LABEL_X, y, size=BODY_SIZE, align="right"))
        ops.append(TextOp(value, DETAIL_VALUE_X, y, size=BODY_SIZE))
        y += DETAIL_SPACING
    ops.append(TextOp(with_colon(labels["balance_due_label"]), DETAIL_LABEL_X, y, size=BODY_SIZE, align="right"))
    ops.append(
        TextOp(format_currency(totals.total, invoice.currency), RIGHT_EDGE, y, size=BODY_SIZE, bold=True, align="right")
    )
    return ops, y


def _format_date(value) -> str:
    if value is None:
        return ""
    return value.strftime(DATE_FORMAT)
