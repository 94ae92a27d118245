from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping

from invoice_generator.core.calculations.totals_engine import InvoiceTotals, compute_totals
from invoice_generator.core.models.invoice import InvoiceData
from invoice_generator.utils.files import write_atomic
from invoice_generator.utils.image import LogoImage
from invoice_generator.utils.pdf.core import fonts
from invoice_generator.utils.pdf.core.builder import LOGO_NAME, build_pdf_bytes
from invoice_generator.utils.pdf.core.drawing import _draw_image, _draw_text, _fill_rect, _set_color, mm_to_pt, page_y
from invoice_generator.utils.pdf.core.layout_common import PAGE_H, PAGE_W, PT_PER_MM, color
from invoice_generator.utils.pdf.core.operations import DrawOp, ImageOp, TableOp, TextOp
from invoice_generator.utils.pdf.renderers.layout_engine import layout_invoice


# Baseline of the first line inside a table cell, as a share of the line height.
_CELL_BASELINE = 0.75


def render_invoice_pdf(
    invoice: InvoiceData,
    labels: Mapping[str, str],
    logo: LogoImage | None = None,
    totals: InvoiceTotals | None = None,
) -> bytes:
    totals = totals or compute_totals(invoice)
    ops = layout_invoice(invoice, totals, labels, logo)
    content = render_operations(ops)
    return build_pdf_bytes(content, page_size=(mm_to_pt(PAGE_W), mm_to_pt(PAGE_H)), image=logo)


def write_invoice_pdf(path: Path, invoice: InvoiceData, labels: Mapping[str, str], logo: LogoImage | None = None) -> Path:
    return write_atomic(path, render_invoice_pdf(invoice, labels, logo))


def render_operations(ops: Iterable[DrawOp]) -> str:
    parts: list[str] = []
    images = 0
    for op in ops:
        if isinstance(op, TextOp):
            parts.append(_render_text(op))
        elif isinstance(op, TableOp):
            parts.append(_render_table(op))
        elif isinstance(op, ImageOp):
            images += 1
            if images > 1:
                raise ValueError("Only one image per page is supported")
            parts.append(_render_image(op))
        else:
            raise TypeError(f"Unknown draw operation: {op!r}")
    return "".join(parts)


def _render_text(op: TextOp) -> str:
    font = fonts.font_for(op.bold)
    x = mm_to_pt(op.x)
    if op.align == "right":
        x -= fonts.string_width(op.text, font, op.size)
    return _set_color(color(op.color)) + _draw_text(op.text, x, page_y(op.y), font, op.size)


def _render_image(op: ImageOp) -> str:
    return _draw_image(LOGO_NAME, mm_to_pt(op.x), page_y(op.y + op.height), mm_to_pt(op.width), mm_to_pt(op.height))


def _render_table(op: TableOp) -> str:
    parts: list[str] = []
    width = mm_to_pt(op.width)
    left = mm_to_pt(op.x)

    top = op.y
    parts.append(_set_color(color(op.header_fill)))
    parts.append(_fill_rect(left, page_y(top + op.header_height), width, mm_to_pt(op.header_height)))
    # Header cells are left aligned, body cells follow the column alignment.
    parts.append(_render_row(op, op.header, top, fonts.BOLD, color(op.header_color), ["left"] * len(op.header)))
    top += op.header_height

    for idx, (cells, height) in enumerate(zip(op.rows, op.row_heights)):
        if idx % 2 == 1:
            parts.append(_set_color(color(op.alt_fill)))
            parts.append(_fill_rect(left, page_y(top + height), width, mm_to_pt(height)))
        parts.append(_render_row(op, cells, top, fonts.REGULAR, color("text"), op.column_aligns))
        top += height
    parts.append(_set_color(color("text")))
    return "".join(parts)


def _render_row(op: TableOp, cells, top: float, font: str, rgb: str, aligns) -> str:
    parts = [_set_color(rgb)]
    cell_x = op.x
    leading = op.line_height * PT_PER_MM
    first_baseline = top + op.padding + op.line_height * _CELL_BASELINE
    for text, cell_w, align in zip(cells, op.column_widths, aligns):
        for line_no, line in enumerate(str(text).split("\n")):
            if align == "right":
                x = mm_to_pt(cell_x + cell_w - op.padding) - fonts.string_width(line, font, op.font_size)
            else:
                x = mm_to_pt(cell_x + op.padding)
            y = page_y(first_baseline) - line_no * leading
            parts.append(_draw_text(line, x, y, font, op.font_size))
        cell_x += cell_w
    return "".join(parts)
