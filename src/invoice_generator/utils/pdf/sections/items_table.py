from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from invoice_generator.core.calculations.totals_engine import format_currency, format_quantity
from invoice_generator.core.models.invoice import Currency, LineItem
from invoice_generator.utils.pdf.core import fonts
from invoice_generator.utils.pdf.core.drawing import mm_to_pt
from invoice_generator.utils.pdf.core.layout_common import (
    LEFT_MARGIN,
    PAGE_W,
    TABLE_ALIGNS,
    TABLE_FIXED_WIDTHS,
    TABLE_FONT_SIZE,
    TABLE_LINE_HEIGHT,
    TABLE_PADDING,
    TABLE_RIGHT_MARGIN,
    TABLE_Y,
    split_lines,
)
from invoice_generator.utils.pdf.core.operations import TableOp


def printable_items(items: Iterable[LineItem]) -> list[LineItem]:
    """Drop rows where description, quantity and rate are all empty."""
    return [item for item in items if not item.is_blank()]


def build_table_rows(items: Iterable[LineItem], currency: Currency) -> list[tuple[str, str, str, str]]:
    return [
        (
            item.description,
            format_quantity(item.quantity),
            format_currency(item.rate, currency),
            format_currency(item.amount, currency),
        )
        for item in printable_items(items)
    ]


def column_widths(x: float = LEFT_MARGIN) -> tuple[float, ...]:
    table_w = PAGE_W - x - TABLE_RIGHT_MARGIN
    return (table_w - sum(TABLE_FIXED_WIDTHS),) + TABLE_FIXED_WIDTHS


def wrap_cell(text: str, width_mm: float, font: str = fonts.REGULAR, size: float = TABLE_FONT_SIZE) -> list[str]:
    """Greedy word wrap against Helvetica metrics; explicit line breaks are kept."""
    limit = mm_to_pt(width_mm)
    lines: list[str] = []
    for paragraph in split_lines(text):
        current = ""
        for word in paragraph.split(" "):
            candidate = f"{current} {word}" if current else word
            if fonts.string_width(candidate, font, size) <= limit:
                current = candidate
                continue
            if current:
                lines.append(current)
            current = ""
            # Words wider than the cell are broken per character.
            for ch in word:
                if current and fonts.string_width(current + ch, font, size) > limit:
                    lines.append(current)
                    current = ""
                current += ch
        lines.append(current)
    return lines


def layout_items_table(
    items: Sequence[LineItem],
    currency: Currency,
    labels: Mapping[str, str],
    x: float = LEFT_MARGIN,
    y: float = TABLE_Y,
) -> TableOp | None:
    """
    Items table (header + body rows). Returns None when no printable row is left.
    """
    body = build_table_rows(items, currency)
    if not body:
        return None
    widths = column_widths(x)
    rows: list[tuple[str, ...]] = []
    heights: list[float] = []
    for cells in body:
        wrapped = [wrap_cell(cell, width - 2 * TABLE_PADDING) for cell, width in zip(cells, widths)]
        line_count = max(len(lines) for lines in wrapped)
        rows.append(tuple("\n".join(lines) for lines in wrapped))
        heights.append(line_count * TABLE_LINE_HEIGHT + 2 * TABLE_PADDING)
    labels_row = (labels["item_label"], labels["quantity_label"], labels["rate_label"], labels["amount_label"])
    header_wrapped = [wrap_cell(text, width - 2 * TABLE_PADDING, fonts.BOLD) for text, width in zip(labels_row, widths)]
    header_lines = max(len(lines) for lines in header_wrapped)
    return TableOp(
        x=x,
        y=y,
        column_widths=widths,
        column_aligns=TABLE_ALIGNS,
        header=tuple("\n".join(lines) for lines in header_wrapped),
        rows=tuple(rows),
        header_height=header_lines * TABLE_LINE_HEIGHT + 2 * TABLE_PADDING,
        row_heights=tuple(heights),
        font_size=TABLE_FONT_SIZE,
        padding=TABLE_PADDING,
        line_height=TABLE_LINE_HEIGHT,
    )
