import logging
from dataclasses import replace

import pytest

from invoice_generator.core.calculations.totals_engine import compute_totals
from invoice_generator.core.models.invoice import InvoiceData, LineItem, OptionalAdjustment, AdjustmentValue
from invoice_generator.core.models.labels import LabelSet
from invoice_generator.utils.image import fit_logo, load_logo
from invoice_generator.utils.pdf.core.layout_common import TABLE_LINE_HEIGHT, TABLE_PADDING
from invoice_generator.utils.pdf.core.operations import ImageOp, TableOp, TextOp
from invoice_generator.utils.pdf.renderers.layout_engine import layout_invoice
from invoice_generator.utils.pdf.sections.items_table import column_widths, wrap_cell
from invoice_generator.utils.pdf.sections.summary import build_summary_lines


def _layout(invoice, labels=None, logo=None):
    return layout_invoice(invoice, compute_totals(invoice), labels or LabelSet(), logo)


def _text(ops, text):
    return next(op for op in ops if isinstance(op, TextOp) and op.text == text)


def _tables(ops):
    return [op for op in ops if isinstance(op, TableOp)]


def test_title_and_number_are_right_aligned_at_the_top(widget_invoice):
    ops = _layout(widget_invoice)
    title = _text(ops, "INVOICE")
    number = _text(ops, "#INV-1")
    assert (title.x, title.y, title.size, title.bold, title.align) == (185, 25, 24, True, "right")
    assert (number.x, number.y, number.size, number.align) == (185, 35, 12, "right")


def test_company_block_and_details(widget_invoice):
    ops = _layout(widget_invoice)
    name = _text(ops, "Acme Ltd")
    assert (name.x, name.y, name.bold) == (25, 65, True)
    assert _text(ops, "Hong Kong").y == 74

    assert _text(ops, "Jan 01, 2024").x == 145
    assert _text(ops, "Jan 31, 2024").y == 75
    balance_label = _text(ops, "Balance Due:")
    assert (balance_label.x, balance_label.y, balance_label.align) == (140, 80, "right")
    balance = next(op for op in ops if isinstance(op, TextOp) and op.text == "HK$18.90" and op.y == 80)
    assert balance.bold and balance.align == "right" and balance.x == 185


def test_bill_to_heading_gets_colon(widget_invoice):
    ops = _layout(widget_invoice)
    heading = _text(ops, "Bill To:")
    assert (heading.y, heading.bold, heading.size) == (85, True, 12)
    assert _text(ops, "Client Co").y == 90
    assert _text(ops, "2 Side Road").y == 94


def test_blank_rows_are_not_printed(widget_invoice):
    invoice = replace(widget_invoice, items=[LineItem(), LineItem("Widget", 2, 10)])
    (table,) = _tables(_layout(invoice))
    assert table.rows == (("Widget", "2", "HK$10.00", "HK$20.00"),)
    assert table.header == ("Item", "Quantity", "Rate", "Amount")
    assert table.y == 105 and table.x == 25


def test_table_geometry():
    widths = column_widths()
    assert widths == pytest.approx((61.0, 30.0, 40.0, 40.0))
    assert sum(widths) == pytest.approx(171.0)


def test_totals_start_below_table(widget_invoice):
    ops = _layout(widget_invoice)
    (table,) = _tables(ops)
    assert table.bottom == pytest.approx(105 + 2 * (TABLE_LINE_HEIGHT + 2 * TABLE_PADDING))

    subtotal = _text(ops, "Subtotal:")
    assert subtotal.y == pytest.approx(table.bottom + 3)
    assert _text(ops, "Discount:").y == pytest.approx(subtotal.y + 4)
    assert _text(ops, "Tax:").y == pytest.approx(subtotal.y + 8)
    total = _text(ops, "Total:")
    assert total.bold and total.y == pytest.approx(subtotal.y + 14)


def test_no_table_when_every_row_is_blank(widget_invoice):
    invoice = replace(widget_invoice, items=[LineItem(), LineItem()])
    ops = _layout(invoice)
    assert _tables(ops) == []
    # Lowest header line is the second bill-to line at 94.
    assert _text(ops, "Subtotal:").y == pytest.approx(102)


def test_summary_lines_only_for_non_zero_adjustments(widget_invoice, labels):
    invoice = replace(
        widget_invoice,
        discount=AdjustmentValue(kind="fixed", amount=0),
        tax=OptionalAdjustment(kind="percentage", amount=0, enabled=True),
        shipping=OptionalAdjustment(kind="fixed", amount=7.5, enabled=True),
    )
    lines = build_summary_lines(invoice, compute_totals(invoice), labels)
    assert [label for label, _amount, _bold in lines] == ["Subtotal:", "Shipping:", "Total:"]
    assert lines[-1] == ("Total:", pytest.approx(27.5), True)


def test_disabled_shipping_is_not_printed(widget_invoice, labels):
    invoice = replace(widget_invoice, shipping=OptionalAdjustment(kind="fixed", amount=50, enabled=False))
    lines = build_summary_lines(invoice, compute_totals(invoice), labels)
    assert "Shipping:" not in [label for label, _amount, _bold in lines]


def test_free_text_sections_keep_order_and_skip_blanks(widget_invoice):
    invoice = replace(widget_invoice, notes="   ", terms_and_conditions="T1\nT2", payment_details="Pay by wire")
    ops = _layout(invoice)
    total_y = _text(ops, "Total:").y
    terms = _text(ops, "Terms and Conditions")
    payment = _text(ops, "Payment Details")
    assert not [op for op in ops if isinstance(op, TextOp) and op.text == "Notes"]
    assert terms.y == pytest.approx(total_y + 15)
    assert _text(ops, "T1").y == pytest.approx(terms.y + 5)
    assert _text(ops, "T2").y == pytest.approx(terms.y + 9)
    assert payment.y == pytest.approx(terms.y + 20)


def test_custom_labels_are_used(widget_invoice):
    labels = LabelSet({"invoice_title": "RECHNUNG", "total_label": "Summe:"})
    ops = _layout(widget_invoice, labels)
    assert _text(ops, "RECHNUNG").y == 25
    assert _text(ops, "Summe:").bold


def test_logo_is_placed_first_and_fitted(widget_invoice, png_bytes):
    logo = load_logo(png_bytes)
    ops = _layout(widget_invoice, logo=logo)
    first = ops[0]
    assert isinstance(first, ImageOp)
    assert (first.x, first.y) == (25, 25)
    assert (first.width, first.height) == pytest.approx((40.0, 20.0))


def test_fit_logo_respects_both_box_edges():
    assert fit_logo(200, 100) == pytest.approx((40.0, 20.0))
    assert fit_logo(40, 80) == pytest.approx((20.0, 40.0))
    assert fit_logo(10, 10) == pytest.approx((40.0, 40.0))


def test_layout_is_deterministic(widget_invoice):
    assert _layout(widget_invoice) == _layout(widget_invoice)


def test_long_descriptions_wrap_and_grow_the_row(widget_invoice):
    text = "A very long item description that cannot fit on a single table line at all"
    invoice = replace(widget_invoice, items=[LineItem(text, 1, 5)])
    (table,) = _tables(_layout(invoice))
    lines = table.rows[0][0].split("\n")
    assert len(lines) > 1
    assert " ".join(lines) == text
    assert table.row_heights[0] == pytest.approx(len(lines) * TABLE_LINE_HEIGHT + 2 * TABLE_PADDING)


def test_wrap_cell_breaks_words_wider_than_the_cell():
    lines = wrap_cell("x" * 200, 20)
    assert len(lines) > 1
    assert "".join(lines) == "x" * 200


def test_overflow_is_logged(widget_invoice, caplog):
    invoice = replace(widget_invoice, notes="\n".join(f"line {i}" for i in range(60)))
    with caplog.at_level(logging.WARNING):
        _layout(invoice)
    assert "past the page bottom" in caplog.text


def test_empty_bill_to_draws_nothing(widget_invoice):
    invoice = replace(widget_invoice, bill_to="")
    ops = _layout(invoice)
    assert not [op for op in ops if isinstance(op, TextOp) and op.text == "Bill To:"]


def test_missing_dates_print_blank():
    invoice = InvoiceData(company_name="Acme", items=[LineItem("A", 1, 1)])
    ops = _layout(invoice)
    values = [op.text for op in ops if isinstance(op, TextOp) and op.x == 145]
    assert values == ["", "", ""]


def test_invoice_without_adjustments_prints_only_subtotal_and_total(labels):
    invoice = InvoiceData(items=[LineItem("Service", 1, 99.99)])
    lines = build_summary_lines(invoice, compute_totals(invoice), labels)
    assert lines == [("Subtotal:", pytest.approx(99.99), False), ("Total:", pytest.approx(99.99), True)]
    texts = [op.text for op in _layout(invoice) if isinstance(op, TextOp)]
    assert "Discount:" not in texts and "Tax:" not in texts and "Shipping:" not in texts


def test_partly_filled_rows_stay_in_the_table(widget_invoice):
    invoice = replace(widget_invoice, items=[LineItem("", 2, 0), LineItem("", 0, 5), LineItem()])
    (table,) = _tables(_layout(invoice))
    assert table.rows == (("", "2", "HK$0.00", "HK$0.00"), ("", "0", "HK$5.00", "HK$0.00"))
