import json
import re
from dataclasses import replace

import pytest

from invoice_generator.core.calculations.totals_engine import compute_totals
from invoice_generator.core.models.invoice import LineItem, get_currency
from invoice_generator.core.services import export as export_service
from invoice_generator.core.services.export import ExportError, export_invoice, invoice_filename
from invoice_generator.core.services.history import append_invoice_record, load_history
from invoice_generator.core.services.invoice import InvoiceValidationError
from invoice_generator.utils import files
from invoice_generator.utils.image import load_logo
from invoice_generator.utils.pdf.core import fonts
from invoice_generator.utils.pdf.core.operations import ImageOp, TextOp
from invoice_generator.utils.pdf.renderers.pdf_renderer import render_invoice_pdf, render_operations, write_invoice_pdf


def _startxref(pdf: bytes) -> int:
    match = re.search(rb"startxref\n(\d+)\n%%EOF", pdf)
    assert match
    return int(match.group(1))


def test_render_produces_single_page_pdf(widget_invoice, labels):
    pdf = render_invoice_pdf(widget_invoice, labels)
    assert pdf.startswith(b"%PDF-1.4")
    assert pdf.rstrip().endswith(b"%%EOF")
    assert b"/Count 1" in pdf
    assert pdf[_startxref(pdf):].startswith(b"xref")
    for text in (b"(INVOICE)", b"(#INV-1)", b"(Widget)", b"(HK$18.90)", b"(Bill To:)"):
        assert text in pdf


def test_xref_offsets_point_at_objects(widget_invoice, labels):
    pdf = render_invoice_pdf(widget_invoice, labels)
    xref = pdf[_startxref(pdf):]
    offsets = [int(line[:10]) for line in xref.split(b"\n")[3:] if line.endswith(b" n ")]
    for number, offset in enumerate(offsets, start=1):
        assert pdf[offset:].startswith(f"{number} 0 obj".encode("ascii"))


def test_euro_symbol_is_winansi_encoded(widget_invoice, labels):
    invoice = replace(widget_invoice, currency=get_currency("EUR"))
    pdf = render_invoice_pdf(invoice, labels)
    assert b"(\\20018.90)" in pdf
    assert b"/WinAnsiEncoding" in pdf


def test_logo_is_embedded_as_image_xobject(widget_invoice, labels, png_bytes):
    pdf = render_invoice_pdf(widget_invoice, labels, logo=load_logo(png_bytes))
    assert b"/Subtype /Image" in pdf
    assert b"/Width 80 /Height 40" in pdf
    assert b"/Im1 Do" in pdf


def test_right_aligned_text_ends_at_anchor():
    op = TextOp("Hello", 100, 50, size=10, align="right")
    stream = render_operations([op])
    width = fonts.string_width("Hello", fonts.REGULAR, 10)
    assert width == pytest.approx(22.78)
    x = float(re.search(r"Tf ([\d.]+) [\d.]+ Td", stream).group(1))
    assert x == pytest.approx(100 * 72 / 25.4 - width, abs=0.01)


def test_only_one_image_per_page(png_bytes):
    logo = load_logo(png_bytes)
    op = ImageOp(image=logo, x=25, y=25, width=40, height=20)
    with pytest.raises(ValueError):
        render_operations([op, op])


def test_font_width_tables_cover_printable_ascii():
    assert len(fonts._HELVETICA_WIDTHS) == 95
    assert len(fonts._HELVETICA_BOLD_WIDTHS) == 95
    assert fonts.string_width("W", fonts.BOLD, 10) > fonts.string_width("i", fonts.BOLD, 10)


def test_invoice_filename():
    assert invoice_filename("20240101") == "invoice_20240101.pdf"
    assert invoice_filename("A/B 7") == "invoice_A_B_7.pdf"
    assert invoice_filename("  ") == "invoice_draft.pdf"


def test_export_writes_pdf_and_history(widget_invoice, labels, tmp_path):
    history = tmp_path / "data" / "invoices.json"
    result = export_invoice(widget_invoice, labels, tmp_path / "out", history_path=history)

    assert result.path == tmp_path / "out" / "invoice_INV-1.pdf"
    assert result.path.read_bytes().startswith(b"%PDF")
    assert result.totals.total == pytest.approx(18.9)

    entries = load_history(history)
    assert len(entries) == 1
    entry = entries[0]
    assert entry["id"] == result.record["id"]
    assert entry["invoice_number"] == "INV-1"
    assert entry["invoice_date"] == "2024-01-01"
    assert entry["currency_code"] == "HKD"
    assert entry["total"] == pytest.approx(18.9)
    assert entry["items"][0] == {"description": "Widget", "quantity": 2, "rate": 10}


def test_history_is_appended(widget_invoice, labels, tmp_path):
    history = tmp_path / "invoices.json"
    export_invoice(widget_invoice, labels, tmp_path, history_path=history)
    export_invoice(replace(widget_invoice, invoice_number="INV-2"), labels, tmp_path, history_path=history)
    records = json.loads(history.read_text(encoding="utf-8"))
    assert [r["invoice_number"] for r in records] == ["INV-1", "INV-2"]
    assert records[0]["id"] != records[1]["id"]


def test_validation_errors_stop_export(widget_invoice, labels, tmp_path):
    invoice = replace(widget_invoice, company_name=" ", items=[LineItem("", 0, 10)])
    with pytest.raises(InvoiceValidationError) as excinfo:
        export_invoice(invoice, labels, tmp_path, history_path=tmp_path / "h.json")
    assert set(excinfo.value.errors) == {"company_name", "items.0.description", "items.0.quantity"}
    assert list(tmp_path.iterdir()) == []


def test_render_failure_leaves_no_file(widget_invoice, labels, tmp_path, monkeypatch):
    def boom(*_args, **_kwargs):
        raise ValueError("broken layout")

    monkeypatch.setattr(export_service, "render_invoice_pdf", boom)
    with pytest.raises(ExportError):
        export_invoice(widget_invoice, labels, tmp_path, history_path=tmp_path / "h.json")
    assert list(tmp_path.iterdir()) == []


def test_history_failure_keeps_pdf(widget_invoice, labels, tmp_path, monkeypatch):
    def fail(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(export_service, "append_invoice_record", fail)
    result = export_invoice(widget_invoice, labels, tmp_path, history_path=tmp_path / "h.json")
    assert result.path.exists()
    assert result.record is None


def test_write_invoice_pdf(widget_invoice, labels, tmp_path):
    path = write_invoice_pdf(tmp_path / "preview.pdf", widget_invoice, labels)
    assert path.read_bytes() == render_invoice_pdf(widget_invoice, labels)


def test_non_finite_rate_is_not_exported(widget_invoice, labels, tmp_path):
    invoice = replace(widget_invoice, items=[LineItem("Widget", 1, float("1e999"))])
    with pytest.raises(InvoiceValidationError) as excinfo:
        export_invoice(invoice, labels, tmp_path, history_path=tmp_path / "h.json")
    assert set(excinfo.value.errors) == {"items.0.rate"}
    assert list(tmp_path.iterdir()) == []


def test_failed_history_write_keeps_previous_records(widget_invoice, tmp_path, monkeypatch):
    history = tmp_path / "invoices.json"
    totals = compute_totals(widget_invoice)
    append_invoice_record(widget_invoice, totals, history)
    before = history.read_bytes()

    def broken_replace(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(files.os, "replace", broken_replace)
    with pytest.raises(OSError):
        append_invoice_record(replace(widget_invoice, invoice_number="INV-2"), totals, history)
    assert history.read_bytes() == before
    assert [p.name for p in tmp_path.iterdir()] == ["invoices.json"]


def test_write_invoice_pdf_leaves_no_temp_file_on_failure(widget_invoice, labels, tmp_path, monkeypatch):
    def broken_replace(*_args, **_kwargs):
        raise OSError("read-only")

    monkeypatch.setattr(files.os, "replace", broken_replace)
    with pytest.raises(OSError):
        write_invoice_pdf(tmp_path / "preview.pdf", widget_invoice, labels)
    assert list(tmp_path.iterdir()) == []
