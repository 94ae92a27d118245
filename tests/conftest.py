import io
import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure `src` is importable when running tests from repo root.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def widget_invoice():
    from invoice_generator.core.models.invoice import AdjustmentValue, InvoiceData, LineItem, OptionalAdjustment

    return InvoiceData(
        company_name="Acme Ltd",
        company_address="1 Main Street\nHong Kong",
        bill_to="Client Co\n2 Side Road",
        invoice_number="INV-1",
        invoice_date=date(2024, 1, 1),
        payment_terms="30 Days",
        due_date=date(2024, 1, 31),
        items=(LineItem(description="Widget", quantity=2, rate=10),),
        discount=AdjustmentValue(kind="percentage", amount=10),
        tax=OptionalAdjustment(kind="percentage", amount=5, enabled=True),
        shipping=OptionalAdjustment(kind="fixed", amount=0, enabled=False),
    )


@pytest.fixture
def labels():
    from invoice_generator.core.models.labels import LabelSet

    return LabelSet()


@pytest.fixture
def png_bytes():
    """Semi-transparent 80x40 PNG, wider than tall."""
    from PIL import Image

    img = Image.new("RGBA", (80, 40), (200, 30, 30, 128))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
