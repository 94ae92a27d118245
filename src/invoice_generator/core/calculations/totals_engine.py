from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from invoice_generator.core.models.invoice import (
    AdjustmentValue,
    Currency,
    InvoiceData,
    LineItem,
    OptionalAdjustment,
)


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: float
    discount_amount: float
    tax_amount: float
    shipping_amount: float
    total: float


def compute_subtotal(items: Iterable[LineItem]) -> float:
    return sum((item.amount for item in items), 0.0)


def compute_discount_amount(subtotal: float, discount: AdjustmentValue) -> float:
    # Fixed discounts are taken verbatim, even above the subtotal.
    if discount.is_percentage:
        return subtotal * (discount.amount / 100.0)
    return float(discount.amount)


def compute_tax_amount(subtotal: float, discount_amount: float, tax: OptionalAdjustment) -> float:
    if not tax.enabled:
        return 0.0
    taxable = subtotal - discount_amount
    if tax.is_percentage:
        return taxable * (tax.amount / 100.0)
    return float(tax.amount)


def shipping_amount(shipping: OptionalAdjustment) -> float:
    return float(shipping.amount) if shipping.enabled else 0.0


def compute_total(subtotal: float, discount_amount: float, tax_amount: float, shipping: OptionalAdjustment) -> float:
    return subtotal - discount_amount + tax_amount + shipping_amount(shipping)


def compute_totals(invoice: InvoiceData) -> InvoiceTotals:
    """Fresh totals for one invoice snapshot; nothing is rounded here."""
    subtotal = compute_subtotal(invoice.items)
    discount = compute_discount_amount(subtotal, invoice.discount)
    tax = compute_tax_amount(subtotal, discount, invoice.tax)
    return InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount,
        tax_amount=tax,
        shipping_amount=shipping_amount(invoice.shipping),
        total=compute_total(subtotal, discount, tax, invoice.shipping),
    )


def format_currency(value: float, currency: Currency) -> str:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        numeric = 0.0
    # round() keeps "-0.00" out of the output
    numeric = round(numeric, 2) + 0.0
    return f"{currency.symbol}{numeric:.2f}"


def format_quantity(value: float) -> str:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return str(value)
    if numeric.is_integer():
        return str(int(numeric))
    return f"{numeric:.2f}"
