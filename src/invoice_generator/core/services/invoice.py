from __future__ import annotations

import math
import re
from datetime import date, timedelta
from typing import Dict

from invoice_generator.core.models.invoice import InvoiceData

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class InvoiceValidationError(ValueError):
    """Raised when the form data does not satisfy the export contract."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in self.errors.items()))


def default_invoice_number(today: date | None = None) -> str:
    return (today or date.today()).strftime("%Y%m%d")


def payment_terms_days(payment_terms: str | None) -> int:
    """
    Leading integer of the payment terms text ("30 Days" -> 30).
    Text without a leading number counts as 0 days.
    """
    match = _LEADING_INT.match(payment_terms or "")
    if not match:
        return 0
    return int(match.group(1))


def recalculate_due_date(invoice_date: date | None, payment_terms: str | None) -> date | None:
    if invoice_date is None or not (payment_terms or "").strip():
        return None
    return invoice_date + timedelta(days=payment_terms_days(payment_terms))


def collect_validation_errors(invoice: InvoiceData) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    required = {
        "company_name": (invoice.company_name, "Company name is required"),
        "company_address": (invoice.company_address, "Company address is required"),
        "bill_to": (invoice.bill_to, "Bill to is required"),
        "invoice_number": (invoice.invoice_number, "Invoice number is required"),
        "payment_terms": (invoice.payment_terms, "Payment terms are required"),
    }
    for field_name, (value, message) in required.items():
        if not (value or "").strip():
            errors[field_name] = message
    if not isinstance(invoice.invoice_date, date):
        errors["invoice_date"] = "Invoice date is required"
    if not isinstance(invoice.due_date, date):
        errors["due_date"] = "Due date is required"
    for idx, item in enumerate(invoice.items):
        if not (item.description or "").strip():
            errors[f"items.{idx}.description"] = "Description is required"
        if not _is_positive(item.quantity):
            errors[f"items.{idx}.quantity"] = "Quantity must be a positive number"
        if not _is_positive(item.rate):
            errors[f"items.{idx}.rate"] = "Rate must be a positive number"
    return errors


def validate_invoice(invoice: InvoiceData) -> InvoiceData:
    errors = collect_validation_errors(invoice)
    if errors:
        raise InvoiceValidationError(errors)
    return invoice


def parse_number(raw: str | None) -> float:
    """Form field text to a number; blank, malformed or non-finite input reads as 0."""
    text = (raw or "").strip().replace(",", ".")
    if not text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _is_positive(value) -> bool:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number > 0
