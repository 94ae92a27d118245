from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Tuple

PERCENTAGE = "percentage"
FIXED = "fixed"
ADJUSTMENT_KINDS = (PERCENTAGE, FIXED)


@dataclass(frozen=True)
class LineItem:
    """One billable row. Blank rows from the form carry zeros."""

    description: str = ""
    quantity: float = 0.0
    rate: float = 0.0

    @property
    def amount(self) -> float:
        return float(self.quantity) * float(self.rate)

    def is_blank(self) -> bool:
        return not (self.description or self.quantity or self.rate)


@dataclass(frozen=True)
class AdjustmentValue:
    kind: str = PERCENTAGE
    amount: float = 0.0

    def __post_init__(self) -> None:
        if self.kind not in ADJUSTMENT_KINDS:
            raise ValueError(f"Unknown adjustment kind: {self.kind!r}")
        if not (math.isfinite(self.amount) and self.amount >= 0):
            raise ValueError(f"Adjustment amount must be a finite number >= 0, got {self.amount!r}")

    @property
    def is_percentage(self) -> bool:
        return self.kind == PERCENTAGE


@dataclass(frozen=True)
class OptionalAdjustment(AdjustmentValue):
    enabled: bool = False


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str


CURRENCIES: Tuple[Currency, ...] = (
    Currency(code="HKD", symbol="HK$"),
    Currency(code="USD", symbol="$"),
    Currency(code="EUR", symbol="€"),
    Currency(code="GBP", symbol="£"),
)
DEFAULT_CURRENCY = CURRENCIES[0]


def get_currency(code: str | None) -> Currency:
    wanted = (code or "").strip().upper()
    for currency in CURRENCIES:
        if currency.code == wanted:
            return currency
    return DEFAULT_CURRENCY


@dataclass(frozen=True)
class InvoiceData:
    """Snapshot of the invoice form handed to the totals and layout code."""

    company_name: str = ""
    company_address: str = ""
    bill_to: str = ""
    invoice_number: str = ""
    invoice_date: date | None = None
    payment_terms: str = ""
    due_date: date | None = None
    items: Tuple[LineItem, ...] = ()
    notes: str = ""
    terms_and_conditions: str = ""
    payment_details: str = ""
    optional: str = ""
    discount: AdjustmentValue = field(default_factory=AdjustmentValue)
    tax: OptionalAdjustment = field(default_factory=OptionalAdjustment)
    shipping: OptionalAdjustment = field(default_factory=lambda: OptionalAdjustment(kind=FIXED))
    currency: Currency = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        # Form rows arrive as lists.
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))
