from __future__ import annotations

from typing import Dict, Iterator, Mapping

DEFAULT_LABELS: Dict[str, str] = {
    "invoice_title": "INVOICE",
    "invoice_number_label": "Invoice Number",
    "invoice_date_label": "Invoice Date",
    "payment_terms_label": "Payment Terms",
    "due_date_label": "Due Date",
    "bill_to_label": "Bill To",
    "optional_label": "Optional",
    "item_label": "Item",
    "quantity_label": "Quantity",
    "rate_label": "Rate",
    "amount_label": "Amount",
    "notes_label": "Notes",
    "terms_label": "Terms and Conditions",
    "payment_details_label": "Payment Details",
    "subtotal_label": "Subtotal:",
    "discount_label": "Discount:",
    "tax_label": "Tax:",
    "shipping_label": "Shipping:",
    "total_label": "Total:",
    "balance_due_label": "Balance Due:",
}


class LabelSet(Mapping[str, str]):
    """
    On-document labels: defaults plus user overrides.
    Unknown keys are ignored so old settings files keep loading.
    """

    def __init__(self, overrides: Mapping[str, str] | None = None):
        self._overrides: Dict[str, str] = {}
        for key, value in (overrides or {}).items():
            self.set(key, value)

    def __getitem__(self, key: str) -> str:
        if key in self._overrides:
            return self._overrides[key]
        return DEFAULT_LABELS[key]

    def __iter__(self) -> Iterator[str]:
        return iter(DEFAULT_LABELS)

    def __len__(self) -> int:
        return len(DEFAULT_LABELS)

    def set(self, key: str, value: str) -> None:
        if key not in DEFAULT_LABELS:
            return
        text = str(value if value is not None else "")
        if text == DEFAULT_LABELS[key]:
            self._overrides.pop(key, None)
        else:
            self._overrides[key] = text

    def reset(self, key: str | None = None) -> None:
        if key is None:
            self._overrides.clear()
        else:
            self._overrides.pop(key, None)

    def overrides(self) -> Dict[str, str]:
        return dict(self._overrides)

    def copy(self) -> "LabelSet":
        return LabelSet(self._overrides)
