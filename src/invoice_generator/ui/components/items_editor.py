import tkinter as tk
from typing import Callable, List, Mapping

import customtkinter as ctk

from invoice_generator.core.calculations.totals_engine import format_currency
from invoice_generator.core.models.invoice import Currency, LineItem
from invoice_generator.core.services.invoice import parse_number
from invoice_generator.ui.styles import theme


class _ItemRow:
    def __init__(self, editor: "ItemsEditor", description: str = "", quantity: str = "1", rate: str = "0"):
        self.description = tk.StringVar(value=description)
        self.quantity = tk.StringVar(value=quantity)
        self.rate = tk.StringVar(value=rate)
        self.amount = tk.StringVar(value="")
        for var in (self.description, self.quantity, self.rate):
            var.trace_add("write", lambda *_: editor.notify_change())

        body = editor.body
        self.widgets = [
            ctk.CTkEntry(body, textvariable=self.description, placeholder_text="Item description"),
            ctk.CTkEntry(body, textvariable=self.quantity, width=80, justify="right"),
            ctk.CTkEntry(body, textvariable=self.rate, width=100, justify="right"),
            ctk.CTkLabel(body, textvariable=self.amount, width=100, anchor="e"),
        ]
        self.remove_btn = ctk.CTkButton(body, text="x", width=28, command=lambda: editor.remove_row(self))

    def grid(self, row: int, removable: bool) -> None:
        for col, widget in enumerate(self.widgets):
            widget.grid(row=row, column=col, sticky="ew", padx=4, pady=2)
        if removable:
            self.remove_btn.grid(row=row, column=len(self.widgets), padx=4, pady=2)
        else:
            self.remove_btn.grid_remove()

    def destroy(self) -> None:
        for widget in self.widgets + [self.remove_btn]:
            widget.destroy()

    def item(self) -> LineItem:
        return LineItem(
            description=self.description.get(),
            quantity=parse_number(self.quantity.get()),
            rate=parse_number(self.rate.get()),
        )


class ItemsEditor(ctk.CTkFrame):
    """
    Line item rows with a dark header, live amounts and add/remove buttons.
    """

    def __init__(self, master: tk.Misc, labels: Mapping[str, str], on_change: Callable[[], None]):
        super().__init__(master, fg_color=theme.PALETTE["panel"], corner_radius=8)
        self._on_change = on_change
        self._currency: Currency | None = None
        self._rows: List[_ItemRow] = []
        self.columnconfigure(0, weight=1)

        self.header = ctk.CTkFrame(self, fg_color=theme.PALETTE["accent"], corner_radius=6)
        self.header.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        self.header.columnconfigure(0, weight=1)
        self._header_labels = []
        for col, width in enumerate((0, 80, 100, 100)):
            label = ctk.CTkLabel(self.header, text="", text_color="#ffffff", anchor="w" if col == 0 else "e", width=width)
            label.grid(row=0, column=col, sticky="ew", padx=8, pady=4)
            self._header_labels.append(label)
        ctk.CTkLabel(self.header, text="", width=28).grid(row=0, column=4, padx=4)

        self.body = ctk.CTkScrollableFrame(self, fg_color="transparent", height=180)
        self.body.grid(row=1, column=0, sticky="nsew", padx=8)
        self.body.columnconfigure(0, weight=1)

        ctk.CTkButton(self, text="+ Add Item", command=self.add_row, width=120).grid(
            row=2, column=0, sticky="w", padx=8, pady=8
        )
        self.set_labels(labels)
        self.add_row()

    def set_labels(self, labels: Mapping[str, str]) -> None:
        keys = ("item_label", "quantity_label", "rate_label", "amount_label")
        for label, key in zip(self._header_labels, keys):
            label.configure(text=labels[key])

    def set_currency(self, currency: Currency) -> None:
        self._currency = currency
        self.refresh_amounts()

    def add_row(self, description: str = "", quantity: str = "1", rate: str = "0") -> None:
        self._rows.append(_ItemRow(self, description, quantity, rate))
        self._regrid()
        self.notify_change()

    def remove_row(self, row: _ItemRow) -> None:
        if len(self._rows) <= 1:
            return
        self._rows.remove(row)
        row.destroy()
        self._regrid()
        self.notify_change()

    def _regrid(self) -> None:
        removable = len(self._rows) > 1
        for idx, row in enumerate(self._rows):
            row.grid(idx, removable)

    def notify_change(self) -> None:
        self.refresh_amounts()
        self._on_change()

    def refresh_amounts(self) -> None:
        for row in self._rows:
            amount = row.item().amount
            row.amount.set(format_currency(amount, self._currency) if self._currency else f"{amount:.2f}")

    def items(self) -> List[LineItem]:
        return [row.item() for row in self._rows]
