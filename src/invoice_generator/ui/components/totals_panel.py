import tkinter as tk
from typing import Callable, Mapping

import customtkinter as ctk

from invoice_generator.core.calculations.totals_engine import InvoiceTotals, format_currency
from invoice_generator.core.models.invoice import FIXED, PERCENTAGE, AdjustmentValue, Currency, OptionalAdjustment
from invoice_generator.core.services.invoice import parse_number
from invoice_generator.ui.styles import theme


class TotalsPanel(ctk.CTkFrame):
    """
    Discount / tax / shipping inputs with the live subtotal and total.
    Holds the adjustment state; the window reads it back as frozen values.
    """

    def __init__(self, master: tk.Misc, labels: Mapping[str, str], currency: Currency, on_change: Callable[[], None]):
        super().__init__(master, fg_color="transparent")
        self._on_change = on_change
        self._currency = currency
        self._discount_kind = PERCENTAGE
        self._tax_kind = PERCENTAGE
        self._tax_enabled = False
        self._shipping_enabled = False

        self._discount_var = tk.StringVar(value="0")
        self._tax_var = tk.StringVar(value="0")
        self._shipping_var = tk.StringVar(value="0")
        self._subtotal_var = tk.StringVar()
        self._total_var = tk.StringVar()
        for var in (self._discount_var, self._tax_var, self._shipping_var):
            var.trace_add("write", lambda *_: self._changed())

        self.columnconfigure(0, weight=1)
        self._subtotal_label = ctk.CTkLabel(self, anchor="w")
        self._subtotal_label.grid(row=0, column=0, sticky="w", padx=8)
        ctk.CTkLabel(self, textvariable=self._subtotal_var, anchor="e").grid(row=0, column=1, columnspan=3, sticky="e", padx=8)

        self._discount_label = ctk.CTkLabel(self, anchor="w")
        self._discount_label.grid(row=1, column=0, sticky="w", padx=8)
        ctk.CTkEntry(self, textvariable=self._discount_var, width=80, justify="right").grid(row=1, column=1, sticky="e")
        self._discount_kind_btn = ctk.CTkButton(self, width=40, command=self._toggle_discount_kind)
        self._discount_kind_btn.grid(row=1, column=2, padx=(4, 0))
        ctk.CTkButton(self, text="x", width=28, command=self.reset_discount).grid(row=1, column=3, padx=(4, 8))

        self._tax_label = ctk.CTkLabel(self, anchor="w")
        self._tax_entry = ctk.CTkEntry(self, textvariable=self._tax_var, width=80, justify="right")
        self._tax_kind_btn = ctk.CTkButton(self, width=40, command=self._toggle_tax_kind)
        self._tax_remove_btn = ctk.CTkButton(self, text="x", width=28, command=lambda: self.set_tax_enabled(False))
        self._tax_add_btn = ctk.CTkButton(self, text="+ Tax", width=90, command=lambda: self.set_tax_enabled(True))

        self._shipping_label = ctk.CTkLabel(self, anchor="w")
        self._shipping_entry = ctk.CTkEntry(self, textvariable=self._shipping_var, width=80, justify="right")
        self._shipping_remove_btn = ctk.CTkButton(
            self, text="x", width=28, command=lambda: self.set_shipping_enabled(False)
        )
        self._shipping_add_btn = ctk.CTkButton(
            self, text="+ Shipping", width=90, command=lambda: self.set_shipping_enabled(True)
        )

        separator = ctk.CTkFrame(self, height=2, fg_color=theme.PALETTE["border"])
        separator.grid(row=4, column=0, columnspan=4, sticky="we", pady=6, padx=8)
        self._total_label = ctk.CTkLabel(self, anchor="w", font=("Segoe UI", 13, "bold"))
        self._total_label.grid(row=5, column=0, sticky="w", padx=8)
        ctk.CTkLabel(self, textvariable=self._total_var, font=("Segoe UI", 13, "bold")).grid(
            row=5, column=1, columnspan=3, sticky="e", padx=8
        )

        self.set_labels(labels)
        self._layout_optional_rows()
        self._refresh_kind_buttons()

    # --- state ---
    def discount(self) -> AdjustmentValue:
        return AdjustmentValue(kind=self._discount_kind, amount=max(0.0, parse_number(self._discount_var.get())))

    def tax(self) -> OptionalAdjustment:
        return OptionalAdjustment(
            kind=self._tax_kind,
            amount=max(0.0, parse_number(self._tax_var.get())),
            enabled=self._tax_enabled,
        )

    def shipping(self) -> OptionalAdjustment:
        return OptionalAdjustment(
            kind=FIXED,
            amount=max(0.0, parse_number(self._shipping_var.get())),
            enabled=self._shipping_enabled,
        )

    def reset_discount(self) -> None:
        self._discount_kind = PERCENTAGE
        self._refresh_kind_buttons()
        self._discount_var.set("0")

    def set_tax_enabled(self, enabled: bool) -> None:
        self._tax_enabled = enabled
        self._layout_optional_rows()
        self._changed()

    def set_shipping_enabled(self, enabled: bool) -> None:
        self._shipping_enabled = enabled
        self._layout_optional_rows()
        self._changed()

    def set_currency(self, currency: Currency) -> None:
        self._currency = currency
        self._refresh_kind_buttons()

    def set_labels(self, labels: Mapping[str, str]) -> None:
        self._subtotal_label.configure(text=labels["subtotal_label"])
        self._discount_label.configure(text=labels["discount_label"])
        self._tax_label.configure(text=labels["tax_label"])
        self._shipping_label.configure(text=labels["shipping_label"])
        self._total_label.configure(text=labels["total_label"])

    def update_values(self, totals: InvoiceTotals) -> None:
        self._subtotal_var.set(format_currency(totals.subtotal, self._currency))
        self._total_var.set(format_currency(totals.total, self._currency))

    # --- internals ---
    def _changed(self) -> None:
        self._on_change()

    def _toggle_discount_kind(self) -> None:
        self._discount_kind = FIXED if self._discount_kind == PERCENTAGE else PERCENTAGE
        self._refresh_kind_buttons()
        self._changed()

    def _toggle_tax_kind(self) -> None:
        self._tax_kind = FIXED if self._tax_kind == PERCENTAGE else PERCENTAGE
        self._refresh_kind_buttons()
        self._changed()

    def _kind_text(self, kind: str) -> str:
        return "%" if kind == PERCENTAGE else self._currency.symbol

    def _refresh_kind_buttons(self) -> None:
        self._discount_kind_btn.configure(text=self._kind_text(self._discount_kind))
        self._tax_kind_btn.configure(text=self._kind_text(self._tax_kind))

    def _layout_optional_rows(self) -> None:
        tax_widgets = (self._tax_label, self._tax_entry, self._tax_kind_btn, self._tax_remove_btn)
        shipping_widgets = (self._shipping_label, self._shipping_entry, self._shipping_remove_btn)
        if self._tax_enabled:
            self._tax_add_btn.grid_remove()
            for col, widget in enumerate(tax_widgets):
                widget.grid(row=2, column=col, sticky="w" if col == 0 else "e", padx=(8 if col == 0 else 4, 0), pady=2)
        else:
            for widget in tax_widgets:
                widget.grid_remove()
            self._tax_add_btn.grid(row=2, column=0, sticky="w", padx=8, pady=2)
        if self._shipping_enabled:
            self._shipping_add_btn.grid_remove()
            self._shipping_label.grid(row=3, column=0, sticky="w", padx=8, pady=2)
            self._shipping_entry.grid(row=3, column=1, sticky="e", pady=2)
            self._shipping_remove_btn.grid(row=3, column=3, padx=(4, 8), pady=2)
        else:
            for widget in shipping_widgets:
                widget.grid_remove()
            self._shipping_add_btn.grid(row=3, column=0, sticky="w", padx=8, pady=2)
