import logging
import tkinter as tk
from datetime import date
from typing import Dict, Mapping

import customtkinter as ctk

from invoice_generator.core.calculations.totals_engine import compute_totals, format_currency
from invoice_generator.core.models.invoice import CURRENCIES, InvoiceData, get_currency
from invoice_generator.core.models.labels import LabelSet
from invoice_generator.core.services.invoice import default_invoice_number, recalculate_due_date
from invoice_generator.core.services.settings import labels_from_settings, save_settings
from invoice_generator.ui.components.items_editor import ItemsEditor
from invoice_generator.ui.components.label_editor_dialog import LabelEditorDialog
from invoice_generator.ui.components.totals_panel import TotalsPanel
from invoice_generator.ui.controllers.export_controller import ExportController
from invoice_generator.ui.layouts.actions_bar import ActionsBar
from invoice_generator.ui.styles import theme
from invoice_generator.utils.image import LogoImage, fit_logo

logger = logging.getLogger(__name__)

PAYMENT_TERMS_OPTIONS = ["30 Days", "60 Days", "90 Days"]
LOGO_PREVIEW_PX = 128


def parse_date(raw: str) -> date | None:
    try:
        return date.fromisoformat((raw or "").strip())
    except ValueError:
        return None


class MainWindow(ctk.CTk):
    def __init__(self, settings: dict):
        super().__init__()
        self.settings = settings
        self._palette = theme.apply_theme(self, settings.get("theme", "light"))
        self.title("Invoice Generator")
        self.geometry("1100x860")
        self.minsize(900, 640)

        self.labels: LabelSet = labels_from_settings(settings)
        self.currency = get_currency(settings.get("currency"))
        self.logo: LogoImage | None = None
        self._logo_preview = None
        self._export = ExportController(self)

        today = date.today()
        self.company_name = tk.StringVar()
        self.invoice_number = tk.StringVar(value=default_invoice_number(today))
        self.invoice_date = tk.StringVar(value=today.isoformat())
        self.payment_terms = tk.StringVar(value=str(settings.get("payment_terms") or PAYMENT_TERMS_OPTIONS[0]))
        self.due_date = tk.StringVar()
        self.invoice_date.trace_add("write", lambda *_: self._recalculate_due_date())
        self.payment_terms.trace_add("write", lambda *_: self._recalculate_due_date())
        self._recalculate_due_date()

        self.columnconfigure(0, weight=1)
        self.columnconfigure(1, weight=1)
        self.rowconfigure(3, weight=1)

        self.actions = ActionsBar(
            self,
            currency_codes=[c.code for c in CURRENCIES],
            currency_code=self.currency.code,
            on_currency_change=self._set_currency,
            on_logo=self._export.choose_logo,
            on_clear_logo=lambda: self.set_logo(None),
            on_edit_labels=self._open_label_editor,
            on_pdf=self._export.export_pdf,
            row=0,
        )
        self.actions.set_logo_loaded(False)

        self._build_header(row=1)
        self._build_form(row=2)

        self.items_editor = ItemsEditor(self, self.labels, on_change=self.update_totals)
        self.items_editor.grid(row=3, column=0, columnspan=2, sticky="nsew", padx=8, pady=(0, 8))

        self._build_footer(row=4)
        self.items_editor.set_currency(self.currency)
        self.update_totals()

    # --- layout ---
    def _build_header(self, row: int) -> None:
        self._logo_label = ctk.CTkLabel(
            self, text="No logo", width=LOGO_PREVIEW_PX, height=LOGO_PREVIEW_PX, fg_color=self._palette["panel"]
        )
        self._logo_label.grid(row=row, column=0, sticky="w", padx=8, pady=8)
        self._logo_label.bind("<Button-1>", lambda _e: self._export.choose_logo())
        self._title_label = ctk.CTkLabel(self, font=("Segoe UI", 28, "bold"))
        self._title_label.grid(row=row, column=1, sticky="e", padx=16)
        self._title_label.bind("<Button-1>", lambda _e: self._open_label_editor())

    def _build_form(self, row: int) -> None:
        self._entries: Dict[str, ctk.CTkBaseClass] = {}
        left = ctk.CTkFrame(self, fg_color=self._palette["panel"], corner_radius=8)
        left.grid(row=row, column=0, sticky="nsew", padx=8, pady=(0, 8))
        left.columnconfigure(0, weight=1)
        left.columnconfigure(1, weight=1)

        name_entry = ctk.CTkEntry(left, textvariable=self.company_name, placeholder_text="Company Name", font=("Segoe UI", 14, "bold"))
        name_entry.grid(row=0, column=0, columnspan=2, sticky="ew", padx=8, pady=(8, 4))
        self.company_address = ctk.CTkTextbox(left, height=70)
        self.company_address.grid(row=1, column=0, columnspan=2, sticky="ew", padx=8, pady=(0, 6))

        self._bill_to_label = ctk.CTkLabel(left, anchor="w")
        self._bill_to_label.grid(row=2, column=0, sticky="w", padx=8)
        self._optional_label = ctk.CTkLabel(left, anchor="w")
        self._optional_label.grid(row=2, column=1, sticky="w", padx=8)
        self.bill_to = ctk.CTkTextbox(left, height=60)
        self.bill_to.grid(row=3, column=0, sticky="ew", padx=8, pady=(0, 8))
        self.optional = ctk.CTkTextbox(left, height=60)
        self.optional.grid(row=3, column=1, sticky="ew", padx=8, pady=(0, 8))

        right = ctk.CTkFrame(self, fg_color=self._palette["panel"], corner_radius=8)
        right.grid(row=row, column=1, sticky="nsew", padx=8, pady=(0, 8))
        right.columnconfigure(1, weight=1)
        self._detail_labels: Dict[str, ctk.CTkLabel] = {}
        details = [
            ("invoice_number_label", "invoice_number", ctk.CTkEntry(right, textvariable=self.invoice_number, justify="right")),
            ("invoice_date_label", "invoice_date", ctk.CTkEntry(right, textvariable=self.invoice_date, justify="right")),
            (
                "payment_terms_label",
                "payment_terms",
                ctk.CTkComboBox(right, values=PAYMENT_TERMS_OPTIONS, variable=self.payment_terms, justify="right"),
            ),
            ("due_date_label", "due_date", ctk.CTkEntry(right, textvariable=self.due_date, justify="right")),
        ]
        for idx, (label_key, field_key, widget) in enumerate(details):
            label = ctk.CTkLabel(right, anchor="w")
            label.grid(row=idx, column=0, sticky="w", padx=8, pady=4)
            widget.grid(row=idx, column=1, sticky="ew", padx=8, pady=4)
            self._detail_labels[label_key] = label
            self._entries[field_key] = widget

        self._entries.update(
            {
                "company_name": name_entry,
                "company_address": self.company_address,
                "bill_to": self.bill_to,
            }
        )

    def _build_footer(self, row: int) -> None:
        notes_frame = ctk.CTkFrame(self, fg_color="transparent")
        notes_frame.grid(row=row, column=0, sticky="nsew", padx=8, pady=(0, 8))
        notes_frame.columnconfigure(0, weight=1)
        self._section_labels: Dict[str, ctk.CTkLabel] = {}
        self._sections: Dict[str, ctk.CTkTextbox] = {}
        for idx, (label_key, field) in enumerate(
            (("notes_label", "notes"), ("terms_label", "terms_and_conditions"), ("payment_details_label", "payment_details"))
        ):
            label = ctk.CTkLabel(notes_frame, anchor="w")
            label.grid(row=idx * 2, column=0, sticky="w")
            box = ctk.CTkTextbox(notes_frame, height=56)
            box.grid(row=idx * 2 + 1, column=0, sticky="ew", pady=(0, 4))
            self._section_labels[label_key] = label
            self._sections[field] = box

        self.totals_panel = TotalsPanel(self, self.labels, self.currency, on_change=self.update_totals)
        self.totals_panel.grid(row=row, column=1, sticky="new", padx=8, pady=(0, 8))
        self._balance_label = ctk.CTkLabel(self, font=("Segoe UI", 12, "bold"))
        self._balance_label.grid(row=row + 1, column=1, sticky="e", padx=16, pady=(0, 8))
        self._apply_labels()

    # --- state ---
    def invoice_data(self) -> InvoiceData:
        """Snapshot of the form; everything downstream works on this frozen value."""
        return InvoiceData(
            company_name=self.company_name.get().strip(),
            company_address=_text(self.company_address),
            bill_to=_text(self.bill_to),
            optional=_text(self.optional),
            invoice_number=self.invoice_number.get().strip(),
            invoice_date=parse_date(self.invoice_date.get()),
            payment_terms=self.payment_terms.get().strip(),
            due_date=parse_date(self.due_date.get()),
            items=tuple(self.items_editor.items()),
            notes=_text(self._sections["notes"]),
            terms_and_conditions=_text(self._sections["terms_and_conditions"]),
            payment_details=_text(self._sections["payment_details"]),
            discount=self.totals_panel.discount(),
            tax=self.totals_panel.tax(),
            shipping=self.totals_panel.shipping(),
            currency=self.currency,
        )

    def update_totals(self) -> None:
        if not hasattr(self, "totals_panel"):
            return
        totals = compute_totals(self.invoice_data())
        self.totals_panel.update_values(totals)
        self._balance_label.configure(
            text=f"{self.labels['balance_due_label']} {format_currency(totals.total, self.currency)}"
        )

    def set_logo(self, logo: LogoImage | None) -> None:
        self.logo = logo
        self.actions.set_logo_loaded(logo is not None)
        if logo is None:
            self._logo_preview = None
            self._logo_label.configure(image=None, text="No logo")
            return
        w, h = fit_logo(logo.width, logo.height, box=(LOGO_PREVIEW_PX, LOGO_PREVIEW_PX))
        pil = logo.to_pil()
        self._logo_preview = ctk.CTkImage(light_image=pil, dark_image=pil, size=(int(w), int(h)))
        self._logo_label.configure(image=self._logo_preview, text="")

    def show_field_errors(self, errors: Mapping[str, str]) -> None:
        for key, widget in self._entries.items():
            color = self._palette["error"] if key in errors else self._palette["border"]
            widget.configure(border_color=color)

    # --- handlers ---
    def _recalculate_due_date(self) -> None:
        due = recalculate_due_date(parse_date(self.invoice_date.get()), self.payment_terms.get())
        if due is not None:
            self.due_date.set(due.isoformat())

    def _set_currency(self, code: str) -> None:
        self.currency = get_currency(code)
        self.settings["currency"] = self.currency.code
        self.items_editor.set_currency(self.currency)
        self.totals_panel.set_currency(self.currency)
        self.update_totals()
        self._persist_settings()

    def _open_label_editor(self) -> None:
        LabelEditorDialog(self, self.labels, self._set_labels)

    def _set_labels(self, labels: LabelSet) -> None:
        self.labels = labels
        self.settings["labels"] = labels.overrides()
        self._apply_labels()
        self.update_totals()
        self._persist_settings()

    def _apply_labels(self) -> None:
        self._title_label.configure(text=self.labels["invoice_title"])
        self._bill_to_label.configure(text=self.labels["bill_to_label"])
        self._optional_label.configure(text=self.labels["optional_label"])
        for key, label in self._detail_labels.items():
            label.configure(text=self.labels[key])
        for key, label in self._section_labels.items():
            label.configure(text=self.labels[key])
        self.items_editor.set_labels(self.labels)
        self.totals_panel.set_labels(self.labels)

    def _persist_settings(self) -> None:
        try:
            save_settings(self.settings)
        except OSError as exc:
            logger.warning("Could not save settings: %s", exc)


def _text(box: ctk.CTkTextbox) -> str:
    return box.get("1.0", "end-1c").strip()
