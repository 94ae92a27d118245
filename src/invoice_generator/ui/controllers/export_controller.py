from __future__ import annotations

import logging
from pathlib import Path
from tkinter import filedialog, messagebox

from invoice_generator.core.services.export import ExportError, export_invoice, invoice_filename
from invoice_generator.core.services.invoice import InvoiceValidationError
from invoice_generator.core.services.settings import output_dir_from_settings, save_settings
from invoice_generator.utils.image import LogoError, load_logo, pick_logo_file

logger = logging.getLogger(__name__)

FIELD_NAMES = {
    "company_name": "Company name",
    "company_address": "Company address",
    "bill_to": "Bill to",
    "invoice_number": "Invoice number",
    "invoice_date": "Invoice date",
    "payment_terms": "Payment terms",
    "due_date": "Due date",
}


def describe_field(key: str) -> str:
    if key.startswith("items."):
        _, idx, name = key.split(".", 2)
        return f"Item {int(idx) + 1} {name}"
    return FIELD_NAMES.get(key, key)


class ExportController:
    """
    Export and logo actions of the main window. All user-facing errors end here.
    """

    def __init__(self, window) -> None:
        self.w = window

    def export_pdf(self) -> None:
        invoice = self.w.invoice_data()
        default_dir = output_dir_from_settings(self.w.settings)
        target = filedialog.askdirectory(
            initialdir=str(default_dir),
            title=f"Folder for {invoice_filename(invoice.invoice_number)}",
        )
        if not target:
            return
        output_dir = Path(target)
        try:
            result = export_invoice(invoice, self.w.labels, output_dir, logo=self.w.logo)
        except InvoiceValidationError as exc:
            lines = [f"- {describe_field(key)}: {msg}" for key, msg in exc.errors.items()]
            self.w.show_field_errors(exc.errors)
            messagebox.showwarning("Invoice is incomplete", "\n".join(lines), parent=self.w)
            return
        except ExportError:
            messagebox.showerror("Export failed", "Failed to generate PDF. Please try again.", parent=self.w)
            return
        self.w.show_field_errors({})
        self.w.settings["output_dir"] = str(output_dir)
        self._save_settings()
        messagebox.showinfo("Invoice exported", f"Invoice saved to\n{result.path}", parent=self.w)

    def choose_logo(self) -> None:
        paths = filedialog.askopenfilenames(
            title="Choose logo",
            filetypes=[("Images", "*.png *.jpg *.jpeg *.gif *.bmp *.webp *.tif *.tiff"), ("All files", "*.*")],
        )
        path = pick_logo_file(list(paths))
        if path is None:
            return
        try:
            logo = load_logo(path)
        except LogoError as exc:
            logger.warning("Rejected logo %s: %s", path, exc)
            messagebox.showerror("Logo", f"Cannot use this image:\n{exc}", parent=self.w)
            return
        self.w.set_logo(logo)

    def _save_settings(self) -> None:
        try:
            save_settings(self.w.settings)
        except OSError as exc:
            logger.warning("Could not save settings: %s", exc)
