import tkinter as tk
from typing import Callable, Dict

import customtkinter as ctk

from invoice_generator.core.models.labels import DEFAULT_LABELS, LabelSet
from invoice_generator.ui.styles import theme


class LabelEditorDialog(ctk.CTkToplevel):
    """
    Rename any on-document label. Empty fields fall back to the default text.
    """

    def __init__(self, master, labels: LabelSet, on_save: Callable[[LabelSet], None]):
        super().__init__(master)
        self.title("Edit labels")
        self.transient(master)
        self.grab_set()
        self.geometry("460x620")
        self.minsize(380, 400)
        self._on_save = on_save
        self._vars: Dict[str, tk.StringVar] = {}

        frame = ctk.CTkScrollableFrame(self, fg_color="transparent")
        frame.pack(fill="both", expand=True, padx=12, pady=12)
        frame.columnconfigure(1, weight=1)
        for row, key in enumerate(DEFAULT_LABELS):
            ctk.CTkLabel(frame, text=DEFAULT_LABELS[key], anchor="w").grid(row=row, column=0, sticky="w", padx=(0, 8), pady=2)
            var = tk.StringVar(value=labels[key])
            ctk.CTkEntry(frame, textvariable=var).grid(row=row, column=1, sticky="ew", pady=2)
            self._vars[key] = var

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.pack(fill="x", padx=12, pady=(0, 12))
        ctk.CTkButton(buttons, text="Cancel", command=self.destroy).pack(side="right", padx=(6, 0))
        ctk.CTkButton(buttons, text="Save", command=self._save, **theme.accent_button_kwargs(theme.PALETTE)).pack(side="right")
        ctk.CTkButton(buttons, text="Restore defaults", command=self._restore_defaults).pack(side="left")

    def _restore_defaults(self) -> None:
        for key, var in self._vars.items():
            var.set(DEFAULT_LABELS[key])

    def _save(self) -> None:
        updated = LabelSet()
        for key, var in self._vars.items():
            text = var.get().strip()
            updated.set(key, text or DEFAULT_LABELS[key])
        self._on_save(updated)
        self.destroy()
