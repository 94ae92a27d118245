import tkinter as tk
from typing import Callable, Sequence

import customtkinter as ctk

from invoice_generator.ui.styles import theme


class ActionsBar(ctk.CTkFrame):
    """
    Top bar: currency selector, logo picker, label editor and the PDF button.
    """

    def __init__(
        self,
        master: tk.Misc,
        currency_codes: Sequence[str],
        currency_code: str,
        on_currency_change: Callable[[str], None],
        on_logo: Callable[[], None],
        on_clear_logo: Callable[[], None],
        on_edit_labels: Callable[[], None],
        on_pdf: Callable[[], None],
        row: int = 0,
    ):
        super().__init__(master, fg_color="transparent")
        self.grid(row=row, column=0, columnspan=2, sticky="ew", padx=8, pady=6)

        self.logo_btn = ctk.CTkButton(self, text="Logo...", command=on_logo, width=90)
        self.logo_btn.pack(side="left", padx=(0, 6))
        self.clear_logo_btn = ctk.CTkButton(self, text="Remove logo", command=on_clear_logo, width=110)
        self.clear_logo_btn.pack(side="left", padx=(0, 6))
        self.labels_btn = ctk.CTkButton(self, text="Edit labels", command=on_edit_labels, width=110)
        self.labels_btn.pack(side="left", padx=(0, 6))

        self.pdf_btn = ctk.CTkButton(self, text="Download PDF", command=on_pdf, **theme.accent_button_kwargs(theme.PALETTE))
        self.pdf_btn.pack(side="right")

        self._currency_var = tk.StringVar(value=currency_code)
        self.currency_menu = ctk.CTkComboBox(
            self,
            values=list(currency_codes),
            variable=self._currency_var,
            command=lambda _val: on_currency_change(self._currency_var.get()),
            state="readonly",
            width=100,
        )
        self.currency_menu.pack(side="right", padx=(0, 6))
        theme.style_combo_box(self.currency_menu, theme.PALETTE)

    def set_logo_loaded(self, loaded: bool) -> None:
        self.clear_logo_btn.configure(state="normal" if loaded else "disabled")
