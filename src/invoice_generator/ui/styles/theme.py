from typing import Dict

import customtkinter as ctk

# Light mirrors the PDF table header colour.
THEMES: Dict[str, dict] = {
    "light": {
        "bg": "#f1f5f9",
        "surface": "#fdfdfe",
        "panel": "#e2e8f0",
        "muted": "#64748b",
        "text": "#111827",
        "accent": "#1e293b",
        "accent_dim": "#334155",
        "border": "#cbd5e1",
        "highlight": "#e5e7eb",
        "error": "#dc2626",
    },
    "dark": {
        "bg": "#0f172a",
        "surface": "#1e293b",
        "panel": "#273449",
        "muted": "#94a3b8",
        "text": "#e2e8f0",
        "accent": "#38bdf8",
        "accent_dim": "#0ea5e9",
        "border": "#334155",
        "highlight": "#1f2a3c",
        "error": "#f87171",
    },
}

ACTIVE_THEME = "light"
PALETTE = THEMES[ACTIVE_THEME]


def apply_theme(root: ctk.CTk, name: str = "light") -> dict:
    global ACTIVE_THEME, PALETTE
    if name not in THEMES:
        name = "light"
    ACTIVE_THEME = name
    PALETTE = THEMES[name]
    ctk.set_appearance_mode("Light" if name == "light" else "Dark")
    ctk.set_default_color_theme("blue" if name == "light" else "dark-blue")
    root.configure(fg_color=PALETTE["bg"])
    return PALETTE


def style_combo_box(combo: ctk.CTkComboBox, palette: dict) -> None:
    combo.configure(
        fg_color=palette["surface"],
        border_color=palette["border"],
        button_color=palette["accent"],
        button_hover_color=palette["accent_dim"],
        text_color=palette["text"],
        dropdown_fg_color=palette["surface"],
        dropdown_text_color=palette["text"],
        dropdown_hover_color=palette["highlight"],
    )


def accent_button_kwargs(palette: dict) -> dict:
    return {
        "fg_color": palette["accent"],
        "hover_color": palette["accent_dim"],
        "text_color": "#ffffff",
    }
