"""
Layout and style constants for the invoice page.
Positions are in millimetres from the top-left corner; text y is the baseline.
"""

from __future__ import annotations

# Page geometry (A4 portrait)
PAGE_W, PAGE_H = 210.0, 297.0
PT_PER_MM = 72.0 / 25.4
LEFT_MARGIN = 25.0
RIGHT_EDGE = 185.0

# Logo
LOGO_X, LOGO_Y = 25.0, 25.0

# Title block
TITLE_Y = 25.0
TITLE_SIZE = 24
NUMBER_Y = 35.0
NUMBER_SIZE = 12

# Company block
COMPANY_Y = 65.0
COMPANY_SIZE = 12
ADDRESS_Y = 70.0
BODY_SIZE = 10
LINE_SPACING = 4.0

# Detail group (date / terms / due date / balance due)
DETAIL_LABEL_X = 140.0
DETAIL_VALUE_X = 145.0
DETAIL_Y = 65.0
DETAIL_SPACING = 5.0
DATE_FORMAT = "%b %d, %Y"

# Bill to
BILL_TO_Y = 85.0
BILL_TO_LINES_Y = 90.0
BILL_TO_SIZE = 12

# Items table
TABLE_Y = 105.0
TABLE_RIGHT_MARGIN = 14.0
TABLE_FONT_SIZE = 10
TABLE_PADDING = 3.0
TABLE_LINE_HEIGHT = TABLE_FONT_SIZE * 1.15 / PT_PER_MM
TABLE_FIXED_WIDTHS = (30.0, 40.0, 40.0)
TABLE_ALIGNS = ("left", "right", "right", "right")

# Totals block
TOTALS_LABEL_X = 140.0
TOTALS_VALUE_X = 185.0
TOTALS_GAP_AFTER_TABLE = 3.0
TOTALS_GAP_NO_TABLE = 8.0
TOTALS_STEP = 4.0
TOTAL_STEP = 6.0

# Free text sections
SECTIONS_GAP = 15.0
SECTION_BODY_OFFSET = 5.0
SECTION_HEIGHT = 20.0

# Colors (RGB components in 0-1 space encoded as strings for PDF ops)
COLORS = {
    "text": "0 0 0",
    "white": "1 1 1",
    "header": "0.118 0.161 0.231",
    "row_alt": "0.961 0.961 0.961",
}


def color(name: str) -> str:
    return COLORS.get(name, "0 0 0")


def split_lines(text: str | None) -> list[str]:
    return str(text or "").replace("\r\n", "\n").split("\n")


def with_colon(label: str) -> str:
    label = str(label or "")
    return label if label.endswith(":") else f"{label}:"
