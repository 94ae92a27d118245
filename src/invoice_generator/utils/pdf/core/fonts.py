"""
Built-in Type1 fonts (Helvetica, Helvetica-Bold) with WinAnsi encoding.
Widths are the standard AFM advance widths in 1/1000 em, used for right alignment
and wrapping of table cells.
"""

from __future__ import annotations

import unicodedata
from typing import Dict

REGULAR = "/F1"
BOLD = "/F2"

BASE_FONTS: Dict[str, str] = {
    REGULAR: "Helvetica",
    BOLD: "Helvetica-Bold",
}

# ASCII 32..126
_HELVETICA_WIDTHS = (
    278, 278, 355, 556, 556, 889, 667, 191, 333, 333, 389, 584, 278, 333, 278, 278,
    556, 556, 556, 556, 556, 556, 556, 556, 556, 556, 278, 278, 584, 584, 584, 556,
    1015, 667, 667, 722, 722, 667, 611, 778, 722, 278, 500, 667, 556, 833, 722, 778,
    667, 778, 722, 667, 611, 722, 667, 944, 667, 667, 611, 278, 278, 278, 469, 556,
    333, 556, 556, 500, 556, 556, 278, 556, 556, 222, 222, 500, 222, 833, 556, 556,
    556, 556, 333, 500, 278, 556, 500, 722, 500, 500, 500, 334, 260, 334, 584,
)
_HELVETICA_BOLD_WIDTHS = (
    278, 333, 474, 556, 556, 889, 722, 238, 333, 333, 389, 584, 278, 333, 278, 278,
    556, 556, 556, 556, 556, 556, 556, 556, 556, 556, 333, 333, 584, 584, 584, 611,
    975, 722, 722, 722, 722, 667, 611, 778, 722, 278, 556, 722, 611, 833, 722, 778,
    667, 778, 722, 667, 611, 722, 667, 944, 667, 667, 611, 333, 278, 333, 584, 556,
    333, 556, 611, 556, 611, 556, 333, 611, 611, 278, 278, 556, 278, 889, 611, 611,
    611, 611, 389, 556, 333, 611, 556, 778, 556, 556, 500, 389, 280, 389, 584,
)

_WIDTHS = {
    REGULAR: _HELVETICA_WIDTHS,
    BOLD: _HELVETICA_BOLD_WIDTHS,
}

# Currency signs and a few frequent WinAnsi characters outside ASCII.
_EXTRA_WIDTHS = {
    0x80: 556,  # euro
    0xA3: 556,  # pound
    0xA5: 556,  # yen
    0xA9: 737,  # copyright
    0xB0: 400,  # degree
}
_DEFAULT_WIDTH = 556


def encode_winansi(text: str) -> bytes:
    """Encode to cp1252; characters it cannot hold are reduced to ASCII."""
    out = bytearray()
    for ch in str(text):
        try:
            out += ch.encode("cp1252")
        except UnicodeEncodeError:
            fallback = unicodedata.normalize("NFKD", ch).encode("ascii", "ignore")
            out += fallback or b"?"
    return bytes(out)


def char_width(code: int, font: str = REGULAR) -> int:
    table = _WIDTHS.get(font, _HELVETICA_WIDTHS)
    if 32 <= code <= 126:
        return table[code - 32]
    return _EXTRA_WIDTHS.get(code, _DEFAULT_WIDTH)


def string_width(text: str, font: str = REGULAR, size: float = 10) -> float:
    """Width of `text` in points."""
    units = sum(char_width(code, font) for code in encode_winansi(text))
    return units * size / 1000.0


def font_for(bold: bool) -> str:
    return BOLD if bold else REGULAR
