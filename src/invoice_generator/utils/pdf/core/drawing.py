from __future__ import annotations

from invoice_generator.utils.pdf.core import fonts
from invoice_generator.utils.pdf.core.layout_common import PAGE_H, PT_PER_MM


def mm_to_pt(value: float) -> float:
    return value * PT_PER_MM


def page_y(y_mm: float) -> float:
    """Top-left millimetres to PDF user space (origin bottom-left, points)."""
    return (PAGE_H - y_mm) * PT_PER_MM


def _num(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text if text not in ("", "-0") else "0"


def _escape_pdf_text(text: str) -> str:
    out = []
    for byte in fonts.encode_winansi(text):
        ch = chr(byte)
        if ch in "\\()":
            out.append("\\" + ch)
        elif 32 <= byte <= 126:
            out.append(ch)
        else:
            out.append(f"\\{byte:03o}")
    return "".join(out)


def _draw_text(text: str, x: float, y: float, font: str, size: float) -> str:
    return f"BT {font} {_num(size)} Tf {_num(x)} {_num(y)} Td ({_escape_pdf_text(str(text))}) Tj ET\n"


def _fill_rect(x: float, y: float, w: float, h: float) -> str:
    return f"{_num(x)} {_num(y)} {_num(w)} {_num(h)} re f\n"


def _draw_image(name: str, x: float, y: float, w: float, h: float) -> str:
    return f"q {_num(w)} 0 0 {_num(h)} {_num(x)} {_num(y)} cm /{name} Do Q\n"


def _set_color(rgb: str) -> str:
    return f"{rgb} rg {rgb} RG "
