"""
PDF object builder: assembles the page content stream, fonts and the optional logo
into a minimal single-page PDF byte output.
"""

from __future__ import annotations

import zlib
from typing import List

from invoice_generator.utils.image import LogoImage
from invoice_generator.utils.pdf.core import fonts

LOGO_NAME = "Im1"


def build_pdf_bytes(content_stream: str, page_size=(595.28, 841.89), image: LogoImage | None = None) -> bytes:
    """
    Given one page content stream (str), return ready-to-write PDF bytes.
    """
    stream_bytes = content_stream.encode("ascii")

    objs: List[bytes] = [
        b"1 0 obj << /Type /Catalog /Pages 2 0 R >> endobj\n",
        b"2 0 obj << /Type /Pages /Count 1 /Kids [3 0 R] >> endobj\n",
    ]
    font1_id, font2_id, content_id = 4, 5, 6
    next_obj_id = 7

    xobjects = ""
    image_obj = b""
    if image is not None:
        image_id = next_obj_id
        next_obj_id += 1
        xobjects = f" /XObject << /{LOGO_NAME} {image_id} 0 R >>"
        image_obj = _image_object(image_id, image)

    media_box = f"[0 0 {page_size[0]:.2f} {page_size[1]:.2f}]"
    objs.append(
        f"3 0 obj << /Type /Page /Parent 2 0 R /MediaBox {media_box} /Contents {content_id} 0 R "
        f"/Resources << /Font << /F1 {font1_id} 0 R /F2 {font2_id} 0 R >>{xobjects} >> >> endobj\n".encode("ascii")
    )
    for obj_id, key in ((font1_id, fonts.REGULAR), (font2_id, fonts.BOLD)):
        objs.append(
            f"{obj_id} 0 obj << /Type /Font /Subtype /Type1 /BaseFont /{fonts.BASE_FONTS[key]} "
            f"/Encoding /WinAnsiEncoding >> endobj\n".encode("ascii")
        )
    objs.append(
        f"{content_id} 0 obj << /Length {len(stream_bytes)} >> stream\n".encode("ascii") + stream_bytes + b"\nendstream endobj\n"
    )
    if image_obj:
        objs.append(image_obj)

    header = b"%PDF-1.4\n"
    offsets = [0]
    pdf_body = bytearray()
    current_offset = len(header)
    for obj in objs:
        offsets.append(current_offset)
        pdf_body += obj
        current_offset += len(obj)

    xref_entries = ["0000000000 65535 f \n"] + [_format_xref_entry(off) for off in offsets[1:]]
    xref = ("xref\n0 %d\n" % len(offsets)).encode("ascii") + "".join(xref_entries).encode("ascii")
    startxref = len(header) + len(pdf_body)
    trailer = f"trailer << /Size {len(offsets)} /Root 1 0 R >>\nstartxref\n{startxref}\n%%EOF\n".encode("ascii")

    return header + bytes(pdf_body) + xref + trailer


def _image_object(obj_id: int, image: LogoImage) -> bytes:
    data = zlib.compress(image.pixels)
    head = (
        f"{obj_id} 0 obj << /Type /XObject /Subtype /Image /Width {image.width} /Height {image.height} "
        f"/ColorSpace /DeviceRGB /BitsPerComponent 8 /Filter /FlateDecode /Length {len(data)} >> stream\n"
    ).encode("ascii")
    return head + data + b"\nendstream endobj\n"


def _format_xref_entry(offset: int) -> str:
    return f"{offset:010d} 00000 n \n"
