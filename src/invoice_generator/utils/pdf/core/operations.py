"""
Positioned draw instructions produced by the layout engine.
Coordinates are millimetres from the top-left page corner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from invoice_generator.utils.image import LogoImage


@dataclass(frozen=True)
class TextOp:
    text: str
    x: float
    y: float  # baseline
    size: int = 10
    bold: bool = False
    align: str = "left"
    color: str = "text"


@dataclass(frozen=True)
class ImageOp:
    image: LogoImage
    x: float
    y: float  # top edge
    width: float
    height: float


@dataclass(frozen=True)
class TableOp:
    x: float
    y: float  # top edge of the header row
    column_widths: Tuple[float, ...]
    column_aligns: Tuple[str, ...]
    header: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]  # wrapped cell lines are joined with "\n"
    header_height: float
    row_heights: Tuple[float, ...]
    font_size: int
    padding: float
    line_height: float
    header_fill: str = "header"
    header_color: str = "white"
    alt_fill: str = "row_alt"

    @property
    def width(self) -> float:
        return sum(self.column_widths)

    @property
    def bottom(self) -> float:
        return self.y + self.header_height + sum(self.row_heights)


DrawOp = Union[TextOp, ImageOp, TableOp]
