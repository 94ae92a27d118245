"""
Logo loading: decode any Pillow-readable image into RGB pixels for the PDF
and a data URI for previews.
"""

from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

LOGO_BOX = (40.0, 40.0)


class LogoError(ValueError):
    """Raised when a logo file cannot be read or decoded."""


@dataclass(frozen=True)
class LogoImage:
    width: int
    height: int
    pixels: bytes  # 8-bit RGB, row-major
    data_uri: str

    @property
    def aspect_ratio(self) -> float:
        return self.width / float(self.height or 1)

    def to_pil(self) -> Image.Image:
        return Image.frombytes("RGB", (self.width, self.height), self.pixels)


def pick_logo_file(paths: Sequence[str | Path]) -> Path | None:
    """Only one logo is accepted; extra files of a multi-file drop are ignored."""
    if not paths:
        return None
    if len(paths) > 1:
        logger.warning("Received %d logo files, using only %s", len(paths), paths[0])
    return Path(paths[0])


def load_logo(source: str | Path | bytes) -> LogoImage:
    if isinstance(source, (bytes, bytearray)):
        raw = bytes(source)
    else:
        try:
            raw = Path(source).read_bytes()
        except OSError as exc:
            raise LogoError(f"Cannot read logo file {source}: {exc}") from exc
    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            mime = Image.MIME.get(img.format or "", "image/png")
            rgb = _flatten(img)
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise LogoError(f"Unsupported or damaged image: {exc}") from exc
    if rgb.width == 0 or rgb.height == 0:
        raise LogoError("Logo image has no pixels")
    data_uri = f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"
    return LogoImage(width=rgb.width, height=rgb.height, pixels=rgb.tobytes(), data_uri=data_uri)


def fit_logo(width: float, height: float, box: tuple[float, float] = LOGO_BOX) -> tuple[float, float]:
    """Scale to the box width first, shrink to the box height when still too tall."""
    max_w, max_h = box
    aspect = width / float(height or 1)
    fit_w = max_w
    fit_h = fit_w / aspect
    if fit_h > max_h:
        fit_h = max_h
        fit_w = fit_h * aspect
    return fit_w, fit_h


def _flatten(img: Image.Image) -> Image.Image:
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return img.convert("RGB")
