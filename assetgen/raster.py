from __future__ import annotations

import io
import logging
from dataclasses import dataclass

import cairosvg
from PIL import Image

from .errors import RenderError
from .svg import VectorDocument


@dataclass(frozen=True)
class RasterImage:
    width: int
    height: int
    data: bytes


def _png_size(data: bytes) -> tuple[int, int]:
    with Image.open(io.BytesIO(data)) as img:
        return img.size


def _resample(data: bytes, width: int, height: int) -> bytes:
    with Image.open(io.BytesIO(data)) as img:
        resized = img.convert("RGBA").resize((width, height), Image.LANCZOS)
    buf = io.BytesIO()
    resized.save(buf, format="PNG")
    return buf.getvalue()


def rasterize(doc: VectorDocument, width: int, height: int) -> RasterImage:
    """Render ``doc`` to a PNG of exactly ``width`` x ``height`` pixels.

    The document's own size does not have to match; CairoSVG scales it into the
    requested box.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Raster size must be positive, got {width}x{height}")
    try:
        data = cairosvg.svg2png(
            bytestring=doc.to_bytes(),
            output_width=width,
            output_height=height,
        )
    except Exception as e:
        raise RenderError(f"Failed to render SVG at {width}x{height}: {e}") from e
    if not data:
        raise RenderError(f"Renderer produced no output at {width}x{height}")

    size = _png_size(data)
    if size != (width, height):
        logging.debug("Renderer returned %sx%s, resampling to %sx%s", *size, width, height)
        data = _resample(data, width, height)
    return RasterImage(width=width, height=height, data=data)
