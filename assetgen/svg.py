from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .errors import SourceNotFound

_ROOT_TAG = re.compile(r"<svg\b([^>]*)>", re.IGNORECASE)
_LENGTH = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(px)?\s*$")


def _attr(tag_attrs: str, name: str) -> str | None:
    m = re.search(rf"(?<![\w:-]){name}\s*=\s*([\"'])(.*?)\1", tag_attrs, re.DOTALL)
    return m.group(2) if m else None


def _parse_length(raw: str | None) -> float | None:
    if raw is None:
        return None
    m = _LENGTH.match(raw)
    if not m:
        return None
    return float(m.group(1))


def _parse_viewbox(raw: str | None) -> tuple[float, float, float, float] | None:
    if not raw:
        return None
    parts = raw.replace(",", " ").split()
    if len(parts) != 4:
        return None
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError:
        return None
    return x, y, w, h


@dataclass(frozen=True)
class VectorDocument:
    """SVG markup held as text.

    Only the root tag is inspected here; well-formedness is checked when the
    document is rasterized.
    """

    markup: str

    @classmethod
    def from_file(cls, path: Path) -> VectorDocument:
        try:
            return cls(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise SourceNotFound(f"Source template not found: {path}") from e

    def to_bytes(self) -> bytes:
        return self.markup.encode("utf-8")

    def _root_attrs(self) -> str | None:
        m = _ROOT_TAG.search(self.markup)
        return m.group(1) if m else None

    def _size(self, name: str, vb_index: int) -> float | None:
        attrs = self._root_attrs()
        if attrs is None:
            return None
        value = _parse_length(_attr(attrs, name))
        if value is not None:
            return value
        vb = _parse_viewbox(_attr(attrs, "viewBox"))
        return vb[vb_index] if vb else None

    @property
    def width(self) -> float | None:
        return self._size("width", 2)

    @property
    def height(self) -> float | None:
        return self._size("height", 3)
