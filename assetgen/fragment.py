from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from .svg import VectorDocument

# Centering offset baked into the logo template's top-level group.
DEFAULT_PLACEHOLDER = 'transform="translate(64,64)"'

_GROUP_TAG = re.compile(r"<(/)?g\b[^>]*>")
_TRANSFORM_ATTR = re.compile(r"\s+transform\s*=\s*([\"']).*?\1", re.DOTALL)


class StripStrategy(str, Enum):
    EXACT = "exact"
    LEADING = "leading"
    NONE = "none"


@dataclass(frozen=True)
class Fragment:
    markup: str

    @property
    def open_tag(self) -> str:
        return self.markup[: self.markup.index(">") + 1]

    def strip_transform(
        self, strategy: StripStrategy, placeholder: str = DEFAULT_PLACEHOLDER
    ) -> Fragment:
        """Return a copy without the fragment's own placement transform.

        EXACT removes the first occurrence of ``placeholder`` only; LEADING drops
        whatever transform sits on the outer ``<g>`` tag. Nested transforms are
        never touched.
        """
        if strategy is StripStrategy.EXACT:
            if placeholder and placeholder in self.markup:
                return Fragment(self.markup.replace(placeholder, "", 1))
            return self
        if strategy is StripStrategy.LEADING:
            head = self.open_tag
            stripped = _TRANSFORM_ATTR.sub("", head, count=1)
            if stripped == head:
                return self
            return Fragment(stripped + self.markup[len(head):])
        return self


def extract_fragment(doc: VectorDocument) -> Fragment | None:
    """Return the first top-level ``<g>`` sub-tree of ``doc``, or None.

    Nested groups are counted so the outer group is returned whole. A missing
    group or an unbalanced one both yield None.
    """
    text = doc.markup
    start: int | None = None
    depth = 0
    for m in _GROUP_TAG.finditer(text):
        closing = m.group(1) is not None
        self_closing = not closing and m.group(0).endswith("/>")
        if start is None:
            if closing:
                continue
            start = m.start()
            if self_closing:
                return Fragment(text[start : m.end()])
            depth = 1
            continue
        if closing:
            depth -= 1
            if depth == 0:
                return Fragment(text[start : m.end()])
        elif not self_closing:
            depth += 1

    if start is None:
        logging.warning("No <g> group found in source document; embedded artwork omitted")
    else:
        logging.warning("Unterminated <g> group in source document; embedded artwork omitted")
    return None
