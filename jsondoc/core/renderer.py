"""
Renderer for jsondoc - serializes a Document tree back to text.

Rendering walks the tree directly and never consults tokens, so parse and
render are independent inverse maps.
"""

import logging
from decimal import Decimal
from typing import Optional, Union

from ..model.document import Document
from ..model.values import Value, ValueKind
from .constants import RENDER_ESCAPES

logger = logging.getLogger(__name__)


def escape_string(text: str) -> str:
    """Escape backslashes first, then quotes and control characters."""
    for raw, escaped in RENDER_ESCAPES:
        text = text.replace(raw, escaped)
    return text


def format_float(number: float) -> str:
    """Format a float as a positional decimal that always contains a dot."""
    text = repr(number)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    return text


class Renderer:
    """Serializes documents in compact or indented form."""

    def __init__(self, indent: Union[int, str, None] = None):
        if isinstance(indent, int) and not isinstance(indent, bool):
            self.indent: Optional[str] = " " * indent
        else:
            self.indent = indent

    @property
    def pretty(self) -> bool:
        return self.indent is not None

    def render(self, document: Document) -> str:
        text = self.render_document(document, 0)
        logger.debug(
            "Rendered %d top-level entries into %d characters", len(document), len(text)
        )
        return text

    def render_document(self, document: Document, level: int) -> str:
        if len(document) == 0:
            return "{}"

        separator = ": " if self.pretty else ":"
        parts = [
            f'"{escape_string(entry.label)}"{separator}'
            f"{self.render_value(entry.value, level + 1)}"
            for entry in document
        ]
        return self._wrap("{", parts, "}", level)

    def render_list(self, items: list[Value], level: int) -> str:
        if not items:
            return "[]"

        parts = [self.render_value(item, level + 1) for item in items]
        return self._wrap("[", parts, "]", level)

    def render_value(self, value: Value, level: int) -> str:
        kind = value.kind
        if kind is ValueKind.STRING:
            return f'"{escape_string(value.data)}"'
        if kind is ValueKind.INT:
            return str(value.data)
        if kind is ValueKind.FLOAT:
            return format_float(value.data)
        if kind is ValueKind.BOOL:
            return "true" if value.data else "false"
        if kind is ValueKind.NULL:
            return "null"
        if kind is ValueKind.LIST:
            return self.render_list(value.data, level)
        if kind is ValueKind.OBJECT:
            return self.render_document(value.data, level)
        raise ValueError(f"Unknown value kind: {kind}")

    def _wrap(self, opening: str, parts: list[str], closing: str, level: int) -> str:
        if not self.pretty:
            return opening + ",".join(parts) + closing

        assert self.indent is not None
        inner = "\n" + self.indent * (level + 1)
        outer = "\n" + self.indent * level
        return opening + inner + ("," + inner).join(parts) + outer + closing


def render(document: Document, indent: Union[int, str, None] = None) -> str:
    """
    Render a Document to text.

    Compact by default: ``{"label":value,...}`` with no whitespace. With
    ``indent`` (a number of spaces or an indent string) one entry or element
    is written per line.
    """
    return Renderer(indent).render(document)
