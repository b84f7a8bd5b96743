"""Resolve which fonts render each text identifier of a screen document."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging
import re
from types import MappingProxyType
import xml.etree.ElementTree as ElementTree

from glyphspec.core.documents import NodeKind, classify, iter_screens
from glyphspec.core.exceptions import FontIndexError, UsageError


logger = logging.getLogger(__name__)

VALUE_ATTRIBUTE = "value"
FONT_ATTRIBUTE = "font"

_DECIMAL = re.compile(r"[0-9]+")


def parse_font_index(raw: str | None, *, font_count: int, context: str = "") -> int:
    """Parse a font index attribute, enforcing ``0 <= index < font_count``."""
    where = f" for {context}" if context else ""
    if raw is None:
        raise FontIndexError(f"Missing font index{where}.")
    cleaned = raw.strip()
    if not _DECIMAL.fullmatch(cleaned):
        raise FontIndexError(f"Invalid font index {raw!r}{where}.")
    try:
        index = int(cleaned.lstrip("0") or "0")
    except ValueError as exc:
        raise FontIndexError(
            f"Font index{where} is out of range "
            f"({len(cleaned)} digits, expected 0..{font_count - 1})."
        ) from exc
    if index >= font_count:
        raise FontIndexError(
            f"Font index {index}{where} is out of range (expected 0..{font_count - 1})."
        )
    return index


class FontUsage(Mapping[str, tuple[bool, ...]]):
    """Read-only mapping from text identifier to its per-font usage vector.

    Every vector has ``font_count`` entries and at least one of them is true.
    """

    __slots__ = ("_entries", "font_count")

    def __init__(self, entries: Mapping[str, tuple[bool, ...]], *, font_count: int) -> None:
        self.font_count = font_count
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, text_id: str) -> tuple[bool, ...]:
        return self._entries[text_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FontUsage({len(self)} text ids, font_count={self.font_count})"

    def fonts_for(self, text_id: str) -> tuple[int, ...]:
        """Return the font indices rendering ``text_id`` (empty when unknown)."""
        vector = self._entries.get(text_id)
        if vector is None:
            return ()
        return tuple(index for index, used in enumerate(vector) if used)

    def as_dict(self) -> dict[str, list[int]]:
        """Return a plain ``text id -> font indices`` mapping, sorted by text id."""
        return {text_id: list(self.fonts_for(text_id)) for text_id in sorted(self._entries)}


class FontUsageBuilder:
    """Accumulate font usages across one or more screen documents."""

    def __init__(self, *, font_count: int) -> None:
        self.font_count = font_count
        self._vectors: dict[str, list[bool]] = {}

    def mark(self, text_id: str, font: int) -> None:
        """Record that ``text_id`` is rendered with ``font``."""
        vector = self._vectors.get(text_id)
        if vector is None:
            vector = [False] * self.font_count
            self._vectors[text_id] = vector
        vector[font] = True

    def add_document(self, root: ElementTree.Element) -> None:
        """Visit every screen of a parsed screen document."""
        for screen in iter_screens(root):
            name = screen.get("name") or "<unnamed>"
            logger.debug("Visiting screen %s", name)
            self._visit(screen, screen=name)

    def _visit(self, parent: ElementTree.Element, *, screen: str) -> None:
        for child in parent:
            kind = classify(child)
            if kind is NodeKind.GROUP:
                self._visit(child, screen=screen)
            elif kind is NodeKind.TEXT:
                self._record_text(child, screen=screen)

    def _record_text(self, element: ElementTree.Element, *, screen: str) -> None:
        text_id = element.get(VALUE_ATTRIBUTE)
        if text_id is None:
            return
        raw_font = element.get(FONT_ATTRIBUTE)
        context = f"text '{text_id}' on screen '{screen}'"
        if raw_font is None:
            raise UsageError(f"Missing '{FONT_ATTRIBUTE}' attribute for {context}.")
        font = parse_font_index(raw_font, font_count=self.font_count, context=context)
        self.mark(text_id, font)

    def freeze(self) -> FontUsage:
        """Return the accumulated usages as an immutable mapping."""
        return FontUsage(
            {text_id: tuple(vector) for text_id, vector in self._vectors.items()},
            font_count=self.font_count,
        )


def resolve_font_usages(root: ElementTree.Element, *, font_count: int) -> FontUsage:
    """Build the font usage mapping of a parsed screen document."""
    builder = FontUsageBuilder(font_count=font_count)
    builder.add_document(root)
    usage = builder.freeze()
    logger.debug("Resolved %d text ids", len(usage))
    return usage


__all__ = [
    "FONT_ATTRIBUTE",
    "VALUE_ATTRIBUTE",
    "FontUsage",
    "FontUsageBuilder",
    "parse_font_index",
    "resolve_font_usages",
]
