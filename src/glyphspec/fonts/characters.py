"""Resolve the code points each font needs from a translation document."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import logging
import xml.etree.ElementTree as ElementTree

from glyphspec.core.diagnostics import DiagnosticEmitter, ensure_emitter
from glyphspec.core.documents import element_text, iter_named, local_name
from glyphspec.core.exceptions import EncodingError, TranslationError

from .usage import FontUsage


logger = logging.getLogger(__name__)

UNIT_TAG = "trans-unit"
NAME_ATTRIBUTE = "name"
CONTENT_TAGS = ("source", "target")


class CodePointSets(Sequence[set[int]]):
    """One set of required code points per font index."""

    def __init__(self, font_count: int) -> None:
        self.font_count = font_count
        self._sets: list[set[int]] = [set() for _ in range(font_count)]

    def __getitem__(self, font: int) -> set[int]:  # type: ignore[override]
        return self._sets[font]

    def __len__(self) -> int:
        return self.font_count

    def __iter__(self) -> Iterator[set[int]]:
        return iter(self._sets)

    def __repr__(self) -> str:
        sizes = ", ".join(str(len(entry)) for entry in self._sets)
        return f"CodePointSets([{sizes}])"

    def add(self, font: int, code_point: int) -> None:
        self._sets[font].add(code_point)

    def update(self, usage: Sequence[bool], code_points: Iterable[int]) -> None:
        """Insert ``code_points`` into every font flagged in ``usage``."""
        fonts = [index for index, used in enumerate(usage) if used]
        for code_point in code_points:
            for font in fonts:
                self._sets[font].add(code_point)

    def sorted(self, font: int) -> list[int]:
        return sorted(self._sets[font])

    def total(self) -> int:
        """Return the number of (font, code point) pairs."""
        return sum(len(entry) for entry in self._sets)


def decode_code_points(data: bytes | str) -> list[int]:
    """Decode UTF-8 content into the sequence of its Unicode code points."""
    if isinstance(data, str):
        # XML parsers hand out text; round-trip it to reject lone surrogates.
        try:
            data = data.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodingError(f"Text is not encodable as UTF-8: {exc.reason}.") from exc
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(
            f"Invalid UTF-8 byte sequence at offset {exc.start}: {exc.reason}."
        ) from exc
    return [ord(char) for char in text]


def resolve_characters(
    usage: FontUsage,
    root: ElementTree.Element,
    *,
    font_count: int,
    emitter: DiagnosticEmitter | None = None,
    into: CodePointSets | None = None,
) -> CodePointSets:
    """Accumulate, per font, the code points required by a translation document.

    Pass ``into`` to merge several translation documents into the same sets.
    """
    emitter = ensure_emitter(emitter)
    sets = into if into is not None else CodePointSets(font_count)
    if sets.font_count != font_count:
        raise ValueError(
            f"Code point sets hold {sets.font_count} fonts, expected {font_count}."
        )

    for unit in iter_named(root, UNIT_TAG):
        text_id = unit.get(NAME_ATTRIBUTE)
        if text_id is None:
            raise TranslationError(f"Translation unit without a '{NAME_ATTRIBUTE}' attribute.")
        _resolve_unit(usage, unit, text_id, sets, emitter)

    logger.debug("Resolved %d code point(s) across %d font(s)", sets.total(), font_count)
    return sets


def _resolve_unit(
    usage: FontUsage,
    unit: ElementTree.Element,
    text_id: str,
    sets: CodePointSets,
    emitter: DiagnosticEmitter,
) -> None:
    for child in unit:
        tag = local_name(child)
        if tag not in CONTENT_TAGS:
            continue
        content = element_text(child)
        if not content:
            emitter.warning(f"Empty <{tag}> in translation unit '{text_id}'.")
            continue
        vector = usage.get(text_id)
        if vector is None:
            emitter.warning(f"Unused translation '{text_id}': no screen renders it.")
            return
        try:
            code_points = decode_code_points(content)
        except EncodingError as exc:
            raise EncodingError(f"Translation unit '{text_id}': {exc}") from exc
        sets.update(vector, code_points)


__all__ = [
    "CONTENT_TAGS",
    "NAME_ATTRIBUTE",
    "UNIT_TAG",
    "CodePointSets",
    "decode_code_points",
    "resolve_characters",
]
