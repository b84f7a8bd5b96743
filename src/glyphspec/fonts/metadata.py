"""Load per-font rendering parameters from a physical attributes document."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
import xml.etree.ElementTree as ElementTree

from glyphspec.core.diagnostics import DiagnosticEmitter, ensure_emitter
from glyphspec.core.documents import iter_named
from glyphspec.core.exceptions import MetadataError


logger = logging.getLogger(__name__)

CONTAINER_TAG = "Fonts"
FONT_TAG = "Font"
NAME_ATTRIBUTE = "Name"
PATH_ATTRIBUTE = "TrueTypeLib"

#: Record field -> document attribute, in serialisation order.
NUMERIC_ATTRIBUTES: dict[str, str] = {
    "size": "Size",
    "width": "Width",
    "height": "Height",
    "x": "StartX",
    "y": "StartY",
}

_FONT_NAME = re.compile(r"FONT([0-9]+)")
_UNSIGNED = re.compile(r"[0-9]+")
# Characters that would split a serialised spec record.
RECORD_SEPARATORS = ("\t", "\n", "\r")


@dataclass(frozen=True, slots=True)
class FontMetadata:
    """Rendering parameters of one bitmap font."""

    index: int
    path: str
    size: int
    width: int
    height: int
    x: int
    y: int


def _find_container(root: ElementTree.Element) -> ElementTree.Element:
    container = next(iter_named(root, CONTAINER_TAG), None)
    if container is None:
        raise MetadataError(f"Physical attributes document has no <{CONTAINER_TAG}> element.")
    return container


def _unsigned(element: ElementTree.Element, attribute: str, label: str) -> int:
    raw = element.get(attribute)
    if raw is None:
        raise MetadataError(f"{label}: missing '{attribute}' attribute.")
    cleaned = raw.strip()
    if not _UNSIGNED.fullmatch(cleaned):
        raise MetadataError(f"{label}: '{attribute}' must be an unsigned integer, got {raw!r}.")
    try:
        return int(cleaned.lstrip("0") or "0")
    except ValueError as exc:
        raise MetadataError(
            f"{label}: '{attribute}' is too large ({len(cleaned)} digits)."
        ) from exc


def parse_font_name(name: str) -> int:
    """Return the font index encoded in a ``FONT<n>`` name."""
    match = _FONT_NAME.fullmatch(name.strip())
    if match is None:
        raise MetadataError(f"Font name {name!r} does not match 'FONT<n>'.")
    try:
        return int(match.group(1).lstrip("0") or "0")
    except ValueError as exc:
        digits = len(match.group(1))
        raise MetadataError(f"Font name has an oversized index ({digits} digits).") from exc


def read_font(
    element: ElementTree.Element, *, font_count: int, max_path_length: int
) -> FontMetadata:
    """Build the metadata record described by a single ``Font`` element."""
    name = element.get(NAME_ATTRIBUTE)
    if name is None:
        raise MetadataError(f"<{FONT_TAG}> element without a '{NAME_ATTRIBUTE}' attribute.")
    label = f"Font '{name}'"
    values = {
        field: _unsigned(element, attribute, label)
        for field, attribute in NUMERIC_ATTRIBUTES.items()
    }
    index = parse_font_name(name)

    path = element.get(PATH_ATTRIBUTE)
    if path is None:
        raise MetadataError(f"{label}: missing '{PATH_ATTRIBUTE}' attribute.")
    if len(path) > max_path_length:
        raise MetadataError(
            f"{label}: '{PATH_ATTRIBUTE}' is {len(path)} characters long "
            f"(limit {max_path_length})."
        )
    if any(separator in path for separator in RECORD_SEPARATORS):
        raise MetadataError(
            f"{label}: '{PATH_ATTRIBUTE}' must not contain tabs or line breaks, got {path!r}."
        )
    if index >= font_count:
        raise MetadataError(
            f"{label}: index {index} is out of range (expected 0..{font_count - 1})."
        )
    return FontMetadata(index=index, path=path, **values)


def load_font_metadata(
    root: ElementTree.Element,
    *,
    font_count: int,
    max_path_length: int = 4096,
    emitter: DiagnosticEmitter | None = None,
) -> list[FontMetadata]:
    """Return one metadata record per font index, ordered by index.

    Fonts may appear in any order. Every index in ``range(font_count)`` must be
    described, a later description of the same index replaces the earlier one.
    """
    emitter = ensure_emitter(emitter)
    container = _find_container(root)
    slots: list[FontMetadata | None] = [None] * font_count

    for element in iter_named(container, FONT_TAG):
        record = read_font(element, font_count=font_count, max_path_length=max_path_length)
        if slots[record.index] is not None:
            emitter.warning(f"Font index {record.index} is described more than once.")
        slots[record.index] = record
        logger.debug("Loaded FONT%d from %s", record.index, record.path or "<empty path>")

    missing = [index for index, record in enumerate(slots) if record is None]
    if missing:
        names = ", ".join(f"FONT{index}" for index in missing)
        raise MetadataError(f"Physical attributes document does not describe {names}.")
    return [record for record in slots if record is not None]


__all__ = [
    "CONTAINER_TAG",
    "FONT_TAG",
    "NUMERIC_ATTRIBUTES",
    "PATH_ATTRIBUTE",
    "RECORD_SEPARATORS",
    "FontMetadata",
    "load_font_metadata",
    "parse_font_name",
    "read_font",
]
