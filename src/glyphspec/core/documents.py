"""XML document loading and the node vocabulary of screen descriptions."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
import logging
from pathlib import Path
import xml.etree.ElementTree as ElementTree

from .exceptions import DocumentError


logger = logging.getLogger(__name__)

SCREEN_TAG = "screen"
GROUP_TAG = "variable_region"
TEXT_TAG = "text"


class NodeKind(Enum):
    """Element kinds found below the root of a screen document."""

    SCREEN = "screen"
    GROUP = "group"
    TEXT = "text"
    OTHER = "other"


_KIND_BY_TAG: dict[str, NodeKind] = {
    SCREEN_TAG: NodeKind.SCREEN,
    GROUP_TAG: NodeKind.GROUP,
    TEXT_TAG: NodeKind.TEXT,
}


def local_name(element: ElementTree.Element) -> str | None:
    """Return the tag of ``element`` without its ``{namespace}`` prefix."""
    tag = element.tag
    if not isinstance(tag, str):
        # Comments and processing instructions carry a factory as tag.
        return None
    return tag.rpartition("}")[2]


def iter_named(root: ElementTree.Element, name: str) -> Iterator[ElementTree.Element]:
    """Yield ``root`` and its descendants whose local tag name is ``name``."""
    for element in root.iter():
        if local_name(element) == name:
            yield element


def classify(element: ElementTree.Element) -> NodeKind:
    """Return the kind of a screen document element."""
    name = local_name(element)
    if name is None:
        return NodeKind.OTHER
    return _KIND_BY_TAG.get(name, NodeKind.OTHER)


def iter_screens(root: ElementTree.Element) -> Iterator[ElementTree.Element]:
    """Yield the ``screen`` children of a screen document root."""
    for child in root:
        if classify(child) is NodeKind.SCREEN:
            yield child


def element_text(element: ElementTree.Element) -> str:
    """Return the concatenated text content of ``element`` and its descendants."""
    return "".join(element.itertext())


def parse_document(content: str | bytes, *, source: str = "<memory>") -> ElementTree.Element:
    """Parse in-memory XML content and return its root element."""
    try:
        return ElementTree.fromstring(content)
    except ElementTree.ParseError as exc:
        raise DocumentError(f"Malformed XML document '{source}': {exc}") from exc


def load_document(path: Path) -> ElementTree.Element:
    """Parse the XML file at ``path`` and return its root element."""
    path = Path(path)
    if not path.is_file():
        raise DocumentError(f"Input document '{path}' does not exist.")
    try:
        tree = ElementTree.parse(path)
    except ElementTree.ParseError as exc:
        raise DocumentError(f"Malformed XML document '{path}': {exc}") from exc
    except OSError as exc:
        raise DocumentError(f"Unable to read input document '{path}'.") from exc
    root = tree.getroot()
    if root is None:  # pragma: no cover - the parser rejects empty documents
        raise DocumentError(f"Input document '{path}' has no root element.")
    logger.debug("Parsed %s (root <%s>)", path, root.tag)
    return root


__all__ = [
    "GROUP_TAG",
    "SCREEN_TAG",
    "TEXT_TAG",
    "NodeKind",
    "classify",
    "element_text",
    "iter_named",
    "iter_screens",
    "load_document",
    "local_name",
    "parse_document",
]
