"""Custom exception hierarchy for the glyph specification pipeline."""

from __future__ import annotations


class GlyphSpecError(RuntimeError):
    """Base exception for glyph specification failures."""


class ConfigError(GlyphSpecError):
    """Raised when a configuration file cannot be loaded or validated."""


class DocumentError(GlyphSpecError):
    """Raised when an input document is missing, unreadable, or malformed."""


class UsageError(GlyphSpecError):
    """Raised when a screen document declares an unusable text element."""


class FontIndexError(UsageError):
    """Raised when a font index is missing, unparsable, or out of range."""


class TranslationError(GlyphSpecError):
    """Raised when a translation unit cannot be identified."""


class EncodingError(GlyphSpecError):
    """Raised when translated text is not a valid UTF-8 byte sequence."""


class MetadataError(GlyphSpecError):
    """Raised when the physical attributes of a font cannot be resolved."""


class RecordFormatError(GlyphSpecError):
    """Raised when a glyph specification record exceeds its size limit."""


class EmissionError(GlyphSpecError):
    """Raised when a glyph specification file cannot be written."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


def format_failure(exc: BaseException) -> str:
    """Return the message of ``exc`` followed by its root cause when they differ."""
    messages = exception_messages(exc)
    if not messages:
        return type(exc).__name__
    headline = messages[0]
    hint = exception_hint(exc)
    if hint is None or hint in headline:
        return headline
    return f"{headline} (caused by: {hint})"


__all__ = [
    "ConfigError",
    "DocumentError",
    "EmissionError",
    "EncodingError",
    "FontIndexError",
    "GlyphSpecError",
    "MetadataError",
    "RecordFormatError",
    "TranslationError",
    "UsageError",
    "exception_hint",
    "format_failure",
    "exception_messages",
]
