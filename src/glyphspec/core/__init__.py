"""Core building blocks shared by the resolution stages and the CLI."""

from .config import GlyphSpecConfig, load_config
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .exceptions import GlyphSpecError


__all__ = [
    "DiagnosticEmitter",
    "GlyphSpecConfig",
    "GlyphSpecError",
    "LoggingEmitter",
    "NullEmitter",
    "load_config",
]
