"""Command implementations for the spec-glyphs CLI."""

from __future__ import annotations

from .build import build
from .inspect import fonts, glyphs, usages


__all__ = ["build", "fonts", "glyphs", "usages"]
