"""glyphspec: compute the glyphs each bitmap font must bake.

The pipeline reads three XML documents: screen descriptions (which fonts
render which text ids), translations (the strings behind those ids) and
physical attributes (how each font is rasterised). It writes one
content-addressed specification file per required (font, code point) pair.
"""

from __future__ import annotations

from glyphspec.core.config import GlyphSpecConfig, load_config
from glyphspec.core.exceptions import GlyphSpecError
from glyphspec.fonts import (
    CodePointSets,
    EmissionReport,
    FontMetadata,
    FontUsage,
    GlyphSpecPipeline,
    PipelineResult,
    SpecRecord,
    decode_code_points,
    emit_specs,
    load_font_metadata,
    resolve_characters,
    resolve_font_usages,
)
from glyphspec.version import get_version


__all__ = [
    "CodePointSets",
    "EmissionReport",
    "FontMetadata",
    "FontUsage",
    "GlyphSpecConfig",
    "GlyphSpecError",
    "GlyphSpecPipeline",
    "PipelineResult",
    "SpecRecord",
    "decode_code_points",
    "emit_specs",
    "get_version",
    "load_config",
    "load_font_metadata",
    "resolve_characters",
    "resolve_font_usages",
]
