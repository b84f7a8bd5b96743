"""Glyph requirement resolution for bitmap font builds.

Architecture
: `resolve_font_usages` walks screen documents, recursing through variable
  regions, and maps every text identifier to the fonts that render it.
: `resolve_characters` cross-references translation units against that map and
  fans each decoded code point out to the sets of the fonts using the text.
: `load_font_metadata` reads the physical attributes of every `FONT<n>` entry.
: `emit_specs` turns each (font, code point) pair into a tab-separated record
  stored under its MD5 digest, skipping files that already exist.
: `GlyphSpecPipeline` chains the stages so every document is validated before
  the first file is written.

Goal
: Tell atlas build steps exactly which glyphs to bake per font, and with which
  parameters, in a form that is safe to regenerate incrementally.
"""

from glyphspec.fonts.characters import CodePointSets, decode_code_points, resolve_characters
from glyphspec.fonts.logging import PipelineLogger
from glyphspec.fonts.metadata import FontMetadata, load_font_metadata
from glyphspec.fonts.pipeline import GlyphSpecPipeline, PipelineResult
from glyphspec.fonts.specs import EmissionReport, SpecRecord, emit_specs
from glyphspec.fonts.usage import FontUsage, FontUsageBuilder, resolve_font_usages


__all__ = [
    "CodePointSets",
    "EmissionReport",
    "FontMetadata",
    "FontUsage",
    "FontUsageBuilder",
    "GlyphSpecPipeline",
    "PipelineLogger",
    "PipelineResult",
    "SpecRecord",
    "decode_code_points",
    "emit_specs",
    "load_font_metadata",
    "resolve_characters",
    "resolve_font_usages",
]
