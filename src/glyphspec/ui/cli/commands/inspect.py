"""Read-only commands exposing each resolution stage on its own."""

from __future__ import annotations

import typer

from glyphspec.core.exceptions import GlyphSpecError, format_failure
from glyphspec.fonts.pipeline import GlyphSpecPipeline

from .._options import (
    AttributesArgument,
    ConfigOption,
    ExtraTranslationsOption,
    FontCountOption,
    ScreensArgument,
    TranslationsArgument,
)
from ..diagnostics import CliEmitter
from ..presenter import present_code_points, present_fonts, present_usages
from ..state import emit_error, get_cli_state
from .build import resolve_config


def _pipeline(config: ConfigOption, font_count: FontCountOption) -> GlyphSpecPipeline:
    settings = resolve_config(config, font_count)
    return GlyphSpecPipeline(settings, emitter=CliEmitter(get_cli_state()))


def usages(
    screens: ScreensArgument,
    font_count: FontCountOption = None,
    config: ConfigOption = None,
) -> None:
    """List every text identifier with the font indices that render it."""
    pipeline = _pipeline(config, font_count)
    try:
        usage = pipeline.resolve_usage([screens])
    except GlyphSpecError as exc:
        emit_error(format_failure(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    present_usages(usage)


def glyphs(
    screens: ScreensArgument,
    translations: TranslationsArgument,
    extra_translations: ExtraTranslationsOption = None,
    font_count: FontCountOption = None,
    config: ConfigOption = None,
) -> None:
    """Show how many glyphs each font requires, without writing anything."""
    pipeline = _pipeline(config, font_count)
    try:
        usage = pipeline.resolve_usage([screens])
        code_points = pipeline.resolve_code_points(
            usage, [translations, *(extra_translations or ())]
        )
    except GlyphSpecError as exc:
        emit_error(format_failure(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    present_code_points(get_cli_state(), code_points)


def fonts(
    attributes: AttributesArgument,
    font_count: FontCountOption = None,
    config: ConfigOption = None,
) -> None:
    """Show the rendering parameters loaded for every font index."""
    pipeline = _pipeline(config, font_count)
    try:
        metadata = pipeline.load_metadata(attributes)
    except GlyphSpecError as exc:
        emit_error(format_failure(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    present_fonts(get_cli_state(), metadata)


__all__ = ["fonts", "glyphs", "usages"]
