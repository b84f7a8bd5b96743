"""Build command: emit one spec file per glyph required by the screens."""

from __future__ import annotations

from pathlib import Path

import typer

from glyphspec.core.config import GlyphSpecConfig, load_config
from glyphspec.core.exceptions import GlyphSpecError, format_failure
from glyphspec.fonts.logging import PipelineLogger
from glyphspec.fonts.pipeline import GlyphSpecPipeline

from .._options import (
    AttributesArgument,
    ConfigOption,
    DryRunOption,
    ExtraTranslationsOption,
    FontCountOption,
    OutputDirArgument,
    ScreensArgument,
    TranslationsArgument,
)
from ..diagnostics import CliEmitter
from ..presenter import present_build_summary
from ..state import emit_error, get_cli_state


def resolve_config(config: Path | None, font_count: int | None) -> GlyphSpecConfig:
    """Load the configuration, turning failures into a CLI exit."""
    try:
        return load_config(config, font_count=font_count)
    except GlyphSpecError as exc:
        emit_error(format_failure(exc), exception=exc)
        raise typer.Exit(code=1) from exc


def build(
    screens: ScreensArgument,
    translations: TranslationsArgument,
    attributes: AttributesArgument,
    output_dir: OutputDirArgument,
    extra_translations: ExtraTranslationsOption = None,
    dry_run: DryRunOption = False,
    font_count: FontCountOption = None,
    config: ConfigOption = None,
) -> None:
    """Resolve the glyphs every font needs and write their spec files."""
    state = get_cli_state()
    settings = resolve_config(config, font_count)
    pipeline = GlyphSpecPipeline(
        settings,
        emitter=CliEmitter(state),
        progress_logger=PipelineLogger(verbose=state.verbosity >= 1),
    )
    try:
        result = pipeline.run(
            screens,
            translations,
            attributes,
            output_dir,
            extra_translations=tuple(extra_translations or ()),
            dry_run=dry_run,
        )
    except GlyphSpecError as exc:
        emit_error(format_failure(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    present_build_summary(state, result, output_dir=output_dir, dry_run=dry_run)


__all__ = ["build", "resolve_config"]
