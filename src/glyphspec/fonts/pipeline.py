"""End-to-end orchestration of the glyph specification build."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
from pathlib import Path
import xml.etree.ElementTree as ElementTree

from glyphspec.core.config import GlyphSpecConfig
from glyphspec.core.diagnostics import DiagnosticEmitter, ensure_emitter
from glyphspec.core.documents import load_document

from .characters import CodePointSets, resolve_characters
from .logging import PipelineLogger
from .metadata import FontMetadata, load_font_metadata
from .specs import EmissionReport, emit_specs
from .usage import FontUsage, FontUsageBuilder


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineResult:
    """Artifacts produced by every stage of a pipeline run."""

    usage: FontUsage
    code_points: CodePointSets
    metadata: list[FontMetadata]
    report: EmissionReport = field(default_factory=EmissionReport)


class GlyphSpecPipeline:
    """Resolve font usages, required code points, and emit spec files."""

    def __init__(
        self,
        config: GlyphSpecConfig | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
        progress_logger: PipelineLogger | None = None,
    ) -> None:
        self.config = config or GlyphSpecConfig()
        self.emitter = ensure_emitter(emitter)
        self.progress_logger = progress_logger or PipelineLogger()

    def _load(self, path: Path, role: str) -> ElementTree.Element:
        root = load_document(path)
        self.emitter.event("document_loaded", {"path": str(path), "role": role})
        return root

    def resolve_usage(self, screens: Sequence[Path]) -> FontUsage:
        """Build the font usage map from one or more screen documents."""
        builder = FontUsageBuilder(font_count=self.config.font_count)
        for path in screens:
            builder.add_document(self._load(path, "screens"))
        return builder.freeze()

    def resolve_code_points(
        self, usage: FontUsage, translations: Sequence[Path]
    ) -> CodePointSets:
        """Accumulate the code points every font needs across translations."""
        sets = CodePointSets(self.config.font_count)
        for path in translations:
            resolve_characters(
                usage,
                self._load(path, "translations"),
                font_count=self.config.font_count,
                emitter=self.emitter,
                into=sets,
            )
        return sets

    def load_metadata(self, attributes: Path) -> list[FontMetadata]:
        return load_font_metadata(
            self._load(attributes, "attributes"),
            font_count=self.config.font_count,
            max_path_length=self.config.max_path_length,
            emitter=self.emitter,
        )

    def resolve(
        self,
        screens: Path,
        translations: Path,
        attributes: Path,
        *,
        extra_translations: Sequence[Path] = (),
    ) -> PipelineResult:
        """Run every resolution stage without touching the output directory."""
        usage = self.resolve_usage([screens])
        code_points = self.resolve_code_points(usage, [translations, *extra_translations])
        metadata = self.load_metadata(attributes)
        self.progress_logger.debug(
            "Resolved %d text id(s) and %d glyph(s)", len(usage), code_points.total()
        )
        return PipelineResult(usage=usage, code_points=code_points, metadata=metadata)

    def run(
        self,
        screens: Path,
        translations: Path,
        attributes: Path,
        output_dir: Path,
        *,
        extra_translations: Sequence[Path] = (),
        dry_run: bool = False,
    ) -> PipelineResult:
        """Resolve everything first, then emit the spec files into ``output_dir``."""
        result = self.resolve(
            screens, translations, attributes, extra_translations=extra_translations
        )
        logger.debug("Emitting glyph specs into %s (dry_run=%s)", output_dir, dry_run)
        result.report = emit_specs(
            result.code_points,
            result.metadata,
            output_dir,
            max_record_length=self.config.max_record_length,
            dry_run=dry_run,
            emitter=self.emitter,
            progress_logger=self.progress_logger,
        )
        return result


__all__ = ["GlyphSpecPipeline", "PipelineResult"]
