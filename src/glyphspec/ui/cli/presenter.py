"""Rich-aware presenters for CLI output."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rich import box
from rich.table import Table
import typer

from glyphspec.fonts.characters import CodePointSets
from glyphspec.fonts.metadata import FontMetadata
from glyphspec.fonts.pipeline import PipelineResult
from glyphspec.fonts.usage import FontUsage

from .state import CLIState


def _build_table(*, title: str | None, columns: Sequence[str]) -> Table:
    """Create a Rich table with the house style."""
    table = Table(
        title=title or None,
        box=box.SQUARE,
        show_edge=True,
        header_style="bold cyan",
    )
    for column in columns:
        table.add_column(column)
    return table


def _format_path(path: Path) -> str:
    """Format a path relative to the current working directory for display."""
    resolved = path.resolve()
    try:
        return str(resolved.relative_to(Path.cwd()))
    except ValueError:
        return str(resolved)


def _preview(code_points: Sequence[int], limit: int = 24) -> str:
    """Render the first printable code points of a sorted sequence."""
    chars = [chr(cp) if chr(cp).isprintable() else f"U+{cp:04X}" for cp in code_points[:limit]]
    suffix = " …" if len(code_points) > limit else ""
    return "".join(chars) + suffix


def present_usages(usage: FontUsage) -> None:
    """Print one ``TEXT_ID: font font ...`` line per text identifier."""
    for text_id, fonts in usage.as_dict().items():
        typer.echo(" ".join([f"{text_id}:", *(str(font) for font in fonts)]))


def present_fonts(state: CLIState, metadata: Sequence[FontMetadata]) -> None:
    table = _build_table(
        title="Fonts",
        columns=("Font", "TrueType", "Size", "Width", "Height", "StartX", "StartY"),
    )
    for record in metadata:
        table.add_row(
            f"FONT{record.index}",
            record.path or "-",
            str(record.size),
            str(record.width),
            str(record.height),
            str(record.x),
            str(record.y),
        )
    state.console.print(table)


def present_code_points(state: CLIState, code_points: CodePointSets) -> None:
    table = _build_table(title="Required glyphs", columns=("Font", "Glyphs", "Preview"))
    for font in range(len(code_points)):
        ordered = code_points.sorted(font)
        table.add_row(f"FONT{font}", str(len(ordered)), _preview(ordered) or "-")
    state.console.print(table)


def present_build_summary(
    state: CLIState,
    result: PipelineResult,
    *,
    output_dir: Path,
    dry_run: bool = False,
) -> None:
    """Summarise an emission run per font."""
    report = result.report
    columns: tuple[str, ...] = ("Font", "Glyphs", "Existing")
    columns += ("Planned",) if dry_run else ("Written",)
    table = _build_table(title="Glyph specs", columns=columns)

    for font in range(len(result.code_points)):
        counts: dict[str, Any] = report.per_font.get(font, {})
        new_key = "planned" if dry_run else "written"
        table.add_row(
            f"FONT{font}",
            str(len(result.code_points[font])),
            str(counts.get("existing", 0)),
            str(counts.get(new_key, 0)),
        )
    state.console.print(table)

    new_count = len(report.planned) if dry_run else len(report.written)
    verb = "would be written" if dry_run else "written"
    state.console.print(
        f"{new_count} spec file(s) {verb}, {len(report.existing)} already present "
        f"in {_format_path(output_dir)}"
    )


__all__ = [
    "present_build_summary",
    "present_code_points",
    "present_fonts",
    "present_usages",
]
