"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Documents"
OUTPUT_PANEL = "Output"
CONFIG_PANEL = "Configuration"


def _document_argument(metavar: str, help_text: str) -> typer.models.ArgumentInfo:
    return typer.Argument(
        metavar=metavar,
        help=help_text,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    )


ScreensArgument = Annotated[
    Path,
    _document_argument(
        "SCREENS",
        "Screen description XML listing text elements and the font index of each.",
    ),
]

TranslationsArgument = Annotated[
    Path,
    _document_argument(
        "TRANSLATIONS",
        "Translation XML whose trans-unit elements hold source/target strings.",
    ),
]

AttributesArgument = Annotated[
    Path,
    _document_argument(
        "ATTRIBUTES",
        "Physical attributes XML describing every FONT<n> entry.",
    ),
]

OutputDirArgument = Annotated[
    Path,
    typer.Argument(
        metavar="OUTPUT_DIR",
        help="Directory receiving one content-addressed spec file per glyph.",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

ExtraTranslationsOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--extra-translations",
        "-t",
        help="Additional translation document merged into the glyph sets (repeatable).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

DryRunOption = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        help="Resolve every glyph and report the files without writing them.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

FontCountOption = Annotated[
    int | None,
    typer.Option(
        "--font-count",
        min=1,
        help="Number of bitmap fonts (defaults to the configuration value, 3).",
        rich_help_panel=CONFIG_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML configuration file (defaults to $GLYPHSPEC_CONFIG when set).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=CONFIG_PANEL,
    ),
]


__all__ = [
    "AttributesArgument",
    "ConfigOption",
    "DryRunOption",
    "ExtraTranslationsOption",
    "FontCountOption",
    "OutputDirArgument",
    "ScreensArgument",
    "TranslationsArgument",
]
