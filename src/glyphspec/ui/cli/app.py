"""Typer application wiring for the spec-glyphs CLI."""

from __future__ import annotations

from rich.traceback import Traceback
import typer

from glyphspec.core.exceptions import format_failure
from glyphspec.version import get_version

from .commands.build import build
from .commands.inspect import fonts, glyphs, usages
from .state import debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Compute the glyphs each bitmap font must render and emit their specs.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit(code=0)


@app.callback()
def _app_root(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Print the installed version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
) -> None:
    _ = version
    ctx.obj = get_cli_state()
    set_cli_state(verbosity=verbose, debug=debug)


app.command(name="build")(build)
app.command(name="usages")(usages)
app.command(name="glyphs")(glyphs)
app.command(name="fonts")(fonts)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - defensive catch-all
        state = get_cli_state()
        if state.show_tracebacks:
            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(format_failure(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
