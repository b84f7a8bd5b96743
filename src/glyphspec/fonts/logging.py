"""Small logging helpers that integrate with the spec-glyphs CLI."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
import logging
from typing import Any


logger = logging.getLogger("glyphspec.fonts")


def _resolve_state() -> object | None:
    try:
        from glyphspec.ui.cli.state import get_cli_state
    except ImportError:  # pragma: no cover - fallback when the CLI is unavailable
        return None
    try:
        return get_cli_state(create=False)
    except RuntimeError:
        return None


@dataclass(slots=True)
class PipelineLogger:
    """Route pipeline progress to the CLI console when one is active."""

    verbose: bool = False
    _state: object | None = None

    def __post_init__(self) -> None:
        self._state = _resolve_state()

    def _render_message(self, message: str, args: tuple[Any, ...]) -> str:
        if args:
            message = message % args
        return message

    def info(self, message: str, *args: Any) -> None:
        message = self._render_message(message, args)
        if self._state is not None:
            self._state.console.log(message)
            return
        logger.info(message)

    def debug(self, message: str, *args: Any) -> None:
        """Emit a verbose message when verbose mode is enabled."""
        if not self.verbose:
            logger.debug(self._render_message(message, args))
            return
        self.info(message, *args)

    @contextmanager
    def progress(self, task: str, total: int | None = None) -> Iterator[Callable[[int], None]]:
        """Yield a progress updater, rendered with Rich when a CLI console exists."""
        if self._state is None:

            def _noop(step: int = 1) -> None:
                return

            yield _noop
            return

        from rich.progress import (
            BarColumn,
            Progress,
            SpinnerColumn,
            TaskID,
            TextColumn,
            TimeElapsedColumn,
        )

        with Progress(
            SpinnerColumn(),
            TextColumn(f"[bold cyan]{task}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}" if total else "{task.completed}"),
            TimeElapsedColumn(),
            console=self._state.console,
            transient=not self.verbose,
        ) as progress:
            task_id: TaskID = progress.add_task(task, total=total)

            def _advance(step: int = 1) -> None:
                progress.update(task_id, advance=step)

            yield _advance


__all__ = ["PipelineLogger"]
