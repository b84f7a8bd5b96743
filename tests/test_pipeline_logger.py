from __future__ import annotations

import logging

import pytest

from glyphspec.fonts import logging as pipeline_logging
from glyphspec.fonts.logging import PipelineLogger


def test_logger_without_cli_uses_logging(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(pipeline_logging, "_resolve_state", lambda: None)
    progress_logger = PipelineLogger(verbose=True)
    with caplog.at_level(logging.INFO, logger="glyphspec.fonts"):
        progress_logger.info("resolved %d glyphs", 3)
        progress_logger.debug("verbose detail")
    messages = [record.message for record in caplog.records]
    assert messages == ["resolved 3 glyphs", "verbose detail"]


def test_quiet_debug_goes_to_debug_level(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(pipeline_logging, "_resolve_state", lambda: None)
    with caplog.at_level(logging.DEBUG, logger="glyphspec.fonts"):
        PipelineLogger().debug("hidden %s", "detail")
    assert [(record.levelno, record.message) for record in caplog.records] == [
        (logging.DEBUG, "hidden detail")
    ]


def test_progress_is_a_noop_without_console(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(pipeline_logging, "_resolve_state", lambda: None)
    with PipelineLogger().progress("Emitting", total=2) as advance:
        advance(1)
        advance(1)
