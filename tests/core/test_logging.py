"""Tests for structured logging setup and the engine's log events."""

import io
import itertools
import json
import sys

import pytest
from structlog.testing import capture_logs

from threader.chunking import engine
from threader.chunking.engine import get_chunks
from threader.core.logging import _should_use_json_format, log, setup_logging

pytestmark = pytest.mark.unit

_CI_VARS = ["CI", "CONTINUOUS_INTEGRATION", "GITHUB_ACTIONS", "JENKINS_URL"]


class _TerminalStream:
    def isatty(self):
        return True


class TestSetupLogging:
    def test_json_format(self, capsys):
        setup_logging("json", "INFO")
        log.info("test.event", chunks=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip())
        assert record["event"] == "test.event"
        assert record["level"] == "info"
        assert record["chunks"] == 3
        assert "timestamp" in record

    def test_plain_format(self, capsys):
        setup_logging("plain", "INFO")
        log.info("test.event", chunks=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "test.event" in captured.err
        assert "chunks=3" in captured.err
        assert not captured.err.lstrip().startswith("{")

    def test_debug_is_filtered_at_default_level(self, capsys):
        setup_logging("plain")
        log.debug("test.hidden")
        log.info("test.also_hidden")
        log.warning("test.shown")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "test.hidden" not in captured.err
        assert "test.also_hidden" not in captured.err
        assert "test.shown" in captured.err

    def test_debug_level_lets_debug_through(self, capsys):
        setup_logging("plain", "debug")
        log.debug("test.visible")
        assert "test.visible" in capsys.readouterr().err


class TestAutoFormat:
    def test_ci_environment_selects_json(self, monkeypatch, capsys):
        for name in _CI_VARS:
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("CI", "1")

        setup_logging("auto", "INFO")
        log.info("test.ci")

        assert json.loads(capsys.readouterr().err.strip())["event"] == "test.ci"

    def test_terminal_selects_plain(self, monkeypatch):
        for name in _CI_VARS:
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr(sys, "stderr", _TerminalStream())
        assert _should_use_json_format() is False

    def test_redirected_stderr_selects_json(self, monkeypatch):
        for name in _CI_VARS:
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr(sys, "stderr", io.StringIO())
        assert _should_use_json_format() is True


class TestEngineLogging:
    def test_library_calls_write_nothing_by_default(self, capsys, options_factory):
        options = options_factory(maximum_length=12, enumerate=True)
        chunks = get_chunks("Hello there. General Kenobi.", options)

        assert chunks
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_debug_events_go_to_stderr(self, capsys, options_factory):
        setup_logging("json", "DEBUG")
        options = options_factory(maximum_length=12, enumerate=True)
        get_chunks("Hello there. General Kenobi.", options)

        captured = capsys.readouterr()
        assert captured.out == ""
        events = [json.loads(line)["event"] for line in captured.err.splitlines()]
        assert "chunking.pack.complete" in events
        assert "chunking.enumerate.converged" in events

    def test_iteration_cap_warns_and_still_labels(self, monkeypatch, options_factory):
        overheads = itertools.cycle([2, 3])
        monkeypatch.setattr(
            engine, "enumeration_overhead", lambda total, template: next(overheads)
        )
        options = options_factory(maximum_length=20, enumerate=True)

        with capture_logs() as logs:
            chunks = get_chunks("Alpha bravo charlie delta echo.", options)

        warnings = [
            entry for entry in logs if entry["event"] == "chunking.enumerate.iteration_cap"
        ]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["iterations"] == 21

        total = len(chunks)
        assert total > 0
        for index, chunk in enumerate(chunks, start=1):
            assert chunk.endswith(f" ({index}/{total})")
