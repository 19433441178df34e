"""Tests for structured logging setup."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from apollyon_sheet.core.config import Settings
from apollyon_sheet.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore stdout logging and structlog defaults after each test."""
    yield
    clear_context()
    configure_logging()
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


class TestLogging:
    """Tests for logging helpers."""

    def test_bind_and_clear_context(self) -> None:
        """Test context variables are bound and cleared."""
        bind_context(sheet="Kael")
        assert structlog.contextvars.get_contextvars() == {"sheet": "Kael"}

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test JSON log lines carry the app tag and keyword context."""
        configure_logging(level="INFO", json_format=True)

        get_logger("test").info("Sheet exported", characters=12)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        assert '"event": "Sheet exported"' in line
        assert '"app": "apollyon_sheet"' in line
        assert '"characters": 12' in line

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test records below the configured level are dropped."""
        configure_logging(level="WARNING", json_format=True)

        get_logger("test").info("hidden")

        assert "hidden" not in capsys.readouterr().out

    def test_unknown_level_falls_back_to_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test an unrecognised level name logs at INFO."""
        configure_logging(level="LOUD", json_format=True)

        get_logger("test").debug("quiet")
        get_logger("test").info("shown")

        out = capsys.readouterr().out
        assert "quiet" not in out
        assert "shown" in out


class TestLogFile:
    """Tests for file output."""

    def test_entries_written_to_file(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a configured log file receives JSON lines instead of stdout."""
        log_file = tmp_path / "logs" / "sheet.log"
        configure_logging(level="INFO", json_format=True, log_file=log_file)

        get_logger("test").info("Sheet imported", duplicates=0)
        configure_logging()

        entry = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert entry["event"] == "Sheet imported"
        assert entry["duplicates"] == 0
        assert "Sheet imported" not in capsys.readouterr().out

    def test_file_appended_across_configurations(self, tmp_path: Path) -> None:
        """Test reconfiguring keeps earlier lines in the file."""
        log_file = tmp_path / "sheet.log"

        configure_logging(json_format=True, log_file=log_file)
        get_logger("first").info("first")
        configure_logging(json_format=True, log_file=log_file)
        get_logger("second").info("second")
        configure_logging()

        events = [json.loads(line)["event"] for line in log_file.read_text().splitlines()]
        assert events == ["first", "second"]

    def test_configure_from_settings(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test the log file and level come from the environment."""
        log_file = tmp_path / "env.log"
        monkeypatch.setenv("APOLLYON_LOG_FILE", str(log_file))
        monkeypatch.setenv("APOLLYON_JSON_LOGS", "true")
        monkeypatch.setenv("APOLLYON_LOG_LEVEL", "WARNING")

        configure_from_settings(Settings())
        get_logger("test").info("dropped")
        get_logger("test").warning("Imported mote not in catalog", mote="Zzz")
        configure_logging()

        lines = log_file.read_text().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["mote"] == "Zzz"
