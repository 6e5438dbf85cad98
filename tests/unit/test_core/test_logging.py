"""Unit tests for logging configuration."""

import json
from pathlib import Path

import pytest
from loguru import logger

from weather_locator.core.logging import setup_logging


class TestLogging:
    """Tests for Loguru logging setup."""

    def test_setup_logging_does_not_raise(self) -> None:
        """setup_logging with valid log level does not raise."""
        setup_logging("DEBUG")
        setup_logging("INFO")
        setup_logging("WARNING")

    def test_setup_logging_case_insensitive(self) -> None:
        """setup_logging accepts case-insensitive log levels."""
        setup_logging("info")
        setup_logging("debug")

    def test_file_sink(self, tmp_path: Path) -> None:
        """A log file is written when log_dir is set."""
        log_dir = tmp_path / "logs"
        setup_logging("INFO", log_dir=str(log_dir))
        logger.info("hello from the test")
        logger.complete()
        log_file = log_dir / "weather-locator.log"
        assert log_file.exists()
        assert "hello from the test" in log_file.read_text()
        setup_logging("INFO")

    def test_json_sink_takes_flagged_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Records in a json_output context are serialized; others stay text."""
        setup_logging("INFO")
        try:
            with logger.contextualize(json_output=True):
                logger.info("structured record")
            logger.info("plain record")
        finally:
            logger.remove()

        lines = capsys.readouterr().err.strip().splitlines()
        assert len(lines) == 2
        payload = json.loads(lines[0])
        assert payload["record"]["message"] == "structured record"
        assert payload["record"]["extra"]["json_output"] is True
        assert "plain record" in lines[1]
        assert "structured record" not in lines[1]
