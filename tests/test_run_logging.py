"""Tests for run logging."""

import logging

import pytest
from rich.console import Console

from sequelize_pg_generator.logging import configure_logging, log_run, verbosity_to_level
from sequelize_pg_generator.logging.cli_service import PACKAGE_LOGGER


@pytest.fixture
def console():
    return Console(record=True, width=120)


class TestVerbosity:
    """Tests for logging configuration."""

    def test_levels(self):
        """Test -v repetitions map to logging levels."""
        assert verbosity_to_level(0) == logging.WARNING
        assert verbosity_to_level(1) == logging.INFO
        assert verbosity_to_level(2) == logging.DEBUG
        assert verbosity_to_level(5) == logging.DEBUG

    def test_configure(self, console):
        """Test a single handler is installed on the package logger."""
        configure_logging(verbosity=1, console=console)
        configure_logging(verbosity=2, console=console)

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.DEBUG
        assert package_logger.propagate is False

    def test_quiet_logs_errors_only(self, console):
        """Test quiet overrides verbosity."""
        configure_logging(verbosity=2, quiet=True, console=console)

        assert logging.getLogger(PACKAGE_LOGGER).level == logging.ERROR


class TestLogRun:
    """Tests for log_run."""

    def test_success(self, console):
        """Test a successful run prints its timing."""
        with log_run(database="blog", schema="public", console=console) as ctx:
            ctx.tables_count = 3

        assert ctx.status == "success"
        assert ctx.database == "blog"
        assert "success in" in console.export_text()

    def test_failure_reraises(self, console):
        """Test a failed run prints its timing and re-raises."""
        with pytest.raises(ValueError):
            with log_run(console=console) as ctx:
                raise ValueError("boom")

        assert ctx.status == "failure"
        assert ctx.error_message == "boom"
        assert "failure in" in console.export_text()

    def test_quiet(self, console):
        """Test quiet runs print nothing."""
        with log_run(quiet=True, console=console):
            pass

        assert console.export_text() == ""

    def test_single_status_line(self, console):
        """Test exactly one line is printed, naming the recorded status."""
        with pytest.raises(KeyError):
            with log_run(console=console) as ctx:
                raise KeyError()

        lines = console.export_text().splitlines()
        assert len(lines) == 1
        assert lines[0].startswith(f"{ctx.status} in ")
        assert ctx.status == "failure"

    def test_failure_logged_with_message(self, console, caplog):
        """Test the recorded error message reaches the debug log."""
        configure_logging(verbosity=2, console=console)
        logging.getLogger(PACKAGE_LOGGER).propagate = True

        with caplog.at_level(logging.DEBUG, logger=PACKAGE_LOGGER):
            with pytest.raises(ValueError):
                with log_run(quiet=True, console=console):
                    raise ValueError("boom")

        assert any("run failed" in record.getMessage() and "boom" in record.getMessage() for record in caplog.records)
