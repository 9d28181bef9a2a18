"""Unit tests for the logging system with platform-aware paths and rotation."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from navplan.core.logging_system import (
    LoggingError,
    get_logger,
    get_platform_log_dir,
    initialize_logging,
    rotate_logs,
    shutdown_logging,
)
from navplan.core.resource_path import get_config_path


@pytest.fixture
def log_dir(tmp_path: Path):
    """Redirect the platform log directory to a temporary one."""
    with patch("navplan.core.logging_system.get_platform_log_dir", return_value=tmp_path):
        yield tmp_path
    shutdown_logging()


class TestPlatformLogDir:
    """Tests for get_platform_log_dir function."""

    def test_macos_log_dir(self) -> None:
        with patch("platform.system", return_value="Darwin"):
            assert get_platform_log_dir() == Path.home() / "Library" / "Logs" / "NavPlan"

    def test_linux_log_dir(self) -> None:
        with patch("platform.system", return_value="Linux"):
            assert get_platform_log_dir() == Path.home() / ".navplan" / "logs"

    def test_windows_log_dir(self) -> None:
        with patch("platform.system", return_value="Windows"):
            with patch.dict("os.environ", {"APPDATA": "C:/Users/Test/AppData/Roaming"}):
                log_dir = get_platform_log_dir()
                assert "NavPlan" in str(log_dir)
                assert log_dir.name == "Logs"

    def test_unknown_platform_defaults_to_linux(self) -> None:
        with patch("platform.system", return_value="FreeBSD"):
            assert get_platform_log_dir() == Path.home() / ".navplan" / "logs"


class TestLogRotation:
    """Tests for log rotation functionality."""

    def test_no_existing_log(self, tmp_path: Path) -> None:
        rotate_logs(tmp_path, "test.log", 5)
        assert list(tmp_path.glob("*")) == []

    def test_shifts_old_logs(self, tmp_path: Path) -> None:
        (tmp_path / "test.log").write_text("current")
        (tmp_path / "test.log.1").write_text("previous-1")
        (tmp_path / "test.log.2").write_text("previous-2")

        rotate_logs(tmp_path, "test.log", 5)

        assert not (tmp_path / "test.log").exists()
        assert (tmp_path / "test.log.1").read_text() == "current"
        assert (tmp_path / "test.log.2").read_text() == "previous-1"
        assert (tmp_path / "test.log.3").read_text() == "previous-2"

    def test_deletes_oldest(self, tmp_path: Path) -> None:
        (tmp_path / "test.log").write_text("current")
        for i in range(1, 3):
            (tmp_path / f"test.log.{i}").write_text(f"old-{i}")

        rotate_logs(tmp_path, "test.log", keep_count=2)

        assert (tmp_path / "test.log.1").read_text() == "current"
        assert (tmp_path / "test.log.2").read_text() == "old-1"
        assert not (tmp_path / "test.log.3").exists()


class TestLoggingInitialization:
    """Tests for logging system initialization."""

    def test_writes_to_platform_dir(self, log_dir: Path) -> None:
        initialize_logging(use_platform_dir=True)
        get_logger("navplan.test").info("Computed 3 legs")
        shutdown_logging()

        assert "Computed 3 legs" in (log_dir / "navplan.log").read_text()

    def test_missing_config(self) -> None:
        with pytest.raises(LoggingError, match="Logging config file not found"):
            initialize_logging(config_path="/nonexistent/config.yaml")

    def test_shipped_config_levels(self, log_dir: Path) -> None:
        """Component levels from logging.yaml are applied."""
        initialize_logging(get_config_path("logging.yaml"), use_platform_dir=True)
        logger = get_logger("navplan.planning.orchestrator")
        assert logger.level != logging.NOTSET

    def test_disabled_component(self, log_dir: Path) -> None:
        config = log_dir / "logging.yaml"
        config.write_text(
            "file_log:\n  enabled: false\nconsole:\n  enabled: false\n"
            "components:\n  navplan.noisy:\n    enabled: false\n",
            encoding="utf-8",
        )
        initialize_logging(config, use_platform_dir=True)

        assert get_logger("navplan.noisy").disabled
        assert not (log_dir / "navplan.log").exists()
        logging.getLogger("navplan.noisy").disabled = False

    def test_startup_rotates_previous_session(self, log_dir: Path) -> None:
        for session in range(2):
            initialize_logging(use_platform_dir=True)
            get_logger("navplan.test").info("Session %d", session)
            shutdown_logging()

        assert "Session 0" in (log_dir / "navplan.log.1").read_text()
        assert "Session 1" in (log_dir / "navplan.log").read_text()


class TestGetLogger:
    """Tests for logger creation."""

    def test_before_initialization(self) -> None:
        """Loggers are usable without initializing the system."""
        shutdown_logging()
        logger = get_logger("navplan.uninitialized")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "navplan.uninitialized"

    def test_cached_after_initialization(self, log_dir: Path) -> None:
        initialize_logging(use_platform_dir=True)
        assert get_logger("navplan.test") is get_logger("navplan.test")
