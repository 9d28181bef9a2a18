"""Logging system for the planning engine and its front-ends.

This module provides YAML-configurable logging with per-component loggers,
platform-aware log locations, and startup-based rotation.

Platform-specific log locations:
    - macOS: ~/Library/Logs/NavPlan/navplan.log
    - Linux: ~/.navplan/logs/navplan.log
    - Windows: %AppData%/NavPlan/Logs/navplan.log

Each application start rotates logs, keeping the last 5 runs.

Typical usage example:
    from navplan.core.logging_system import get_logger

    logger = get_logger(__name__)
    logger.info("Computed %d legs", len(legs))
"""

import logging
import logging.handlers
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}
_initialized = False


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get platform-specific log directory.

    Returns:
        Path to the platform-appropriate log directory:
        - macOS: ~/Library/Logs/NavPlan
        - Linux: ~/.navplan/logs
        - Windows: %AppData%/NavPlan/Logs
    """
    system = platform.system()

    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / "NavPlan"
    elif system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "NavPlan" / "Logs"
    else:
        return Path.home() / ".navplan" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = "navplan.log", keep_count: int = 5) -> None:
    """Rotate logs on startup, keeping the last N runs.

    Renames the current log to navplan.log.1, shifts older logs, and deletes
    logs beyond keep_count.

    Args:
        log_dir: Directory containing log files.
        log_filename: Base name of the log file.
        keep_count: Number of old logs to keep.
    """
    log_file = log_dir / log_filename

    if not log_file.exists():
        return

    oldest_log = log_dir / f"{log_filename}.{keep_count}"
    if oldest_log.exists():
        oldest_log.unlink()

    for i in range(keep_count - 1, 0, -1):
        old_log = log_dir / f"{log_filename}.{i}"
        if old_log.exists():
            old_log.rename(log_dir / f"{log_filename}.{i + 1}")

    log_file.rename(log_dir / f"{log_filename}.1")


def initialize_logging(config_path: str | Path | None = None, use_platform_dir: bool = True) -> None:
    """Initialize the logging system from YAML configuration.

    Call once at application startup. Library code never calls this; it only
    asks for loggers through get_logger().

    Args:
        config_path: Path to logging configuration YAML file.
            If None, uses default configuration.
        use_platform_dir: If True, use platform-specific log directory.
            If False, use directory from config (for development/testing).

    Raises:
        LoggingError: If the configuration file is missing or unreadable.

    Examples:
        >>> initialize_logging("config/logging.yaml")
        >>> get_logger("navplan.cli").info("Logging initialized")
    """
    global _logging_config, _initialized

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise LoggingError(f"Logging config file not found: {config_path}")
        try:
            with config_path.open("r", encoding="utf-8") as f:
                _logging_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e
    else:
        _logging_config = _get_default_config()

    if use_platform_dir:
        _logging_config["log_dir"] = str(get_platform_log_dir())

    file_config = _logging_config.get("file_log", {})
    if file_config.get("enabled", True):
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        rotate_logs(
            log_dir,
            file_config.get("filename", "navplan.log"),
            file_config.get("backup_count", 5),
        )

    _configure_root_logger()
    _loggers_cache.clear()
    _initialized = True

    # Module loggers are usually created at import time, before this runs.
    for name in _logging_config.get("components", {}):
        get_logger(name)


def _get_default_config() -> dict[str, Any]:
    """Get default logging configuration.

    Returns:
        Default logging configuration dictionary.
    """
    return {
        "version": 1,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "file_log": {
            "enabled": True,
            "filename": "navplan.log",
            "backup_count": 5,
        },
        "console": {
            "enabled": True,
            "level": "WARNING",
        },
        "components": {},
    }


def _configure_root_logger() -> None:
    """Configure the root logger with handlers."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_config = _logging_config.get("console", {})
    if console_config.get("enabled", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_config.get("level", "INFO")))
        console_handler.setFormatter(_get_formatter())
        root_logger.addHandler(console_handler)

    file_config = _logging_config.get("file_log", {})
    if file_config.get("enabled", True):
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        file_handler = logging.FileHandler(
            log_dir / file_config.get("filename", "navplan.log"),
            mode="w",
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_get_formatter())
        root_logger.addHandler(file_handler)


class MillisecondFormatter(logging.Formatter):
    """Formatter that appends milliseconds with a dot separator."""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module or component.

    Loggers are cached. When logging has been initialized, per-component
    levels from the 'components' section of the config are applied, and a
    component can be silenced with ``enabled: false``. Before initialization
    the plain standard-library logger is returned, so importing the library
    never touches the filesystem.

    Args:
        name: Logger name (typically ``__name__``).

    Returns:
        Logger instance.

    Note:
        Use lazy formatting (%) instead of f-strings.
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)
    if not _initialized:
        return logger

    component_config = _logging_config.get("components", {}).get(name, {})
    if component_config.get("enabled", True):
        if "level" in component_config:
            logger.setLevel(getattr(logging, component_config["level"]))
    else:
        logger.disabled = True

    _loggers_cache[name] = logger
    return logger


def shutdown_logging() -> None:
    """Flush and close all handlers and detach them from the root logger."""
    global _initialized
    logging.shutdown()
    logging.getLogger().handlers.clear()
    _loggers_cache.clear()
    _initialized = False
