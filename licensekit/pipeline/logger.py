"""Structured logging for task execution."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for console output."""

    def __init__(self, fmt: str, datefmt: str, colors: dict):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.colors = colors

    def format(self, record):
        levelname = record.levelname
        color = self.colors.get(levelname, self.colors["RESET"])
        reset = self.colors["RESET"]
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{levelname}{reset}"
        return super().format(record)


class BuildLogger:
    """Structured logging for build task execution.

    Logs to the console (colored) and, when ``log_dir`` is given, to a
    timestamped build log file as well.

    Parameters
    ----------
    log_dir : str, optional
        Directory for log files. Default: console only
    log_level : str
        Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_name : str, optional
        Logger name. Default: "licensekit.build"

    Attributes
    ----------
    log_file : Path or None
        Path to the build log file
    logger : logging.Logger
        Python logger instance

    Example
    -------
    >>> logger = BuildLogger("build/logs", log_level="INFO")
    >>> logger.setup()
    >>> logger.log_task_start("licenseMain", "Scanning license on main files")
    >>> logger.log_task_complete("licenseMain", 0.4)
    """

    COLORS = {
        "DEBUG": "\033[0;36m",  # Cyan
        "INFO": "\033[0;34m",  # Blue
        "WARNING": "\033[1;33m",  # Yellow
        "ERROR": "\033[0;31m",  # Red
        "CRITICAL": "\033[1;31m",  # Bold Red
        "RESET": "\033[0m",  # Reset
    }

    def __init__(
        self,
        log_dir: Optional[str] = None,
        log_level: str = "INFO",
        log_name: str = "licensekit.build",
    ):
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_file: Optional[Path] = None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.log_file = self.log_dir / f"build_{timestamp}.log"

        self.log_level = getattr(logging, log_level.upper())
        self.logger = logging.getLogger(log_name)
        self.logger.setLevel(self.log_level)
        self.logger.propagate = False
        self.close()

    def setup(self) -> None:
        """Configure logging handlers.

        Sets up a console handler (colored output) and, if a log directory
        was given, a file handler (detailed logs).
        """
        if self.log_file is not None:
            file_handler = logging.FileHandler(self.log_file, mode="w", encoding="utf-8")
            file_handler.setLevel(self.log_level)
            file_handler.setFormatter(self._get_file_formatter())
            self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(self._get_console_formatter())
        self.logger.addHandler(console_handler)

    def close(self) -> None:
        """Close and detach all handlers, releasing the build log file."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def _get_file_formatter(self) -> logging.Formatter:
        """Get formatter for file logging (detailed, no colors)."""
        return logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def _get_console_formatter(self) -> logging.Formatter:
        """Get formatter for console logging (colored, concise)."""
        return ColoredFormatter(
            fmt="%(asctime)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
            colors=self.COLORS,
        )

    def log_task_start(self, name: str, description: Optional[str] = None) -> None:
        """Log the start of a task."""
        if description:
            self.logger.info("> Task :%s (%s)", name, description)
        else:
            self.logger.info("> Task :%s", name)

    def log_task_complete(self, name: str, duration: float) -> None:
        """Log successful completion of a task.

        Parameters
        ----------
        name : str
            Task name
        duration : float
            Execution time in seconds
        """
        self.logger.info("Task :%s completed in %s", name, self.format_duration(duration))

    def log_task_skipped(self, name: str, reason: str) -> None:
        self.logger.info("> Task :%s SKIPPED (%s)", name, reason)

    def log_task_error(self, name: str, error: str) -> None:
        """Log a task failure."""
        self.logger.error("Task :%s failed: %s", name, error)

    def log_info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    @staticmethod
    def format_duration(seconds: float) -> str:
        """Format duration in seconds to human-readable string.

        Parameters
        ----------
        seconds : float
            Duration in seconds

        Returns
        -------
        str
            Formatted string (e.g., "45.2s", "1m 23s", "2h 15m")
        """
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            mins = int(seconds // 60)
            secs = int(seconds % 60)
            return f"{mins}m {secs}s"
        else:
            hours = int(seconds // 3600)
            mins = int((seconds % 3600) // 60)
            return f"{hours}h {mins}m"
