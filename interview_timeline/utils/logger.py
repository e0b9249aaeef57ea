"""
Interview Timeline Logging System

Logging setup with Rich console output, optional rotating file logs,
and structured (structlog) event logging for the cache layer and API.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Dict, Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
import structlog

from .config import LoggingConfig, get_config


class TimelineLogger:
    """
    Centralized logging system for the timeline engine.

    Console logging goes to stderr so that command output on stdout stays
    machine-readable.
    """

    def __init__(self, config: Optional[LoggingConfig] = None):
        """
        Initialize the logging system.

        Args:
            config: Logging configuration, uses global config if None
        """
        if config is None:
            try:
                self.config = get_config().logging
            except RuntimeError:
                self.config = LoggingConfig()
        else:
            self.config = config
        self.console = Console(stderr=True)
        self.loggers: Dict[str, logging.Logger] = {}
        self._setup_logging()

    def _setup_logging(self):
        """Setup the main logging configuration."""
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, self.config.level))
        root_logger.handlers.clear()

        if self.config.console_format == "rich":
            console_handler = RichHandler(
                console=self.console,
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True
            )
            console_format = "%(message)s"
        else:
            console_handler = logging.StreamHandler(sys.stderr)
            if self.config.console_format == "json":
                console_format = '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
            else:
                console_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

        console_handler.setFormatter(logging.Formatter(console_format))
        root_logger.addHandler(console_handler)

        if self.config.log_to_file:
            log_dir = Path(self.config.log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / "interview_timeline.log",
                maxBytes=10*1024*1024,  # 10MB
                backupCount=self.config.max_log_files
            )

            if self.config.file_format == "json":
                file_format = '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "module": "%(module)s", "function": "%(funcName)s", "line": %(lineno)d, "message": "%(message)s"}'
            else:
                file_format = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s"

            file_handler.setFormatter(logging.Formatter(file_format))
            root_logger.addHandler(file_handler)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer()
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger instance for a specific module."""
        if name not in self.loggers:
            self.loggers[name] = logging.getLogger(name)
        return self.loggers[name]

    def log_analysis_summary(self, summary: Dict[str, Any]):
        """
        Log and render a summary of one timeline analysis.

        Args:
            summary: Flat mapping of metric name to value
        """
        logger = self.get_logger("interview_timeline.analysis")
        logger.info("Timeline analysis summary", extra={"summary": summary})

        table = Table(title="Timeline Analysis")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")

        for key, value in summary.items():
            if isinstance(value, float):
                value_str = f"{value:.2f}"
            else:
                value_str = str(value)
            table.add_row(key.replace("_", " ").title(), value_str)

        self.console.print(table)


# Global logger instance
_global_logger: Optional[TimelineLogger] = None


def get_logger(name: str = "interview_timeline") -> logging.Logger:
    """Get a logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = TimelineLogger()
    return _global_logger.get_logger(name)


def setup_logging(config: Optional[LoggingConfig] = None) -> TimelineLogger:
    """Setup the global logging system."""
    global _global_logger
    _global_logger = TimelineLogger(config)
    return _global_logger
