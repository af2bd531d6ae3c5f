"""
Utility functions for prowjobs.

Logging setup for processes embedding the translation layer.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from prowjobs.config import ProwJobsConfig


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "structured",
    console_output: bool = True,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Set up logging for the prowjobs package.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: "structured" (JSON) or "pretty" (human-readable)
        console_output: Also log to console
        log_file: Optional path to log file

    Returns:
        Configured logger
    """
    logger = logging.getLogger("prowjobs")
    logger.setLevel(getattr(logging, log_level.upper()))
    logger.handlers = []  # Clear existing handlers

    # File handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        if log_format == "structured":
            file_handler.setFormatter(StructuredFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
        logger.addHandler(file_handler)

    # Console handler
    if console_output:
        if log_format == "pretty":
            console_handler: logging.Handler = RichHandler(rich_tracebacks=True, show_time=False)
        else:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(StructuredFormatter())

        logger.addHandler(console_handler)

    return logger


def setup_logging_from_config(config: ProwJobsConfig) -> logging.Logger:
    """Set up logging from a loaded ProwJobsConfig."""
    return setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        console_output=config.log_console,
        log_file=config.log_file,
    )


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # ProwJob fields passed as extra={"prow_job": prow_job_fields(pj)}
        if hasattr(record, "prow_job"):
            log_data.update(record.prow_job)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)
