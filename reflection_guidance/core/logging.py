"""
Structured logging configuration using structlog.

Provides consistent, structured logging across the package with:
- JSON output in production
- Pretty console output in development
- Context binding for request tracing
- File output to the log directory (session-based rotation)
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import structlog
from structlog.typing import Processor

from reflection_guidance.core.config import settings


def _cull_old_logs(logs_dir: Path, keep: int) -> None:
    """Delete old log files, keeping only the N most recent.

    Args:
        logs_dir: Directory containing log files
        keep: Number of recent log files to retain
    """
    log_files = sorted(
        logs_dir.glob("guidance_*.log"),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )

    for old_file in log_files[keep:]:
        try:
            os.remove(old_file)
        except OSError:
            pass  # Ignore permission errors, etc.


def configure_logging(
    log_sessions_to_keep: Optional[int] = None, log_dir: Optional[Path] = None
) -> None:
    """Configure structlog for the application.

    Call this once at application startup, before any logging.

    Creates a new timestamped log file per session and automatically
    culls old logs, keeping only the most recent N sessions.

    Args:
        log_sessions_to_keep: Number of recent session logs to retain
            (default: settings.log_sessions_to_keep)
        log_dir: Directory for log files (default: settings.log_dir)

    Outputs:
        - Console (colored in dev, plain in production)
        - File: <log_dir>/guidance_YYYYMMDD_HHMMSS.log
    """
    keep = log_sessions_to_keep or settings.log_sessions_to_keep
    logs_dir = Path(log_dir or settings.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    # keep-1 to make room for the new file
    _cull_old_logs(logs_dir, keep=max(keep - 1, 0))

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"guidance_{timestamp}.log"

    shared_processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
    ]

    if settings.debug:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
        level = logging.DEBUG
    else:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
        level = logging.INFO

    # Clear any existing handlers first (needed for reconfiguration in tests)
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_file, mode="w")
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(file_handler)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_stderr_logging() -> None:
    """Configure structlog to write to stderr only, without a session file.

    For command-line tools whose stdout carries data (e.g. JSON output).
    """
    if settings.debug:
        renderer: Processor = structlog.dev.ConsoleRenderer(colors=False)
        level = logging.DEBUG
    else:
        renderer = structlog.processors.JSONRenderer()
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Bound structlog logger

    Usage:
        from reflection_guidance.core.logging import get_logger

        log = get_logger(__name__)
        log.info("something_happened", key="value")
    """
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """
    Bind context variables that will be included in all subsequent logs.

    Useful for request-scoped context like thread_id:

        bind_context(thread_id=turn.session.thread_id)
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables from the logging context."""
    structlog.contextvars.clear_contextvars()
