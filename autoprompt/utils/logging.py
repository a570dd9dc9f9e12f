"""
AUTOPROMPT Logging Utilities - Session Debug & Audit Logging

Overview:
---------
Centralised logging configuration for the AUTOPROMPT command line.  Provides
session-based file logging with unique identifiers, configurable verbosity,
and structured output for tracing extraction runs, quota decisions, and job
queue transitions.

Log Location:
-------------
- Default: ~/.autoprompt/logs/ (follows ``AUTOPROMPT_HOME_DIR``)
- Each CLI run creates a timestamped log file with session ID
- A symlink 'autoprompt.log' always points to the latest session
- Can be overridden via AUTOPROMPT_LOG_DIR environment variable

Log File Format:
----------------
- autoprompt_YYYYMMDD_HHMMSS_<session_id>.log  (per-session files)
- autoprompt.log (symlink to latest)

Log Levels:
-----------
- DEBUG: Segment counts per delimiter pass, input previews
- INFO: Extraction summaries, batch progress, queue transitions
- WARNING: Truncated input, quota refusals, skipped files
- ERROR: Load failures, rejected job transitions

Usage:
------
    from autoprompt.utils.logging import get_logger, setup_logging

    # Call once at startup (CLI entry point)
    log_file = setup_logging(level="DEBUG")

    # Library modules use the standard pattern
    logger = logging.getLogger(__name__)
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

# ============================================================================
# Constants
# ============================================================================

DEFAULT_LOG_LEVEL = "INFO"
SYMLINK_NAME = "autoprompt.log"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(session_id)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# File logging also records line numbers
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(session_id)s | %(name)s:%(lineno)d | %(message)s"

_logging_initialised = False
_log_file_path: Optional[Path] = None
_session_id: Optional[str] = None


# ============================================================================
# Session ID Filter / Formatter
# ============================================================================

class SessionIdFilter(logging.Filter):
    """Add session_id to all log records."""

    def __init__(self, session_id: str):
        super().__init__()
        self.session_id = session_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = self.session_id  # type: ignore[attr-defined]
        return True


class SessionFormatter(logging.Formatter):
    """Formatter that adds session_id, defaulting to 'N/A' if not present."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "session_id"):
            record.session_id = _session_id or "N/A"  # type: ignore[attr-defined]
        return super().format(record)


# ============================================================================
# Setup Functions
# ============================================================================

def generate_session_id() -> str:
    """Generate a short unique session ID (6 characters)."""
    return uuid.uuid4().hex[:6]


def get_log_directory() -> Path:
    """Get the log directory, respecting AUTOPROMPT_LOG_DIR."""
    env_log_dir = os.getenv("AUTOPROMPT_LOG_DIR")
    if env_log_dir:
        return Path(env_log_dir)
    from ..config import get_config

    return get_config().log_dir


def generate_log_filename(session_id: str) -> str:
    """Generate a timestamped log filename with session ID."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"autoprompt_{timestamp}_{session_id}.log"


def setup_logging(
    level: Optional[str] = None,
    log_dir: Optional[Path] = None,
    console_output: bool = False,
    quiet: bool = False,
) -> Path:
    """
    Initialise AUTOPROMPT logging with a session file and optional console output.

    Parameters
    ----------
    level : str, optional
        Log level: DEBUG, INFO, WARNING, ERROR. Defaults to INFO.
        Can also be set via AUTOPROMPT_LOG_LEVEL environment variable.
    log_dir : Path, optional
        Directory for log files. Defaults to ~/.autoprompt/logs/
    console_output : bool
        If True, also log to console (stderr). Default False.
    quiet : bool
        If True, suppress console output entirely. Default False.

    Returns
    -------
    Path
        Path to the log file being written to.
    """
    global _logging_initialised, _log_file_path, _session_id

    _session_id = generate_session_id()

    if level is None:
        level = os.getenv("AUTOPROMPT_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    if log_dir is None:
        log_dir = get_log_directory()
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / generate_log_filename(_session_id)
    _log_file_path = log_file

    root_logger = logging.getLogger("autoprompt")

    # Repeated setup (tests, nested CLI invocations) must not stack handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for f in root_logger.filters[:]:
        root_logger.removeFilter(f)

    root_logger.setLevel(log_level)
    root_logger.addFilter(SessionIdFilter(_session_id))

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(SessionFormatter(FILE_LOG_FORMAT, LOG_DATE_FORMAT))
    root_logger.addHandler(file_handler)

    if console_output and not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(SessionFormatter(LOG_FORMAT, LOG_DATE_FORMAT))
        root_logger.addHandler(console_handler)

    root_logger.propagate = False

    symlink_path = log_dir / SYMLINK_NAME
    try:
        if symlink_path.is_symlink() or symlink_path.exists():
            symlink_path.unlink()
        symlink_path.symlink_to(log_file.name)
    except OSError:
        # Symlinks are unavailable on some filesystems; the session file still exists
        pass

    _logging_initialised = True

    root_logger.info("=" * 80)
    root_logger.info("AUTOPROMPT Logging Session Started")
    root_logger.info(f"  Session ID: {_session_id}")
    root_logger.info(f"  Log file: {log_file}")
    root_logger.info(f"  Log level: {level.upper()}")
    root_logger.info("=" * 80)

    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``autoprompt`` namespace.

    Unlike ``logging.getLogger`` this initialises session logging on first
    use, so it is meant for entry points rather than library modules.
    """
    if not _logging_initialised:
        setup_logging()

    if name.startswith("autoprompt"):
        return logging.getLogger(name)
    return logging.getLogger(f"autoprompt.{name}")


def get_current_log_file() -> Optional[Path]:
    """Return the path to the current log file, if logging is initialised."""
    return _log_file_path


def get_session_id() -> Optional[str]:
    """Return the current session ID, if logging is initialised."""
    return _session_id


# ============================================================================
# Structured Logging Helpers
# ============================================================================

def log_extraction_start(
    logger: logging.Logger,
    source: str,
    char_count: int,
    platform: Optional[str] = None,
) -> None:
    """Log the start of an extraction run."""
    logger.info("-" * 60)
    logger.info("EXTRACTION START")
    logger.info(f"  Source: {source}")
    logger.info(f"  Characters: {char_count}")
    if platform:
        logger.info(f"  Platform: {platform}")
    logger.info("-" * 60)


def log_extraction_complete(
    logger: logging.Logger,
    source: str,
    prompt_count: int,
    total_tokens: int,
    duration_seconds: Optional[float] = None,
) -> None:
    """Log extraction completion summary."""
    logger.info("-" * 60)
    logger.info("EXTRACTION COMPLETE")
    logger.info(f"  Source: {source}")
    logger.info(f"  Prompts: {prompt_count}")
    logger.info(f"  Estimated tokens: {total_tokens}")
    if duration_seconds is not None:
        logger.info(f"  Duration: {duration_seconds:.3f}s")
    logger.info("-" * 60)


def log_text_content(
    logger: logging.Logger,
    source: str,
    text_content: str,
    truncate_at: int = 1000,
) -> None:
    """Log input text (for debugging segmentation issues)."""
    if len(text_content) > truncate_at:
        display_text = text_content[:truncate_at] + f"... [TRUNCATED, {len(text_content)} chars total]"
    else:
        display_text = text_content

    logger.debug(f"TEXT CONTENT (from {source}, {len(text_content)} chars):\n{display_text}")
