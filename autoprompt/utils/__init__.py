"""
AUTOPROMPT Utilities Package - Cross-Cutting Helpers

Session logging for the CLI and batch runs.  Kept free of heavier imports so
the package can be loaded without pulling in pandas or rich.
"""

from .logging import (
    setup_logging,
    get_logger,
    get_current_log_file,
    get_session_id,
    log_extraction_start,
    log_extraction_complete,
    log_text_content,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_current_log_file",
    "get_session_id",
    "log_extraction_start",
    "log_extraction_complete",
    "log_text_content",
]
