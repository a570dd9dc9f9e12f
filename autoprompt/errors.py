# autoprompt/errors.py
"""Exception hierarchy shared by the loaders, quota ledger, and job queue.

Every error carries a short ``user_message`` that the CLI shows instead of
the low-level detail, plus a category used when logging.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    USER = "user"
    SYSTEM = "system"
    EXTRACTION = "extraction"
    QUOTA = "quota"
    QUEUE = "queue"


class AutopromptError(Exception):
    """Base class for all AUTOPROMPT errors."""

    category: ErrorCategory = ErrorCategory.SYSTEM
    default_user_message = "Something went wrong. Check the log file for details."

    def __init__(self, message: str, *, user_message: str | None = None) -> None:
        super().__init__(message)
        self.user_message = user_message or self.default_user_message


class DocumentLoadError(AutopromptError):
    """Raised when a document cannot be loaded or decoded."""

    category = ErrorCategory.EXTRACTION
    default_user_message = "Could not load the document. Check the file format and try again."


class QuotaExceededError(AutopromptError):
    """Raised when a usage quota would be exceeded."""

    category = ErrorCategory.QUOTA

    def __init__(self, quota_type: str, requested: int, remaining: int) -> None:
        self.quota_type = quota_type
        self.requested = requested
        self.remaining = remaining
        super().__init__(
            f"Quota {quota_type!r} exceeded: requested {requested}, remaining {remaining}",
            user_message=(
                f"Usage limit reached for {quota_type.replace('_', ' ')} "
                f"({remaining} remaining this month)."
            ),
        )


class JobNotFoundError(AutopromptError):
    """Raised when a job id is not present in the queue."""

    category = ErrorCategory.QUEUE

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}", user_message=f"No queued job with id {job_id}.")


class JobStateError(AutopromptError):
    """Raised on a status transition the job's current state does not allow."""

    category = ErrorCategory.QUEUE

    def __init__(self, job_id: str, current: str, action: str) -> None:
        self.job_id = job_id
        self.current = current
        self.action = action
        super().__init__(
            f"Cannot {action} job {job_id} in status {current!r}",
            user_message=f"Job {job_id} is {current} and cannot be {_past_tense(action)}.",
        )


def _past_tense(action: str) -> str:
    irregular = {"cancel": "cancelled", "retry": "retried"}
    if action in irregular:
        return irregular[action]
    return action + ("d" if action.endswith("e") else "ed")
