# autoprompt/jobs.py
"""Local execution queue for extracted prompts.

Jobs hand prompt text to a local tool (an IDE agent, a CLI assistant) and
track its status.  Allowed transitions::

    pending  -> running | cancelled
    running  -> completed | failed | cancelled
    failed, cancelled -> pending   (retry)

The queue lives in one JSON file; every mutation rewrites it.
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from .errors import JobNotFoundError, JobStateError

logger = logging.getLogger(__name__)


class JobStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


_CANCELLABLE = {JobStatus.PENDING, JobStatus.RUNNING}
_RETRYABLE = {JobStatus.FAILED, JobStatus.CANCELLED}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ExecutionJob:
    """One queued hand-off of prompt data to a local tool."""

    id: str
    tool_target: str
    execution_data: Any
    seq: int
    created_at: str
    batch_id: Optional[str] = None
    priority: int = 0
    status: JobStatus = JobStatus.PENDING
    error_message: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExecutionJob:
        data = dict(data)
        data["status"] = JobStatus(data.get("status", "pending"))
        return cls(**data)


class LocalExecutionQueue:
    """File-backed job queue with validated status transitions."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._jobs: dict[str, ExecutionJob] = {}
        self._seq = 0
        if self.path.exists():
            self._load()

    @classmethod
    def from_config(cls) -> LocalExecutionQueue:
        from .config import get_config

        return cls(get_config().queue_path)

    # -- persistence -----------------------------------------------------

    def _load(self) -> None:
        data = json.loads(self.path.read_text(encoding="utf-8"))
        for raw in data.get("jobs", []):
            job = ExecutionJob.from_dict(raw)
            self._jobs[job.id] = job
        self._seq = max((j.seq for j in self._jobs.values()), default=0)

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        jobs = [j.to_dict() for j in sorted(self._jobs.values(), key=lambda j: j.seq)]
        self.path.write_text(
            json.dumps({"jobs": jobs, "saved_at": _now()}, indent=2, default=str),
            encoding="utf-8",
        )

    # -- queries ---------------------------------------------------------

    def __len__(self) -> int:
        return len(self._jobs)

    def get(self, job_id: str) -> ExecutionJob:
        try:
            return self._jobs[job_id]
        except KeyError:
            raise JobNotFoundError(job_id) from None

    def list_jobs(self, status: Optional[JobStatus] = None) -> list[ExecutionJob]:
        """All jobs, newest first, optionally filtered by status."""
        jobs = sorted(self._jobs.values(), key=lambda j: j.seq, reverse=True)
        if status is not None:
            jobs = [j for j in jobs if j.status is JobStatus(status)]
        return jobs

    def next_pending(self) -> Optional[ExecutionJob]:
        """Highest-priority pending job, oldest first among equals."""
        pending = [j for j in self._jobs.values() if j.status is JobStatus.PENDING]
        if not pending:
            return None
        return min(pending, key=lambda j: (-j.priority, j.seq))

    # -- mutations -------------------------------------------------------

    def queue_execution(
        self,
        tool_target: str,
        execution_data: Any,
        batch_id: Optional[str] = None,
        priority: int = 0,
    ) -> ExecutionJob:
        with self._lock:
            self._seq += 1
            job = ExecutionJob(
                id=uuid.uuid4().hex[:12],
                tool_target=tool_target,
                execution_data=execution_data,
                seq=self._seq,
                created_at=_now(),
                batch_id=batch_id,
                priority=priority,
            )
            self._jobs[job.id] = job
            self._save()
        logger.info("Queued job %s for %s (priority %d)", job.id, tool_target, priority)
        return job

    def _transition(
        self,
        job_id: str,
        action: str,
        allowed: set[JobStatus],
        new_status: JobStatus,
        **changes: Any,
    ) -> ExecutionJob:
        with self._lock:
            job = self.get(job_id)
            if job.status not in allowed:
                logger.error("Rejected %s of job %s in status %s", action, job_id, job.status.value)
                raise JobStateError(job_id, job.status.value, action)
            job.status = new_status
            for key, value in changes.items():
                setattr(job, key, value)
            self._save()
        logger.info("Job %s -> %s", job_id, new_status.value)
        return job

    def start(self, job_id: str) -> ExecutionJob:
        return self._transition(
            job_id, "start", {JobStatus.PENDING}, JobStatus.RUNNING, started_at=_now()
        )

    def complete(self, job_id: str) -> ExecutionJob:
        return self._transition(
            job_id, "complete", {JobStatus.RUNNING}, JobStatus.COMPLETED, completed_at=_now()
        )

    def fail(self, job_id: str, message: str) -> ExecutionJob:
        return self._transition(
            job_id, "fail", {JobStatus.RUNNING}, JobStatus.FAILED,
            error_message=message, completed_at=_now(),
        )

    def cancel(self, job_id: str) -> ExecutionJob:
        return self._transition(
            job_id, "cancel", _CANCELLABLE, JobStatus.CANCELLED, completed_at=_now()
        )

    def retry(self, job_id: str) -> ExecutionJob:
        return self._transition(
            job_id, "retry", _RETRYABLE, JobStatus.PENDING,
            error_message=None, started_at=None, completed_at=None,
        )

    def delete(self, job_id: str) -> None:
        with self._lock:
            self.get(job_id)
            del self._jobs[job_id]
            self._save()
        logger.info("Deleted job %s", job_id)
