# autoprompt/batch.py
"""Batch extraction over a directory of text files.

Every worker handles one file end to end: read it, reserve its characters
against the ``batch_extraction_chars`` quota, run the extraction callable,
and write ``<stem>.json`` to the output directory.  Text files are small and
loading them is thread-safe, so nothing is read ahead of the pool.

A :class:`BatchCheckpoint` remembers what each finished file produced
(prompt count and token estimate), so an interrupted run can be resumed
without redoing or re-billing completed files.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from .usage import UsageLedger

logger = logging.getLogger(__name__)

CHARS_QUOTA = "batch_extraction_chars"
RUNS_QUOTA = "batch_extractions_per_month"


def discover_documents(input_dir: Path) -> list[Path]:
    """Supported text files directly inside *input_dir*, sorted by name."""
    from .documents.loader import SUPPORTED_FORMATS

    return sorted(
        p for p in Path(input_dir).iterdir()
        if p.is_file() and p.suffix.lower() in SUPPORTED_FORMATS
    )


def summarize_result(result: dict[str, Any], characters: int) -> dict[str, Any]:
    """Per-file record kept in the checkpoint."""
    envelope = result.get("_autoprompt") or {}
    return {
        "characters": characters,
        "prompts": len(result.get("prompts") or []),
        "estimated_tokens": (envelope.get("tokens") or {}).get("estimated", 0),
        "finished_at": datetime.now(timezone.utc).isoformat(),
    }


class BatchCheckpoint:
    """Completed files of one batch run, keyed by file name."""

    def __init__(self, batch_id: str, checkpoint_dir: Path) -> None:
        self.batch_id = batch_id
        self.checkpoint_dir = Path(checkpoint_dir)
        self.files: dict[str, dict[str, Any]] = {}

    @property
    def path(self) -> Path:
        return self.checkpoint_dir / f"{self.batch_id}.json"

    def record(self, doc_name: str, summary: dict[str, Any]) -> None:
        self.files[doc_name] = summary

    def is_completed(self, doc_name: str) -> bool:
        return doc_name in self.files

    @property
    def completed_count(self) -> int:
        return len(self.files)

    @property
    def total_prompts(self) -> int:
        return sum(int(s.get("prompts", 0)) for s in self.files.values())

    def save(self) -> None:
        self.checkpoint_dir.mkdir(parents=True, exist_ok=True)
        data = {
            "batch_id": self.batch_id,
            "files": self.files,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }
        self.path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> BatchCheckpoint:
        path = Path(path)
        data = json.loads(path.read_text(encoding="utf-8"))
        cp = cls(batch_id=data["batch_id"], checkpoint_dir=path.parent)
        cp.files = dict(data.get("files", {}))
        return cp

    @classmethod
    def open(cls, batch_id: str, checkpoint_dir: Path) -> BatchCheckpoint:
        """Load the checkpoint for *batch_id* if one exists, else start empty."""
        cp = cls(batch_id, checkpoint_dir)
        return cls.load(cp.path) if cp.path.exists() else cp


class BatchProcessor:
    """Thread-pool extractor over a directory, one output file per input.

    A failing file is reported in the summary and never stops the batch.
    When a *ledger* is given, each file's characters are reserved
    atomically before processing, so parallel workers cannot overrun the
    quota between them.
    """

    MAX_WORKERS = 32

    def __init__(
        self,
        workers: int = 4,
        checkpoint_every: int = 50,
        ledger: Optional[UsageLedger] = None,
    ) -> None:
        self.workers = min(max(1, workers), self.MAX_WORKERS)
        self.checkpoint_every = max(1, checkpoint_every)
        self.ledger = ledger

    def _run_one(
        self,
        doc_path: Path,
        output_dir: Path,
        process_fn: Callable[[str], dict[str, Any]],
        load_fn: Callable[[Path], str],
    ) -> dict[str, Any]:
        text = load_fn(doc_path)
        if self.ledger is not None:
            self.ledger.consume(CHARS_QUOTA, len(text))
        result = process_fn(text)
        (output_dir / f"{doc_path.stem}.json").write_text(
            json.dumps(result, indent=2, default=str, ensure_ascii=False),
            encoding="utf-8",
        )
        if self.ledger is not None:
            self.ledger.increment_usage(RUNS_QUOTA)
        return summarize_result(result, len(text))

    def process_directory(
        self,
        input_dir: Path,
        output_dir: Path,
        process_fn: Callable[[str], dict[str, Any]],
        resume_id: Optional[str] = None,
        checkpoint_dir: Optional[Path] = None,
        load_fn: Optional[Callable[[Path], str]] = None,
        on_progress: Optional[Callable[[str, bool], None]] = None,
    ) -> dict[str, Any]:
        """Process all text documents in a directory.

        Args:
            input_dir: Directory of input documents.
            output_dir: Directory for per-document output JSON files.
            process_fn: Takes document text, returns a JSON-serialisable dict.
            resume_id: If set, skip files recorded in the checkpoint with this ID.
            checkpoint_dir: Directory for checkpoint files (default: output_dir).
            load_fn: Takes a Path, returns text. Defaults to ``load_document``.
            on_progress: Callback(doc_name, success) after each document.

        Returns:
            Summary dict with keys: total, succeeded, failed, skipped,
            prompts, errors.
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        if load_fn is None:
            from .documents.loader import load_document

            def load_fn(path: Path) -> str:
                return load_document(path).text

        docs = discover_documents(input_dir)
        total = len(docs)

        checkpoint: BatchCheckpoint | None = None
        if resume_id:
            checkpoint = BatchCheckpoint.open(resume_id, checkpoint_dir or output_dir)
            done = [d for d in docs if checkpoint.is_completed(d.name)]
            docs = [d for d in docs if not checkpoint.is_completed(d.name)]
            if done:
                logger.info("Resuming batch %s: %d already done", resume_id, len(done))
            if on_progress:
                for d in done:
                    on_progress(d.name, True)
        skipped = total - len(docs)

        succeeded = 0
        prompts = 0
        errors: list[dict[str, str]] = []

        try:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                futures = {
                    pool.submit(self._run_one, d, output_dir, process_fn, load_fn): d
                    for d in docs
                }
                for finished, future in enumerate(as_completed(futures), start=1):
                    name = futures[future].name
                    try:
                        summary = future.result()
                    except Exception as exc:
                        logger.warning("Batch file %s failed: %s", name, exc, exc_info=True)
                        errors.append({"file": name, "error": f"{type(exc).__name__}: {exc}"})
                        ok = False
                    else:
                        succeeded += 1
                        prompts += summary["prompts"]
                        ok = True
                        if checkpoint:
                            checkpoint.record(name, summary)
                            if finished % self.checkpoint_every == 0:
                                checkpoint.save()
                    if on_progress:
                        on_progress(name, ok)
        finally:
            # Written on every exit path, including KeyboardInterrupt
            if checkpoint:
                checkpoint.save()

        logger.info(
            "Batch finished: %d files, %d ok, %d failed, %d skipped, %d prompts",
            total, succeeded, len(errors), skipped, prompts,
        )
        return {
            "total": total,
            "succeeded": succeeded,
            "failed": len(errors),
            "skipped": skipped,
            "prompts": prompts,
            "errors": errors,
        }
