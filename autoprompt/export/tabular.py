"""Tabular export: CSV, Parquet, JSONL.

Writes extracted prompts as flat rows (one row per prompt) for
spreadsheets and downstream pipelines.

Functions
---------
export_csv
    Write prompt rows to a CSV file.
export_jsonl
    Write prompt rows as newline-delimited JSON (one object per line).
export_parquet
    Write prompt rows to an Apache Parquet file via *pandas* + *pyarrow*.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

import pandas as pd

from ..extraction.models import ExtractedPrompt

COLUMNS = ["source", "position", "id", "content", "original_prompt", "estimated_tokens"]


def prompt_rows(
    prompts: Sequence[ExtractedPrompt],
    source: str | None = None,
) -> list[dict[str, Any]]:
    """Flatten prompts to row dicts, tagging each with its source file."""
    return [{"source": source, **p.to_dict()} for p in prompts]


def _frame(rows: list[dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=COLUMNS)


def export_csv(rows: list[dict[str, Any]], path: Path | str) -> None:
    """Write *rows* to a CSV file with a fixed column order."""
    _frame(rows).to_csv(Path(path), index=False)


def export_jsonl(rows: list[dict[str, Any]], path: Path | str) -> None:
    """Write *rows* as newline-delimited JSON (JSONL)."""
    path = Path(path)
    with path.open("w", encoding="utf-8") as fh:
        for row in rows:
            fh.write(json.dumps(row, default=str, ensure_ascii=False) + "\n")


def export_parquet(rows: list[dict[str, Any]], path: Path | str) -> None:
    """Write *rows* to an Apache Parquet file."""
    _frame(rows).to_parquet(Path(path), index=False)


EXPORTERS = {
    "csv": export_csv,
    "jsonl": export_jsonl,
    "parquet": export_parquet,
}


def export_rows(rows: list[dict[str, Any]], output_dir: Path, stem: str, formats: Sequence[str]) -> list[Path]:
    """Write *rows* once per requested format; returns the written paths."""
    written: list[Path] = []
    for fmt in formats:
        fmt = fmt.lower()
        if fmt not in EXPORTERS:
            continue
        path = output_dir / f"{stem}.{fmt}"
        EXPORTERS[fmt](rows, path)
        written.append(path)
    return written
