"""Flat-file export of extracted prompts."""
from .tabular import COLUMNS, EXPORTERS, export_csv, export_jsonl, export_parquet, export_rows, prompt_rows

__all__ = [
    "COLUMNS",
    "EXPORTERS",
    "export_csv",
    "export_jsonl",
    "export_parquet",
    "export_rows",
    "prompt_rows",
]
