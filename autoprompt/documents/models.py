# autoprompt/documents/models.py
"""Document data models for the loading step."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..errors import DocumentLoadError

__all__ = ["DocumentLoadError", "LoadedDocument"]


@dataclass
class LoadedDocument:
    """A batch file read into memory as text."""

    text: str
    source_path: Optional[Path]
    format: str
    metadata: dict = field(default_factory=dict)
    decode_errors: bool = False

    @property
    def char_count(self) -> int:
        return len(self.text)

    @property
    def is_empty(self) -> bool:
        return len(self.text.strip()) == 0

    @property
    def name(self) -> str:
        return self.source_path.name if self.source_path else "<text>"
