# autoprompt/extraction/models.py
"""Data models for prompt extraction."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any


@dataclass(frozen=True)
class ExtractedPrompt:
    """One candidate prompt cut out of a larger text.

    ``original_prompt`` keeps the text as extracted so that callers can
    derive an edited copy via :meth:`with_content` without losing it.
    """

    id: str
    content: str
    original_prompt: str
    estimated_tokens: int
    position: int

    @property
    def char_count(self) -> int:
        return len(self.content)

    @property
    def is_edited(self) -> bool:
        return self.content != self.original_prompt

    def with_content(self, content: str) -> ExtractedPrompt:
        """Return a copy with new content; provenance and token estimate are kept."""
        return replace(self, content=content)

    def with_position(self, position: int) -> ExtractedPrompt:
        return replace(self, position=position)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
