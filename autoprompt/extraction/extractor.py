# autoprompt/extraction/extractor.py
"""Deterministic prompt segmentation.

Splits freeform text (pasted documents, chat logs, batch files) into
candidate prompts in four steps:

1. normalise   -- trim the input, convert CRLF to LF
2. segment     -- apply each delimiter pattern, in order, to every fragment
3. filter      -- drop short fragments and document scaffolding
4. materialise -- wrap survivors as :class:`ExtractedPrompt` values

The delimiter passes are sequential on purpose: a later pass subdivides the
fragments produced by earlier ones, so folding them into one alternation
would change how overlapping markers (a numbered list inside a bulleted
list, a heading followed by a list) are cut.  No LLM dependency.
"""

from __future__ import annotations

import logging
import math
import re
import time
import uuid
from typing import Optional

from .models import ExtractedPrompt

logger = logging.getLogger(__name__)

# Fragments must be strictly longer than this (after trimming) to survive.
MIN_PROMPT_LENGTH = 10

# Coarse proxy for sub-word tokenisation.
CHARS_PER_TOKEN = 4


def _labelled(label: str) -> re.Pattern[str]:
    return re.compile(rf"(?:^|\n){label}(?:[ \t]*\d+)?[ \t]*:", re.IGNORECASE)


# Ordered cut points; each match is consumed.
DELIMITER_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("blank_lines", re.compile(r"\n\s*\n\s*\n")),
    ("horizontal_rule", re.compile(r"^[ \t]*(?:-{3,}|={3,})[ \t]*$", re.MULTILINE)),
    ("numbered_list", re.compile(r"(?:^|\n)\d+\.\s+")),
    ("bullet_list", re.compile(r"(?:^|\n)[•*-]\s+")),
    ("heading", re.compile(r"(?:^|\n)#{1,6}\s+")),
    ("prompt_label", _labelled("prompt")),
    ("task_label", _labelled("task")),
    ("request_label", _labelled("request")),
)

_CRLF = re.compile(r"\r+\n")

# Matched against the trimmed fragment.
BOILERPLATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^[-=]{3,}$"),
    re.compile(r"^\*{3,}$"),
    re.compile(r"^page\s*\d+", re.IGNORECASE),
    re.compile(r"^(?:table of contents|index|references?|bibliography)$", re.IGNORECASE),
)


def normalize_text(text: Optional[str]) -> str:
    """Trim surrounding whitespace and convert CRLF line endings to LF.

    Stray carriage returns before a newline (``\\r\\r\\n``) collapse too, so the
    result never contains CRLF.
    """
    if not text:
        return ""
    return _CRLF.sub("\n", text.strip())


def segment_text(text: str) -> list[str]:
    """Cut *text* at every delimiter pattern, one pass per pattern.

    Fragments are returned untrimmed and may be empty.
    """
    fragments = [text]
    for name, pattern in DELIMITER_PATTERNS:
        next_fragments: list[str] = []
        for fragment in fragments:
            next_fragments.extend(pattern.split(fragment))
        if len(next_fragments) != len(fragments):
            logger.debug("Delimiter pass %s: %d -> %d fragments", name, len(fragments), len(next_fragments))
        fragments = next_fragments
    return fragments


def is_boilerplate(fragment: str) -> bool:
    """True for rules, page markers, and table-of-contents style headings."""
    stripped = fragment.strip()
    return any(pattern.search(stripped) for pattern in BOILERPLATE_PATTERNS)


def estimate_tokens(content: str) -> int:
    """Estimate token cost as ``ceil(len(content) / 4)``."""
    return math.ceil(len(content) / CHARS_PER_TOKEN)


def _keep(fragment: str) -> bool:
    stripped = fragment.strip()
    return len(stripped) > MIN_PROMPT_LENGTH and not is_boilerplate(stripped)


def _new_prompt_id() -> str:
    return f"prompt_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def extract_prompts(text: Optional[str]) -> list[ExtractedPrompt]:
    """Split *text* into an ordered list of candidate prompts.

    Never raises for string input: text with nothing worth keeping yields an
    empty list.  ``position`` is the index in the returned list, so it is
    contiguous even when fragments were dropped.
    """
    normalized = normalize_text(text)
    if not normalized:
        return []

    fragments = segment_text(normalized)
    kept = [fragment.strip() for fragment in fragments if _keep(fragment)]
    logger.debug("Kept %d of %d fragments", len(kept), len(fragments))

    return [
        ExtractedPrompt(
            id=_new_prompt_id(),
            content=content,
            original_prompt=content,
            estimated_tokens=estimate_tokens(content),
            position=position,
        )
        for position, content in enumerate(kept)
    ]


def total_tokens(prompts: list[ExtractedPrompt]) -> int:
    """Sum of ``estimated_tokens`` over *prompts*."""
    return sum(p.estimated_tokens for p in prompts)
