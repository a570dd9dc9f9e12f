# autoprompt/extraction/analysis.py
"""Input statistics, duplicate detection, and extraction-quality reports."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Literal, Sequence

from .models import ExtractedPrompt
from .quality import PromptQualityScorer

Complexity = Literal["low", "medium", "high"]
OverallQuality = Literal["excellent", "good", "fair", "poor"]

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_END = re.compile(r"[.!?]+")
_LIST_MARKER = re.compile(r"^[ \t]*(?:\d+\.|[-*•])\s", re.MULTILINE)
_STRUCTURE = re.compile(r"^[ \t]*(?:\d+\.|[-*•]|#{1,6})\s", re.MULTILINE)
_PROMPT_MARKER = re.compile(r"\b(?:prompt|task|instruction|request|todo)\s*\d*\s*:", re.IGNORECASE)

DUPLICATE_SIMILARITY = 0.85


@dataclass
class TextAnalysis:
    """Statistics about an input text before extraction."""

    character_count: int
    word_count: int
    paragraph_count: int
    sentence_count: int
    complexity: Complexity
    has_structured_content: bool
    has_prompt_markers: bool
    estimated_prompt_count: int


@dataclass
class ExtractionReport:
    """Aggregate quality verdict over a list of extracted prompts."""

    overall_quality: OverallQuality
    average_quality_score: float
    prompt_count: int
    total_tokens: int
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


def analyze_text(text: str) -> TextAnalysis:
    """Describe *text* and estimate how many prompts it holds."""
    text = text or ""
    word_count = len(text.split())
    paragraph_count = sum(1 for p in _PARAGRAPH_BREAK.split(text) if p.strip())
    sentence_count = sum(1 for s in _SENTENCE_END.split(text) if s.strip())

    if word_count > 5000 or paragraph_count > 50:
        complexity: Complexity = "high"
    elif word_count > 1000 or paragraph_count > 10:
        complexity = "medium"
    else:
        complexity = "low"

    structured = bool(_STRUCTURE.search(text))
    estimated = max(1, math.floor(paragraph_count * 0.6)) if text.strip() else 0
    if structured:
        estimated = max(estimated, len(_LIST_MARKER.findall(text)))

    return TextAnalysis(
        character_count=len(text),
        word_count=word_count,
        paragraph_count=paragraph_count,
        sentence_count=sentence_count,
        complexity=complexity,
        has_structured_content=structured,
        has_prompt_markers=bool(_PROMPT_MARKER.search(text)),
        estimated_prompt_count=estimated,
    )


def normalize_for_comparison(text: str) -> str:
    """Lowercase, drop punctuation, collapse whitespace."""
    text = re.sub(r"[^\w\s]", "", text.lower())
    return re.sub(r"\s+", " ", text).strip()


def word_similarity(a: str, b: str) -> float:
    """Jaccard similarity over the word sets of two normalised strings."""
    words_a = set(a.split())
    words_b = set(b.split())
    union = words_a | words_b
    if not union:
        return 1.0
    return len(words_a & words_b) / len(union)


def find_duplicates(prompts: Sequence[ExtractedPrompt]) -> list[ExtractedPrompt]:
    """Prompts whose normalised content already appeared earlier in the list."""
    seen: set[str] = set()
    duplicates: list[ExtractedPrompt] = []
    for prompt in prompts:
        key = normalize_for_comparison(prompt.content)
        if key in seen:
            duplicates.append(prompt)
        else:
            seen.add(key)
    return duplicates


def remove_duplicates(
    prompts: Sequence[ExtractedPrompt],
    threshold: float = DUPLICATE_SIMILARITY,
) -> list[ExtractedPrompt]:
    """Drop exact and near-duplicate prompts, keeping the first occurrence.

    Survivors are renumbered so ``position`` stays contiguous.
    """
    kept: list[ExtractedPrompt] = []
    kept_keys: list[str] = []
    for prompt in prompts:
        key = normalize_for_comparison(prompt.content)
        if key in kept_keys:
            continue
        if any(word_similarity(key, other) > threshold for other in kept_keys):
            continue
        kept.append(prompt)
        kept_keys.append(key)
    return [p.with_position(i) for i, p in enumerate(kept)]


def _label(score: float) -> OverallQuality:
    if score >= 0.8:
        return "excellent"
    if score >= 0.6:
        return "good"
    if score >= 0.4:
        return "fair"
    return "poor"


def validate_extraction(
    prompts: Sequence[ExtractedPrompt],
    scorer: PromptQualityScorer | None = None,
) -> ExtractionReport:
    """Grade an extraction result and list what to fix."""
    if not prompts:
        return ExtractionReport(
            overall_quality="poor",
            average_quality_score=0.0,
            prompt_count=0,
            total_tokens=0,
            issues=["No prompts were extracted"],
            recommendations=["Check the input text or split it with blank lines, lists, or headings"],
        )

    scorer = scorer or PromptQualityScorer()
    average = sum(scorer.score(p.content) for p in prompts) / len(prompts)

    issues: list[str] = []
    recommendations: list[str] = []
    n = len(prompts)

    short = sum(1 for p in prompts if len(p.content) < 50)
    if short > n * 0.3:
        issues.append(f"{short} prompts are too short")
        recommendations.append("Consider combining short prompts or adding more context")

    long_ = sum(1 for p in prompts if len(p.content) > 1000)
    if long_ > n * 0.2:
        issues.append(f"{long_} prompts are very long")
        recommendations.append("Consider breaking long prompts into smaller tasks")

    duplicates = len(find_duplicates(prompts))
    if duplicates:
        issues.append(f"{duplicates} potential duplicate prompts found")
        recommendations.append("Remove or merge duplicate prompts")

    return ExtractionReport(
        overall_quality=_label(average),
        average_quality_score=round(average, 3),
        prompt_count=n,
        total_tokens=sum(p.estimated_tokens for p in prompts),
        issues=issues,
        recommendations=recommendations,
    )
