# autoprompt/extraction/quality.py
"""Deterministic quality scorer for extracted prompts.

Evaluates prompt text using four metrics: action vocabulary, specificity,
clarity (absence of vague wording), and length. No LLM dependency.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .models import ExtractedPrompt
from .optimizer import VAGUE_WORDS, generate_suggestions

# Verbs that make a prompt actionable for a code-generation tool.
ACTION_VOCAB: frozenset[str] = frozenset({
    "create", "build", "make", "develop", "implement", "design", "write",
    "generate", "add", "remove", "update", "modify", "fix", "improve",
    "enhance", "optimize", "refactor", "integrate", "deploy", "test",
})

# Phrases that signal a precise request.
SPECIFICITY_TERMS: tuple[str, ...] = (
    "specific", "specifically", "detailed", "exactly", "precisely",
    "step by step", "should", "must", "require",
)

TECH_TERMS: frozenset[str] = frozenset({
    "component", "function", "api", "database", "ui", "interface", "feature",
    "button", "form", "page", "screen", "website", "app", "system", "endpoint",
})

CLARITY_PENALTIES: tuple[str, ...] = (
    "something", "anything", "maybe", "perhaps", "kind of", "sort of", "stuff", "things",
)

SHORT_PROMPT_CHARS = 50
LONG_PROMPT_CHARS = 1500


def _words(text: str) -> list[str]:
    return re.findall(r"[a-zA-Z][\w'-]*", text.lower())


def action_score(text: str) -> float:
    """Score 0-1: leading imperative scores highest, any action verb scores well."""
    words = _words(text)
    if not words:
        return 0.0
    if words[0] in ACTION_VOCAB:
        return 1.0
    if any(w in ACTION_VOCAB for w in words):
        return 0.7
    return 0.2


def specificity_score(text: str) -> float:
    """Score 0-1 from specificity phrases and technical vocabulary."""
    if not text.strip():
        return 0.0
    lowered = text.lower()
    phrase_hits = sum(1 for term in SPECIFICITY_TERMS if term in lowered)
    tech_hits = sum(1 for w in set(_words(text)) if w in TECH_TERMS)
    # Two of each is treated as fully specific
    return min(1.0, 0.25 * min(phrase_hits, 2) + 0.25 * min(tech_hits, 2))


def clarity_score(text: str) -> float:
    """Score 0-1; each vague phrase costs a quarter point."""
    if not text.strip():
        return 0.0
    lowered = text.lower()
    vague = sum(1 for phrase in CLARITY_PENALTIES if phrase in lowered)
    return max(0.0, 1.0 - 0.25 * vague)


def length_score(text: str) -> float:
    """Score 0-1 based on character count; 100-500 chars is ideal."""
    n = len(text.strip())
    if n == 0:
        return 0.0
    if 100 <= n <= 500:
        return 1.0
    if SHORT_PROMPT_CHARS <= n < 100 or 500 < n <= 1000:
        return 0.7
    if n > 1000:
        return 0.5
    return 0.3


class PromptQualityScorer:
    """Deterministic scorer for prompt quality.

    Combines action vocabulary, specificity, clarity, and length into a
    single 0-1 score.
    """

    WEIGHTS = {
        "action": 0.35,
        "specificity": 0.20,
        "clarity": 0.25,
        "length": 0.20,
    }

    def score(self, text: str) -> float:
        """Return overall quality score 0-1."""
        if not text.strip():
            return 0.0
        return (
            self.WEIGHTS["action"] * action_score(text)
            + self.WEIGHTS["specificity"] * specificity_score(text)
            + self.WEIGHTS["clarity"] * clarity_score(text)
            + self.WEIGHTS["length"] * length_score(text)
        )

    def score_detailed(self, text: str) -> dict[str, float]:
        """Return per-metric scores plus overall."""
        detail = {
            "action": action_score(text),
            "specificity": specificity_score(text),
            "clarity": clarity_score(text),
            "length": length_score(text),
        }
        detail["overall"] = sum(
            self.WEIGHTS[k] * v for k, v in detail.items() if k != "overall"
        )
        return detail


@dataclass
class QualityAssessment:
    """Score plus human-readable issues for one prompt."""

    score: float
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


_scorer = PromptQualityScorer()


def assess_prompt(prompt: ExtractedPrompt) -> QualityAssessment:
    """Score *prompt* and list what would make it better."""
    content = prompt.content
    issues: list[str] = []
    suggestions: list[str] = []
    score = _scorer.score(content)

    if len(content) < SHORT_PROMPT_CHARS:
        issues.append("Prompt is too short")
        suggestions.append("Add more details and context")
        score -= 0.2

    if len(content) > LONG_PROMPT_CHARS:
        issues.append("Prompt is very long")
        suggestions.append("Consider breaking into smaller, focused prompts")
        score -= 0.1

    lowered = content.lower()
    if any(word in lowered for word in VAGUE_WORDS):
        issues.append("Contains vague language")
        suggestions.append("Replace vague terms with specific requirements")
        score -= 0.15

    for hint in generate_suggestions(content):
        if hint not in suggestions:
            suggestions.append(hint)

    return QualityAssessment(
        score=round(max(0.1, min(1.0, score)), 3),
        issues=issues,
        suggestions=suggestions,
    )
