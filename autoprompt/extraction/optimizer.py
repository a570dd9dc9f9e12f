# autoprompt/extraction/optimizer.py
"""Rule-based prompt rewriting.

``optimize_prompt`` applies two rewrites in a fixed order:

1. a long single-line prompt with more than two sentences is broken into
   one paragraph per sentence;
2. a prompt without any action or request word is turned into a request
   by prefixing ``"Please "`` and lowercasing the original text.

The split runs first because it only applies to text without line breaks.
"""

from __future__ import annotations

import re

# Single-line prompts longer than this are candidates for sentence splitting.
SPLIT_MIN_LENGTH = 100

# Checked case-insensitively as substrings.
ACTION_WORDS: tuple[str, ...] = (
    "create", "build", "make", "develop", "implement", "design", "write",
    "generate", "add", "remove", "update", "modify", "fix", "improve",
    "please", "can you", "could you", "would you", "help",
)

_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")

PLATFORM_GUIDANCE: dict[str, str] = {
    "lovable.dev": "Use React, TypeScript, and Tailwind CSS. Make it responsive and accessible.",
    "bolt.new": "Include proper error handling and make it production-ready.",
    "v0.dev": "Use Vercel design system and modern UI patterns.",
    "cursor.so": "Write clean, well-commented code with proper TypeScript types.",
    "claude.ai": "Provide detailed explanations and consider edge cases.",
}

# Batch targets offered by the extractor; replit.com has no tailoring text.
PLATFORMS: tuple[str, ...] = (
    "lovable.dev", "bolt.new", "replit.com", "v0.dev", "cursor.so", "claude.ai",
)

VAGUE_WORDS: tuple[str, ...] = ("something", "anything", "stuff", "things")


def split_sentences(text: str) -> list[str]:
    """Split after ``.``, ``!`` or ``?`` followed by whitespace."""
    return [s for s in (part.strip() for part in _SENTENCE_BREAK.split(text)) if s]


def has_action_word(text: str) -> bool:
    lowered = text.lower()
    return any(word in lowered for word in ACTION_WORDS)


def optimize_prompt(prompt: str) -> str:
    """Rewrite *prompt* into a clearer request.

    >>> optimize_prompt("a landing page for my bakery")
    'Please a landing page for my bakery'
    """
    optimized = prompt

    if "\n" not in optimized and len(optimized) > SPLIT_MIN_LENGTH:
        sentences = split_sentences(optimized)
        if len(sentences) > 2:
            optimized = "\n\n".join(sentences)

    if not has_action_word(optimized):
        optimized = f"Please {optimized.lower()}"

    return optimized


def optimize_for_platform(prompt: str, platform: str) -> str:
    """Append the target platform's guidance paragraph, if it has one."""
    guidance = PLATFORM_GUIDANCE.get(platform)
    return f"{prompt}\n\n{guidance}" if guidance else prompt


def generate_suggestions(content: str) -> list[str]:
    """Return improvement hints for a prompt, most important first."""
    suggestions: list[str] = []
    lowered = content.lower()

    if any(word in lowered for word in VAGUE_WORDS):
        suggestions.append("Be more specific about what you want created")

    if len(content) < 100:
        suggestions.append("Add more context and details to improve results")

    if "component" not in lowered and "function" not in lowered:
        suggestions.append("Specify if you want a component, function, or other code structure")

    if "should" not in content and "must" not in content and "require" not in content:
        suggestions.append("Include specific requirements or constraints")

    return suggestions
