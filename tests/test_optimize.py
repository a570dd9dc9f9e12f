# tests/test_optimize.py
"""Tests for the rule-based prompt optimizer."""

from __future__ import annotations


def _three_sentences(length: int) -> str:
    """Single-line prompt with an action word, three sentences, exact length."""
    prefix = "Write a poem. Use short lines. End with "
    text = prefix + "z" * (length - len(prefix) - 1) + "."
    assert len(text) == length
    return text


class TestOptimizePrompt:
    def test_action_prompt_is_unchanged(self):
        from autoprompt.extraction import optimize_prompt

        text = "make a todo app with dark mode and user accounts and offline sync"
        assert optimize_prompt(text) == text

    def test_missing_action_word_gets_please(self):
        from autoprompt.extraction import optimize_prompt

        assert optimize_prompt("A Landing Page for my bakery") == "Please a landing page for my bakery"

    def test_request_phrases_count_as_action(self):
        from autoprompt.extraction import optimize_prompt

        text = "Could you sketch a logo concept"
        assert optimize_prompt(text) == text

    def test_exactly_100_chars_is_not_split(self):
        from autoprompt.extraction import optimize_prompt

        text = _three_sentences(100)
        assert optimize_prompt(text) == text

    def test_101_chars_with_three_sentences_is_split(self):
        from autoprompt.extraction import optimize_prompt

        text = _three_sentences(101)
        result = optimize_prompt(text)
        assert result == "Write a poem.\n\nUse short lines.\n\nEnd with " + "z" * 60 + "."

    def test_two_sentences_are_not_split(self):
        from autoprompt.extraction import optimize_prompt

        text = "Write a long poem about the ocean and its tides. " + "It should rhyme " * 5
        text = text.strip() + "."
        assert len(text) > 100
        assert optimize_prompt(text) == text

    def test_multiline_prompt_is_not_split(self):
        from autoprompt.extraction import optimize_prompt

        text = "Write a poem.\nUse short lines. Keep it calm. " + "z" * 80
        assert optimize_prompt(text) == text

    def test_split_runs_before_please_prefix(self):
        from autoprompt.extraction import optimize_prompt

        text = "The sky is blue. The sea is wide. The sun is warm and bright " + "o" * 50 + "."
        assert len(text) > 100
        result = optimize_prompt(text)
        assert result.startswith("Please the sky is blue.\n\nthe sea is wide.\n\n")


class TestPlatformOptimization:
    def test_known_platform_appends_guidance(self):
        from autoprompt.extraction import optimize_for_platform

        result = optimize_for_platform("Build a todo app", "bolt.new")
        assert result == (
            "Build a todo app\n\nInclude proper error handling and make it production-ready."
        )

    def test_unknown_platform_is_passthrough(self):
        from autoprompt.extraction import optimize_for_platform

        assert optimize_for_platform("Build a todo app", "replit.com") == "Build a todo app"
        assert optimize_for_platform("Build a todo app", "nowhere") == "Build a todo app"

    def test_platform_list_covers_guidance(self):
        from autoprompt.extraction.optimizer import PLATFORM_GUIDANCE, PLATFORMS

        assert set(PLATFORM_GUIDANCE) <= set(PLATFORMS)


class TestGenerateSuggestions:
    def test_vague_short_prompt_gets_all_hints(self):
        from autoprompt.extraction import generate_suggestions

        hints = generate_suggestions("make something cool")
        assert hints == [
            "Be more specific about what you want created",
            "Add more context and details to improve results",
            "Specify if you want a component, function, or other code structure",
            "Include specific requirements or constraints",
        ]

    def test_detailed_prompt_gets_no_hints(self):
        from autoprompt.extraction import generate_suggestions

        text = (
            "Build a React component for a signup form. It must validate the email "
            "field and should show inline errors next to each input."
        )
        assert len(text) >= 100
        assert generate_suggestions(text) == []
