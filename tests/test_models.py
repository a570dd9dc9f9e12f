# tests/test_models.py
"""Tests for ExtractedPrompt and the error hierarchy."""

from __future__ import annotations

import dataclasses

import pytest


def _make(**overrides):
    from autoprompt.extraction import ExtractedPrompt

    fields = dict(
        id="prompt_1_abc",
        content="Build a login page",
        original_prompt="Build a login page",
        estimated_tokens=5,
        position=0,
    )
    fields.update(overrides)
    return ExtractedPrompt(**fields)


class TestExtractedPrompt:
    def test_is_frozen(self):
        p = _make()
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.content = "changed"

    def test_with_content_keeps_original(self):
        p = _make()
        edited = p.with_content("Build a login page with OAuth")
        assert edited.content == "Build a login page with OAuth"
        assert edited.original_prompt == "Build a login page"
        assert edited.id == p.id
        assert edited.is_edited is True
        assert p.is_edited is False

    def test_with_position(self):
        assert _make().with_position(4).position == 4

    def test_char_count(self):
        assert _make().char_count == len("Build a login page")

    def test_to_dict(self):
        data = _make().to_dict()
        assert data == {
            "id": "prompt_1_abc",
            "content": "Build a login page",
            "original_prompt": "Build a login page",
            "estimated_tokens": 5,
            "position": 0,
        }


class TestErrors:
    def test_user_message_default(self):
        from autoprompt.errors import AutopromptError, ErrorCategory

        exc = AutopromptError("internal detail")
        assert str(exc) == "internal detail"
        assert exc.category is ErrorCategory.SYSTEM
        assert "log file" in exc.user_message

    def test_quota_error(self):
        from autoprompt.errors import ErrorCategory, QuotaExceededError

        exc = QuotaExceededError("batch_extraction_chars", 600, 20)
        assert exc.category is ErrorCategory.QUOTA
        assert exc.remaining == 20
        assert exc.user_message == "Usage limit reached for batch extraction chars (20 remaining this month)."

    def test_job_state_error_message(self):
        from autoprompt.errors import JobStateError

        assert JobStateError("abc", "completed", "cancel").user_message == (
            "Job abc is completed and cannot be cancelled."
        )
        assert JobStateError("abc", "pending", "retry").user_message == (
            "Job abc is pending and cannot be retried."
        )
        assert JobStateError("abc", "failed", "complete").user_message.endswith("cannot be completed.")
        assert JobStateError("abc", "failed", "start").user_message.endswith("cannot be started.")

    def test_job_not_found(self):
        from autoprompt.errors import AutopromptError, JobNotFoundError

        exc = JobNotFoundError("zzz")
        assert isinstance(exc, AutopromptError)
        assert "zzz" in exc.user_message
