# autoprompt/config.py
"""
AUTOPROMPT Configuration: Single source of truth via Pydantic Settings.

Resolution order: CLI flags > env vars (AUTOPROMPT_*) > .env files > defaults.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AutopromptConfig(BaseSettings):
    """Central configuration for AUTOPROMPT."""

    model_config = SettingsConfigDict(
        env_prefix="AUTOPROMPT_",
        env_file=(".env", str(Path.home() / ".autoprompt" / ".env")),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Extraction ---
    # Pasted input beyond this many characters is truncated before extraction.
    character_limit: int = 50000
    default_platform: str = "lovable.dev"

    # --- Processing ---
    batch_workers: int = 1
    checkpoint_every: int = 50

    # --- Usage quotas (monthly) ---
    enforce_quota: bool = True
    quota_prompts_per_month: int = 500
    quota_ai_optimizations_per_month: int = 100
    quota_batch_extractions_per_month: int = 50
    quota_batch_extraction_chars: int = 500000
    quota_api_calls: int = 1000

    # --- Export ---
    default_export_formats: list[str] = Field(default_factory=lambda: ["jsonl"])

    # --- Paths ---
    home_dir: Path = Field(default_factory=lambda: Path.home() / ".autoprompt")

    @property
    def log_dir(self) -> Path:
        return self.home_dir / "logs"

    @property
    def checkpoint_dir(self) -> Path:
        return self.home_dir / "checkpoints"

    @property
    def queue_path(self) -> Path:
        return self.home_dir / "queue.json"

    @property
    def usage_path(self) -> Path:
        return self.home_dir / "usage.json"

    @property
    def quota_limits(self) -> dict[str, int]:
        """Monthly limit per quota type, keyed by the quota type name."""
        return {
            "prompts_per_month": self.quota_prompts_per_month,
            "ai_optimizations_per_month": self.quota_ai_optimizations_per_month,
            "batch_extractions_per_month": self.quota_batch_extractions_per_month,
            "batch_extraction_chars": self.quota_batch_extraction_chars,
            "api_calls": self.quota_api_calls,
        }


@lru_cache(maxsize=1)
def get_config() -> AutopromptConfig:
    """Return the global config singleton."""
    return AutopromptConfig()
