# autoprompt/usage.py
"""Monthly usage quotas backed by a JSON ledger file.

Callers reserve bulk work before doing it::

    ledger = UsageLedger.from_config()
    ledger.consume("batch_extraction_chars", len(text))
    prompts = extract_prompts(text)

``consume`` checks and records under one lock, so parallel batch workers
share the headroom correctly.  The extractor itself never consults the
ledger.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from .errors import QuotaExceededError

logger = logging.getLogger(__name__)

QUOTA_TYPES: tuple[str, ...] = (
    "prompts_per_month",
    "ai_optimizations_per_month",
    "batch_extractions_per_month",
    "batch_extraction_chars",
    "api_calls",
)


def current_period(now: Optional[datetime] = None) -> str:
    """Billing period key, e.g. ``"2026-10"`` (UTC calendar month)."""
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m")


class UsageLedger:
    """Per-month usage counters with fixed limits per quota type."""

    def __init__(
        self,
        path: Path,
        limits: dict[str, int],
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.path = Path(path)
        self.limits = dict(limits)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = threading.Lock()
        self._periods: dict[str, dict[str, int]] = {}
        if self.path.exists():
            self._periods = self._read()

    @classmethod
    def from_config(cls) -> UsageLedger:
        from .config import get_config

        cfg = get_config()
        return cls(cfg.usage_path, cfg.quota_limits)

    # -- persistence -----------------------------------------------------

    def _read(self) -> dict[str, dict[str, int]]:
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return {
            period: {k: int(v) for k, v in counters.items()}
            for period, counters in data.get("periods", {}).items()
        }

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data: dict[str, Any] = {
            "periods": self._periods,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")

    # -- queries ---------------------------------------------------------

    @property
    def period(self) -> str:
        return current_period(self._clock())

    def usage_for(self, quota_type: str) -> int:
        return self._periods.get(self.period, {}).get(quota_type, 0)

    def remaining(self, quota_type: str) -> int:
        limit = self.limits.get(quota_type)
        if limit is None:
            return 0
        return max(0, limit - self.usage_for(quota_type))

    def check_usage_limit(self, quota_type: str, amount: int = 1) -> bool:
        """True if *amount* more units fit in this month's quota.

        Unknown quota types are refused.
        """
        if quota_type not in self.limits:
            logger.warning("Usage check for unknown quota type %r", quota_type)
            return False
        return self.usage_for(quota_type) + amount <= self.limits[quota_type]

    def require(self, quota_type: str, amount: int = 1) -> None:
        """Raise :class:`QuotaExceededError` unless *amount* fits."""
        if not self.check_usage_limit(quota_type, amount):
            remaining = self.remaining(quota_type)
            logger.warning(
                "Quota %s refused: requested %d, remaining %d", quota_type, amount, remaining
            )
            raise QuotaExceededError(quota_type, amount, remaining)

    # -- updates ---------------------------------------------------------

    def consume(self, quota_type: str, amount: int = 1) -> None:
        """Check and record *amount* in one step.

        Concurrent callers cannot both pass the check on the same headroom.
        Raises :class:`QuotaExceededError` and records nothing when it does
        not fit.
        """
        if amount < 0:
            raise ValueError("amount must be non-negative")
        with self._lock:
            self.require(quota_type, amount)
            counters = self._periods.setdefault(self.period, {})
            counters[quota_type] = counters.get(quota_type, 0) + amount
            self._save()
        logger.debug("Usage %s += %d (now %d)", quota_type, amount, self.usage_for(quota_type))

    def increment_usage(self, quota_type: str, amount: int = 1) -> None:
        """Record *amount* units against this month's counter and persist."""
        if amount < 0:
            raise ValueError("amount must be non-negative")
        with self._lock:
            counters = self._periods.setdefault(self.period, {})
            counters[quota_type] = counters.get(quota_type, 0) + amount
            self._save()
        logger.debug("Usage %s += %d (now %d)", quota_type, amount, self.usage_for(quota_type))

    def snapshot(self) -> dict[str, dict[str, int]]:
        """Used / limit / remaining for every configured quota type."""
        return {
            quota_type: {
                "used": self.usage_for(quota_type),
                "limit": limit,
                "remaining": self.remaining(quota_type),
            }
            for quota_type, limit in self.limits.items()
        }
