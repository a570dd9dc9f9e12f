# autoprompt/envelope.py
"""
``_autoprompt`` metadata envelope builder.

Every CLI output document carries an ``_autoprompt`` key holding the dict
returned by :func:`build_envelope`.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from . import __version__


def build_envelope(
    *,
    pipeline: str,
    duration_s: float | None = None,
    tokens: dict[str, int] | None = None,
    document: dict[str, Any] | None = None,
    quota: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a JSON-serializable metadata envelope.

    Parameters
    ----------
    pipeline:
        Name of the operation that produced the output (required), e.g.
        ``"extract"`` or ``"optimize"``.
    duration_s:
        Wall-clock processing time in seconds, or ``None``.
    tokens:
        Dict with an ``estimated`` token total.
        Defaults to ``{"estimated": 0}``.
    document:
        Source metadata (filename, characters, truncation), or ``None``.
    quota:
        Quota consumed by the run (type and amount), or ``None``.
    """
    return {
        "version": __version__,
        "pipeline": pipeline,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "duration_s": duration_s,
        "tokens": tokens if tokens is not None else {"estimated": 0},
        "document": document,
        "quota": quota,
    }
