# autoprompt/documents/loader.py
"""Load plain-text batch files from disk.

Only text formats are accepted; bytes that are not valid UTF-8 are replaced
rather than rejected so a stray byte never blocks a whole batch.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .models import DocumentLoadError, LoadedDocument

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS: frozenset[str] = frozenset({".txt", ".md", ".markdown", ".text"})


def load_document(path: Path) -> LoadedDocument:
    """Read a text document from disk.

    Raises ``FileNotFoundError`` for a missing path and
    :class:`DocumentLoadError` for unsupported formats or unreadable files.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_FORMATS:
        raise DocumentLoadError(
            f"Unsupported format '{suffix}'. Supported: {sorted(SUPPORTED_FORMATS)}",
            user_message=f"Unsupported file type '{suffix or path.name}'. Use a text or Markdown file.",
        )

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise DocumentLoadError(f"Cannot read {path}: {exc}") from exc

    try:
        text = raw.decode("utf-8-sig")
        decode_errors = False
    except UnicodeDecodeError:
        logger.warning("Non UTF-8 bytes in %s, decoding with replacement", path)
        text = raw.decode("utf-8", errors="replace")
        decode_errors = True

    return LoadedDocument(
        text=text,
        source_path=path,
        format=suffix.lstrip("."),
        metadata={"size_bytes": len(raw)},
        decode_errors=decode_errors,
    )
