"""Document loading: plain-text batch files pasted or uploaded for extraction."""
from .models import LoadedDocument, DocumentLoadError
from .loader import SUPPORTED_FORMATS, load_document

__all__ = ["LoadedDocument", "DocumentLoadError", "SUPPORTED_FORMATS", "load_document"]
