"""Prompt extraction: segmentation, rewriting, and quality heuristics."""
from .models import ExtractedPrompt
from .extractor import extract_prompts, estimate_tokens, normalize_text, segment_text
from .optimizer import optimize_for_platform, optimize_prompt, generate_suggestions
from .quality import PromptQualityScorer, QualityAssessment, assess_prompt
from .analysis import (
    ExtractionReport,
    TextAnalysis,
    analyze_text,
    find_duplicates,
    remove_duplicates,
    validate_extraction,
)

__all__ = [
    "ExtractedPrompt",
    "extract_prompts",
    "estimate_tokens",
    "normalize_text",
    "segment_text",
    "optimize_prompt",
    "optimize_for_platform",
    "generate_suggestions",
    "PromptQualityScorer",
    "QualityAssessment",
    "assess_prompt",
    "ExtractionReport",
    "TextAnalysis",
    "analyze_text",
    "find_duplicates",
    "remove_duplicates",
    "validate_extraction",
]
