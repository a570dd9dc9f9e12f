"""
AUTOPROMPT - prompt extraction and batching toolkit

Turns pasted documents, chat logs, and batch files into ordered lists of
discrete prompts, with token estimates, rule-based rewriting, usage quotas,
and a local execution queue.

Main Components:
    - autoprompt.extraction: segmentation, optimizer, quality heuristics
    - autoprompt.batch: directory batch processing with checkpoints
    - autoprompt.jobs: local execution job queue
    - autoprompt.cli: ``autoprompt`` command line
"""

__version__ = "1.0.0"

from .extraction import ExtractedPrompt, extract_prompts, optimize_prompt

__all__ = ["__version__", "ExtractedPrompt", "extract_prompts", "optimize_prompt"]
