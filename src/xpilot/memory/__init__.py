"""Learned facts and the heuristics that feed them."""

from .extractor import DEFAULT_EXTRACTION, ExtractionConfig, extract
from .facts import LearnedFacts

__all__ = [
    "DEFAULT_EXTRACTION",
    "ExtractionConfig",
    "LearnedFacts",
    "extract",
]
