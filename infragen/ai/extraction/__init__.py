"""Recovering structured output from gateway responses."""

from infragen.ai.extraction.extractor import STRATEGIES, extract_payload, find_candidate

__all__ = [
    "STRATEGIES",
    "extract_payload",
    "find_candidate",
]
