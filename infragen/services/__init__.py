"""Application services: the generation pipeline and result normalization."""

from infragen.services.generation_service import GenerationService
from infragen.services.result_normalizer import normalize_result

__all__ = [
    "GenerationService",
    "normalize_result",
]
