"""
Model Router - maps caller-facing model ids to gateway model ids.

Users pick from a small, stable vocabulary (gemini, gpt, claude). The gateway
speaks its own "vendor/model" names, which change as models are swapped.
Keeping a single table here means an upstream swap never changes the API.

Unknown ids do not fail: they resolve to DEFAULT_UPSTREAM_MODEL.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional

logger = logging.getLogger("infragen.ai.router")


# Fallback for ids not in the table
DEFAULT_MODEL_KEY = "default"
DEFAULT_UPSTREAM_MODEL = "google/gemini-2.5-flash"


@dataclass(frozen=True)
class ModelOption:
    """One entry of the caller-facing model catalogue."""
    id: str
    label: str
    upstream: str

    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label, "upstream": self.upstream}


# Claude is not offered by the gateway; it is served by Gemini Pro.
MODEL_CATALOGUE = (
    ModelOption(id="gemini", label="Google Gemini Pro", upstream="google/gemini-2.5-pro"),
    ModelOption(id="gpt", label="OpenAI GPT-5", upstream="openai/gpt-5"),
    ModelOption(id="claude", label="Anthropic Claude", upstream="google/gemini-2.5-pro"),
)

MODEL_MAP: Mapping[str, str] = MappingProxyType(
    {option.id: option.upstream for option in MODEL_CATALOGUE}
)


def resolve_model(model_id: Optional[str]) -> str:
    """
    Resolve a caller-facing model id to the gateway model id.

    Args:
        model_id: "gemini", "gpt", "claude" (case-insensitive), or anything else

    Returns:
        Upstream model id; DEFAULT_UPSTREAM_MODEL for unknown or empty ids
    """
    key = (model_id or "").strip().lower()
    upstream = MODEL_MAP.get(key)
    if upstream is None:
        logger.debug(
            f"Unknown model id {model_id!r}, using {DEFAULT_MODEL_KEY} model {DEFAULT_UPSTREAM_MODEL}"
        )
        return DEFAULT_UPSTREAM_MODEL
    return upstream


def list_models() -> List[dict]:
    """Caller-facing model catalogue, in display order."""
    return [option.to_dict() for option in MODEL_CATALOGUE]
