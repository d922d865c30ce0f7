"""
Model Router Module.

Maps the model names users choose from to the gateway's model ids.
"""

from infragen.ai.router.model_router import (
    DEFAULT_UPSTREAM_MODEL,
    MODEL_MAP,
    list_models,
    resolve_model,
)

__all__ = [
    "DEFAULT_UPSTREAM_MODEL",
    "MODEL_MAP",
    "list_models",
    "resolve_model",
]
