"""
AI Providers Module - client for the generation gateway.

Every model family is served by one OpenAI-compatible gateway, so there is
a single HTTP client rather than one SDK per vendor:

    response = await client.complete(model, system_prompt, user_prompt, tool=...)
"""

from infragen.ai.providers.base import GatewayResponse, TokenUsage
from infragen.ai.providers.gateway import GatewayClient

__all__ = [
    "GatewayClient",
    "GatewayResponse",
    "TokenUsage",
]
