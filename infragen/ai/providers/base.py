"""
Gateway response types.

The generation client returns the gateway's chat-completions envelope
untouched, wrapped with the bookkeeping needed for logging (model, token
usage, latency). Interpreting the envelope is the extractor's job.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


@dataclass
class TokenUsage:
    """
    Token usage statistics for a gateway request.

    Used for cost tracking and log lines; zeros when the gateway
    does not report usage.
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        """Calculate total if not provided."""
        if self.total_tokens == 0:
            self.total_tokens = self.prompt_tokens + self.completion_tokens

    @classmethod
    def from_envelope(cls, envelope: Dict[str, Any]) -> "TokenUsage":
        """Read the OpenAI-style `usage` block, tolerating its absence."""
        usage = envelope.get("usage") if isinstance(envelope, dict) else None
        if not isinstance(usage, dict):
            return cls()
        return cls(
            prompt_tokens=usage.get("prompt_tokens") or 0,
            completion_tokens=usage.get("completion_tokens") or 0,
            total_tokens=usage.get("total_tokens") or 0,
        )


@dataclass
class GatewayResponse:
    """
    Successful (2xx) response from the AI gateway.

    Attributes:
        envelope: Parsed JSON body, exactly as the gateway sent it
        model: Upstream model id the request was sent to
        usage: Token usage statistics
        latency_ms: Wall time of the HTTP call
        created_at: Timestamp of the response
    """
    envelope: Dict[str, Any]
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "model": self.model,
            "tokens": {
                "prompt": self.usage.prompt_tokens,
                "completion": self.usage.completion_tokens,
                "total": self.usage.total_tokens,
            },
            "latency_ms": round(self.latency_ms, 2),
            "created_at": self.created_at.isoformat(),
        }


def measure_latency(start_time: float) -> float:
    """Milliseconds elapsed since `start_time` (a time.time() value)."""
    return (time.time() - start_time) * 1000
