"""
AI Logger - Structured logging for gateway calls.

Each event is one log line with a JSON payload:
- ai_request: model, provider, prompt sizes
- ai_response: model, tokens, latency, success / error
- ai_parse_failure: which strategy failed plus a bounded excerpt

Never logged: the user's API key, the full prompt, the full response.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from infragen.ai.errors import MalformedUpstreamOutput, truncate
from infragen.ai.providers.base import GatewayResponse

logger = logging.getLogger("infragen.ai.monitoring")

# Preview length for prompt text in request events
PREVIEW_LIMIT = 100


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class AILogger:
    """
    Structured logger for gateway interactions.

    Usage:
        ai_logger.log_request(request_id, model="openai/gpt-5", ...)
        ai_logger.log_response(request_id, response=gateway_response)
    """

    def __init__(self, target: Optional[logging.Logger] = None):
        self._logger = target or logger

    def log_request(
        self,
        request_id: str,
        model: str,
        system_prompt: str,
        user_prompt: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log an outgoing gateway request."""
        log_data = {
            "event": "ai_request",
            "request_id": request_id,
            "model": model,
            "system_prompt_length": len(system_prompt),
            "user_prompt_length": len(user_prompt),
            "user_prompt_preview": truncate(user_prompt, PREVIEW_LIMIT),
            "timestamp": _now(),
        }
        if metadata:
            log_data["metadata"] = metadata

        self._logger.info(f"AI Request: {json.dumps(log_data)}")

    def log_response(
        self,
        request_id: str,
        response: Optional[GatewayResponse] = None,
        model: Optional[str] = None,
        error: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        """
        Log the outcome of a gateway request.

        Pass `response` on success, or `model`/`error`/`status_code` on failure.
        """
        if response is not None:
            log_data = {"event": "ai_response", "request_id": request_id, "success": True}
            log_data.update(response.to_dict())
        else:
            log_data = {
                "event": "ai_response",
                "request_id": request_id,
                "success": False,
                "model": model or "unknown",
                "status_code": status_code,
                "error": error,
                "created_at": _now(),
            }

        level = logging.INFO if response is not None else logging.WARNING
        self._logger.log(level, f"AI Response: {json.dumps(log_data)}")

    def log_parse_failure(self, request_id: str, exc: MalformedUpstreamOutput) -> None:
        """Log why a response could not be turned into a project."""
        log_data = {
            "event": "ai_parse_failure",
            "request_id": request_id,
            "strategy": exc.strategy,
            "reason": exc.reason,
            "excerpt": exc.excerpt,
            "timestamp": _now(),
        }
        self._logger.error(f"AI Parse Failure: {json.dumps(log_data)}")


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
ai_logger = AILogger()
