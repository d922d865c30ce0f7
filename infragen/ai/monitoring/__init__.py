"""
Monitoring Module - structured logging for gateway calls.

Usage:
======
    from infragen.ai.monitoring import ai_logger

    ai_logger.log_request(request_id, model, system_prompt, user_prompt)
    ai_logger.log_response(request_id, response=gateway_response)
"""

from infragen.ai.monitoring.logger import AILogger, ai_logger

__all__ = [
    "AILogger",
    "ai_logger",
]
