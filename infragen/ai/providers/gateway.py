"""
Gateway Provider - HTTP client for the OpenAI-compatible AI gateway.

All model families (Gemini, GPT, ...) are reached through one
chat-completions endpoint, so there is a single client instead of one
SDK per vendor.

Behaviour:
==========
- One non-streaming POST per call, no retries. Generation is expensive
  and rate limited, so retrying is left to the caller.
- The whole call, including a slowly trickling body, is bounded by
  `timeout`; httpx limits each read or write on top of that.
- A new httpx.AsyncClient per call: nothing is pooled or shared between
  requests, and cancelling the calling task closes the connection.
- Non-2xx statuses become typed errors (429, 402, everything else).
  Error bodies are logged, never returned.

API Reference: https://platform.openai.com/docs/api-reference/chat/create
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import httpx

from infragen.ai.errors import (
    ConfigurationError,
    MalformedUpstreamOutput,
    UpstreamQuotaExceeded,
    UpstreamRateLimited,
    UpstreamRequestFailed,
    truncate,
)
from infragen.ai.providers.base import GatewayResponse, TokenUsage, measure_latency

logger = logging.getLogger("infragen.ai.gateway")


class GatewayClient:
    """
    Client for the AI gateway's chat completions API.

    Usage:
        client = GatewayClient(api_key=settings.AI_GATEWAY_API_KEY)
        response = await client.complete(
            model="openai/gpt-5",
            system_prompt="You are ...",
            user_prompt="a private S3 bucket",
            tool=GENERATE_TERRAFORM_TOOL,
        )
        response.envelope["choices"][0]["message"]
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://ai.gateway.lovable.dev/v1",
        timeout: float = 300.0,
        max_completion_tokens: int = 16000,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: Server-side gateway credential (empty = not configured)
            base_url: Gateway base URL, without the /chat/completions suffix
            timeout: Upper bound for the whole call, in seconds
            max_completion_tokens: Output size cap sent with each request
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_completion_tokens = max_completion_tokens
        self._transport = transport

        if not self.api_key:
            logger.warning("AI gateway credential not configured - generation unavailable")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def build_payload(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
        tool: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Build the request body.

        When `tool` is given, tool_choice forces the model to answer by
        calling that function instead of writing free text.
        """
        payload: Dict[str, Any] = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_completion_tokens": self.max_completion_tokens,
        }

        if tool is not None:
            payload["tools"] = [tool]
            payload["tool_choice"] = {
                "type": "function",
                "function": {"name": tool["function"]["name"]},
            }

        return payload

    async def complete(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
        tool: Optional[Dict[str, Any]] = None,
    ) -> GatewayResponse:
        """
        Send one chat completion request.

        Returns:
            GatewayResponse with the parsed JSON envelope

        Raises:
            ConfigurationError: No gateway credential configured
            UpstreamRateLimited: Gateway returned 429
            UpstreamQuotaExceeded: Gateway returned 402
            UpstreamRequestFailed: Any other non-2xx status or network error
            MalformedUpstreamOutput: 2xx response whose body is not JSON
        """
        if not self.api_key:
            raise ConfigurationError()

        payload = self.build_payload(model, system_prompt, user_prompt, tool)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        start_time = time.time()

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        ) as client:
            try:
                response = await asyncio.wait_for(
                    client.post(self.endpoint, json=payload, headers=headers),
                    timeout=self.timeout,
                )
            except (asyncio.TimeoutError, httpx.TimeoutException) as e:
                logger.error(f"Gateway request timed out after {self.timeout}s: {e!r}")
                raise UpstreamRequestFailed(upstream_body=f"timeout: {e!r}") from e
            except httpx.RequestError as e:
                logger.error(f"Network error calling gateway: {e!r}")
                raise UpstreamRequestFailed(upstream_body=repr(e)) from e

        latency_ms = measure_latency(start_time)

        if not response.is_success:
            self._raise_for_status(response)

        try:
            envelope = response.json()
        except ValueError as e:
            raise MalformedUpstreamOutput(
                reason="gateway response is not valid JSON",
                excerpt=response.text,
                strategy="envelope",
            ) from e

        if not isinstance(envelope, dict):
            raise MalformedUpstreamOutput(
                reason="gateway response is not a JSON object",
                excerpt=response.text,
                strategy="envelope",
            )

        usage = TokenUsage.from_envelope(envelope)
        logger.info(f"Gateway request completed in {latency_ms:.0f}ms, tokens: {usage.total_tokens}")

        return GatewayResponse(
            envelope=envelope,
            model=model,
            usage=usage,
            latency_ms=latency_ms,
        )

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Map a non-2xx gateway response to a typed error."""
        status = response.status_code

        if status == 429:
            logger.warning("Gateway rate limit hit (429)")
            raise UpstreamRateLimited()
        if status == 402:
            logger.warning("Gateway quota exhausted (402)")
            raise UpstreamQuotaExceeded()

        # Body may be HTML or empty on failure paths; only ever read it as text
        body = response.text
        logger.error(f"AI API error: {status} {truncate(body)}")
        raise UpstreamRequestFailed(upstream_status=status, upstream_body=body)
