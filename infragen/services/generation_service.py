"""
Generation Service - the Terraform generation pipeline.

One call to `generate()` runs the whole chain:

    GenerationRequest
        │
        ├─► prompts (system + user)        infragen.ai.prompts
        ├─► upstream model id              infragen.ai.router
        ▼
    GatewayClient.complete()               one HTTP call, no retries
        ▼
    extract_payload()                      tool call / fenced JSON / raw JSON
        ▼
    normalize_result()                     files required, defaults filled
        ▼
    GenerationResult

The service keeps no per-request state, so one instance serves concurrent
requests. Every failure is a GenerationError subclass; the router maps them
to HTTP statuses.
"""

import logging
import time
import uuid as uuid_module

from infragen.ai.errors import GenerationError, MalformedUpstreamOutput
from infragen.ai.extraction.extractor import extract_payload
from infragen.ai.monitoring.logger import AILogger, ai_logger
from infragen.ai.prompts.terraform_prompts import build_system_prompt, build_user_prompt
from infragen.ai.providers.base import measure_latency
from infragen.ai.providers.gateway import GatewayClient
from infragen.ai.router.model_router import resolve_model
from infragen.ai.schemas.terraform_project import (
    GENERATE_TERRAFORM_TOOL,
    TOOL_NAME,
    GenerationRequest,
    GenerationResult,
)
from infragen.core.config import Settings
from infragen.services.result_normalizer import normalize_result

logger = logging.getLogger("infragen.services.generation")


class GenerationService:
    """
    Runs the generation pipeline for one request at a time.

    Usage:
        service = GenerationService(GatewayClient(api_key="..."))
        result = await service.generate(request)
    """

    def __init__(self, client: GatewayClient, monitor: AILogger = ai_logger):
        self.client = client
        self.monitor = monitor

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationService":
        """Build the service and its gateway client from application settings."""
        client = GatewayClient(
            api_key=settings.AI_GATEWAY_API_KEY,
            base_url=settings.AI_GATEWAY_URL,
            timeout=settings.AI_REQUEST_TIMEOUT,
            max_completion_tokens=settings.AI_MAX_COMPLETION_TOKENS,
        )
        return cls(client)

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Generate a Terraform project for `request`.

        Raises:
            GenerationError: any pipeline failure (see infragen.ai.errors)
        """
        request_id = str(uuid_module.uuid4())
        start_time = time.time()

        upstream_model = resolve_model(request.model)
        system_prompt = build_system_prompt(request.provider, request.project_name, request.region)
        user_prompt = build_user_prompt(request.description)

        logger.info(
            f"Generating Terraform project: request_id={request_id}, model={request.model!r}, "
            f"provider={request.provider.value}, project={request.project_name!r}, "
            f"region={request.region!r}"
        )
        self.monitor.log_request(
            request_id,
            model=upstream_model,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            metadata={"provider": request.provider.value, "requested_model": request.model},
        )

        try:
            response = await self.client.complete(
                model=upstream_model,
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                tool=GENERATE_TERRAFORM_TOOL,
            )
        except GenerationError as e:
            self.monitor.log_response(
                request_id,
                model=upstream_model,
                error=type(e).__name__,
                status_code=getattr(e, "upstream_status", None) or e.status_code,
            )
            if isinstance(e, MalformedUpstreamOutput):
                self.monitor.log_parse_failure(request_id, e)
            raise

        self.monitor.log_response(request_id, response=response)
        logger.debug(f"Gateway envelope keys: {sorted(response.envelope.keys())}")

        try:
            raw = extract_payload(response.envelope, TOOL_NAME)
            result = normalize_result(raw)
        except MalformedUpstreamOutput as e:
            self.monitor.log_parse_failure(request_id, e)
            raise

        logger.info(
            f"Successfully generated Terraform project: request_id={request_id}, "
            f"files={len(result.files)}, variables={len(result.variables)}, "
            f"corrections={len(result.corrections)}, total_ms={measure_latency(start_time):.0f}"
        )
        return result
