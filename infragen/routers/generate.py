"""
Generate Router - HTTP boundary of the Terraform generator.

Endpoints:
- POST    /generate-terraform   run the generation pipeline
- OPTIONS /generate-terraform   CORS pre-flight, answered without running anything
- GET     /models               caller-facing model catalogue

Every response, including errors and pre-flights, carries the CORS headers
below. Errors are always {"error": "<message>"}:
- 429 gateway rate limit
- 402 gateway quota / billing
- 500 everything else, including an incomplete request
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from infragen.ai.errors import GenerationError, InvalidRequest
from infragen.ai.router.model_router import list_models
from infragen.ai.schemas.terraform_project import GenerationRequest
from infragen.deps import get_generation_service
from infragen.services.generation_service import GenerationService


# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger("infragen.routers.generate")


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(tags=["generate"])

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
}


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS
# ---------------------------------------------------------------------------

def json_response(content: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def error_response(message: str, status_code: int) -> JSONResponse:
    return json_response({"error": message}, status_code=status_code)


def parse_generation_request(body: Any) -> GenerationRequest:
    """
    Validate the JSON body.

    Raises:
        InvalidRequest: body is not an object or a mandatory field is missing
    """
    if not isinstance(body, dict):
        raise InvalidRequest("Request body must be a JSON object")
    try:
        return GenerationRequest.model_validate(body)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise InvalidRequest(f"Missing or invalid fields: {', '.join(fields)}") from e


# ---------------------------------------------------------------------------
# ENDPOINTS
# ---------------------------------------------------------------------------

@router.options("/generate-terraform", include_in_schema=False)
async def generate_terraform_preflight() -> Response:
    """CORS pre-flight for clients that reach the route directly."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/generate-terraform")
async def generate_terraform(
    request: Request,
    service: GenerationService = Depends(get_generation_service),
) -> JSONResponse:
    """
    Generate a Terraform project from a free-text description.

    Request:
    {
        "model": "gpt",
        "apiKey": "...",
        "provider": "aws",
        "description": "a private S3 bucket",
        "projectName": "demo",
        "region": ""
    }

    Response (200):
    {"files": [...], "variables": [...], "diagnostics": [...], "corrections": [...]}
    """
    try:
        try:
            body = await request.json()
        except ValueError as e:
            raise InvalidRequest("Request body must be valid JSON") from e

        generation_request = parse_generation_request(body)
        result = await service.generate(generation_request)

    except GenerationError as e:
        log = logger.warning if isinstance(e, InvalidRequest) or e.status_code < 500 else logger.error
        log(f"Generation failed with {e.status_code}: {type(e).__name__}: {e.message}")
        return error_response(e.message, e.status_code)

    except Exception:
        logger.exception("Unexpected error in generate-terraform")
        return error_response("Unknown error occurred", 500)

    return json_response(result.to_response())


@router.get("/models")
async def get_models() -> JSONResponse:
    """Models a caller can pass as `model`."""
    return json_response({"models": list_models()})
