"""
Result Normalizer - turns the extracted payload into a GenerationResult.

Rules:
- `files` is mandatory: missing, not a list, empty, or holding an entry that
  is not {name, content} is a hard failure. Nothing useful can be returned
  without it.
- `variables` and `corrections` default to [] when missing or not a list.
  A present empty list is kept as an intentional "none".
- `diagnostics` defaults to a single success entry when missing, not a list,
  or empty.
- Invalid entries in the optional lists are dropped with a warning.
- Unknown keys are ignored.
"""

import logging
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from infragen.ai.errors import MalformedUpstreamOutput
from infragen.ai.schemas.terraform_project import (
    DEFAULT_DIAGNOSTIC_MESSAGE,
    Correction,
    Diagnostic,
    DiagnosticType,
    GeneratedFile,
    GenerationResult,
    TerraformVariable,
)

logger = logging.getLogger("infragen.services.normalizer")

ModelT = TypeVar("ModelT", bound=BaseModel)


def default_diagnostics() -> List[Diagnostic]:
    return [Diagnostic(type=DiagnosticType.SUCCESS, message=DEFAULT_DIAGNOSTIC_MESSAGE)]


def _normalize_files(raw_files: Any) -> List[GeneratedFile]:
    if raw_files is None:
        raise MalformedUpstreamOutput("Invalid response format: missing files array")
    if not isinstance(raw_files, list):
        raise MalformedUpstreamOutput(
            f"Invalid response format: files must be an array, got {type(raw_files).__name__}"
        )
    if not raw_files:
        raise MalformedUpstreamOutput("Invalid response format: files array is empty")

    files = []
    for index, item in enumerate(raw_files):
        try:
            files.append(GeneratedFile.model_validate(item))
        except ValidationError as e:
            raise MalformedUpstreamOutput(
                f"Invalid response format: files[{index}] is not a {{name, content}} object",
                excerpt=str(e),
            ) from e
    return files


def _normalize_list(raw_items: Any, model: Type[ModelT], field_name: str) -> List[ModelT]:
    """Validate an optional list, dropping entries that do not fit `model`."""
    if not isinstance(raw_items, list):
        if raw_items is not None:
            logger.warning(f"Ignoring {field_name}: expected array, got {type(raw_items).__name__}")
        return []

    items = []
    for index, item in enumerate(raw_items):
        try:
            items.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Dropping invalid {field_name}[{index}]: {e.error_count()} validation error(s)")
    return items


def normalize_result(raw: Any) -> GenerationResult:
    """
    Validate the raw payload and fill defaults.

    Args:
        raw: Decoded JSON from the response extractor

    Returns:
        GenerationResult with non-empty files

    Raises:
        MalformedUpstreamOutput: payload is not an object or `files` is unusable
    """
    if not isinstance(raw, dict):
        raise MalformedUpstreamOutput(
            f"Invalid response format: expected a JSON object, got {type(raw).__name__}"
        )

    files = _normalize_files(raw.get("files"))
    variables = _normalize_list(raw.get("variables"), TerraformVariable, "variables")
    corrections = _normalize_list(raw.get("corrections"), Correction, "corrections")
    diagnostics = _normalize_list(raw.get("diagnostics"), Diagnostic, "diagnostics")

    if not diagnostics:
        diagnostics = default_diagnostics()

    return GenerationResult(
        files=files,
        variables=variables,
        diagnostics=diagnostics,
        corrections=corrections,
    )
