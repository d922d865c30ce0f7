"""Pydantic schemas for generation requests and results."""

from infragen.ai.schemas.terraform_project import (
    GENERATE_TERRAFORM_TOOL,
    TOOL_NAME,
    CloudProvider,
    Correction,
    Diagnostic,
    DiagnosticType,
    GeneratedFile,
    GenerationRequest,
    GenerationResult,
    TerraformVariable,
)

__all__ = [
    "GENERATE_TERRAFORM_TOOL",
    "TOOL_NAME",
    "CloudProvider",
    "Correction",
    "Diagnostic",
    "DiagnosticType",
    "GeneratedFile",
    "GenerationRequest",
    "GenerationResult",
    "TerraformVariable",
]
