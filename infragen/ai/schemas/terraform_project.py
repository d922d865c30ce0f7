"""
Terraform Project Schemas

Pydantic models for everything that crosses the pipeline:
- GenerationRequest: what the caller sends to POST /generate-terraform
- GeneratedFile / TerraformVariable / Diagnostic / Correction: pieces of a result
- GenerationResult: the normalized project returned to the caller

Plus GENERATE_TERRAFORM_TOOL, the function schema sent to the gateway so the
model answers through a tool call instead of free text.

Wire names are camelCase (apiKey, projectName) to match the web client;
Python attributes are snake_case.

Usage:
======
```python
request = GenerationRequest.model_validate(
    {"model": "gpt", "provider": "aws", "description": "a private S3 bucket",
     "projectName": "demo", "region": ""}
)
request.project_name  # "demo"
```
"""

import json
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# ENUMS
# ---------------------------------------------------------------------------

class CloudProvider(str, Enum):
    """Target cloud for the generated project."""
    AWS = "aws"
    GCP = "gcp"
    AZURE = "azure"

    @property
    def display_name(self) -> str:
        return _PROVIDER_NAMES[self]


_PROVIDER_NAMES = {
    CloudProvider.AWS: "Amazon Web Services",
    CloudProvider.GCP: "Google Cloud Platform",
    CloudProvider.AZURE: "Microsoft Azure",
}


class DiagnosticType(str, Enum):
    """Severity of a diagnostic message."""
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"


# ---------------------------------------------------------------------------
# REQUEST
# ---------------------------------------------------------------------------

class GenerationRequest(BaseModel):
    """
    One user action asking for a Terraform project.

    `model` is a plain string on purpose: unknown ids are not rejected here,
    the model router maps them to its default upstream model.

    `api_key` is accepted and kept on the request but the pipeline does not
    use it; upstream calls authenticate with the server-side gateway key.
    """
    model_config = ConfigDict(populate_by_name=True)

    model: str = Field(default="", description="Caller-facing model id (gemini, gpt, claude)")
    api_key: str = Field(default="", alias="apiKey", repr=False)
    provider: CloudProvider
    description: str = Field(description="Free-text infrastructure requirements")
    project_name: str = Field(alias="projectName")
    region: str = Field(default="", description="Cloud region; empty means provider default")

    @field_validator("description", "project_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("model", "region", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


# ---------------------------------------------------------------------------
# RESULT PIECES
# ---------------------------------------------------------------------------

class GeneratedFile(BaseModel):
    """A single generated file, e.g. main.tf."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Relative filename (e.g. main.tf)")
    content: str = Field(description="Full file content")


class TerraformVariable(BaseModel):
    """
    A variable declared in variables.tf.

    `default` is None when the variable has no default value; it is left
    out of the serialized response in that case.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "string"
    description: str = ""
    default: Optional[str] = None

    @field_validator("default", mode="before")
    @classmethod
    def coerce_default(cls, v: Any) -> Optional[str]:
        """Models sometimes return numbers/booleans/lists; keep their JSON text."""
        if v is None or isinstance(v, str):
            return v
        return json.dumps(v)


class Diagnostic(BaseModel):
    """Informational message about the generated project."""
    model_config = ConfigDict(frozen=True)

    type: DiagnosticType
    message: str


class Correction(BaseModel):
    """An ambiguity in the request that the generator resolved on its own."""
    model_config = ConfigDict(frozen=True)

    original: str
    corrected: str
    reason: str


# ---------------------------------------------------------------------------
# RESULT
# ---------------------------------------------------------------------------

DEFAULT_DIAGNOSTIC_MESSAGE = (
    "Terraform project generated successfully with security best practices"
)


class GenerationResult(BaseModel):
    """The normalized Terraform project returned to the caller."""
    model_config = ConfigDict(frozen=True)

    files: List[GeneratedFile] = Field(min_length=1)
    variables: List[TerraformVariable] = Field(default_factory=list)
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    corrections: List[Correction] = Field(default_factory=list)

    def to_response(self) -> dict:
        """JSON-ready dict; variables without a default omit the key."""
        return self.model_dump(mode="json", exclude_none=True)


# ---------------------------------------------------------------------------
# TOOL SCHEMA
# ---------------------------------------------------------------------------
# Sent as `tools` with a forced `tool_choice`, so a compliant model returns
# the project as JSON in tool_calls[0].function.arguments.

TOOL_NAME = "generate_terraform_project"

GENERATE_TERRAFORM_TOOL = {
    "type": "function",
    "function": {
        "name": TOOL_NAME,
        "description": "Generate a complete Terraform project with all necessary files",
        "parameters": {
            "type": "object",
            "properties": {
                "files": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string", "description": "Filename (e.g., main.tf)"},
                            "content": {"type": "string", "description": "Full file content"},
                        },
                        "required": ["name", "content"],
                    },
                },
                "variables": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string"},
                            "type": {"type": "string"},
                            "description": {"type": "string"},
                            "default": {"type": "string"},
                        },
                    },
                },
                "diagnostics": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "type": {"type": "string", "enum": [t.value for t in DiagnosticType]},
                            "message": {"type": "string"},
                        },
                    },
                },
                "corrections": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "original": {"type": "string"},
                            "corrected": {"type": "string"},
                            "reason": {"type": "string"},
                        },
                    },
                },
            },
            "required": ["files"],
        },
    },
}
