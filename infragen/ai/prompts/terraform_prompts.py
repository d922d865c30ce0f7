"""
Terraform Generation Prompts

Builds the system instruction and user message for one generation call.

The system instruction carries the whole output contract:
- target cloud, project name and region
- the exact set of files to produce
- security-by-default policy
- self-correction of ambiguous requirements (reported as corrections)
- the JSON shape of the answer

The JSON shape is spelled out in the prompt even though the gateway call
also forces a tool call: models that ignore the tool still tend to answer
with the same object as free text, which the extractor can recover.

Usage:
======
```python
from infragen.ai.prompts.terraform_prompts import build_generation_messages

messages = build_generation_messages(CloudProvider.AWS, "demo", "", "a private S3 bucket")
```
"""

from typing import Dict, List

from infragen.ai.schemas.terraform_project import CloudProvider, DEFAULT_DIAGNOSTIC_MESSAGE


# Used when the caller leaves region empty
DEFAULT_REGION_PHRASE = "default region for provider"

# Files every generated project must contain, in display order
EXPECTED_FILES = (
    ("main.tf", "core resources"),
    ("variables.tf", "input variable declarations with types and descriptions"),
    ("outputs.tf", "useful outputs (IDs, ARNs, endpoints)"),
    ("providers.tf", "terraform block with required_providers and provider configuration"),
    ("README.md", "what the project creates, prerequisites and usage"),
    ("terraform.tfvars.example", "example values for every variable"),
)


# ---------------------------------------------------------------------------
# OUTPUT CONTRACT
# ---------------------------------------------------------------------------

OUTPUT_FORMAT = f"""Respond with exactly ONE JSON object of this shape and nothing else:
{{
  "files": [{{"name": "main.tf", "content": "<full file content>"}}],
  "variables": [{{"name": "string", "type": "string", "description": "string", "default": "optional string"}}],
  "diagnostics": [{{"type": "info|warning|success", "message": "string"}}],
  "corrections": [{{"original": "string", "corrected": "string", "reason": "string"}}]
}}

Rules:
- "files" is REQUIRED and must contain every file listed above.
- Each file "content" is the complete file text, never a placeholder or diff.
- Omit "default" for variables that have no default value.
- Use "diagnostics" for notes and warnings about the design; if there is
  nothing to report use [{{"type": "success", "message": "{DEFAULT_DIAGNOSTIC_MESSAGE}"}}].
- Use "corrections": [] when nothing needed correcting."""


SECURITY_POLICY = """SECURITY BEST PRACTICES (apply by default, even if not asked):
- Private networking: place workloads in private subnets, no public IPs or
  public buckets unless the user explicitly asks for public access.
- Encryption at rest for every storage and database resource, and encryption
  in transit (TLS-only policies, HTTPS listeners).
- Least privilege: narrowly scoped IAM roles/policies and security group rules.
- Consistent tagging: tag every taggable resource with at least Project,
  Environment and ManagedBy = "terraform"."""


SELF_CORRECTION_POLICY = """AMBIGUOUS REQUIREMENTS:
- If a requirement is ambiguous, contradictory or insecure, pick the safest
  reasonable interpretation and generate code for it.
- Report every such decision in "corrections" with the original wording,
  what you generated instead, and why."""


# ---------------------------------------------------------------------------
# BUILDERS
# ---------------------------------------------------------------------------

def format_region(region: str) -> str:
    """Return the region, or the default-region phrase when it is blank."""
    region = (region or "").strip()
    return region or DEFAULT_REGION_PHRASE


def build_system_prompt(provider: CloudProvider, project_name: str, region: str) -> str:
    """
    Build the system instruction for a Terraform generation call.

    Args:
        provider: Target cloud provider
        project_name: Name used for the project and resource naming/tags
        region: Cloud region, empty for the provider's default

    Returns:
        System prompt string
    """
    provider = CloudProvider(provider)
    files_section = "\n".join(
        f"- {name}: {purpose}" for name, purpose in EXPECTED_FILES
    )

    return f"""You are an expert DevOps engineer specialized in Terraform infrastructure as code.
Generate complete, production-ready Terraform projects based on user requirements.

Cloud Provider: {provider.value.upper()} ({provider.display_name})
Project Name: {project_name}
Region: {format_region(region)}

REQUIRED FILES:
{files_section}

{SECURITY_POLICY}

{SELF_CORRECTION_POLICY}

OUTPUT FORMAT:
{OUTPUT_FORMAT}"""


def build_user_prompt(description: str) -> str:
    """The user's requirements, passed through as the user message."""
    return description.strip()


def build_generation_messages(
    provider: CloudProvider,
    project_name: str,
    region: str,
    description: str,
) -> List[Dict[str, str]]:
    """Chat messages (system + user) for the gateway."""
    return [
        {"role": "system", "content": build_system_prompt(provider, project_name, region)},
        {"role": "user", "content": build_user_prompt(description)},
    ]
