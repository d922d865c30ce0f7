"""Prompt builders for Terraform generation."""

from infragen.ai.prompts.terraform_prompts import (
    DEFAULT_REGION_PHRASE,
    EXPECTED_FILES,
    build_generation_messages,
    build_system_prompt,
    build_user_prompt,
)

__all__ = [
    "DEFAULT_REGION_PHRASE",
    "EXPECTED_FILES",
    "build_generation_messages",
    "build_system_prompt",
    "build_user_prompt",
]
