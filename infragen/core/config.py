"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To override in production, set environment variables:
        export AI_GATEWAY_API_KEY=your-gateway-secret
        export AI_REQUEST_TIMEOUT=120
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Display name shown in API docs and logging
    APP_NAME: str = "InfraGen Terraform Generator"

    # DEBUG: More verbose logging (full gateway envelopes at DEBUG level)
    DEBUG: bool = False

    # LOG_LEVEL: Level for the "infragen" logger tree
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # AI GATEWAY SETTINGS
    # ---------------------------------------------------------------------------
    # AI_GATEWAY_API_KEY: Server-side credential for the generation gateway.
    # - This is NOT the key users type into the UI; that one never leaves
    #   the request object.
    # - Empty means "not configured": generation requests fail with a 500.
    AI_GATEWAY_API_KEY: str = ""

    # AI_GATEWAY_URL: Base URL of the OpenAI-compatible chat completions API
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1"

    # AI_REQUEST_TIMEOUT: Upper bound for one generation call, in seconds.
    # Full Terraform projects take a while to generate, so this is generous.
    AI_REQUEST_TIMEOUT: float = 300.0

    # AI_MAX_COMPLETION_TOKENS: Output size cap sent with every request
    AI_MAX_COMPLETION_TOKENS: int = 16000


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from infragen.core.config import settings
settings = Settings()
