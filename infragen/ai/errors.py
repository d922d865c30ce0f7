"""
Generation errors - typed failures of the generation pipeline.

Each exception knows the HTTP status and the message the caller is allowed
to see. Anything more detailed (upstream bodies, unparseable payload
excerpts) stays on the exception for logging and is never sent back.

Taxonomy:
=========
- ConfigurationError       -> 500  gateway credential missing
- UpstreamRateLimited      -> 429  gateway said "slow down"
- UpstreamQuotaExceeded    -> 402  gateway said "out of credits"
- UpstreamRequestFailed    -> 500  any other gateway failure
- MalformedUpstreamOutput  -> 500  no usable project in the response
- InvalidRequest           -> 500  caller sent an incomplete request
"""

from typing import Optional


# Maximum characters of upstream text kept on an exception for logging
EXCERPT_LIMIT = 1000


def truncate(text: Optional[str], limit: int = EXCERPT_LIMIT) -> str:
    """Cut text down to at most `limit` characters for logs."""
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


class GenerationError(Exception):
    """Base exception for all generation pipeline failures."""

    status_code: int = 500
    public_message: str = "Unknown error occurred"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)

    @property
    def message(self) -> str:
        """Message safe to return to the caller."""
        return str(self)


class ConfigurationError(GenerationError):
    """Raised when the gateway credential is not configured."""

    public_message = "AI gateway credential is not configured"


class UpstreamRateLimited(GenerationError):
    """Raised when the gateway answers 429."""

    status_code = 429
    public_message = "Rate limit exceeded. Please try again later."


class UpstreamQuotaExceeded(GenerationError):
    """Raised when the gateway answers 402."""

    status_code = 402
    public_message = "Payment required. Please add credits to your workspace."


class UpstreamRequestFailed(GenerationError):
    """
    Raised for any other gateway failure (non-2xx status or transport error).

    The upstream body is kept for logs only; the caller gets a generic message.
    """

    public_message = "AI API request failed"

    def __init__(
        self,
        upstream_status: Optional[int] = None,
        upstream_body: Optional[str] = None,
    ):
        super().__init__()
        self.upstream_status = upstream_status
        self.upstream_body = truncate(upstream_body)


class MalformedUpstreamOutput(GenerationError):
    """
    Raised when no structured project can be recovered from the response.

    Attributes:
        reason: Short description of what went wrong (safe to return)
        excerpt: Bounded slice of the unparseable text (log only)
        strategy: Extraction strategy that produced the bad candidate, if any
    """

    public_message = "Failed to parse AI-generated Terraform configuration"

    def __init__(
        self,
        reason: str,
        excerpt: Optional[str] = None,
        strategy: Optional[str] = None,
    ):
        super().__init__(f"{self.public_message}: {reason}")
        self.reason = reason
        self.excerpt = truncate(excerpt)
        self.strategy = strategy


class InvalidRequest(GenerationError):
    """Raised when mandatory request fields are missing or invalid."""

    status_code = 500
    public_message = "Invalid request"
