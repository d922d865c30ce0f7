"""
Response Extractor - recovers the structured project from a gateway envelope.

Models do not always honour the forced tool call. The answer can arrive as:

1. tool_calls[].function.arguments   (the happy path)
2. a ```json fenced block inside free text
3. an unlabeled ``` fenced block inside free text
4. the free text itself, as raw JSON

Each location is a small strategy function returning an optional candidate
string. Strategies run in that order and the FIRST candidate found is parsed;
a later strategy is never used to rescue an earlier candidate that fails to
parse. A tool call with the wrong function name counts as "no candidate".

A ```json block may sit on one line (```json{...}```). An unlabeled block
must open with ``` on its own line; a one-line ```{...}``` is not treated
as a fence and falls through to the raw-body strategy.
"""

import json
import logging
import re
from typing import Any, Callable, Dict, Optional, Tuple

from infragen.ai.errors import MalformedUpstreamOutput
from infragen.ai.schemas.terraform_project import TOOL_NAME

logger = logging.getLogger("infragen.ai.extraction")


JSON_FENCE_PATTERN = re.compile(r"```json\b[ \t]*\r?\n?([\s\S]*?)```", re.IGNORECASE)
# Opening and closing fences are matched as pairs, so the closing fence of a
# labeled block (```hcl) is never mistaken for the start of an unlabeled one.
FENCED_BLOCK_PATTERN = re.compile(r"```([^\s`]*)[ \t]*\r?\n([\s\S]*?)```")

Strategy = Callable[[Dict[str, Any], str], Optional[str]]


# ---------------------------------------------------------------------------
# ENVELOPE HELPERS
# ---------------------------------------------------------------------------

def get_message(envelope: Dict[str, Any]) -> Dict[str, Any]:
    """choices[0].message, or {} when the envelope has no such thing."""
    if not isinstance(envelope, dict):
        return {}
    choices = envelope.get("choices")
    if not isinstance(choices, list) or not choices:
        return {}
    first = choices[0]
    if not isinstance(first, dict):
        return {}
    message = first.get("message")
    return message if isinstance(message, dict) else {}


def get_text_content(message: Dict[str, Any]) -> str:
    """
    Free-text body of a message.

    Some gateways send content as a list of parts
    ([{"type": "text", "text": "..."}]); those are joined.
    """
    content = message.get("content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                parts.append(part["text"])
        return "".join(parts)
    return ""


# ---------------------------------------------------------------------------
# STRATEGIES
# ---------------------------------------------------------------------------

def from_tool_call(message: Dict[str, Any], function_name: str) -> Optional[str]:
    """Arguments of the first tool call to `function_name`."""
    tool_calls = message.get("tool_calls")
    if not isinstance(tool_calls, list):
        return None

    for call in tool_calls:
        if not isinstance(call, dict):
            continue
        function = call.get("function")
        if not isinstance(function, dict) or function.get("name") != function_name:
            continue

        arguments = function.get("arguments")
        if isinstance(arguments, str):
            return arguments if arguments.strip() else None
        if isinstance(arguments, (dict, list)):
            # Already decoded by the gateway
            return json.dumps(arguments)

    return None


def from_json_fence(message: Dict[str, Any], function_name: str) -> Optional[str]:
    """Body of the first ```json fenced block."""
    match = JSON_FENCE_PATTERN.search(get_text_content(message))
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def from_plain_fence(message: Dict[str, Any], function_name: str) -> Optional[str]:
    """Body of the first unlabeled ``` fenced block, skipping labeled ones."""
    for match in FENCED_BLOCK_PATTERN.finditer(get_text_content(message)):
        if match.group(1):
            continue
        body = match.group(2).strip()
        if body:
            return body
    return None


def from_raw_body(message: Dict[str, Any], function_name: str) -> Optional[str]:
    """The whole free-text body."""
    text = get_text_content(message).strip()
    return text or None


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("tool_call", from_tool_call),
    ("json_fence", from_json_fence),
    ("plain_fence", from_plain_fence),
    ("raw_body", from_raw_body),
)


# ---------------------------------------------------------------------------
# ENTRY POINTS
# ---------------------------------------------------------------------------

def find_candidate(
    envelope: Dict[str, Any],
    function_name: str = TOOL_NAME,
) -> Optional[Tuple[str, str]]:
    """
    Run the strategies in priority order.

    Returns:
        (strategy_name, candidate_text) for the first hit, or None
    """
    message = get_message(envelope)
    for name, strategy in STRATEGIES:
        candidate = strategy(message, function_name)
        if candidate:
            return name, candidate
    return None


def extract_payload(envelope: Dict[str, Any], function_name: str = TOOL_NAME) -> Any:
    """
    Locate and parse the structured payload in a gateway envelope.

    Args:
        envelope: Parsed chat-completions response body
        function_name: Tool name the payload must be delivered through

    Returns:
        The decoded JSON value (normally a dict; shape is checked by the normalizer)

    Raises:
        MalformedUpstreamOutput: nothing found, or the candidate is not valid JSON
    """
    found = find_candidate(envelope, function_name)
    if found is None:
        raise MalformedUpstreamOutput(
            reason=f"AI did not call {function_name} or return a JSON project",
            excerpt=json.dumps(envelope) if isinstance(envelope, dict) else repr(envelope),
        )

    strategy, candidate = found
    logger.debug(f"Payload candidate from {strategy}, {len(candidate)} chars")

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise MalformedUpstreamOutput(
            reason=f"{e.msg} (line {e.lineno}, column {e.colno})",
            excerpt=candidate,
            strategy=strategy,
        ) from e