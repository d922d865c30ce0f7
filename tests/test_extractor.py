"""
Tests for the Response Extractor.

This module tests:
- Each delivery shape (tool call, ```json fence, ``` fence, raw body)
- Priority between shapes, using deliberately different payloads
- Wrong tool names and unparseable candidates
"""

import json

import pytest

from conftest import make_envelope, make_tool_call, tool_call_envelope
from infragen.ai.errors import EXCERPT_LIMIT, MalformedUpstreamOutput
from infragen.ai.extraction.extractor import (
    STRATEGIES,
    extract_payload,
    find_candidate,
    get_text_content,
)
from infragen.ai.schemas.terraform_project import TOOL_NAME


TOOL_PAYLOAD = {"files": [{"name": "from-tool.tf", "content": "tool"}]}
FENCE_PAYLOAD = {"files": [{"name": "from-fence.tf", "content": "fence"}]}
PLAIN_PAYLOAD = {"files": [{"name": "from-plain.tf", "content": "plain"}]}


def json_fence(payload) -> str:
    return f"Here is your project:\n```json\n{json.dumps(payload)}\n```\nEnjoy!"


def plain_fence(payload) -> str:
    return f"Sure.\n```\n{json.dumps(payload)}\n```"


class TestStrategies:
    """One delivery shape at a time."""

    def test_strategy_order(self):
        assert [name for name, _ in STRATEGIES] == [
            "tool_call",
            "json_fence",
            "plain_fence",
            "raw_body",
        ]

    def test_tool_call_arguments(self):
        envelope = tool_call_envelope(TOOL_PAYLOAD)
        assert extract_payload(envelope) == TOOL_PAYLOAD

    def test_tool_call_with_decoded_arguments(self):
        envelope = make_envelope(tool_calls=[{
            "type": "function",
            "function": {"name": TOOL_NAME, "arguments": TOOL_PAYLOAD},
        }])
        assert extract_payload(envelope) == TOOL_PAYLOAD

    def test_json_fence(self):
        envelope = make_envelope(content=json_fence(FENCE_PAYLOAD))
        assert extract_payload(envelope) == FENCE_PAYLOAD

    def test_plain_fence(self):
        envelope = make_envelope(content=plain_fence(PLAIN_PAYLOAD))
        assert extract_payload(envelope) == PLAIN_PAYLOAD

    def test_plain_fence_after_labeled_block(self):
        content = (
            'Example:\n```hcl\nresource "aws_s3_bucket" "b" {}\n```\n'
            "And the project:\n" + plain_fence(PLAIN_PAYLOAD)
        )
        envelope = make_envelope(content=content)

        assert find_candidate(envelope)[0] == "plain_fence"
        assert extract_payload(envelope) == PLAIN_PAYLOAD

    def test_labeled_block_alone_is_not_a_plain_fence(self):
        content = 'Example:\n```hcl\nresource "aws_s3_bucket" "b" {}\n```\nNothing else.'
        strategy, _ = find_candidate(make_envelope(content=content))

        assert strategy == "raw_body"

    def test_single_line_json_fence(self):
        content = "```json" + json.dumps(FENCE_PAYLOAD) + "```"
        assert extract_payload(make_envelope(content=content)) == FENCE_PAYLOAD

    def test_single_line_plain_fence_is_raw_body(self):
        content = "```" + json.dumps(PLAIN_PAYLOAD) + "```"
        strategy, candidate = find_candidate(make_envelope(content=content))

        assert strategy == "raw_body"
        assert candidate == content

    def test_raw_body(self):
        envelope = make_envelope(content="  " + json.dumps(PLAIN_PAYLOAD) + "\n")
        assert extract_payload(envelope) == PLAIN_PAYLOAD

    def test_content_parts_are_joined(self):
        text = json.dumps(PLAIN_PAYLOAD)
        envelope = make_envelope(content=[
            {"type": "text", "text": text[:10]},
            {"type": "text", "text": text[10:]},
        ])
        assert extract_payload(envelope) == PLAIN_PAYLOAD

    def test_get_text_content_without_content(self):
        assert get_text_content({"role": "assistant", "content": None}) == ""


class TestPriority:
    """Earlier strategies win, even when later ones would also succeed."""

    def test_tool_call_beats_json_fence(self):
        envelope = tool_call_envelope(TOOL_PAYLOAD, content=json_fence(FENCE_PAYLOAD))

        result = extract_payload(envelope)

        assert result == TOOL_PAYLOAD
        assert result != FENCE_PAYLOAD

    def test_json_fence_beats_plain_fence(self):
        content = plain_fence(PLAIN_PAYLOAD) + "\n" + json_fence(FENCE_PAYLOAD)
        envelope = make_envelope(content=content)

        assert extract_payload(envelope) == FENCE_PAYLOAD

    def test_first_json_fence_is_used(self):
        content = json_fence(FENCE_PAYLOAD) + json_fence(PLAIN_PAYLOAD)
        assert extract_payload(make_envelope(content=content)) == FENCE_PAYLOAD

    def test_find_candidate_reports_strategy(self):
        strategy, candidate = find_candidate(make_envelope(content=json_fence(FENCE_PAYLOAD)))

        assert strategy == "json_fence"
        assert json.loads(candidate) == FENCE_PAYLOAD


class TestToolName:
    """A tool call to another function is treated as absent."""

    def test_wrong_name_falls_through_to_text(self):
        envelope = make_envelope(
            content=json_fence(FENCE_PAYLOAD),
            tool_calls=[make_tool_call(TOOL_PAYLOAD, name="something_else")],
        )
        assert extract_payload(envelope) == FENCE_PAYLOAD

    def test_wrong_name_without_text_fails(self):
        envelope = tool_call_envelope(TOOL_PAYLOAD, name="something_else")

        with pytest.raises(MalformedUpstreamOutput) as exc_info:
            extract_payload(envelope)
        assert exc_info.value.strategy is None

    def test_matching_call_found_after_other_calls(self):
        envelope = make_envelope(tool_calls=[
            make_tool_call({"files": []}, name="other"),
            make_tool_call(TOOL_PAYLOAD),
        ])
        assert extract_payload(envelope) == TOOL_PAYLOAD

    def test_custom_function_name(self):
        envelope = tool_call_envelope(TOOL_PAYLOAD, name="custom")
        assert extract_payload(envelope, function_name="custom") == TOOL_PAYLOAD


class TestFailures:
    """Nothing usable in the envelope."""

    @pytest.mark.parametrize("envelope", [
        {},
        {"choices": []},
        {"choices": [{"message": None}]},
        make_envelope(content=None),
        make_envelope(content="   "),
    ])
    def test_no_candidate(self, envelope):
        with pytest.raises(MalformedUpstreamOutput):
            extract_payload(envelope)

    def test_invalid_tool_arguments(self):
        envelope = tool_call_envelope('{"files": [ {"name": "main.tf", "content": oops')

        with pytest.raises(MalformedUpstreamOutput) as exc_info:
            extract_payload(envelope)

        error = exc_info.value
        assert error.strategy == "tool_call"
        assert "oops" in error.excerpt
        assert "oops" not in error.message
        assert error.message.startswith("Failed to parse AI-generated Terraform configuration")

    def test_invalid_tool_arguments_are_not_rescued_by_text(self):
        envelope = tool_call_envelope("not json", content=json_fence(FENCE_PAYLOAD))

        with pytest.raises(MalformedUpstreamOutput):
            extract_payload(envelope)

    def test_prose_only(self):
        envelope = make_envelope(content="I cannot help with that.")

        with pytest.raises(MalformedUpstreamOutput) as exc_info:
            extract_payload(envelope)
        assert exc_info.value.strategy == "raw_body"

    def test_excerpt_is_bounded(self):
        envelope = tool_call_envelope("x" * (EXCERPT_LIMIT * 5))

        with pytest.raises(MalformedUpstreamOutput) as exc_info:
            extract_payload(envelope)
        assert len(exc_info.value.excerpt) <= EXCERPT_LIMIT + 3
