"""Tests for parsing generated content and the Outcome wrapper."""

import pytest

from acns.services import Outcome, RawContent, StructuredContent, attempt, parse_generated
from acns.services.generated import strip_code_fences

BODY = '{"title": "Cloud Security Trends", "tags": ["cloud", "security"]}'


@pytest.mark.parametrize(
    "text",
    [
        BODY,
        f"```json\n{BODY}\n```",
        f"```\n{BODY}\n```",
        f"  ```json{BODY}```  ",
    ],
)
def test_fenced_and_unfenced_parse_the_same(text):
    result = parse_generated(text)

    assert isinstance(result, StructuredContent)
    assert result.format == "structured"
    assert result.to_payload() == {"title": "Cloud Security Trends", "tags": ["cloud", "security"]}


def test_non_json_falls_back_to_raw():
    text = "Here is your blog post: Cloud is great."
    result = parse_generated(text)

    assert isinstance(result, RawContent)
    assert result.format == "raw"
    assert result.to_payload() == {"raw": text}


def test_truncated_json_is_raw():
    assert isinstance(parse_generated('```json\n{"title": "Half'), RawContent)


def test_strip_code_fences():
    assert strip_code_fences("```json\n[1, 2]\n```") == "[1, 2]"
    assert strip_code_fences("plain") == "plain"


# ── Outcome ───────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_attempt_captures_value():
    async def ok():
        return 42

    outcome = await attempt(ok(), "answer")

    assert outcome.ok
    assert outcome.unwrap_or(0) == 42


@pytest.mark.asyncio
async def test_attempt_captures_error():
    async def broken():
        raise RuntimeError("db down")

    outcome = await attempt(broken(), "context")

    assert not outcome.ok
    assert isinstance(outcome.error, RuntimeError)
    assert outcome.unwrap_or("fallback") == "fallback"


def test_outcome_with_none_value_is_ok():
    assert Outcome(value=None).ok
    assert Outcome(value=None).unwrap_or("x") is None
