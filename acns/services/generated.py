"""
Generated content - Parsed model output for the content generator.

The model is told to answer with bare JSON but sometimes wraps it in
code fences or answers in prose. Output is therefore a tagged variant:
StructuredContent when it parses, RawContent with the original text
when it does not.
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Union

_FENCE_JSON = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


@dataclass(frozen=True)
class StructuredContent:
    value: Any
    format = "structured"

    def to_payload(self) -> Any:
        return self.value


@dataclass(frozen=True)
class RawContent:
    text: str
    format = "raw"

    def to_payload(self) -> Dict[str, str]:
        return {"raw": self.text}


Generated = Union[StructuredContent, RawContent]


def strip_code_fences(text: str) -> str:
    """Remove ```json and ``` markers and surrounding whitespace."""
    return _FENCE.sub("", _FENCE_JSON.sub("", text)).strip()


def parse_generated(text: str) -> Generated:
    """
    Parse model output as JSON, falling back to the raw text.

    Example:
        >>> parse_generated('```json\\n{"a": 1}\\n```')
        StructuredContent(value={'a': 1})
        >>> parse_generated("not json")
        RawContent(text='not json')
    """
    try:
        return StructuredContent(json.loads(strip_code_fences(text)))
    except json.JSONDecodeError:
        return RawContent(text)
