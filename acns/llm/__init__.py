"""
LLM module - Language model integration.

This module handles all Gemini interactions:
- API key rotation (key_pool.py)
- Async API calls and response parsing (client.py)
- Prompt construction (prompts/)
"""
from acns.llm.client import GeminiClient, SamplingConfig
from acns.llm.key_pool import KeyPool

__all__ = [
    "GeminiClient",
    "SamplingConfig",
    "KeyPool",
]
