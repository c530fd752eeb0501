"""
LLM Client for Google Gemini.

This module provides a small async interface to Gemini for the AI
service. It handles:
- Key rotation (one google-genai client per key, created lazily)
- Request assembly (role-tagged turns, system instruction, sampling)
- Timeouts and error wrapping
- First-candidate text extraction
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from google import genai
from google.genai import types

from acns.core.exceptions import ConfigurationError, UpstreamError
from acns.core.logging_config import get_logger
from acns.llm.key_pool import KeyPool

logger = get_logger(__name__)

# (role, text) where role is "user" or "model"
Message = Tuple[str, str]


@dataclass(frozen=True)
class SamplingConfig:
    """Sampling parameters for one kind of request."""
    temperature: float
    max_output_tokens: int
    top_p: Optional[float] = None
    top_k: Optional[int] = None


class GeminiClient:
    """
    Async Gemini client that rotates API keys on every call.

    Example:
        >>> client = GeminiClient(KeyPool(["key"]), model_name="gemini-2.0-flash")
        >>> text = await client.generate(
        ...     [("user", "Hello")], "You are helpful.", SamplingConfig(0.7, 256)
        ... )
    """

    def __init__(
        self,
        key_pool: KeyPool,
        model_name: str = "gemini-2.0-flash",
        timeout_seconds: float = 30.0,
        client_factory: Optional[Callable[[str], Any]] = None,
    ):
        """
        Args:
            key_pool: Credentials to rotate through
            model_name: Gemini model identifier
            timeout_seconds: Upper bound for a single call
            client_factory: Builds an SDK client for a key (tests inject fakes)
        """
        self.key_pool = key_pool
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self._client_factory = client_factory or (lambda key: genai.Client(api_key=key))
        self._clients: Dict[str, Any] = {}

        if key_pool.is_empty:
            logger.warning("No Gemini API keys configured. AI features disabled.")
        else:
            logger.info(f"Gemini client initialized: model={model_name}, keys={len(key_pool)}")

    @property
    def is_configured(self) -> bool:
        return not self.key_pool.is_empty

    def ensure_configured(self) -> None:
        """Raise ConfigurationError when there is no key to call with."""
        if not self.is_configured:
            raise ConfigurationError()

    def _client_for(self, key: str) -> Any:
        client = self._clients.get(key)
        if client is None:
            client = self._client_factory(key)
            self._clients[key] = client
        return client

    async def generate(
        self,
        messages: Sequence[Message],
        system_instruction: str,
        sampling: SamplingConfig,
    ) -> Optional[str]:
        """
        Run one generation call with the next key in the pool.

        Args:
            messages: Conversation turns, oldest first, ending with the user turn
            system_instruction: System prompt for the call
            sampling: Temperature, nucleus/top-k and output budget

        Returns:
            Text of the first candidate, or None when the response has none

        Raises:
            ConfigurationError: If no keys are configured
            UpstreamError: If the call fails or exceeds the timeout
        """
        key = self.key_pool.next()
        client = self._client_for(key)

        contents = build_contents(messages)
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=sampling.temperature,
            top_p=sampling.top_p,
            top_k=sampling.top_k,
            max_output_tokens=sampling.max_output_tokens,
        )

        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=self.model_name,
                    contents=contents,
                    config=config,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Gemini call timed out after {self.timeout_seconds}s")
            raise UpstreamError(
                "AI service timed out", details=f"timeout={self.timeout_seconds}s"
            ) from e
        except Exception as e:
            error_msg = str(e).lower()
            is_rate_limit = "429" in error_msg or "quota" in error_msg or "rate limit" in error_msg
            log_level = logger.warning if is_rate_limit else logger.error
            log_level(f"Gemini call failed ({self.model_name}): {e}")
            raise UpstreamError(details=type(e).__name__) from e

        return first_candidate_text(response)

    async def close(self) -> None:
        """Close every cached SDK client; later calls create fresh ones."""
        clients, self._clients = self._clients, {}
        for client in clients.values():
            try:
                await client.aio.aclose()
            except Exception as e:
                logger.warning(f"Failed to close Gemini client: {e}")
        if clients:
            logger.info(f"Closed {len(clients)} Gemini client(s)")


def build_contents(messages: Sequence[Message]) -> List[types.Content]:
    """Convert (role, text) pairs into Gemini content objects."""
    return [
        types.Content(role=role, parts=[types.Part(text=text)])
        for role, text in messages
    ]


def first_candidate_text(response: Any) -> Optional[str]:
    """
    Text of the first part of the first candidate.

    Returns None when the response carries no candidates, no parts or
    only empty text (for example when a safety filter blocked output).
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return None
    text = getattr(parts[0], "text", None)
    return text or None
