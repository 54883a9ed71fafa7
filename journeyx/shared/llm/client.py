"""
OpenAI client for itinerary generation.

Provides a cached async client and a single-attempt completion call.
Retrying a failed generation is the caller's decision, so no retry
policy is applied here.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from openai import AsyncOpenAI, OpenAIError

from journeyx.shared import config
from journeyx.shared.contracts import GroundingChunk
from journeyx.shared.errors import ConfigurationError, TransportError

# Module-level cache for the OpenAI client
_client: Optional[AsyncOpenAI] = None


@dataclass
class GenerationResult:
    """Raw model text plus any citations the provider attached."""

    text: str
    grounding_chunks: List[GroundingChunk] = field(default_factory=list)


def get_cached_client() -> AsyncOpenAI:
    """
    Returns a cached instance of the async OpenAI client.

    Uses the OPENAI_API_KEY environment variable for authentication.
    The client is created once and reused for all subsequent calls.
    """
    global _client
    if _client is None:
        if not config.OPENAI_API_KEY:
            raise ConfigurationError(
                "OPENAI_API_KEY environment variable is not set. "
                "Please set it to your OpenAI API key."
            )
        _client = AsyncOpenAI(
            api_key=config.OPENAI_API_KEY,
            timeout=config.LLM_TIMEOUT_SECONDS,
            max_retries=0,
        )
    return _client


async def call_llm(
    prompt: str,
    model: Optional[str] = None,
    client: Optional[AsyncOpenAI] = None,
) -> GenerationResult:
    """
    Send one prompt to the chat completion API.

    Args:
        prompt: Full planning prompt
        model: Model identifier to use (default: config.LLM_MODEL)
        client: Optional client instance. If not provided, uses cached client.

    Returns:
        GenerationResult with the assistant's raw text.

    Raises:
        TransportError: If the API call fails.
    """
    if client is None:
        client = get_cached_client()

    try:
        response = await client.chat.completions.create(
            model=model or config.LLM_MODEL,
            messages=[{"role": "user", "content": prompt}],
        )
    except OpenAIError as e:
        raise TransportError(f"Generation request failed: {e}") from e

    content = response.choices[0].message.content or ""
    # Chat completions carry no web grounding metadata.
    return GenerationResult(text=content.strip())
