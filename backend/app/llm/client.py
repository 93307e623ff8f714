"""LLM and embedding clients with OpenAI integration.

Security: Reads API key from environment only, never hardcoded.
Provides deterministic stubs when no key is present for testing.
"""

import hashlib
import logging
import math
import re
from typing import Protocol

from openai import AsyncOpenAI

from backend.app.config import settings

logger = logging.getLogger(__name__)

STUB_EMBEDDING_DIM = 64


class LLMClient(Protocol):
    """Protocol for answer-generation clients."""

    async def generate(self, *, system_prompt: str, user_prompt: str) -> str:
        """Generate answer text for a prompt.

        Args:
            system_prompt: Instructions for the model
            user_prompt: Retrieved context followed by the question

        Returns:
            Answer text
        """
        ...


class EmbeddingClient(Protocol):
    """Protocol for text embedding clients."""

    async def embed(self, text: str) -> list[float]: ...


class DeterministicStubClient:
    """Deterministic stub client for testing (no API key required)."""

    async def generate(self, *, system_prompt: str, user_prompt: str) -> str:
        """Echo the question with the size of the supplied context."""
        context, _, question = user_prompt.rpartition("\n\nQuestion: ")
        num_chunks = context.count("\n\n---\n\n") + 1 if context.strip() != "Context:" else 0
        return (
            f"Based on {num_chunks} itinerary note(s): {question.strip()}\n"
            "(This is a stub response generated without LLM synthesis.)"
        )


class DeterministicStubEmbedder:
    """Hashing bag-of-words embedder; same text always gives the same vector."""

    def __init__(self, dim: int = STUB_EMBEDDING_DIM):
        self.dim = dim

    async def embed(self, text: str) -> list[float]:
        vector = [0.0] * self.dim
        for word in re.findall(r"\w+", text.lower()):
            digest = hashlib.sha256(word.encode("utf-8")).digest()
            vector[int.from_bytes(digest[:4], "big") % self.dim] += 1.0

        norm = math.sqrt(sum(v * v for v in vector))
        return [v / norm for v in vector] if norm else vector


class OpenAIClient:
    """OpenAI-backed answer generation."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini"):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Chat model name
        """
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model

    async def generate(self, *, system_prompt: str, user_prompt: str) -> str:
        """Generate an answer using the OpenAI chat API.

        Errors from the API propagate to the caller.
        """
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=0.3,
        )

        answer = response.choices[0].message.content or ""
        if not answer.strip():
            logger.warning("OpenAI returned empty response")
            return "I could not generate an answer."
        return answer


class OpenAIEmbeddingClient:
    """OpenAI-backed text embeddings."""

    def __init__(self, api_key: str, model: str = "text-embedding-3-small"):
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model

    async def embed(self, text: str) -> list[float]:
        response = await self.client.embeddings.create(input=text, model=self.model)
        return list(response.data[0].embedding)


def _api_key() -> str | None:
    api_key = settings.openai_api_key
    if api_key and api_key.get_secret_value():
        return api_key.get_secret_value()
    return None


async def get_llm_client() -> LLMClient:
    """Factory function to get appropriate LLM client based on config.

    Returns:
        OpenAIClient if API key is configured, DeterministicStubClient otherwise
    """
    api_key = _api_key()

    if api_key:
        logger.info("Using OpenAI client for answer generation")
        return OpenAIClient(api_key=api_key, model=settings.openai_model)
    else:
        logger.warning("No OpenAI API key configured, using deterministic stub client")
        return DeterministicStubClient()


async def get_embedding_client() -> EmbeddingClient:
    """Factory function to get appropriate embedding client based on config."""
    api_key = _api_key()

    if api_key:
        return OpenAIEmbeddingClient(api_key=api_key, model=settings.openai_embedding_model)
    else:
        logger.warning("No OpenAI API key configured, using deterministic stub embedder")
        return DeterministicStubEmbedder()
