"""Token counting for model context budgets.

The tokenizer encoding is expensive to build, so each TokenCounter loads it
once on first use and shares it read-only afterwards. Loading is guarded by a
lock; encode/decode hold no per-call state and need no further locking.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

import tiktoken

from backend.app.config import settings

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "..."


@dataclass(frozen=True)
class TokenLimits:
    """Token allowances for one question-answering exchange."""

    rag_context: int = 6000
    system_prompt: int = 1000
    user_question: int = 500
    response_buffer: int = 2000


TOKEN_LIMITS = TokenLimits()


class Encoding(Protocol):
    """The slice of tiktoken.Encoding this module relies on."""

    def encode(self, text: str) -> list[int]: ...

    def decode(self, tokens: list[int]) -> str: ...


class TokenizerError(RuntimeError):
    """Raised when the tokenizer cannot be loaded or fails on input."""


class TokenCounter:
    """Counts, truncates and budgets text in model tokens."""

    def __init__(
        self,
        encoding_name: str = "cl100k_base",
        loader: Callable[[str], Encoding] = tiktoken.get_encoding,
    ) -> None:
        self.encoding_name = encoding_name
        self._loader = loader
        self._encoding: Encoding | None = None
        self._lock = threading.Lock()

    @property
    def encoding(self) -> Encoding:
        """The loaded encoding, built on first access."""
        encoding = self._encoding
        if encoding is None:
            with self._lock:
                if self._encoding is None:
                    logger.info(f"Loading tokenizer encoding {self.encoding_name}")
                    try:
                        self._encoding = self._loader(self.encoding_name)
                    except Exception as e:
                        raise TokenizerError(
                            f"Failed to load encoding {self.encoding_name}: {e}"
                        ) from e
                encoding = self._encoding
        return encoding

    def encode(self, text: str) -> list[int]:
        try:
            return list(self.encoding.encode(text))
        except TokenizerError:
            raise
        except Exception as e:
            raise TokenizerError(f"Failed to encode text: {e}") from e

    def count(self, text: str | None) -> int:
        """Number of tokens in text; 0 for empty or missing text."""
        if not text:
            return 0
        return len(self.encode(text))

    def truncate(self, text: str, max_tokens: int) -> str:
        """Cut text to max_tokens, appending a marker when anything was dropped."""
        max_tokens = max(max_tokens, 0)
        tokens = self.encode(text) if text else []
        if len(tokens) <= max_tokens:
            return text

        try:
            head = self.encoding.decode(tokens[:max_tokens])
        except Exception as e:
            raise TokenizerError(f"Failed to decode tokens: {e}") from e
        return head + TRUNCATION_MARKER

    def exceeds(self, text: str | None, max_tokens: int) -> bool:
        return self.count(text) > max_tokens


@lru_cache
def get_token_counter() -> TokenCounter:
    """Process-wide TokenCounter for the configured encoding."""
    return TokenCounter(settings.token_encoding)
