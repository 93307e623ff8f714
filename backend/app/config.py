"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External APIs
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    openai_embedding_model: str = "text-embedding-3-small"

    # Tokenizer
    token_encoding: str = "cl100k_base"

    # RAG context budget (tokens)
    rag_context_tokens: int = 6000

    # Retrieval
    rag_top_k: int = 10
    rag_rerank_top_n: int = 5
    rag_similarity_threshold: float = 0.45
    rag_fallback_threshold: float = 0.3
    rag_diversity_penalty: float = 0.1

    # Day balancing
    balance_max_iterations: int = 30
    balance_min_floor: int = 3


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
