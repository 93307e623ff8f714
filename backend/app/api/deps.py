"""FastAPI dependencies wiring the RAG collaborators."""

from functools import lru_cache

from backend.app.llm.client import get_embedding_client, get_llm_client
from backend.app.rag.orchestrator import RagOrchestrator
from backend.app.rag.provider import InMemoryRagProvider, RagProvider
from backend.app.tokens.counter import get_token_counter


@lru_cache
def get_rag_provider() -> RagProvider:
    """Process-wide knowledge store.

    The in-memory store stands in until a persistent provider is wired.
    """
    return InMemoryRagProvider()


async def get_orchestrator() -> RagOrchestrator:
    """Build an orchestrator for one request."""
    return RagOrchestrator(
        provider=get_rag_provider(),
        embedder=await get_embedding_client(),
        llm=await get_llm_client(),
        token_counter=get_token_counter(),
    )
