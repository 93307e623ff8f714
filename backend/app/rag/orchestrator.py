"""Question answering over an itinerary's embedded knowledge.

One call to ask() runs a single turn:

    existence check -> readiness check -> embed + retrieve -> re-rank
    -> context assembly -> prompt -> generation -> AnswerPayload

The two checks run first and short-circuit before any retrieval cost. Any
failure after them is reported as RagInternalError; nothing is retried here.
"""

import logging
import time

from backend.app.config import settings
from backend.app.llm.client import EmbeddingClient, LLMClient
from backend.app.models.answer import AnswerPayload
from backend.app.models.knowledge import EmbeddingStatus
from backend.app.rag import prompts
from backend.app.rag.context import assemble_context, join_context
from backend.app.rag.errors import (
    EmbeddingsNotReadyError,
    ItineraryNotFoundError,
    RagInternalError,
)
from backend.app.rag.provider import RagProvider
from backend.app.rag.retrieval import RetrievalConfig, expand_query, mean_similarity, rank_chunks
from backend.app.tokens.counter import TOKEN_LIMITS, TokenCounter
from backend.app.utils.metrics import metrics

logger = logging.getLogger(__name__)

STALE_WARNING = "Some information may be outdated."


class RagOrchestrator:
    """Answers questions about one itinerary at a time."""

    def __init__(
        self,
        *,
        provider: RagProvider,
        embedder: EmbeddingClient,
        llm: LLMClient,
        token_counter: TokenCounter,
        context_tokens: int | None = None,
        retrieval: RetrievalConfig | None = None,
    ):
        self.provider = provider
        self.embedder = embedder
        self.llm = llm
        self.token_counter = token_counter
        self.context_tokens = settings.rag_context_tokens if context_tokens is None else context_tokens
        self.retrieval = retrieval or RetrievalConfig.from_settings()

    async def ask(self, question: str, itinerary_id: str) -> AnswerPayload:
        """Answer a question using the itinerary's retrieved context.

        Raises:
            ItineraryNotFoundError: Itinerary does not exist
            EmbeddingsNotReadyError: No chunks embedded yet
            RagInternalError: Lookup, retrieval, tokenizer or generation failed
        """
        started = time.perf_counter()
        outcome = "error"
        try:
            try:
                exists = await self.provider.itinerary_exists(itinerary_id)
                chunk_count = await self.provider.count_chunks(itinerary_id) if exists else 0
            except Exception as e:
                logger.error(f"[rag] itinerary={itinerary_id} lookup failed: {e}", exc_info=True)
                raise RagInternalError("Failed to process question") from e

            if not exists:
                outcome = "not_found"
                raise ItineraryNotFoundError(itinerary_id)

            if chunk_count == 0:
                outcome = "not_ready"
                raise EmbeddingsNotReadyError(itinerary_id)

            logger.info(f'[rag] Q&A for itinerary {itinerary_id}: "{question}"')

            try:
                payload = await self._answer(question, itinerary_id)
            except Exception as e:
                logger.error(f"[rag] itinerary={itinerary_id} failed: {e}", exc_info=True)
                raise RagInternalError("Failed to process question") from e

            outcome = "success"
            return payload
        finally:
            metrics.record_outcome(outcome, (time.perf_counter() - started) * 1000)

    async def embedding_status(self, itinerary_id: str) -> EmbeddingStatus:
        """Report how many chunks exist for an itinerary, by type."""
        count = await self.provider.count_chunks(itinerary_id)
        breakdown = await self.provider.type_breakdown(itinerary_id)
        return EmbeddingStatus(
            itinerary_id=itinerary_id,
            embedding_count=count,
            is_ready=count > 0,
            chunk_types=breakdown,
        )

    async def _answer(self, question: str, itinerary_id: str) -> AnswerPayload:
        expanded = expand_query(question)
        search_query = " ".join(expanded)
        if len(expanded) > 1:
            logger.info(f'[rag] Expanded query: "{question}" -> "{search_query}"')

        vector = await self.embedder.embed(search_query)
        retrieved = await self.provider.retrieve_similar(
            vector, itinerary_id, self.retrieval.top_k
        )
        ranked = rank_chunks(retrieved, self.retrieval)
        logger.info(f"[rag] Retrieved {len(retrieved)} chunks, kept {len(ranked)} after re-ranking")

        window = assemble_context(ranked, self.context_tokens, self.token_counter)
        metrics.record_context(window.total_tokens)

        stale_warning = STALE_WARNING if any(c.is_stale for c in window.chunks) else None

        if self.token_counter.exceeds(question, TOKEN_LIMITS.user_question):
            logger.warning(f"[rag] Question over {TOKEN_LIMITS.user_question} tokens, truncating")
            question = self.token_counter.truncate(question, TOKEN_LIMITS.user_question)

        answer = await self.llm.generate(
            system_prompt=prompts.system_prompt(stale_warning),
            user_prompt=prompts.user_prompt(join_context(window), question),
        )

        return AnswerPayload(
            answer=answer,
            sources=[c.chunk_id for c in window.chunks],
            confidence=mean_similarity(window.chunks),
            stale_warning=stale_warning,
        )
