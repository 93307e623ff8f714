"""Knowledge store collaborators for retrieval.

Persistence and vector search live outside this package. The orchestrator
only sees the RagProvider protocol; InMemoryRagProvider backs local runs and
tests.
"""

import math
from collections import Counter
from typing import Protocol

from backend.app.models.knowledge import EmbeddingTypeBreakdown, KnowledgeChunk


class RagProvider(Protocol):
    """Read-only access to itineraries and their embedded chunks."""

    async def itinerary_exists(self, itinerary_id: str) -> bool: ...

    async def count_chunks(self, itinerary_id: str) -> int: ...

    async def type_breakdown(self, itinerary_id: str) -> list[EmbeddingTypeBreakdown]: ...

    async def retrieve_similar(
        self, vector: list[float], itinerary_id: str, limit: int
    ) -> list[KnowledgeChunk]:
        """Return up to limit chunks ranked by similarity, most similar first."""
        ...


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity of two vectors; 0.0 when either is all zeros."""
    dot = sum(x * y for x, y in zip(a, b, strict=False))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


class InMemoryRagProvider:
    """In-memory implementation of RagProvider."""

    def __init__(self) -> None:
        self._itineraries: set[str] = set()
        self._chunks: dict[str, list[tuple[KnowledgeChunk, list[float]]]] = {}

    def add_itinerary(self, itinerary_id: str) -> None:
        self._itineraries.add(itinerary_id)

    def add_chunk(self, chunk: KnowledgeChunk, vector: list[float]) -> None:
        """Store a chunk with its precomputed embedding."""
        self._itineraries.add(chunk.itinerary_id)
        self._chunks.setdefault(chunk.itinerary_id, []).append((chunk, vector))

    def delete_chunks(self, itinerary_id: str) -> int:
        """Drop all chunks for an itinerary; returns how many were removed."""
        return len(self._chunks.pop(itinerary_id, []))

    async def itinerary_exists(self, itinerary_id: str) -> bool:
        return itinerary_id in self._itineraries

    async def count_chunks(self, itinerary_id: str) -> int:
        return len(self._chunks.get(itinerary_id, []))

    async def type_breakdown(self, itinerary_id: str) -> list[EmbeddingTypeBreakdown]:
        counts = Counter(chunk.chunk_type for chunk, _ in self._chunks.get(itinerary_id, []))
        return [
            EmbeddingTypeBreakdown(chunk_type=chunk_type, count=count)
            for chunk_type, count in sorted(counts.items(), key=lambda kv: kv[0].value)
        ]

    async def retrieve_similar(
        self, vector: list[float], itinerary_id: str, limit: int
    ) -> list[KnowledgeChunk]:
        scored = [
            chunk.model_copy(update={"similarity": cosine_similarity(vector, stored)})
            for chunk, stored in self._chunks.get(itinerary_id, [])
        ]
        scored.sort(key=lambda c: -c.similarity)
        return scored[:limit]
