"""Tests for the in-memory knowledge store."""

import pytest

from backend.app.models.knowledge import ChunkType, KnowledgeChunk
from backend.app.rag.provider import InMemoryRagProvider, cosine_similarity


def _chunk(chunk_id: str, chunk_type: ChunkType = ChunkType.ACTIVITY) -> KnowledgeChunk:
    return KnowledgeChunk(
        chunk_id=chunk_id, itinerary_id="itin-1", chunk_type=chunk_type, text=chunk_id
    )


def test_cosine_similarity() -> None:
    assert cosine_similarity([1.0, 0.0], [1.0, 0.0]) == pytest.approx(1.0)
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)
    assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0


@pytest.mark.asyncio
async def test_counts_and_existence() -> None:
    provider = InMemoryRagProvider()
    provider.add_itinerary("empty")
    provider.add_chunk(_chunk("a"), [1.0, 0.0])
    provider.add_chunk(_chunk("b", ChunkType.MEAL), [0.0, 1.0])
    provider.add_chunk(_chunk("c"), [0.5, 0.5])

    assert await provider.itinerary_exists("itin-1")
    assert await provider.itinerary_exists("empty")
    assert not await provider.itinerary_exists("missing")
    assert await provider.count_chunks("itin-1") == 3
    assert await provider.count_chunks("empty") == 0

    breakdown = await provider.type_breakdown("itin-1")
    assert [(b.chunk_type, b.count) for b in breakdown] == [
        (ChunkType.ACTIVITY, 2),
        (ChunkType.MEAL, 1),
    ]


@pytest.mark.asyncio
async def test_retrieve_similar_ranks_and_limits() -> None:
    provider = InMemoryRagProvider()
    provider.add_chunk(_chunk("far"), [0.0, 1.0])
    provider.add_chunk(_chunk("near"), [1.0, 0.0])
    provider.add_chunk(_chunk("mid"), [0.6, 0.8])

    result = await provider.retrieve_similar([1.0, 0.0], "itin-1", 2)

    assert [c.chunk_id for c in result] == ["near", "mid"]
    assert result[0].similarity == pytest.approx(1.0)
    assert result[1].similarity == pytest.approx(0.6)


def test_delete_chunks() -> None:
    provider = InMemoryRagProvider()
    provider.add_chunk(_chunk("a"), [1.0])
    assert provider.delete_chunks("itin-1") == 1
    assert provider.delete_chunks("itin-1") == 0
