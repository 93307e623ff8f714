"""Retrieval post-processing - query expansion and re-ranking."""

from collections.abc import Sequence
from dataclasses import dataclass

from backend.app.config import settings
from backend.app.models.knowledge import ChunkType, KnowledgeChunk

_EXPANSIONS: list[tuple[tuple[str, ...], list[str]]] = [
    (
        ("restaurant", "food", "eat", "dining"),
        ["restaurants cafes food dining places to eat", "local cuisine traditional dishes"],
    ),
    (("do", "activity", "activities"), ["things to do activities attractions"]),
    (("pack", "bring", "checklist"), ["packing checklist what to bring essentials"]),
]


@dataclass(frozen=True)
class RetrievalConfig:
    top_k: int
    rerank_top_n: int
    similarity_threshold: float
    fallback_threshold: float
    diversity_penalty: float

    @classmethod
    def from_settings(cls) -> "RetrievalConfig":
        return cls(
            top_k=settings.rag_top_k,
            rerank_top_n=settings.rag_rerank_top_n,
            similarity_threshold=settings.rag_similarity_threshold,
            fallback_threshold=settings.rag_fallback_threshold,
            diversity_penalty=settings.rag_diversity_penalty,
        )


def expand_query(query: str) -> list[str]:
    """Return the query followed by topical expansions it triggers.

    Matching is by lowercase substring, so "do" also fires on "download".
    """
    lower = query.lower()
    queries = [query]
    for keywords, extra in _EXPANSIONS:
        if any(k in lower for k in keywords):
            queries.extend(extra)
    return queries


def apply_diversity_penalty(
    chunks: Sequence[KnowledgeChunk], penalty: float
) -> list[KnowledgeChunk]:
    """Damp repeated chunk types so one type does not crowd out the rest.

    The first chunk of each type keeps its score; later ones are scaled by
    (1 - penalty). Result is re-sorted by similarity, stable on ties.
    """
    if len(chunks) <= 1:
        return list(chunks)

    seen: set[ChunkType] = set()
    result: list[KnowledgeChunk] = []
    for chunk in chunks:
        if chunk.chunk_type in seen:
            result.append(chunk.model_copy(update={"similarity": chunk.similarity * (1 - penalty)}))
        else:
            seen.add(chunk.chunk_type)
            result.append(chunk)

    return sorted(result, key=lambda c: -c.similarity)


def rank_chunks(chunks: Sequence[KnowledgeChunk], config: RetrievalConfig) -> list[KnowledgeChunk]:
    """Filter, diversify and cut retrieved chunks down to the re-rank size."""
    ordered = sorted(chunks, key=lambda c: -c.similarity)

    candidates = [c for c in ordered if c.similarity >= config.similarity_threshold][: config.top_k]
    if not candidates:
        candidates = [c for c in ordered if c.similarity >= config.fallback_threshold][
            : config.top_k
        ]

    diverse = apply_diversity_penalty(candidates, config.diversity_penalty)
    return diverse[: config.rerank_top_n]


def mean_similarity(chunks: Sequence[KnowledgeChunk]) -> float:
    """Mean similarity rounded to two decimals, clamped to [0, 1]."""
    if not chunks:
        return 0.0
    mean = sum(c.similarity for c in chunks) / len(chunks)
    return round(min(max(mean, 0.0), 1.0), 2)
