"""Knowledge chunk models for retrieval."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ChunkType(str, Enum):
    """Kind of text a chunk was cut from."""

    OVERVIEW = "OVERVIEW"
    DAY_SUMMARY = "DAY_SUMMARY"
    ACTIVITY = "ACTIVITY"
    MEAL = "MEAL"
    ACCOMMODATION = "ACCOMMODATION"
    LOGISTICS = "LOGISTICS"
    KNOWLEDGE = "KNOWLEDGE"  # general knowledge base, not itinerary content


class KnowledgeChunk(BaseModel):
    """Itinerary-scoped text unit produced by the embedding step."""

    model_config = ConfigDict(frozen=True)

    chunk_id: str
    itinerary_id: str
    chunk_type: ChunkType
    text: str
    token_count: int | None = None
    similarity: float = 0.0
    day_numbers: list[int] = Field(default_factory=list)
    place_ids: list[str] = Field(default_factory=list)
    is_stale: bool = False


class ContextWindow(BaseModel):
    """Chunks selected for one question-answering turn."""

    chunks: list[KnowledgeChunk] = Field(default_factory=list)
    texts: list[str] = Field(default_factory=list, description="Rendered chunk text, same order")
    total_tokens: int = 0
    max_tokens: int

    @property
    def over_budget(self) -> bool:
        """True only for the single oversized first chunk."""
        return self.total_tokens > self.max_tokens


class EmbeddingTypeBreakdown(BaseModel):
    """Chunk count for one chunk type."""

    chunk_type: ChunkType
    count: int


class EmbeddingStatus(BaseModel):
    """Readiness of an itinerary for question answering."""

    itinerary_id: str
    embedding_count: int
    is_ready: bool
    chunk_types: list[EmbeddingTypeBreakdown] = Field(default_factory=list)
