"""Models package - re-exports for convenience."""

from backend.app.models.activity import (
    Activity,
    BalanceReport,
    BalanceRequest,
    BalanceResponse,
    DayCluster,
)
from backend.app.models.answer import AnswerPayload, AskRequest
from backend.app.models.common import Coordinate
from backend.app.models.knowledge import (
    ChunkType,
    ContextWindow,
    EmbeddingStatus,
    EmbeddingTypeBreakdown,
    KnowledgeChunk,
)

__all__ = [
    # Common
    "Coordinate",
    # Balancing
    "Activity",
    "DayCluster",
    "BalanceRequest",
    "BalanceReport",
    "BalanceResponse",
    # Knowledge
    "ChunkType",
    "KnowledgeChunk",
    "ContextWindow",
    "EmbeddingTypeBreakdown",
    "EmbeddingStatus",
    # Answer
    "AskRequest",
    "AnswerPayload",
]
