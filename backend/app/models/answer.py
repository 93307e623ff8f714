"""Request/response models for itinerary question answering."""

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """Request body for POST /itineraries/{itinerary_id}/ask."""

    question: str = Field(..., min_length=1, max_length=2000)


class AnswerPayload(BaseModel):
    """Answer to one question about an itinerary.

    Fully derived per request and never stored.
    """

    answer: str = Field(..., description="Generated answer text")
    sources: list[str] = Field(
        default_factory=list, description="IDs of the chunks that went into the context"
    )
    confidence: float = Field(0.0, ge=0, le=1, description="Mean similarity of the used chunks")
    stale_warning: str | None = Field(
        None, description="Set when itinerary content changed after embeddings were generated"
    )
