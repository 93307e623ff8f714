"""Itinerary question-answering endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from backend.app.api.deps import get_orchestrator
from backend.app.models.answer import AnswerPayload, AskRequest
from backend.app.models.knowledge import EmbeddingStatus
from backend.app.rag.errors import (
    EmbeddingsNotReadyError,
    ItineraryNotFoundError,
    RagInternalError,
)
from backend.app.rag.orchestrator import RagOrchestrator

router = APIRouter(prefix="/itineraries", tags=["itineraries"])
logger = logging.getLogger(__name__)


@router.post("/{itinerary_id}/ask", response_model=AnswerPayload, status_code=status.HTTP_200_OK)
async def ask_question(
    itinerary_id: str,
    body: AskRequest,
    orchestrator: Annotated[RagOrchestrator, Depends(get_orchestrator)],
) -> AnswerPayload:
    """Answer a question about an itinerary from its embedded content.

    Raises:
        HTTPException: 404 if the itinerary does not exist, 400 if its
            embeddings are not generated yet, 500 on any other failure
    """
    try:
        return await orchestrator.ask(body.question, itinerary_id)
    except ItineraryNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Itinerary not found",
        ) from e
    except EmbeddingsNotReadyError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Embeddings not generated yet", "message": e.guidance},
        ) from e
    except RagInternalError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="internal error",
        ) from e


@router.get("/{itinerary_id}/embeddings", response_model=EmbeddingStatus)
async def get_embedding_status(
    itinerary_id: str,
    orchestrator: Annotated[RagOrchestrator, Depends(get_orchestrator)],
) -> EmbeddingStatus:
    """Report whether an itinerary is ready for questions."""
    try:
        return await orchestrator.embedding_status(itinerary_id)
    except Exception as e:
        logger.error(f"[GET /itineraries/{itinerary_id}/embeddings] failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="internal error",
        ) from e
