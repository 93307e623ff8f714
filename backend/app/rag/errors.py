"""Errors raised by the question-answering path."""


class RagError(Exception):
    """Base class for question-answering failures."""


class ItineraryNotFoundError(RagError):
    """The referenced itinerary does not exist."""

    def __init__(self, itinerary_id: str):
        super().__init__(f"Itinerary {itinerary_id} not found")
        self.itinerary_id = itinerary_id


class EmbeddingsNotReadyError(RagError):
    """No knowledge chunks exist yet for the itinerary. Retry later."""

    guidance = (
        "Please wait for the itinerary to be fully processed before asking questions."
    )

    def __init__(self, itinerary_id: str):
        super().__init__(f"Embeddings not generated yet for itinerary {itinerary_id}")
        self.itinerary_id = itinerary_id


class RagInternalError(RagError):
    """A retrieval, embedding, tokenizer or generation call failed."""
