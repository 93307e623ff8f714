"""Prompt templates for itinerary question answering."""

SYSTEM_PROMPT = """You are a knowledgeable travel assistant for the traveler's itinerary.
Answer the user's question completely based on the context provided.
If the answer is not in the context, say so politely.
Don't use Markdown formatting (bold/italics) in the answer."""


def system_prompt(stale_warning: str | None = None) -> str:
    if stale_warning:
        return f"{SYSTEM_PROMPT}\n\nNote: {stale_warning}"
    return SYSTEM_PROMPT


def user_prompt(context: str, question: str) -> str:
    return f"Context:\n{context}\n\nQuestion: {question}"
