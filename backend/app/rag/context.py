"""Context assembly - fit ranked chunks into a token budget."""

import logging
from collections.abc import Sequence

from backend.app.models.knowledge import ContextWindow, KnowledgeChunk
from backend.app.tokens.counter import TokenCounter

logger = logging.getLogger(__name__)

CHUNK_SEPARATOR = "\n\n---\n\n"


def select_within_budget(
    chunks: Sequence[str],
    max_tokens: int,
    counter: TokenCounter,
) -> list[str]:
    """Greedily keep the longest ranked prefix that fits max_tokens.

    Chunks are taken in the order given, which is relevance order, and the
    result keeps that order. The scan stops at the first chunk that would
    overflow the budget. If that is the very first chunk it is kept anyway,
    so a non-empty input always yields a non-empty result even when the one
    chunk alone exceeds the budget.

    Args:
        chunks: Chunk texts, most relevant first
        max_tokens: Token budget for the selection
        counter: Tokenizer handle

    Returns:
        Selected prefix of chunks
    """
    selected: list[str] = []
    total = 0

    for chunk in chunks:
        tokens = counter.count(chunk)
        if total + tokens > max_tokens:
            if not selected:
                selected.append(chunk)
            break
        selected.append(chunk)
        total += tokens

    return selected


def render_chunk(chunk: KnowledgeChunk) -> str:
    """Chunk text as presented to the model, tagged with its type and places."""
    place_info = f" [PlaceIDs: {', '.join(chunk.place_ids)}]" if chunk.place_ids else ""
    return f"[{chunk.chunk_type.value}]{place_info}\n{chunk.text}"


def assemble_context(
    chunks: Sequence[KnowledgeChunk],
    max_tokens: int,
    counter: TokenCounter,
) -> ContextWindow:
    """Build the context window for one question from ranked chunks.

    Applies select_within_budget to the rendered chunks, so the tags count
    against the budget too.
    """
    rendered = [render_chunk(c) for c in chunks]
    selected = select_within_budget(rendered, max_tokens, counter)

    kept = list(chunks[: len(selected)])
    total_tokens = sum(counter.count(text) for text in selected)

    if len(selected) < len(rendered):
        logger.warning(
            f"[rag] Truncated from {len(rendered)} to {len(selected)} chunks due to token limit"
        )
    if total_tokens > max_tokens:
        logger.warning(
            f"[rag] First chunk alone uses {total_tokens} tokens, over the {max_tokens} budget"
        )

    return ContextWindow(
        chunks=kept,
        texts=selected,
        total_tokens=total_tokens,
        max_tokens=max_tokens,
    )


def join_context(window: ContextWindow) -> str:
    return CHUNK_SEPARATOR.join(window.texts)
