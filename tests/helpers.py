"""Shared builders for tests."""

from backend.app.models.activity import Activity
from backend.app.tokens.counter import TokenCounter


class WordEncoding:
    """Whitespace tokenizer standing in for tiktoken: one word, one token."""

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}
        self._words: list[str] = []

    def encode(self, text: str) -> list[int]:
        tokens = []
        for word in text.split():
            if word not in self._ids:
                self._ids[word] = len(self._words)
                self._words.append(word)
            tokens.append(self._ids[word])
        return tokens

    def decode(self, tokens: list[int]) -> str:
        return " ".join(self._words[t] for t in tokens)


def word_counter() -> TokenCounter:
    """TokenCounter backed by WordEncoding (no tokenizer download)."""
    return TokenCounter("words", loader=lambda _name: WordEncoding())


def words(n: int, word: str = "tok") -> str:
    """Text of exactly n tokens under WordEncoding."""
    return " ".join([word] * n)


def make_activity(idx: int, lat: float = 33.89, lng: float = 35.50) -> Activity:
    return Activity(id=f"act-{idx}", name=f"Place {idx}", latitude=lat, longitude=lng)


def make_clusters(sizes: list[int]) -> list[list[Activity]]:
    """Clusters of the given sizes with distinct ids, spread along a line."""
    clusters: list[list[Activity]] = []
    idx = 0
    for day, size in enumerate(sizes):
        cluster = []
        for _ in range(size):
            cluster.append(make_activity(idx, lat=33.8 + day * 0.05, lng=35.4 + idx * 0.001))
            idx += 1
        clusters.append(cluster)
    return clusters
