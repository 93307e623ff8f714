"""Prometheus metrics for balancing and question answering."""

from prometheus_client import Counter, Histogram

# Day balancing
balance_moves = Histogram(
    "balance_moves",
    "Activities moved between days per balancing run",
    buckets=[0, 1, 2, 5, 10, 20, 30],
)

balance_unconverged_total = Counter(
    "balance_unconverged_total",
    "Balancing runs that ended with a day outside bounds",
)

# RAG
rag_requests_total = Counter(
    "rag_requests_total",
    "Question-answering turns by outcome",
    ["outcome"],
)

rag_context_tokens = Histogram(
    "rag_context_tokens",
    "Tokens of retrieved context supplied to the model",
    buckets=[100, 500, 1000, 2000, 4000, 6000, 8000, 16000],
)

rag_latency_ms = Histogram(
    "rag_latency_ms",
    "Question-answering latency in milliseconds",
    ["outcome"],
    buckets=[50, 100, 250, 500, 1000, 2000, 4000, 8000, 16000],
)


class PrometheusRagMetrics:
    """Prometheus-based metrics for the planning and RAG paths."""

    def record_balance(self, moves: int, converged: bool) -> None:
        """Record one balancing run."""
        balance_moves.observe(moves)
        if not converged:
            balance_unconverged_total.inc()

    def record_context(self, total_tokens: int) -> None:
        """Record the size of an assembled context window."""
        rag_context_tokens.observe(total_tokens)

    def record_outcome(self, outcome: str, latency_ms: float) -> None:
        """Record a finished question-answering turn."""
        rag_requests_total.labels(outcome=outcome).inc()
        rag_latency_ms.labels(outcome=outcome).observe(latency_ms)


metrics = PrometheusRagMetrics()
