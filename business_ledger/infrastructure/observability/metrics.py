"""Prometheus metrics for ledger activity, assistant replies and HTTP latency"""

from prometheus_client import Counter, Histogram

# Ledger metrics
ledger_mutation_counter = Counter(
    "ledger_mutations_total",
    "Ledger records created, updated or deleted",
    ["collection", "operation"],  # operation: create | update | delete
)

debt_payment_counter = Counter(
    "ledger_debt_payments_total",
    "Debt payments applied",
    ["status"],  # partial | paid
)

# Assistant metrics
assistant_reply_counter = Counter(
    "assistant_replies_total",
    "Assistant replies by source",
    ["mode"],  # simulated | openai | fallback-simulated
)

assistant_latency_histogram = Histogram(
    "assistant_completion_latency_seconds",
    "Remote completion response time",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_mutation(collection: str, operation: str) -> None:
    """Count a successful create/update/delete on a collection"""
    ledger_mutation_counter.labels(collection=collection, operation=operation).inc()


def record_payment(status: str) -> None:
    debt_payment_counter.labels(status=status).inc()


def record_reply(mode: str) -> None:
    assistant_reply_counter.labels(mode=mode).inc()
