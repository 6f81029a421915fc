"""Prometheus metrics for monitoring transfer outcomes, volumes and fees"""

from prometheus_client import Counter, Histogram

from wallet_transfer.domain.models import TransferResult

# Transfer metrics
transfer_counter = Counter(
    "wallet_transfer_total",
    "Total transfer requests handled",
    ["outcome"],  # completed | INSUFFICIENT_FUNDS | DAILY_LIMIT_EXCEEDED | ...
)

transfer_amount_histogram = Histogram(
    "wallet_transfer_amount",
    "Amount moved by completed transfers",
    buckets=[10, 50, 100, 500, 1_000, 5_000, 10_000, 50_000],
)

fee_counter = Counter(
    "wallet_transfer_fees_total",
    "Service fees charged on completed transfers",
)

transfer_duration_histogram = Histogram(
    "wallet_transfer_duration_seconds",
    "Time to run a transfer request through the engine",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_transfer(result: TransferResult, duration_seconds: float) -> None:
    """Record outcome, volume and fee metrics for one transfer request"""
    outcome = "completed" if result.success else result.error_code
    transfer_counter.labels(outcome=outcome).inc()
    transfer_duration_histogram.observe(duration_seconds)

    if result.success:
        transfer_amount_histogram.observe(float(result.record.amount))
        fee_counter.inc(float(result.record.fee))
