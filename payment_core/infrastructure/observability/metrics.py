"""Prometheus metrics for bank validation outcomes, payment errors and provider operations"""

from prometheus_client import Counter, Histogram

# Validation metrics
bank_validation_counter = Counter(
    "payment_bank_validation_total",
    "Bank detail validations performed",
    ["country", "outcome"],  # valid | invalid | unsupported
)

# Error metrics
payment_error_counter = Counter(
    "payment_errors_total",
    "Payment failures mapped to client errors",
    ["provider", "kind"],
)

# Provider operation metrics
operation_duration_histogram = Histogram(
    "payment_operation_duration_seconds",
    "Duration of tracked payment operations",
    ["operation", "outcome"],  # completed | failed
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_bank_validation(country_code: str | None, valid: bool) -> None:
    """Record a validation outcome; country_code is None for unsupported countries"""
    if country_code is None:
        # Country label only takes supported codes
        bank_validation_counter.labels(country="other", outcome="unsupported").inc()
        return
    bank_validation_counter.labels(country=country_code, outcome="valid" if valid else "invalid").inc()
