"""Prometheus metrics for order validation.

Defines operational metrics for monitoring validation traffic and failures.
"""

from prometheus_client import Counter, Histogram

# Validation run metrics
order_validations_total = Counter(
    "orders_validations_total",
    "Total order validation runs",
    ["outcome"]  # outcome: accepted|rejected|error
)

order_validation_violations_total = Counter(
    "orders_validation_violations_total",
    "Total validation violations reported",
    ["field"]
)

order_validation_duration_seconds = Histogram(
    "orders_validation_duration_seconds",
    "Time spent validating a single order draft in seconds",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)

# Oracle metrics
order_oracle_errors_total = Counter(
    "orders_oracle_errors_total",
    "Existence oracle lookups that failed with an infrastructure error",
    ["lookup"]  # lookup: title_author|isbn|daily_count
)
