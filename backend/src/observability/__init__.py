"""Observability module.

Provides structured logging, request ID correlation and Prometheus metrics.
"""

from .logging_config import configure_logging, configure_logging_from_settings
from .metrics import (
    order_validations_total,
    order_validation_violations_total,
    order_validation_duration_seconds,
    order_oracle_errors_total,
)
from .request_id import request_id_var, get_request_id

__all__ = [
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    # Metrics
    "order_validations_total",
    "order_validation_violations_total",
    "order_validation_duration_seconds",
    "order_oracle_errors_total",
    # Request ID
    "request_id_var",
    "get_request_id",
]
