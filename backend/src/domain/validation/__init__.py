"""Validation domain module.

Implements the order-creation validation pipeline: per-field rules,
cross-field business rules and the ISBN checksum, run against a
read-only existence oracle.
"""

from .models import (
    FieldId,
    OrderCategory,
    OrderDraft,
    OrderValidationError,
    OrderValidationPipelineError,
    ValidationContext,
    ValidationMetrics,
    ValidationOutcome,
    ValidationReport,
    Violation,
)
from .port import ExistenceOracle, OracleUnavailableError
from .policy import ValidationPolicy
from .isbn import is_valid_isbn, normalize_isbn
from .engine import ValidationPipeline

__all__ = [
    "FieldId",
    "OrderCategory",
    "OrderDraft",
    "OrderValidationError",
    "OrderValidationPipelineError",
    "ValidationContext",
    "ValidationMetrics",
    "ValidationOutcome",
    "ValidationReport",
    "Violation",
    "ExistenceOracle",
    "OracleUnavailableError",
    "ValidationPolicy",
    "is_valid_isbn",
    "normalize_isbn",
    "ValidationPipeline",
]
